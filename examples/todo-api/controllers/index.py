"""Root controller — service status."""

from autoroute import __version__


def read(params, meta):
    return {"service": "todo-api", "version": __version__}

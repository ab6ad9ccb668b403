"""Shared test fixtures for autoroute."""

from __future__ import annotations

from pathlib import Path

import pytest

# A controller exporting one function per REST action plus a helper that
# must never be routed.
CONTROLLER_SOURCE = '''\
def exists(params, meta):
    return None


def read(params, meta):
    return {"action": "read", "params": params}


def create(params, meta):
    return {"action": "create", "params": params}


def update(params, meta):
    return {"action": "update", "params": params}


def partial(params, meta):
    return {"action": "partial", "params": params}


def destroy(params, meta):
    return {"action": "destroy", "params": params}


def helper():
    return "not an action"


VERSION = 1
'''

# A co-located test module: discovered unless ignored, but exports no actions.
SPEC_SOURCE = '''\
def test_read():
    assert True
'''

ACTIONS: dict[str, str] = {
    "exists": "head",
    "read": "get",
    "create": "post",
    "update": "put",
    "partial": "patch",
    "destroy": "delete",
}


def write_controller(base: Path, name: str, content: str = CONTROLLER_SOURCE) -> Path:
    """Write a controller module under *base* and return its path."""
    path = base / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def actions() -> dict[str, str]:
    """The REST actions map used throughout the tests."""
    return dict(ACTIONS)


@pytest.fixture
def controllers_dir(tmp_path: Path) -> Path:
    """Create the reference controllers tree.

    ::

        controllers/
            index.py
            test.py
            subPath/subTest.py
            subPath/subTest.spec.py

    """
    base = tmp_path / "controllers"
    base.mkdir()
    write_controller(base, "index.py")
    write_controller(base, "test.py")
    write_controller(base, "subPath/subTest.py")
    write_controller(base, "subPath/subTest.spec.py", SPEC_SOURCE)
    return base.resolve()

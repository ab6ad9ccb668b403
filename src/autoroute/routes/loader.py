"""Controller loading — import discovered files as isolated modules.

Each controller file is imported under a synthetic dotted name derived from
its location (``controllers/api/users.py`` -> ``autoroute_controllers.api.users``)
without touching ``sys.path``.
"""

import importlib.util
import re
import sys
from pathlib import Path

from autoroute._errors import LoadError
from autoroute.routes.controller import Controller

MODULE_PREFIX = "autoroute_controllers"

_NON_IDENTIFIER = re.compile(r"\W")


def controller_module_name(file_path: Path, base_path: Path) -> str:
    """Derive the dotted module name for a controller file.

    ``subPath/subTest.spec.py`` -> ``autoroute_controllers.subPath.subTest_spec``

    """
    relative = file_path.relative_to(base_path)
    parts = [*relative.parent.parts, relative.name.rsplit(".", 1)[0]]
    return ".".join([MODULE_PREFIX, *(_NON_IDENTIFIER.sub("_", part) for part in parts)])


def load_controller(file_path: Path, base_path: Path) -> Controller:
    """Import *file_path* and wrap its exports in a ``Controller``.

    Raises:
        LoadError: If the file has no usable loader or fails to execute.

    """
    module_name = controller_module_name(file_path, base_path)

    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        msg = f"No module loader available for controller {file_path}"
        raise LoadError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        # Register in sys.modules so imports from within controllers resolve
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load controller module {file_path}: {exc}"
        raise LoadError(msg) from exc

    return Controller.from_module(module)

"""Controller capability object.

A controller is looked up by action name instead of by attribute access on
whatever module happened to be imported::

    controller = Controller.from_mapping({"read": read_users}, name="users")
    action = controller.lookup("read")

Modules export actions as plain module-level callables defined in the
module itself; names it merely imports are not exports.  When a module
defines ``__all__`` only those names are exported.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType, ModuleType

from autoroute._types import ActionFunc


@dataclass(frozen=True, slots=True)
class Controller:
    """Named, immutable table of exported callables.

    Attributes:
        name: Human-readable identifier (module name or file path).
        exports: Exported callables keyed by name, in definition order.

    """

    name: str
    exports: Mapping[str, ActionFunc]

    @classmethod
    def from_mapping(cls, exports: Mapping[str, object], *, name: str = "controller") -> Controller:
        """Build a controller from a mapping, keeping only callables."""
        callables = {
            key: value for key, value in exports.items() if callable(value)
        }
        return cls(name=name, exports=MappingProxyType(callables))

    @classmethod
    def from_module(cls, module: ModuleType) -> Controller:
        """Build a controller from a module's public callables."""
        namespace = vars(module)
        exported = namespace.get("__all__")
        if exported is None:
            names = [
                key for key, value in namespace.items()
                if not key.startswith("_")
                and getattr(value, "__module__", None) == module.__name__
            ]
        else:
            names = [key for key in exported if key in namespace]
        return cls.from_mapping(
            {key: namespace[key] for key in names},
            name=module.__name__,
        )

    def lookup(self, action: str) -> ActionFunc | None:
        """Return the callable exported as *action*, or None."""
        return self.exports.get(action)

    def names(self) -> tuple[str, ...]:
        """Exported names in definition order."""
        return tuple(self.exports)

    def __contains__(self, action: object) -> bool:
        return action in self.exports

    def __iter__(self) -> Iterator[str]:
        return iter(self.exports)

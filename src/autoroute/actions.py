"""Action → HTTP verb mapping.

An ``ActionsMap`` tells the registrar which controller exports are actions
and which HTTP verb each one answers to::

    actions = ActionsMap.from_mapping({
        "read": "get",
        "create": "post",
        "update": "put",
    })

Verbs are restricted to a closed set.  Anything else is rejected when the
map is built, so an unknown verb can never reach the router.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import cast

from autoroute._errors import ConfigError
from autoroute._types import HttpVerb

HTTP_VERBS: tuple[HttpVerb, ...] = ("head", "get", "post", "put", "patch", "delete")

# Verbs that address both the collection and a single resource (``/:id``)
SINGULAR_VERBS: frozenset[HttpVerb] = frozenset({"head", "get", "put", "patch", "delete"})

REST_ACTIONS: Mapping[str, HttpVerb] = MappingProxyType({
    "exists": "head",
    "read": "get",
    "create": "post",
    "update": "put",
    "partial": "patch",
    "destroy": "delete",
})


@dataclass(frozen=True, slots=True, eq=False)
class ActionsMap(Mapping[str, HttpVerb]):
    """Immutable mapping of action name to HTTP verb.

    Iteration follows the order of the mapping it was built from, which is
    also the order actions are registered in.
    """

    _verbs: Mapping[str, HttpVerb]

    @classmethod
    def from_mapping(cls, actions: Mapping[str, str]) -> ActionsMap:
        """Validate *actions* and freeze it.

        Verbs are matched case-insensitively and stored lower-case.

        Raises:
            ConfigError: If an action name is empty or a verb is unknown.

        """
        if isinstance(actions, ActionsMap):
            return actions

        verbs: dict[str, HttpVerb] = {}
        for name, verb in actions.items():
            if not isinstance(name, str) or not name:
                msg = f"Action names must be non-empty strings, got {name!r}"
                raise ConfigError(msg)
            if not isinstance(verb, str) or verb.lower() not in HTTP_VERBS:
                msg = (
                    f"Action {name!r} maps to unsupported verb {verb!r} "
                    f"(expected one of {', '.join(HTTP_VERBS)})"
                )
                raise ConfigError(msg)
            verbs[name] = cast(HttpVerb, verb.lower())
        return cls(MappingProxyType(verbs))

    def __getitem__(self, action: str) -> HttpVerb:
        return self._verbs[action]

    def __iter__(self) -> Iterator[str]:
        return iter(self._verbs)

    def __len__(self) -> int:
        return len(self._verbs)

    def __repr__(self) -> str:
        return f"ActionsMap({dict(self._verbs)!r})"

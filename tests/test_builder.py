"""Tests for autoroute.builder — end-to-end router construction."""

import json
from pathlib import Path

import pytest

from autoroute import Autoroute, AutorouteOptions, RouteTable
from autoroute._errors import DiscoveryError, LoadError, RouteConflictError
from autoroute.handler import IncomingRequest
from autoroute.observability import (
    ControllerRegistered,
    EventLog,
    RouteCollector,
    RouteRegistered,
    RouterBuilt,
)
from autoroute.routes.controller import Controller

from .conftest import write_controller

EXPECTED_ROUTES = [
    ("head", "/sub-path/sub-test"),
    ("head", "/sub-path/sub-test/:id"),
    ("get", "/sub-path/sub-test"),
    ("get", "/sub-path/sub-test/:id"),
    ("post", "/sub-path/sub-test"),
    ("put", "/sub-path/sub-test"),
    ("put", "/sub-path/sub-test/:id"),
    ("patch", "/sub-path/sub-test"),
    ("patch", "/sub-path/sub-test/:id"),
    ("delete", "/sub-path/sub-test"),
    ("delete", "/sub-path/sub-test/:id"),
    ("head", "/test"),
    ("head", "/test/:id"),
    ("get", "/test"),
    ("get", "/test/:id"),
    ("post", "/test"),
    ("put", "/test"),
    ("put", "/test/:id"),
    ("patch", "/test"),
    ("patch", "/test/:id"),
    ("delete", "/test"),
    ("delete", "/test/:id"),
    ("head", "/"),
    ("get", "/"),
    ("post", "/"),
    ("put", "/"),
    ("patch", "/"),
    ("delete", "/"),
]


def _autoroute(actions: dict[str, str], **overrides: object) -> Autoroute[RouteTable]:
    return Autoroute(RouteTable, actions, **overrides)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Options and actions handling."""

    def test_default_options(self, actions: dict[str, str]) -> None:
        autoroute = _autoroute(actions)
        assert autoroute.options == AutorouteOptions()
        assert dict(autoroute.actions) == actions

    def test_overrides_replace_fields(self, actions: dict[str, str]) -> None:
        base = AutorouteOptions(ignore=("**/*.spec.py",))
        autoroute = Autoroute(RouteTable, actions, base, pattern="*.py")
        assert autoroute.options.pattern == "*.py"
        assert autoroute.options.ignore == ("**/*.spec.py",)

    def test_unknown_override_rejected(self, actions: dict[str, str]) -> None:
        with pytest.raises(TypeError):
            _autoroute(actions, colour="blue")


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


class TestPipelineSteps:
    """The individual steps exposed on the builder."""

    def test_find_controllers_uses_ignore(
        self, actions: dict[str, str], controllers_dir: Path,
    ) -> None:
        autoroute = _autoroute(actions, ignore=("**/*.spec.py",))
        assert len(autoroute.find_controllers(controllers_dir)) == 3

    def test_route_from_path(self, actions: dict[str, str], controllers_dir: Path) -> None:
        autoroute = _autoroute(actions)
        path = controllers_dir / "subPath" / "subTest.py"
        assert autoroute.route_from_path(controllers_dir, path) == "/sub-path/sub-test"

    def test_resolve_unique(self, actions: dict[str, str]) -> None:
        autoroute = _autoroute(actions)
        assert autoroute.resolve_unique(["/c/a.pyc", "/c/a.py"]) == [Path("/c/a.py")]

    def test_controller_infos_order(self, actions: dict[str, str], controllers_dir: Path) -> None:
        autoroute = _autoroute(actions, ignore=("**/*.spec.py",))
        routes = [info.route for info in autoroute.controller_infos(controllers_dir)]
        assert routes == ["/sub-path/sub-test", "/test", "/"]

    def test_register_controller(self, actions: dict[str, str]) -> None:
        autoroute = _autoroute(actions)
        controller = Controller.from_mapping({"read": lambda params, meta: params})
        table = RouteTable()
        entries = autoroute.register_controller(table, "/x", controller)
        assert [(e.verb, e.pattern) for e in entries] == [("get", "/x"), ("get", "/x/:id")]
        assert table.entries == tuple(entries)


# ---------------------------------------------------------------------------
# create_router
# ---------------------------------------------------------------------------


class TestCreateRouter:
    """Full builds over a controllers directory."""

    def test_reference_tree(self, actions: dict[str, str], controllers_dir: Path) -> None:
        table = _autoroute(actions, ignore=("**/*.spec.py",)).create_router(controllers_dir)
        assert table.describe() == EXPECTED_ROUTES

    def test_action_free_module_adds_nothing(
        self, actions: dict[str, str], controllers_dir: Path,
    ) -> None:
        table = _autoroute(actions).create_router(controllers_dir)
        assert table.describe() == EXPECTED_ROUTES

    def test_idempotent(self, actions: dict[str, str], controllers_dir: Path) -> None:
        autoroute = _autoroute(actions)
        first = autoroute.create_router(controllers_dir)
        second = autoroute.create_router(controllers_dir)
        assert first is not second
        assert first.describe() == second.describe()

    def test_relative_path(
        self,
        actions: dict[str, str],
        controllers_dir: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(controllers_dir.parent)
        table = _autoroute(actions).create_router("controllers")
        assert table.describe() == EXPECTED_ROUTES

    def test_entries_carry_source(self, actions: dict[str, str], controllers_dir: Path) -> None:
        table = _autoroute(actions).create_router(controllers_dir)
        sources = {entry.pattern: entry.source for entry in table}
        assert sources["/"] == controllers_dir / "index.py"
        assert sources["/sub-path/sub-test/:id"] == controllers_dir / "subPath" / "subTest.py"

    def test_router_factory_called_once(
        self, actions: dict[str, str], controllers_dir: Path,
    ) -> None:
        made: list[RouteTable] = []

        def factory() -> RouteTable:
            table = RouteTable()
            made.append(table)
            return table

        table = Autoroute(factory, actions).create_router(controllers_dir)
        assert made == [table]

    def test_source_preferred_over_bytecode(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(tmp_path, "users.py")
        (tmp_path / "users.pyc").write_bytes(b"not bytecode")
        table = _autoroute(actions).create_router(tmp_path)
        assert {entry.source for entry in table} == {tmp_path.resolve() / "users.py"}

    def test_empty_directory(self, actions: dict[str, str], tmp_path: Path) -> None:
        assert len(_autoroute(actions).create_router(tmp_path)) == 0

    def test_partial_actions_map(self, controllers_dir: Path) -> None:
        table = _autoroute({"create": "post"}).create_router(controllers_dir)
        assert table.describe() == [
            ("post", "/sub-path/sub-test"),
            ("post", "/test"),
            ("post", "/"),
        ]

    def test_imported_helpers_not_routed(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(
            tmp_path,
            "files.py",
            "from os.path import exists\n\n\ndef read(params, meta):\n    return exists(\"x\")\n",
        )
        table = _autoroute(actions).create_router(tmp_path)
        assert table.describe() == [("get", "/files"), ("get", "/files/:id")]

    @pytest.mark.asyncio
    async def test_handlers_invoke_actions(
        self, actions: dict[str, str], controllers_dir: Path,
    ) -> None:
        table = _autoroute(actions).create_router(controllers_dir)
        entry = next(e for e in table if e.verb == "put" and e.pattern == "/test/:id")
        response = await entry.handler(IncomingRequest(
            original_url="/test/5", method="PUT", body={"name": "x"}, path_params={"id": "5"},
        ))
        assert json.loads(response.body) == {
            "action": "update",
            "params": {"name": "x", "id": "5"},
        }

    @pytest.mark.asyncio
    async def test_meta_reaches_action(self, tmp_path: Path) -> None:
        write_controller(tmp_path, "me.py", "def read(params, meta):\n    return meta\n")
        table = _autoroute({"read": "get"}).create_router(tmp_path, meta_list=["user"])
        response = await table.entries[0].handler(
            IncomingRequest(original_url="/me", state={"user": "alice"}),
        )
        assert json.loads(response.body) == {"user": "alice"}


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestCreateRouterFailures:
    """Build errors abort without returning a router."""

    def test_missing_directory(self, actions: dict[str, str], tmp_path: Path) -> None:
        with pytest.raises(DiscoveryError):
            _autoroute(actions).create_router(tmp_path / "missing")

    def test_broken_controller(self, actions: dict[str, str], controllers_dir: Path) -> None:
        write_controller(controllers_dir, "broken.py", "import nonexistent_module_xyz\n")
        made: list[RouteTable] = []

        def factory() -> RouteTable:
            table = RouteTable()
            made.append(table)
            return table

        with pytest.raises(LoadError, match="broken.py"):
            Autoroute(factory, actions).create_router(controllers_dir)
        assert made == []

    def test_unsluggable_directory(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(tmp_path, "--/users.py")
        with pytest.raises(DiscoveryError, match="Cannot derive a route") as exc_info:
            _autoroute(actions).create_router(tmp_path)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_file_and_index_conflict(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(tmp_path, "users.py")
        write_controller(tmp_path, "users/index.py")
        with pytest.raises(RouteConflictError, match="/users"):
            _autoroute(actions).create_router(tmp_path)

    def test_slug_conflict(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(tmp_path, "userGroups.py")
        write_controller(tmp_path, "user_groups.py")
        with pytest.raises(RouteConflictError, match="/user-groups"):
            _autoroute(actions).create_router(tmp_path)

    def test_conflict_ignored_away(self, actions: dict[str, str], tmp_path: Path) -> None:
        write_controller(tmp_path, "users.py")
        write_controller(tmp_path, "users/index.py")
        table = _autoroute(actions, ignore=("users.py",)).create_router(tmp_path)
        assert ("get", "/users/:id") in table.describe()

    def test_invalid_verb(self) -> None:
        from autoroute._errors import ConfigError

        with pytest.raises(ConfigError):
            _autoroute({"read": "fetch"})


# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------


class TestBuildEvents:
    """Collector events emitted during a build."""

    def test_events(self, actions: dict[str, str], controllers_dir: Path) -> None:
        log = EventLog()
        autoroute = _autoroute(actions, ignore=("**/*.spec.py",))
        autoroute.collector = RouteCollector(log)
        autoroute.create_router(controllers_dir)

        assert len(log.query(event_type=RouteRegistered)) == 28
        controllers = log.query(event_type=ControllerRegistered)
        assert [c.route for c in reversed(controllers)] == ["/sub-path/sub-test", "/test", "/"]
        assert controllers[0].actions == (
            "exists", "read", "create", "update", "partial", "destroy",
        )
        (built,) = log.query(event_type=RouterBuilt)
        assert built.controllers == 3
        assert built.routes == 28
        assert built.path == str(controllers_dir)

    def test_collector_keyword(self, actions: dict[str, str], controllers_dir: Path) -> None:
        collector = RouteCollector()
        Autoroute(RouteTable, actions, collector=collector).create_router(controllers_dir)
        summary = collector.summary()
        assert summary["routes"] == 28
        assert summary["controllers"] == 4

"""Tests for autoroute package exports and metadata."""

import pytest

import autoroute


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(autoroute.__version__, str)
        assert "0.1.0" in autoroute.__version__

    def test_free_threading_declaration(self) -> None:
        assert autoroute._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in autoroute.__all__:
            getattr(autoroute, name)

    def test_lazy_export_identity(self) -> None:
        from autoroute.builder import Autoroute

        assert autoroute.Autoroute is Autoroute

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            autoroute.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018

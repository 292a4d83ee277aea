"""Tests for the completion handler registry."""

import pytest

from cmdcomplete.errors import UnknownHandlerError
from cmdcomplete.models import HandlerMode
from cmdcomplete.registry import CompletionRegistry, normalize_id


def _values(handler):
    return list(handler(None))


class TestNormalizeId:
    """Tests for normalize_id."""

    def test_adds_prefix(self):
        """Test the prefix is added and the id lowercased."""
        assert normalize_id("Players") == "@players"

    def test_keeps_prefix(self):
        """Test an existing prefix is kept."""
        assert normalize_id("@Players") == "@players"


class TestRegister:
    """Tests for handler registration."""

    def test_builtins_present(self, registry):
        """Test the built-in handlers are registered."""
        assert registry.ids() == ["@nothing", "@range", "@timeunits"]

    def test_without_builtins(self):
        """Test an empty registry."""
        assert len(CompletionRegistry(with_builtins=False)) == 0

    def test_register_returns_previous(self, registry):
        """Test registration returns the replaced handler."""
        assert registry.register("colors", lambda c: ["red"]) is None
        previous = registry.register("COLORS", lambda c: ["blue"])
        assert previous is not None
        assert previous.id == "@colors"
        assert _values(registry.lookup("colors")) == ["blue"]

    def test_replacement_keeps_one_entry(self, registry):
        """Test re-registration replaces instead of merging."""
        registry.register("colors", lambda c: ["red"])
        registry.register("@colors", lambda c: ["blue"], is_async=True)
        assert registry.ids().count("@colors") == 1
        assert registry.lookup("colors").mode is HandlerMode.ASYNC

    def test_default_mode_is_sync(self, registry):
        """Test handlers are sync-only by default."""
        registry.register("players", lambda c: [])
        assert registry.lookup("players").is_async is False

    def test_register_async(self, registry):
        """Test async-capable registration."""
        registry.register_async("players", lambda c: [])
        assert registry.lookup("@PLAYERS").is_async is True

    def test_lookup_case_insensitive(self, registry):
        """Test lookup ignores case and prefix."""
        assert registry.lookup("@TimeUnits") is registry.lookup("timeunits")

    def test_lookup_missing(self, registry):
        """Test lookup of an unknown id."""
        assert registry.lookup("yes") is None

    def test_unregister(self, registry):
        """Test removing a handler."""
        removed = registry.unregister("nothing")
        assert removed.id == "@nothing"
        assert "nothing" not in registry

    def test_contains(self, registry):
        """Test membership."""
        assert "@range" in registry
        assert "RANGE" in registry
        assert 42 not in registry


class TestRegisterStatic:
    """Tests for static completions."""

    def test_from_pipe_string(self, registry):
        """Test static values from a pipe separated string."""
        registry.register_static("answers", "yes|no|maybe")
        assert _values(registry.lookup("answers")) == ["yes", "no", "maybe"]

    def test_from_list(self, registry):
        """Test static values from a list."""
        registry.register_static("answers", ["yes", "no"])
        assert _values(registry.lookup("answers")) == ["yes", "no"]

    def test_supplier_called_once(self, registry, mocker):
        """Test the supplier is called once, at registration."""
        supplier = mocker.Mock(return_value=["a", "b"])
        registry.register_static("letters", supplier)
        handler = registry.lookup("letters")
        assert _values(handler) == ["a", "b"]
        assert _values(handler) == ["a", "b"]
        supplier.assert_called_once_with()

    def test_static_is_async(self, registry):
        """Test static handlers are async-capable."""
        registry.register_static("answers", "yes|no")
        assert registry.lookup("answers").is_async

    def test_result_is_a_copy(self, registry):
        """Test callers cannot alter static values."""
        registry.register_static("answers", "yes|no")
        handler = registry.lookup("answers")
        handler(None).append("oops")
        assert _values(handler) == ["yes", "no"]


class TestSetDefault:
    """Tests for default completions by type."""

    def test_unknown_id(self, registry):
        """Test a default for an unknown id."""
        with pytest.raises(UnknownHandlerError) as exc_info:
            registry.set_default("players", str)
        assert exc_info.value.handler_id == "players"

    def test_unknown_id_is_key_error(self, registry):
        """Test UnknownHandlerError is a KeyError."""
        with pytest.raises(KeyError):
            registry.set_default("players", str)

    def test_maps_types(self, registry):
        """Test defaults are recorded per type."""
        handler = registry.set_default("range", int, float)
        assert handler is registry.lookup("range")
        assert registry.default_for(int) == "@range"
        assert registry.default_for(float) == "@range"
        assert registry.default_for(str) is None

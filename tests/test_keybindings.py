"""Tests for keybinding management."""

import json
import logging

import pytest

from weft.direction import ParseError
from weft.event import (
    AltChar,
    Char,
    CtrlChar,
    CtrlKey,
    CtrlShiftKey,
    EventTrigger,
    Key,
    KeyEvent,
    ShiftKey,
)
from weft.keybindings import (
    DEFAULT_KEYBINDINGS,
    KeybindingsManager,
    event_to_descriptor,
    parse_event,
)


class TestParseEvent:
    """Tests for parse_event."""

    def test_plain_character(self) -> None:
        assert parse_event("q") == Char("q")

    def test_character_modifiers(self) -> None:
        assert parse_event("ctrl+c") == CtrlChar("c")
        assert parse_event("Ctrl+C") == CtrlChar("c")
        assert parse_event("shift+a") == Char("A")
        assert parse_event("alt+x") == AltChar("x")

    def test_named_keys(self) -> None:
        assert parse_event("tab") == KeyEvent(Key.TAB)
        assert parse_event("Shift+Tab") == ShiftKey(Key.TAB)
        assert parse_event("ctrl+shift+left") == CtrlShiftKey(Key.LEFT)
        assert parse_event("f5") == KeyEvent(Key.F5)

    def test_aliases(self) -> None:
        assert parse_event("return") == KeyEvent(Key.ENTER)
        assert parse_event("escape") == KeyEvent(Key.ESC)
        assert parse_event("pgdown") == KeyEvent(Key.PAGE_DOWN)
        assert parse_event("space") == Char(" ")

    def test_plus_key(self) -> None:
        assert parse_event("+") == Char("+")
        assert parse_event("ctrl++") == CtrlChar("+")

    @pytest.mark.parametrize("descriptor", ["", "hyper+a", "ctrl+ctrl+a", "nosuchkey", "ctrl+alt+shift+tab"])
    def test_invalid_descriptors(self, descriptor: str) -> None:
        with pytest.raises(ParseError):
            parse_event(descriptor)

    def test_unsupported_character_modifiers(self) -> None:
        with pytest.raises(ParseError):
            parse_event("ctrl+alt+a")

    def test_descriptor_round_trip(self) -> None:
        for descriptor in ("q", "ctrl+c", "alt+x", "shift+tab", "ctrl+shift+left", "pagedown"):
            event = parse_event(descriptor)
            assert parse_event(event_to_descriptor(event)) == event  # type: ignore[arg-type]

    def test_non_key_event_has_no_descriptor(self) -> None:
        from weft.event import Refresh

        assert event_to_descriptor(Refresh()) is None


# ---------------------------------------------------------------------------
# TestKeybindingsManager
# ---------------------------------------------------------------------------


class TestKeybindingsManager:
    """Tests for KeybindingsManager."""

    def test_defaults_loaded(self) -> None:
        """All default actions should be present in a fresh manager."""
        manager = KeybindingsManager()
        actions = manager.actions()

        for action in DEFAULT_KEYBINDINGS:
            assert action in actions

    def test_default_actions_are_global_callbacks(self) -> None:
        """Every default action is one that Root registers."""
        assert KeybindingsManager().actions() == ["quit", "redraw"]

    def test_matches_with_string_descriptor(self) -> None:
        """String descriptor 'ctrl+c' should match the 'quit' action."""
        manager = KeybindingsManager()

        assert manager.matches("ctrl+c", "quit") is True
        assert manager.matches("ctrl+d", "quit") is False

    def test_matches_with_event(self) -> None:
        manager = KeybindingsManager()

        assert manager.matches(CtrlChar("c"), "quit") is True
        assert manager.matches(CtrlChar("l"), "redraw") is True
        assert manager.matches(CtrlChar("c"), "redraw") is False

    def test_matches_unknown_action(self) -> None:
        assert KeybindingsManager().matches("ctrl+c", "nope") is False

    def test_user_overrides_replace_defaults(self) -> None:
        """User overrides should replace the default bindings for that action."""
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+x", "q"]})

        assert manager.matches("ctrl+x", "quit") is True
        assert manager.matches("q", "quit") is True
        assert manager.matches("ctrl+c", "quit") is False

    def test_user_overrides_preserve_other_defaults(self) -> None:
        """Overriding one action should not affect other defaults."""
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+x"]})

        assert manager.matches("ctrl+l", "redraw") is True

    def test_invalid_override_is_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="weft"):
            manager = KeybindingsManager(user_overrides={"quit": ["hyper+q", "q"]})

        assert manager.matches("q", "quit") is True
        assert "hyper+q" in caplog.text

    def test_get_keys_returns_descriptors(self) -> None:
        """get_keys should return the descriptor strings as written."""
        manager = KeybindingsManager()

        assert manager.get_keys("redraw") == ["ctrl+l"]
        assert manager.get_keys("nope") == []

    def test_find_action(self) -> None:
        manager = KeybindingsManager()

        assert manager.find_action(CtrlChar("l")) == "redraw"
        assert manager.find_action("ctrl+c") == "quit"
        assert manager.find_action("z") is None

    def test_trigger(self) -> None:
        manager = KeybindingsManager(user_overrides={"quit": ["ctrl+c", "q"]})
        trigger = manager.trigger("quit")

        assert trigger(CtrlChar("c"))
        assert trigger(Char("q"))
        assert not trigger(CtrlKey(Key.ENTER))
        assert trigger == EventTrigger.from_fn_and_tag(lambda e: False, ("action", "quit"))


# ---------------------------------------------------------------------------
# TestLoad
# ---------------------------------------------------------------------------


class TestLoad:
    """Tests for KeybindingsManager.load."""

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text(json.dumps({"quit": ["q"], "bogus": "not-a-list"}))

        manager = KeybindingsManager.load(path)

        assert manager.matches("q", "quit") is True
        assert manager.matches("ctrl+c", "quit") is False
        assert "bogus" not in manager.actions()

    def test_load_missing_file_uses_defaults(self, tmp_path) -> None:
        manager = KeybindingsManager.load(tmp_path / "missing.json")

        assert manager.get_keys("quit") == DEFAULT_KEYBINDINGS["quit"]

    def test_load_invalid_json_uses_defaults(self, tmp_path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "keybindings.json"
        path.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="weft"):
            manager = KeybindingsManager.load(path)

        assert manager.matches("ctrl+c", "quit") is True
        assert "Could not read keybindings" in caplog.text

"""
Keybinding management.

Maps logical actions to event descriptors such as ``"ctrl+c"`` or
``"shift+tab"``, with user overrides loaded from a JSON file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from weft.direction import ParseError
from weft.event import (
    AltChar,
    AltKey,
    AltShiftKey,
    Char,
    CtrlAltKey,
    CtrlChar,
    CtrlKey,
    CtrlShiftKey,
    Event,
    EventTrigger,
    Key,
    KeyEvent,
    ShiftKey,
)
from weft.logging import get_logger

logger = get_logger("keybindings")

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "quit": ["ctrl+c"],
    "redraw": ["ctrl+l"],
}

_ALIASES = {
    "return": "enter",
    "escape": "esc",
    "space": " ",
    "insert": "ins",
    "delete": "del",
    "pgup": "pageup",
    "pgdown": "pagedown",
    "page_up": "pageup",
    "page_down": "pagedown",
}

_MODIFIERS = ("alt", "ctrl", "shift")

# (ctrl, alt, shift) -> event type for named keys
_KEY_EVENTS = {
    (False, False, False): KeyEvent,
    (False, False, True): ShiftKey,
    (False, True, False): AltKey,
    (False, True, True): AltShiftKey,
    (True, False, False): CtrlKey,
    (True, False, True): CtrlShiftKey,
    (True, True, False): CtrlAltKey,
}
_KEY_MODIFIERS = {cls: mods for mods, cls in _KEY_EVENTS.items()}


# ---------------------------------------------------------------------------
# Descriptor parsing
# ---------------------------------------------------------------------------

def _split_descriptor(descriptor: str) -> tuple[set[str], str]:
    text = descriptor.strip()
    if text in ("+", " "):
        return set(), text
    # A trailing "+" is the plus key itself, as in "ctrl++".
    if text.endswith("++"):
        parts = text[:-2].split("+") + ["+"]
    else:
        parts = text.split("+")
    *modifiers, base = [p if p == " " else p.strip() for p in parts]
    mods = {m.lower() for m in modifiers}
    unknown = mods - set(_MODIFIERS)
    if unknown or len(mods) != len(modifiers) or not base:
        raise ParseError(f"invalid key descriptor: {descriptor!r}")
    return mods, base


def parse_event(descriptor: str) -> Event:
    """
    Parse a human-readable key descriptor into an :class:`Event`.

    Examples
    --------
    >>> parse_event("ctrl+c")
    CtrlChar(char='c')
    >>> parse_event("Shift+Tab")
    ShiftKey(key=<Key.TAB: 'tab'>)
    >>> parse_event("q")
    Char(char='q')

    Raises
    ------
    ParseError
        If the descriptor names no key, an unknown modifier, or a
        combination no terminal reports.
    """
    mods, base = _split_descriptor(descriptor)
    ctrl, alt, shift = "ctrl" in mods, "alt" in mods, "shift" in mods

    name = base.lower()
    name = _ALIASES.get(name, name)

    if len(name) == 1:
        char = base if len(base) == 1 else name
        if not mods:
            return Char(char)
        if mods == {"shift"}:
            return Char(char.upper())
        if mods == {"ctrl"}:
            return CtrlChar(char.lower())
        if mods == {"alt"}:
            return AltChar(char)
        raise ParseError(f"unsupported modifiers for a character: {descriptor!r}")

    try:
        key = Key(name)
    except ValueError:
        raise ParseError(f"unknown key: {descriptor!r}") from None

    event_type = _KEY_EVENTS.get((ctrl, alt, shift))
    if event_type is None:
        raise ParseError(f"unsupported modifiers for a key: {descriptor!r}")
    return event_type(key)


def event_to_descriptor(event: Event) -> str | None:
    """
    Canonical descriptor for *event*, or ``None`` for non-key events.

    The result parses back to *event* with :func:`parse_event`.
    """
    if isinstance(event, Char):
        return event.char
    if isinstance(event, CtrlChar):
        return f"ctrl+{event.char}"
    if isinstance(event, AltChar):
        return f"alt+{event.char}"
    mods = _KEY_MODIFIERS.get(type(event))
    if mods is None:
        return None
    ctrl, alt, shift = mods
    names = [m for m, on in zip(_MODIFIERS, (alt, ctrl, shift)) if on]
    return "+".join(names + [event.key.value])  # type: ignore[attr-defined]


def _normalise(descriptor: str) -> Event | None:
    try:
        return parse_event(descriptor)
    except ParseError:
        logger.warning("Ignoring invalid key descriptor %r", descriptor)
        return None


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Manages the mapping from logical action names to key descriptors.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        # Parse once; invalid descriptors are dropped with a warning.
        self._events: dict[str, list[Event]] = {}
        for action, descriptors in self._bindings.items():
            events = [_normalise(d) for d in descriptors]
            self._events[action] = [e for e in events if e is not None]

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        Search order when *config_path* is ``None``:

        1. ``~/.weft/keybindings.json``
        2. Defaults only.

        The JSON file maps action names to lists of descriptors::

            {
                "quit": ["ctrl+c", "q"],
                "redraw": ["ctrl+l"]
            }

        An unreadable or malformed file falls back to the defaults.
        """
        if config_path is not None:
            path = Path(config_path)
        else:
            path = Path.home() / ".weft" / "keybindings.json"

        overrides: dict[str, list[str]] | None = None

        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Could not read keybindings from %s: %s", path, exc)
                raw = None
            if isinstance(raw, dict):
                overrides = {
                    action: val
                    for action, val in raw.items()
                    if isinstance(val, list) and all(isinstance(v, str) for v in val)
                }

        return cls(user_overrides=overrides)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def matches(self, event: Event | str, action: str) -> bool:
        """
        Test whether *event* is bound to *action*.

        Parameters
        ----------
        event:
            An :class:`Event` or a descriptor string such as ``"ctrl+c"``.
        action:
            Logical action name, e.g. ``"quit"``.
        """
        events = self._events.get(action)
        if not events:
            return False
        if isinstance(event, str):
            parsed = _normalise(event)
            if parsed is None:
                return False
            event = parsed
        return event in events

    def get_keys(self, action: str) -> list[str]:
        """Descriptors bound to *action*, as written."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        return list(self._bindings.keys())

    def find_action(self, event: Event | str) -> str | None:
        """
        Find the first action bound to *event*, or ``None``.

        Actions are checked in insertion order.
        """
        for action in self._bindings:
            if self.matches(event, action):
                return action
        return None

    def trigger(self, action: str) -> EventTrigger:
        """An :class:`EventTrigger` matching every event bound to *action*."""
        events = tuple(self._events.get(action, []))
        return EventTrigger.from_fn_and_tag(lambda e: e in events, ("action", action))

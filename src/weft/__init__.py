"""
Weft - a terminal UI toolkit.

Widgets are composed into a tree of views.  Parents negotiate sizes with
their children, route input events down the focus path and draw each
child through a scoped printer.  Scrollable regions settle whether they
need scrollbars with a bounded fixed-point negotiation.

Example:
    from weft import Root, PuppetBackend
    from weft.views import Button, LinearLayout, TextView

    root = Root(PuppetBackend(size=(40, 10)))
    root.set_root_view(
        LinearLayout.vertical([
            TextView("Hello"),
            Button("Quit", lambda r: r.quit()),
        ])
    )
    root.run()
"""

from weft.backend import Backend, ObservedScreen, PuppetBackend
from weft.config import ScrollConfig, WeftConfig
from weft.direction import Absolute, Direction, Orientation, ParseError, Relative
from weft.event import (
    Callback,
    Event,
    EventResult,
    EventTrigger,
    Key,
    KeyEvent,
    Mouse,
    MouseButton,
    MouseEvent,
    MouseEventKind,
)
from weft.keybindings import KeybindingsManager, parse_event
from weft.printer import Printer
from weft.rect import Rect
from weft.root import Root
from weft.theme import ColorStyle, Effect, Style, Theme
from weft.utils.rx import Rx
from weft.vec import XY, Vec2
from weft.view import CannotFocus, ScrollStrategy, Selector, View, ViewNotFound, ViewWrapper

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "XY",
    "Vec2",
    "Rect",
    # Directions
    "Orientation",
    "Absolute",
    "Relative",
    "Direction",
    "ParseError",
    # Events
    "Event",
    "Key",
    "KeyEvent",
    "Mouse",
    "MouseButton",
    "MouseEvent",
    "MouseEventKind",
    "Callback",
    "EventResult",
    "EventTrigger",
    # Views
    "View",
    "ViewWrapper",
    "Selector",
    "CannotFocus",
    "ViewNotFound",
    "ScrollStrategy",
    # Drawing
    "Printer",
    "Theme",
    "ColorStyle",
    "Style",
    "Effect",
    # Backends
    "Backend",
    "PuppetBackend",
    "ObservedScreen",
    # Application
    "Root",
    "WeftConfig",
    "ScrollConfig",
    "KeybindingsManager",
    "parse_event",
    "Rx",
]

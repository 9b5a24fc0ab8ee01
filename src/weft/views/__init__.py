"""Ready-made views."""
from __future__ import annotations

from weft.views.button import Button
from weft.views.circular_focus import CircularFocus
from weft.views.dummy import DummyView
from weft.views.fixed_layout import FixedLayout
from weft.views.linear_layout import LinearLayout
from weft.views.named_view import NamedView, with_name
from weft.views.on_event_view import OnEventView
from weft.views.scroll_view import ScrollView
from weft.views.text_view import TextView

__all__ = [
    "Button",
    "CircularFocus",
    "DummyView",
    "FixedLayout",
    "LinearLayout",
    "NamedView",
    "OnEventView",
    "ScrollView",
    "TextView",
    "with_name",
]

"""The view contract and the building blocks shared by views."""
from __future__ import annotations

from weft.view.scroll import ScrollCore, ScrollStrategy
from weft.view.size_cache import SizeCache
from weft.view.view import AnyCb, CannotFocus, Selector, View, ViewNotFound
from weft.view.view_wrapper import ViewWrapper

__all__ = [
    "AnyCb",
    "CannotFocus",
    "ScrollCore",
    "ScrollStrategy",
    "Selector",
    "SizeCache",
    "View",
    "ViewNotFound",
    "ViewWrapper",
]

"""Utilities shared across weft."""
from __future__ import annotations

from weft.utils.rx import Rx

__all__ = ["Rx"]

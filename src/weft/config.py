"""
Configuration for weft applications.

Settings can be loaded from YAML files or built programmatically, and
are applied by :meth:`weft.root.Root.from_config`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from weft.vec import XY, as_xy
from weft.view.scroll.core import ScrollStrategy

if TYPE_CHECKING:
    from weft.view.scroll.core import ScrollCore

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(default: str = "WARNING") -> str:
    """Log level from ``WEFT_LOG_LEVEL``, falling back to *default*."""
    val = os.environ.get("WEFT_LOG_LEVEL", default).upper()
    if val in _LOG_LEVELS:
        return val
    return default


@dataclass
class ScrollConfig:
    """Defaults for scrollable views."""

    show_scrollbars: bool = True
    scrollbar_padding: XY[int] = field(default_factory=lambda: XY(1, 0))
    wheel_step: int = 3  # Rows per wheel notch
    strategy: ScrollStrategy = ScrollStrategy.KEEP_ROW

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScrollConfig:
        strategy = data.get("strategy", ScrollStrategy.KEEP_ROW)
        if isinstance(strategy, str):
            strategy = ScrollStrategy.from_str(strategy)
        return cls(
            show_scrollbars=data.get("show_scrollbars", True),
            scrollbar_padding=as_xy(data.get("scrollbar_padding", (1, 0))),
            wheel_step=data.get("wheel_step", 3),
            strategy=strategy,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "show_scrollbars": self.show_scrollbars,
            "scrollbar_padding": list(self.scrollbar_padding),
            "wheel_step": self.wheel_step,
            "strategy": self.strategy.value,
        }

    def apply(self, core: ScrollCore) -> None:
        """Configure *core* with these settings."""
        core.set_show_scrollbars(self.show_scrollbars)
        core.set_scrollbar_padding(self.scrollbar_padding)
        core.wheel_step = self.wheel_step
        core.set_scroll_strategy(self.strategy)


@dataclass
class WeftConfig:
    """
    Application-level configuration.

    Example YAML:
        theme: ./themes/dark.yaml
        log_level: WARNING
        fps: 30
        scroll:
          show_scrollbars: true
          scrollbar_padding: [1, 0]
          wheel_step: 3
          strategy: keep_row
        keybindings:
          quit: ["ctrl+c", "q"]
    """

    theme: Path | None = None  # Theme file; default theme otherwise
    log_level: str = field(default_factory=get_log_level)
    fps: int | None = None  # Auto-refresh rate, None for event-driven redraws
    scroll: ScrollConfig = field(default_factory=ScrollConfig)
    keybindings: dict[str, list[str]] = field(default_factory=dict)  # Overrides

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WeftConfig:
        """Create config from a dictionary."""
        fps = data.get("fps")
        if fps is not None and fps <= 0:
            raise ValueError(f"fps must be positive, got {fps!r}")
        return cls(
            theme=Path(data["theme"]).expanduser() if data.get("theme") else None,
            log_level=str(data.get("log_level") or get_log_level()).upper(),
            fps=fps,
            scroll=ScrollConfig.from_dict(data.get("scroll") or {}),
            keybindings={k: list(v) for k, v in (data.get("keybindings") or {}).items()},
        )

    @classmethod
    def from_yaml(cls, path: Path) -> WeftConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> WeftConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "theme": str(self.theme) if self.theme else None,
            "log_level": self.log_level,
            "fps": self.fps,
            "scroll": self.scroll.to_dict(),
            "keybindings": {k: list(v) for k, v in self.keybindings.items()},
        }

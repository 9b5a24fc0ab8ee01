"""Theme loading and discovery."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from weft.logging import get_logger
from weft.theme.defaults import DEFAULT_PALETTE
from weft.theme.models import BorderStyle, Theme, parse_color

logger = get_logger("theme")

_THEME_SUFFIXES = (".json", ".yaml", ".yml")


def _read_theme_file(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"theme file {path} must contain a mapping")
    return data


def load_theme(path: Path | str) -> Theme:
    """Load a theme from a JSON or YAML file.

    Supports variable resolution: a palette value like ``"accent"`` is
    resolved against the ``variables`` dict first, then against the other
    palette entries.  Keys missing from the file take their default
    colour.

    Raises:
        ValueError: If a colour cannot be parsed or ``borders`` is unknown.
    """
    path = Path(path)
    data = _read_theme_file(path)

    variables: dict[str, str] = data.get("variables", {}) or {}
    raw_palette: dict[str, Any] = data.get("palette", {}) or {}

    resolved: dict[str, str] = dict(DEFAULT_PALETTE)
    for key, value in raw_palette.items():
        value = str(value)
        if value in variables:
            value = str(variables[value])
        elif value in raw_palette and value != key:
            # Forward reference to another palette key
            ref_val = str(raw_palette[value])
            value = str(variables.get(ref_val, ref_val))
        if parse_color(value) is None:
            raise ValueError(f"{path}: invalid colour {value!r} for {key!r}")
        resolved[key] = value

    try:
        borders = BorderStyle(str(data.get("borders", "simple")).lower())
    except ValueError:
        raise ValueError(f"{path}: unknown border style {data.get('borders')!r}") from None

    theme = Theme(
        name=data.get("name", path.stem),
        description=data.get("description", ""),
        author=data.get("author", ""),
        shadow=bool(data.get("shadow", True)),
        borders=borders,
        palette=resolved,
    )
    logger.debug("Loaded theme %s from %s", theme.name, path)
    return theme


def discover_themes(
    user_dir: Path | None = None,
    project_dir: Path | None = None,
) -> list[Path]:
    """Discover theme files from standard directories.

    Search paths:
    - ``~/.weft/themes/``
    - ``.weft/themes/``
    """
    theme_files: list[Path] = []
    dirs = [
        user_dir or (Path.home() / ".weft" / "themes"),
        project_dir or (Path.cwd() / ".weft" / "themes"),
    ]
    for d in dirs:
        if d.is_dir():
            for f in sorted(d.iterdir()):
                if f.is_file() and f.suffix in _THEME_SUFFIXES:
                    theme_files.append(f)
    return theme_files

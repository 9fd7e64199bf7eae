"""Color theme for fclean output.

Built-in colors can be overridden from the ``[colors]`` table of
``~/.config/fclean/theme.toml``. A broken theme file never stops a
cleanup; it is logged and the built-in colors are used instead.
"""

import logging
import re
import tomllib
from functools import cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from fclean.core.paths import get_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for each output role."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Per-project lines
    project: str = "#69B9A1"
    dry_run: str = "#0e8ac8"
    progress: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, v: object, info: Any) -> str:
        """Reject anything that is not a hex color string."""
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def _read_overrides(path: Path) -> dict[str, Any]:
    """Read the ``[colors]`` table of a theme file.

    Returns an empty dict when the file is missing or unusable.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Merge user color overrides over the built-in colors.

    Args:
        path: Theme file. Defaults to the XDG theme path.

    Returns:
        The merged colors, or the built-in colors if the overrides are invalid.
    """
    overrides = _read_overrides(path or get_theme_path())
    if not overrides:
        return ThemeColors()

    try:
        return ThemeColors.model_validate(overrides)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using built-in theme: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich style table used by fclean markup.

    Args:
        colors: Colors to use. Loaded from the theme file when None.

    Returns:
        Rich Theme defining every style name used in output markup.
    """
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    styles["project"] = f"bold {colors.project}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()

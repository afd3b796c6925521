"""Colour theme for partsweep output.

The bundled ``data/theme.toml`` defines every colour. A ``theme.toml`` in
the config directory may override any subset of them; an override that
fails validation is ignored as a whole.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from partsweep.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"

HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$"),
]


class ThemeColors(BaseModel):
    """Named colours used by partsweep output, as #RGB or #RRGGBB hex codes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Part file states
    orphan: HexColor = "#f53263"
    referenced: HexColor = "#69B9A1"
    simulated: HexColor = "#0e8ac8"


# Derived styles: name -> (colour field, bold)
_DERIVED_STYLES: dict[str, tuple[str, bool]] = {
    "bold_header": ("header", True),
    "dim": ("muted", False),
    "part.path": ("text", True),
    "part.size": ("info", False),
}


def get_user_theme_path() -> Path:
    """Path of the optional user theme override."""
    return get_config_dir() / THEME_FILENAME


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped with the package."""
    return resources.files("partsweep.data").joinpath(THEME_FILENAME)  # type: ignore[return-value]


def read_theme_file(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Non-string values are dropped. A missing, unreadable or malformed file
    yields None.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled colours with the user override applied."""
    bundled = read_theme_file(get_bundled_theme_path())
    if bundled is None:
        logger.error("Bundled theme is missing, using built-in colours")
        bundled = {}

    user_path = get_user_theme_path()
    overrides = read_theme_file(user_path) or {}

    try:
        return ThemeColors(**{**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Invalid colours in %s, using defaults: %s", user_path, e)
        return ThemeColors(**bundled) if bundled else ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme: one style per colour plus the derived styles."""
    colors = colors or load_theme()
    styles = colors.model_dump()
    styles["error"] = f"bold {colors.error}"
    for name, (field, bold) in _DERIVED_STYLES.items():
        color = getattr(colors, field)
        styles[name] = f"bold {color}" if bold else color
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by the process's consoles, loaded on first use."""
    return get_rich_theme()

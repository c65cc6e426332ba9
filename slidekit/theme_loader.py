"""Theme loader for the built-in presentation themes."""
from pathlib import Path
from typing import Dict, List

from .errors import ThemeNotFoundError
from .models import Theme

THEMES_DIR = Path(__file__).parent / "themes"

# Colors and fonts of the built-in themes; the stylesheet lives in themes/<name>.css.
THEME_PRESETS: Dict[str, Dict[str, str]] = {
    "default": {
        "primary": "#2196F3",
        "secondary": "#FFC107",
        "background": "#FFFFFF",
        "font": "sans-serif",
    },
    "dark": {
        "primary": "#90CAF9",
        "secondary": "#FFE082",
        "background": "#121212",
        "font": "sans-serif",
    },
}


def _check_name(theme: str) -> None:
    # Security: prevent path traversal
    if not theme or not theme.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")


def get_css(theme: str = "default") -> str:
    """
    Load the stylesheet snippet for the specified theme.

    Args:
        theme: Theme name (default, dark, etc.)

    Returns:
        CSS content as string, indented for a frontmatter ``style: |`` block

    Raises:
        ThemeNotFoundError: If theme file doesn't exist
        ValueError: If theme name is invalid
    """
    _check_name(theme)
    theme_path = THEMES_DIR / f"{theme}.css"
    if not theme_path.is_file():
        raise ThemeNotFoundError(theme, list_available_themes())

    with open(theme_path, "r", encoding="utf-8") as f:
        return f.read().rstrip("\n")


def get_theme(theme: str = "default") -> Theme:
    """
    Build a Theme for one of the built-in themes, stylesheet included.

    Raises:
        ThemeNotFoundError: If the theme is unknown
        ValueError: If theme name is invalid
    """
    css = get_css(theme)
    result = Theme(name=theme, **THEME_PRESETS.get(theme, {}))
    result.set_custom("style", css)
    return result


def list_available_themes() -> List[str]:
    """
    List all available themes.

    Returns:
        Sorted list of theme names
    """
    if not THEMES_DIR.exists():
        return []
    return sorted(f.stem for f in THEMES_DIR.glob("*.css") if f.is_file())


def validate_theme(theme: str) -> bool:
    """
    Check if a theme exists.

    Args:
        theme: Theme name to validate

    Returns:
        True if theme exists, False otherwise
    """
    try:
        get_css(theme)
        return True
    except (ThemeNotFoundError, ValueError):
        return False

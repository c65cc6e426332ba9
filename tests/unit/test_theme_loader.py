"""Test theme loader functionality."""

import pytest

import slidekit
from slidekit import encode, parse
from slidekit.errors import ThemeNotFoundError
from slidekit.models import Deck
from slidekit.theme_loader import get_css, get_theme, list_available_themes, validate_theme


def test_get_css_default():
    """Test that default theme loads and returns CSS content."""
    css = get_css("default")

    assert isinstance(css, str)
    assert "section {" in css
    assert ".columns" in css
    assert "#FFFFFF" in css


def test_get_css_dark():
    """Test that dark theme loads and returns CSS content."""
    css = get_css("dark")

    assert "#121212" in css  # Dark background color
    assert css != get_css("default")


def test_css_is_indented_for_frontmatter():
    for theme in list_available_themes():
        lines = get_css(theme).split("\n")
        assert all(line.startswith("  ") for line in lines if line)
        assert not get_css(theme).endswith("\n")


def test_get_css_invalid_theme():
    """Test that invalid theme names raise appropriate errors."""
    # Non-existent theme
    with pytest.raises(ThemeNotFoundError) as excinfo:
        get_css("nonexistent")
    assert excinfo.value.available == ["dark", "default"]

    # Invalid characters (path traversal attempt)
    with pytest.raises(ValueError):
        get_css("../evil")

    with pytest.raises(ValueError):
        get_css("theme/../../evil")

    with pytest.raises(ValueError):
        get_css("")


def test_list_available_themes():
    """Test that list_available_themes returns the built-in themes, sorted."""
    themes = list_available_themes()

    assert themes == sorted(themes)
    assert "default" in themes
    assert "dark" in themes


def test_validate_theme():
    # Valid themes
    assert validate_theme("default") is True
    assert validate_theme("dark") is True

    # Invalid themes
    assert validate_theme("nonexistent") is False
    assert validate_theme("../evil") is False


def test_get_theme():
    theme = get_theme("dark")

    assert theme.name == "dark"
    assert theme.background == "#121212"
    assert theme.primary == "#90CAF9"
    assert theme.style == get_css("dark")


def test_theme_style_survives_markdown_round_trip():
    """Test a built-in stylesheet written into frontmatter reads back intact."""
    deck = Deck(theme=get_theme("default"))
    again = parse(encode(deck))

    assert again.theme.name == "default"
    assert again.theme.style == get_css("default")


def test_theme_functions_are_public_api():
    assert slidekit.get_theme("default").name == "default"
    assert slidekit.list_available_themes() == list_available_themes()
    assert slidekit.validate_theme("dark") is True
    assert {"get_theme", "get_css", "list_available_themes", "validate_theme"} <= set(slidekit.__all__)

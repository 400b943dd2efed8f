from src.drsem.theme import (
    THEME_STYLES,
    THEMES,
    cycle_theme,
    diagram_color_mode,
    get_theme_style,
    theme_css,
)


def test_cycle_runs_through_all_themes():
    assert [cycle_theme(theme) for theme in THEMES] == ["dark", "corporate", "academic", "light"]
    assert cycle_theme("neon") == "dark"


def test_every_theme_has_a_style_record():
    assert set(THEME_STYLES) == set(THEMES)
    assert get_theme_style("neon") == THEME_STYLES["light"]


def test_only_dark_theme_renders_dark_diagrams():
    assert diagram_color_mode("dark") == "dark"
    assert {diagram_color_mode(theme) for theme in ("light", "corporate", "academic")} == {"light"}


def test_theme_css_uses_background():
    assert THEME_STYLES["academic"].background in theme_css("academic")

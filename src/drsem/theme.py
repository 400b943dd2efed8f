from dataclasses import dataclass
from typing import Dict, Tuple

THEMES: Tuple[str, ...] = ("light", "dark", "corporate", "academic")
DEFAULT_THEME = "light"


@dataclass(frozen=True)
class ThemeStyle:
    background: str
    surface: str
    border: str
    text: str
    muted_text: str
    accent: str
    latent_fill: str
    observed_fill: str
    error_fill: str
    node_border: str
    link_color: str


THEME_STYLES: Dict[str, ThemeStyle] = {
    "light": ThemeStyle(
        background="#f9fafb",
        surface="#ffffff",
        border="#e5e7eb",
        text="#0f172a",
        muted_text="#64748b",
        accent="#06b6d4",
        latent_fill="#f0f9ff",
        observed_fill="#f8fafc",
        error_fill="#fef2f2",
        node_border="#0e7490",
        link_color="#94a3b8",
    ),
    "dark": ThemeStyle(
        background="#020617",
        surface="#0f172a",
        border="#1e293b",
        text="#f1f5f9",
        muted_text="#94a3b8",
        accent="#06b6d4",
        latent_fill="#164e63",
        observed_fill="#1e293b",
        error_fill="#450a0a",
        node_border="#22d3ee",
        link_color="#64748b",
    ),
    "corporate": ThemeStyle(
        background="#f8fafc",
        surface="#ffffff",
        border="#bfdbfe",
        text="#1e293b",
        muted_text="#60a5fa",
        accent="#2563eb",
        latent_fill="#eff6ff",
        observed_fill="#ffffff",
        error_fill="#fef2f2",
        node_border="#1d4ed8",
        link_color="#93c5fd",
    ),
    "academic": ThemeStyle(
        background="#fdfbf7",
        surface="#fffefb",
        border="#e5e0d8",
        text="#333333",
        muted_text="#8d6e63",
        accent="#5d4037",
        latent_fill="#efebe9",
        observed_fill="#fffefb",
        error_fill="#fbe9e7",
        node_border="#5d4037",
        link_color="#a1887f",
    ),
}


def normalize_theme(theme: str) -> str:
    return theme if theme in THEME_STYLES else DEFAULT_THEME


def get_theme_style(theme: str) -> ThemeStyle:
    return THEME_STYLES[normalize_theme(theme)]


def cycle_theme(theme: str) -> str:
    index = THEMES.index(normalize_theme(theme))
    return THEMES[(index + 1) % len(THEMES)]


def diagram_color_mode(theme: str) -> str:
    return "dark" if theme == "dark" else "light"


def theme_css(theme: str) -> str:
    style = get_theme_style(theme)
    return (
        "<style>"
        f".stApp {{ background-color: {style.background}; color: {style.text}; }}"
        f"section[data-testid='stSidebar'] {{ background-color: {style.surface}; border-right: 1px solid {style.border}; }}"
        f".drsem-footer {{ color: {style.muted_text}; font-size: 0.75rem; text-align: center; }}"
        "</style>"
    )

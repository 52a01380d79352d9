"""Color palette for QuizArena supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#0F172A", dark="#E2F5E9")
    BACKGROUND_PRIMARY = ThemeColors(light="#F8FAFC", dark="#0B1120")
    BACKGROUND_SECONDARY = ThemeColors(light="#E2E8F0", dark="#111A30")
    BORDER_PRIMARY = ThemeColors(light="#CBD5E1", dark="#334155")

    # Answer feedback and countdown warning
    SUCCESS = ThemeColors(light="#15803D", dark="#4ADE80")
    ERROR = ThemeColors(light="#B91C1C", dark="#F87171")

    BUTTON_PRIMARY_BG = ThemeColors(light="#1F9AA5", dark="#22D3EE")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#0B1120")
    BUTTON_HOVER_BG = ThemeColors(light="#CBD5E1", dark="#1E293B")

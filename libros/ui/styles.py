"""Rich style strings derived from a color theme."""

from dataclasses import dataclass

from ..config import Theme

GRAY = "#9CA3AF"
WHITE = "#FFFFFF"
RED = "#FF0000"
GREEN = "#00FF00"

APP_TITLE = "Ｌｉｂｒｏｓ　－　Ａ　Ｂｏｏｋ　Ｍａｎａｇｅｒ"


def letter_spaced(s: str) -> str:
    """Put a space between every character: ``"Type:"`` -> ``"T y p e :"``."""
    return " ".join(s)


@dataclass(frozen=True)
class Styles:
    """
    Styles for one theme.

    Rebuilt whenever the theme changes; screens receive it at render time
    instead of reading a global.
    """
    title: str
    selected: str
    focused: str
    blurred: str
    button: str
    error: str
    success: str
    help: str
    notes: str
    accent: str

    @classmethod
    def from_theme(cls, theme: Theme) -> "Styles":
        return cls(
            title=f"bold {theme.primary_color}",
            selected=f"bold {WHITE} on {theme.primary_color}",
            focused=theme.primary_color,
            blurred=GRAY,
            button=f"bold {theme.secondary_color}",
            error=RED,
            success=GREEN,
            help=f"italic {GRAY}",
            notes=f"italic {GRAY}",
            accent=f"bold {theme.tertiary_color}",
        )

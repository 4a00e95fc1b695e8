"""
Configuration management for libros.

Handles loading and saving user configuration from:
- $LIBROS_CONFIG, if set
- XDG config directory: ~/.config/libros/config.json
- Fallback: ~/.libros/config.json

The configuration is an explicit value: the UI receives it at startup and
gets a new one back when the theme changes. Nothing here is mutated behind
the renderer's back.
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import (
    BOOKS_PER_PAGE, DEFAULT_LIBRARY_PATH, INPUT_FIELD_WIDTH, TEXTAREA_WIDTH,
)

logger = logging.getLogger(__name__)


@dataclass
class Theme:
    """Color theme used by the terminal UI."""
    name: str = "Default"
    primary_color: str = "#7D56F4"
    secondary_color: str = "#FFA500"
    tertiary_color: str = "#FFD700"


DEFAULT_THEME = Theme()

THEMES: Dict[str, Theme] = {
    "Default": DEFAULT_THEME,
    "Peach Red": Theme("Peach Red", "#ff5d62", "#b8e994", "#7bed9f"),
    "Surimi Orange": Theme("Surimi Orange", "#ff9e3b", "#70a1ff", "#1e90ff"),
    "Spring Blue": Theme("Spring Blue", "#7fb4ca", "#f8a5c2", "#f78fb3"),
}


def theme_names() -> List[str]:
    """Names of the built-in themes, in display order."""
    return list(THEMES)


def get_theme(name: str) -> Theme:
    """
    Look up a built-in theme by name.

    Matching ignores case and accepts snake_case ("peach_red").
    Unknown names give the default theme.
    """
    wanted = (name or "").replace("_", " ").strip().lower()
    for theme_name, theme in THEMES.items():
        if theme_name.lower() == wanted:
            return theme
    return DEFAULT_THEME


@dataclass
class LibraryConfig:
    """Library-related settings."""
    path: Optional[str] = None


@dataclass
class UIConfig:
    """Terminal UI layout settings."""
    page_size: int = BOOKS_PER_PAGE
    input_width: int = INPUT_FIELD_WIDTH
    textarea_width: int = TEXTAREA_WIDTH


@dataclass
class LibrosConfig:
    """Main libros configuration."""
    theme: Theme = field(default_factory=Theme)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "theme": asdict(self.theme),
            "library": asdict(self.library),
            "ui": asdict(self.ui),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LibrosConfig':
        """Create from dictionary."""
        return cls(
            theme=Theme(**data.get("theme", {})),
            library=LibraryConfig(**data.get("library", {})),
            ui=UIConfig(**data.get("ui", {})),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Returns:
        Path to config file
    """
    override = os.environ.get("LIBROS_CONFIG")
    if override:
        return Path(override).expanduser()

    xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "libros"
    else:
        config_dir = Path.home() / ".libros"

    return config_dir / "config.json"


def load_config() -> LibrosConfig:
    """
    Load configuration from file.

    Returns:
        LibrosConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return LibrosConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return LibrosConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        return LibrosConfig()


def save_config(config: LibrosConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def update_theme(name: str) -> LibrosConfig:
    """Persist the named theme and return the updated configuration."""
    config = load_config()
    config.theme = get_theme(name)
    save_config(config)
    return config


def get_library_path(config: LibrosConfig) -> Path:
    """Directory holding books.db, its backup and exports."""
    if config.library.path:
        return Path(config.library.path).expanduser()
    return DEFAULT_LIBRARY_PATH

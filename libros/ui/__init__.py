"""Interactive terminal UI: widgets, forms, screens and the router that ties them together."""

from .app import LibrosApp, run_tui
from .router import Router
from .screens import Screen

__all__ = ["LibrosApp", "Router", "Screen", "run_tui"]

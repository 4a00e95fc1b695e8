"""Decorators for libros CLI commands."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console

from .errors import StorageError, ValidationError

logger = logging.getLogger(__name__)
console = Console()


def handle_library_errors(func: Callable) -> Callable:
    """
    Decorator to turn library errors into a red message and exit code 1.

    Centralizes error handling for:
    - ValidationError: Rejected title, author, notes or path
    - StorageError: Database or filesystem failure
    - General exceptions: Unexpected errors
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            console.print(f"[bold red]Error:[/bold red] Invalid input: {e}")
            raise typer.Exit(code=1)
        except StorageError as e:
            console.print(f"[bold red]Error:[/bold red] Storage failure: {e}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper


def require_confirmation(message: str = "Are you sure you want to continue?") -> Callable:
    """
    Decorator to require user confirmation for destructive operations.

    Skipped when the command is called with ``yes=True``.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            if kwargs.get('yes', False):
                return func(*args, **kwargs)

            console.print(f"[yellow]⚠️  {message}[/yellow]")
            if not typer.confirm("Continue?"):
                console.print("[red]Operation cancelled[/red]")
                raise typer.Exit(code=0)

            return func(*args, **kwargs)

        return wrapper
    return decorator

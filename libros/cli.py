from pathlib import Path
import logging
from typing import Optional
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from . import __version__
from .config import get_library_path, get_theme, load_config, theme_names, update_theme
from .constants import EXPORTS_DIRNAME
from .db.models import BookType
from .decorators import handle_library_errors, require_confirmation
from .library_db import Library
from .services.export_service import EXPORT_FORMATS, ExportService
from .utils import format_book_type, format_date
from .validation import validate_export_path

# Initialize Rich Traceback for better error messages
install(show_locals=False)

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="libros - a personal book library manager for the terminal.")


def _library_path(ctx: typer.Context) -> Path:
    return ctx.obj["library_path"]


@handle_library_errors
def _launch_tui(library_path: Path, config) -> None:
    from .ui.app import run_tui

    run_tui(library_path, config)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    library: Optional[Path] = typer.Option(
        None, "--library", "-l", help="Library directory (default: ~/.libros)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    libros - keep track of the books you own.

    Run without a command to open the interactive interface.
    """
    if verbose:
        logging.getLogger("libros").setLevel(logging.DEBUG)
        console.print("[bold green]Verbose mode enabled.[/bold green]")

    config = load_config()
    library_path = library.expanduser() if library else get_library_path(config)
    ctx.obj = {"library_path": library_path, "config": config}

    if ctx.invoked_subcommand is None:
        _launch_tui(library_path, config)


@app.command()
def about():
    """Display information about libros."""
    console.print(f"[bold cyan]libros {__version__} - Personal Book Manager[/bold cyan]")
    console.print("")
    console.print("Keep a list of the books you own:")
    console.print("  • Add, view, edit and delete books from a keyboard-driven interface")
    console.print("  • Paperback, hardback, audio and digital formats")
    console.print("  • Export to JSON or Markdown")
    console.print("  • One-step database backup")
    console.print("  • Color themes")
    console.print("")
    console.print("[bold]Commands:[/bold]")
    console.print("  libros                       Open the interactive interface")
    console.print("  libros list                  List books")
    console.print("  libros add <title> <author>  Add a book")
    console.print("  libros delete <id>           Delete a book")
    console.print("  libros export <format> [dir] Export books (json, markdown)")
    console.print("  libros backup                Back up the database")
    console.print("  libros theme [name]          Show or set the color theme")


@app.command(name="list")
@handle_library_errors
def list_books(ctx: typer.Context):
    """List all books, newest first."""
    lib = Library.open(_library_path(ctx))
    try:
        books = lib.load_books()
    finally:
        lib.close()

    if not books:
        console.print("[yellow]No books found[/yellow]")
        return

    table = Table(title="Books")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Author", style="blue")
    table.add_column("Type", style="magenta")
    table.add_column("Added", style="yellow")

    for book in books:
        table.add_row(
            str(book.id),
            book.title[:40],
            book.author[:30],
            format_book_type(book.type),
            format_date(book.created_at),
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} books[/dim]")


@app.command()
@handle_library_errors
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Book title"),
    author: str = typer.Argument(..., help="Author name"),
    book_type: BookType = typer.Option(BookType.PAPERBACK, "--type", "-t", help="Book format"),
    notes: str = typer.Option("", "--notes", "-n", help="Notes about the book"),
):
    """
    Add a book to the library.

    Examples:
        libros add "Dune" "Frank Herbert" --type digital
    """
    lib = Library.open(_library_path(ctx))
    try:
        book = lib.save_book(title, author, book_type, notes)
    finally:
        lib.close()

    console.print(f"[green]✓ Added book {book.id}: {book.title} by {book.author}[/green]")


@app.command()
@handle_library_errors
@require_confirmation("This permanently deletes the book.")
def delete(
    ctx: typer.Context,
    book_id: int = typer.Argument(..., help="ID of the book to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a book by ID."""
    lib = Library.open(_library_path(ctx))
    try:
        rows = lib.delete_book(book_id)
    finally:
        lib.close()

    if rows:
        console.print(f"[green]✓ Deleted book {book_id}[/green]")
    else:
        console.print(f"[yellow]No book with ID {book_id}[/yellow]")


@app.command()
@handle_library_errors
def export(
    ctx: typer.Context,
    fmt: str = typer.Argument(..., help="Export format: json or markdown"),
    directory: Optional[Path] = typer.Argument(None, help="Output directory (default: <library>/exports)"),
):
    """
    Export all books to JSON or Markdown.

    Examples:
        libros export json
        libros export markdown ~/Documents
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Error: Unknown format '{fmt}'. Choose from: {', '.join(EXPORT_FORMATS)}[/red]")
        raise typer.Exit(code=1)

    library_path = _library_path(ctx)
    raw = str(directory.expanduser().resolve()) if directory else ""
    target = validate_export_path(raw, library_path / EXPORTS_DIRNAME)

    lib = Library.open(library_path)
    try:
        books = lib.load_books()
    finally:
        lib.close()

    output = ExportService().export(books, target, fmt)
    console.print(f"[green]✓ Exported {len(books)} books to {output}[/green]")


@app.command()
@handle_library_errors
def backup(ctx: typer.Context):
    """Copy the database to books.db.bak next to it."""
    lib = Library.open(_library_path(ctx))
    try:
        path = ExportService().backup_database(lib.db_path)
    finally:
        lib.close()

    console.print(f"[green]✓ Backup saved to {path}[/green]")


@app.command()
@handle_library_errors
def theme(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Theme to use (e.g. 'Spring Blue' or spring_blue)"),
):
    """Show the available themes, or switch to one."""
    current = ctx.obj["config"].theme.name

    if name is None:
        for theme_name in theme_names():
            marker = "[bold green]*[/bold green]" if theme_name == current else " "
            console.print(f" {marker} [{get_theme(theme_name).primary_color}]{theme_name}[/]")
        return

    wanted = name.replace("_", " ").strip().lower()
    if wanted not in (n.lower() for n in theme_names()):
        console.print(f"[red]Error: Unknown theme '{name}'. Choose from: {', '.join(theme_names())}[/red]")
        raise typer.Exit(code=1)

    config = update_theme(name)
    logger.info(f"Theme set to {config.theme.name}")
    console.print(f"[green]✓ Theme set to {config.theme.name}[/green]")


if __name__ == "__main__":
    app()

"""Exception types shared across libros."""


class LibrosError(Exception):
    """Base class for errors raised by libros."""


class ValidationError(LibrosError, ValueError):
    """Input rejected before it reaches the store.

    Always recoverable: the user corrects the field and resubmits.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class StorageError(LibrosError):
    """Failure from the database or the filesystem (export, backup)."""

"""
Service layer for libros.

Provides file-producing operations on top of the Library.
"""

from .export_service import ExportService, EXPORT_FORMATS

__all__ = [
    'ExportService',
    'EXPORT_FORMATS',
]

"""
SQLAlchemy models for the libros database.

A single ``books`` table; every other piece of state lives in memory.
"""

from datetime import datetime
from enum import Enum
from typing import List

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BookType(str, Enum):
    """Format a book is owned in."""

    PAPERBACK = "paperback"
    HARDBACK = "hardback"
    AUDIO = "audio"
    DIGITAL = "digital"

    @classmethod
    def choices(cls) -> List["BookType"]:
        return list(cls)

    @classmethod
    def coerce(cls, value) -> "BookType":
        """Map a stored or typed value onto a BookType, defaulting to paperback."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.PAPERBACK

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Book(Base):
    """A book in the personal library."""
    __tablename__ = 'books'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default=BookType.PAPERBACK.value,
                  server_default=text("'paperback'"))
    notes = Column(Text, default="")

    # Timestamps (set explicitly by the store so created_at == updated_at on insert)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index('idx_book_created', 'created_at'),
    )

    @property
    def book_type(self) -> BookType:
        return BookType.coerce(self.type)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "type": self.book_type.value,
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Book(id={self.id}, title='{(self.title or '')[:50]}')>"

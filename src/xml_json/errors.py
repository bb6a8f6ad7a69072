"""Exception taxonomy for the converter."""

from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for every error raised by xml_json."""

    pass


class XmlParseError(ConversionError):
    """Raised by the strict XML decode path when markup is malformed."""

    pass


class XmlEncodeError(ConversionError):
    """Raised when a node cannot be rendered as XML."""

    pass


class JsonParseError(ConversionError):
    """Raised by the strict JSON decode path when text is not valid JSON."""

    pass


class JsonEncodeError(ConversionError):
    """Raised when a value handed to the JSON encoder is not a node tree."""

    pass


class ShapeError(ConversionError):
    """Raised when CSV rows and header disagree, or rows cannot form a table."""

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message if row is None else f"Row {row}: {message}")
        self.row = row


class FileAccessError(ConversionError, OSError):
    """Raised when the file collaborator cannot read or write a path."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


__all__ = [
    "ConversionError",
    "FileAccessError",
    "JsonEncodeError",
    "JsonParseError",
    "ShapeError",
    "XmlEncodeError",
    "XmlParseError",
]

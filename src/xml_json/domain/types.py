"""Node kinds, document formats and reserved keys of the generic structure."""

from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    """Variant tag of a generic structure node."""

    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"


class DocumentFormat(str, Enum):
    """Text representations the converter reads and writes."""

    XML = "xml"
    JSON = "json"
    CSV = "csv"

    @classmethod
    def from_suffix(cls, suffix: str) -> "DocumentFormat":
        """Map a file suffix such as ``.xml`` to its format."""

        value = suffix.lower().lstrip(".")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unsupported file type: {suffix or '(none)'}") from None


# XML attributes of the enclosing element
ATTRIBUTES_KEY = "@attributes"

# Text content of an element that is not a bare leaf
VALUE_KEY = "_value"

# Text interleaved with child elements (mixed content)
TEXT_KEY = "#text"

XML_ERROR_KEY = "xml_error"
JSON_ERROR_KEY = "json_error"

__all__ = [
    "ATTRIBUTES_KEY",
    "DocumentFormat",
    "JSON_ERROR_KEY",
    "NodeKind",
    "TEXT_KEY",
    "VALUE_KEY",
    "XML_ERROR_KEY",
]

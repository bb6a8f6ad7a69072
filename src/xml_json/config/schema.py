"""Configuration models for the converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class XmlConfig:
    """XML rendering options."""

    root_tag: str = "root"
    pretty_print: bool = False
    encoding: str = "UTF-8"


@dataclass(slots=True)
class JsonConfig:
    """JSON rendering options."""

    indent: Optional[int] = None
    ensure_ascii: bool = False


@dataclass(slots=True)
class CsvConfig:
    """CSV dialect and table options."""

    delimiter: str = ","
    quote_char: str = '"'
    has_header: bool = True
    union_headers: bool = False
    line_terminator: str = "\r\n"


@dataclass(slots=True)
class ConverterConfig:
    """Top-level configuration for the converter."""

    xml: XmlConfig = field(default_factory=XmlConfig)
    json: JsonConfig = field(default_factory=JsonConfig)
    csv: CsvConfig = field(default_factory=CsvConfig)


__all__ = [
    "ConverterConfig",
    "CsvConfig",
    "JsonConfig",
    "XmlConfig",
]

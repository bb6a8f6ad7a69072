"""XML decoding module."""

from .xml_parser import (
    XmlDocument,
    decode_element,
    decode_xml,
    local_name,
    parse_xml_document,
)

__all__ = [
    "XmlDocument",
    "decode_element",
    "decode_xml",
    "local_name",
    "parse_xml_document",
]

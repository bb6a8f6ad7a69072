"""
XML/JSON/CSV converter

Convert data between a generic nested structure, XML, JSON and CSV.

Architecture:
    XML  -> parser   -> generic structure -> renderer -> XML
    JSON -> json_codec <-> generic structure
    CSV  -> csv_codec  <-> generic structure (table of flat rows)
"""

__version__ = "0.8.0"

from .api import csv_to_json, csv_to_xml, json_to_csv, json_to_xml, xml_to_csv, xml_to_json
from .config import ConverterConfig, load_config
from .converter import ConversionResult, XmlJsonConverter, convert_file
from .csv_codec import decode_csv, encode_csv
from .domain import (
    ArrayNode,
    Node,
    ObjectNode,
    ScalarNode,
    from_python,
    is_error_node,
    to_python,
)
from .errors import (
    ConversionError,
    FileAccessError,
    JsonEncodeError,
    JsonParseError,
    ShapeError,
    XmlEncodeError,
    XmlParseError,
)
from .files import FileStore, LocalFileStore
from .json_codec import decode_json, encode_json
from .parser import decode_xml, parse_xml_document
from .renderer import encode_xml

__all__ = [
    # Version
    "__version__",
    # Model
    "ArrayNode",
    "Node",
    "ObjectNode",
    "ScalarNode",
    "from_python",
    "is_error_node",
    "to_python",
    # Codecs
    "decode_csv",
    "decode_json",
    "decode_xml",
    "encode_csv",
    "encode_json",
    "encode_xml",
    "parse_xml_document",
    # Compound conversions
    "csv_to_json",
    "csv_to_xml",
    "json_to_csv",
    "json_to_xml",
    "xml_to_csv",
    "xml_to_json",
    # Facade
    "ConversionResult",
    "XmlJsonConverter",
    "convert_file",
    # Files and config
    "ConverterConfig",
    "FileStore",
    "LocalFileStore",
    "load_config",
    # Errors
    "ConversionError",
    "FileAccessError",
    "JsonEncodeError",
    "JsonParseError",
    "ShapeError",
    "XmlEncodeError",
    "XmlParseError",
]

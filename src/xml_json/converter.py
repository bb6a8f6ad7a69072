"""
Converter facade
================
Holds the most recent value of each representation (generic structure,
XML, JSON, CSV) and chains decode/encode pairs between them. File access is
delegated to a FileStore.

A converter instance is not thread-safe: use one instance per caller, or
guard it externally. Every compound method also returns the value it
produced, so callers can thread results explicitly instead of reading slots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import ConverterConfig
from .csv_codec import decode_csv, encode_csv
from .domain import DocumentFormat, Node, from_python, is_error_node, xml_error_node
from .errors import ConversionError, XmlParseError
from .files import FileStore, LocalFileStore, PathLike
from .json_codec import decode_json, encode_json
from .parser import parse_xml_document
from .renderer import encode_xml

logger = logging.getLogger(__name__)


class XmlJsonConverter:
    """
    Converts data between the generic structure, XML, JSON and CSV.

    Usage:
        converter = XmlJsonConverter()
        converter.load_json("orders.json")
        converter.json_to_xml("orders")
        converter.save_xml("orders.xml")

        converter.xml = "<r><x>1</x><x>2</x></r>"
        node = converter.xml_to_node()
        if is_error_node(node):
            print("Malformed XML")
    """

    def __init__(self, config: Optional[ConverterConfig] = None, file_store: Optional[FileStore] = None):
        """
        Initialize the converter.

        Args:
            config: Converter configuration options
            file_store: File collaborator, defaults to the local filesystem
        """
        self.config = config or ConverterConfig()
        self.file_store = file_store or LocalFileStore()
        self.root_tag: Optional[str] = None
        self._node: Optional[Node] = None
        self._xml: Optional[Union[str, bytes]] = None
        self._json: Optional[str] = None
        self._csv: Optional[str] = None

    # =========================================================================
    # REPRESENTATION SLOTS
    # =========================================================================

    @property
    def node(self) -> Optional[Node]:
        """Copy of the current generic structure."""
        return self._node.copy() if self._node is not None else None

    @node.setter
    def node(self, value: Any) -> None:
        self._node = from_python(value).copy() if value is not None else None

    @property
    def xml(self) -> Optional[Union[str, bytes]]:
        """Current XML text, or raw bytes when loaded from a file."""
        return self._xml

    @xml.setter
    def xml(self, value: Optional[Union[str, bytes]]) -> None:
        self._xml = value

    @property
    def json(self) -> Optional[str]:
        return self._json

    @json.setter
    def json(self, value: Optional[str]) -> None:
        self._json = value

    @property
    def csv(self) -> Optional[str]:
        return self._csv

    @csv.setter
    def csv(self, value: Optional[str]) -> None:
        self._csv = value

    # =========================================================================
    # FILE I/O
    # =========================================================================

    def load_xml(self, path: PathLike) -> None:
        """Load an XML file into the XML slot. The bytes are kept as read."""
        self._xml = self.file_store.read(path)
        logger.info(f"Loaded XML from {path}")

    def save_xml(self, path: PathLike) -> None:
        xml_content = self._require(self._xml, DocumentFormat.XML)
        if isinstance(xml_content, str):
            xml_content = xml_content.encode(self.config.xml.encoding)
        self.file_store.write(path, xml_content)
        logger.info(f"Saved XML to {path}")

    def load_json(self, path: PathLike) -> None:
        self._json = self._read_text(path)
        logger.info(f"Loaded JSON from {path}")

    def save_json(self, path: PathLike) -> None:
        self.file_store.write(path, self._require(self._json, DocumentFormat.JSON).encode("utf-8"))
        logger.info(f"Saved JSON to {path}")

    def load_csv(self, path: PathLike) -> None:
        self._csv = self._read_text(path)
        logger.info(f"Loaded CSV from {path}")

    def save_csv(self, path: PathLike) -> None:
        self.file_store.write(path, self._require(self._csv, DocumentFormat.CSV).encode("utf-8"))
        logger.info(f"Saved CSV to {path}")

    # =========================================================================
    # SINGLE-STEP CONVERSIONS
    # =========================================================================

    def xml_to_node(self) -> Node:
        """Decode the XML slot. Malformed XML yields the ``xml_error`` sentinel."""
        xml_content = self._require(self._xml, DocumentFormat.XML)
        try:
            document = parse_xml_document(xml_content)
        except XmlParseError as e:
            logger.warning(f"Returning xml_error sentinel: {e}")
            self._node = xml_error_node()
        else:
            self.root_tag = document.root_tag
            self._node = document.node
        return self._node.copy()

    def node_to_xml(self, root_tag: Optional[str] = None) -> str:
        """
        Encode the generic structure as XML.

        Args:
            root_tag: Document element tag. Defaults to the tag of the last
                decoded XML document, then to the configured root tag.
        """
        node = self._require(self._node, "generic structure")
        tag = root_tag or self.root_tag or self.config.xml.root_tag
        self._xml = encode_xml(
            node,
            root_tag=tag,
            pretty_print=self.config.xml.pretty_print,
            encoding=self.config.xml.encoding,
        )
        return self._xml

    def json_to_node(self) -> Node:
        """Decode the JSON slot. Invalid JSON yields the ``json_error`` sentinel."""
        self._node = decode_json(self._require(self._json, DocumentFormat.JSON))
        return self._node.copy()

    def node_to_json(self) -> str:
        node = self._require(self._node, "generic structure")
        self._json = encode_json(node, indent=self.config.json.indent, ensure_ascii=self.config.json.ensure_ascii)
        return self._json

    def csv_to_node(self, delimiter: Optional[str] = None, has_header: Optional[bool] = None) -> Node:
        """Decode the CSV slot into a table of rows."""
        options = self.config.csv
        self._node = decode_csv(
            self._require(self._csv, DocumentFormat.CSV),
            delimiter=delimiter or options.delimiter,
            has_header=options.has_header if has_header is None else has_header,
            quote_char=options.quote_char,
        )
        return self._node.copy()

    def node_to_csv(self, delimiter: Optional[str] = None, quote_char: Optional[str] = None) -> str:
        options = self.config.csv
        self._csv = encode_csv(
            self._require(self._node, "generic structure"),
            delimiter=delimiter or options.delimiter,
            quote_char=quote_char or options.quote_char,
            union_headers=options.union_headers,
            line_terminator=options.line_terminator,
        )
        return self._csv

    # =========================================================================
    # COMPOUND CONVERSIONS
    # =========================================================================

    def xml_to_json(self) -> str:
        self.xml_to_node()
        return self.node_to_json()

    def json_to_xml(self, root_tag: Optional[str] = None) -> str:
        self.json_to_node()
        return self.node_to_xml(root_tag)

    def csv_to_json(self) -> str:
        self.csv_to_node()
        return self.node_to_json()

    def json_to_csv(self) -> str:
        self.json_to_node()
        return self.node_to_csv()

    def csv_to_xml(self, root_tag: Optional[str] = None) -> str:
        self.csv_to_node()
        return self.node_to_xml(root_tag)

    def xml_to_csv(self) -> str:
        self.xml_to_node()
        return self.node_to_csv()

    def convert(
        self,
        source: DocumentFormat,
        target: DocumentFormat,
        root_tag: Optional[str] = None,
    ) -> str:
        """
        Decode the ``source`` slot and encode the result into the ``target`` slot.

        Returns:
            The target representation
        """
        self.decode(source)
        return self.encode(target, root_tag)

    # =========================================================================
    # FORMAT DISPATCH
    # =========================================================================

    def load(self, fmt: DocumentFormat, path: PathLike) -> None:
        loaders = {
            DocumentFormat.XML: self.load_xml,
            DocumentFormat.JSON: self.load_json,
            DocumentFormat.CSV: self.load_csv,
        }
        loaders[DocumentFormat(fmt)](path)

    def save(self, fmt: DocumentFormat, path: PathLike) -> None:
        savers = {
            DocumentFormat.XML: self.save_xml,
            DocumentFormat.JSON: self.save_json,
            DocumentFormat.CSV: self.save_csv,
        }
        savers[DocumentFormat(fmt)](path)

    def decode(self, fmt: DocumentFormat) -> Node:
        """Decode the slot of ``fmt`` into the generic structure."""
        decoders = {
            DocumentFormat.XML: self.xml_to_node,
            DocumentFormat.JSON: self.json_to_node,
            DocumentFormat.CSV: self.csv_to_node,
        }
        return decoders[DocumentFormat(fmt)]()

    def encode(self, fmt: DocumentFormat, root_tag: Optional[str] = None) -> str:
        """Encode the generic structure into the slot of ``fmt``."""
        fmt = DocumentFormat(fmt)
        if fmt is DocumentFormat.XML:
            return self.node_to_xml(root_tag)
        if fmt is DocumentFormat.JSON:
            return self.node_to_json()
        return self.node_to_csv()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _read_text(self, path: PathLike) -> str:
        content = self.file_store.read(path)
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ConversionError(f"{path} is not UTF-8 text: {e}") from e

    def _require(self, value: Any, name: Union[DocumentFormat, str]) -> Any:
        if value is None:
            label = name.value.upper() if isinstance(name, DocumentFormat) else name
            raise ConversionError(f"No {label} data loaded")
        return value


@dataclass
class ConversionResult:
    """Result of a file conversion."""
    success: bool
    source_format: DocumentFormat
    target_format: DocumentFormat
    output: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "source_format": self.source_format.value,
            "target_format": self.target_format.value,
            "output": self.output,
            "errors": self.errors,
        }


def convert_file(
    input_path: PathLike,
    output_path: PathLike,
    config: Optional[ConverterConfig] = None,
    root_tag: Optional[str] = None,
    file_store: Optional[FileStore] = None,
) -> ConversionResult:
    """
    Convert a file to another format, choosing formats by file extension.

    A source that decodes to a parse sentinel is reported as an unsuccessful
    result and nothing is written. Shape, encoding and file errors are raised.

    Args:
        input_path: Path to the input file (.xml, .json or .csv)
        output_path: Path to the output file (.xml, .json or .csv)
        config: Optional configuration
        root_tag: Document element tag when writing XML
        file_store: File collaborator, defaults to the local filesystem

    Returns:
        ConversionResult with the produced text or error details
    """
    source_format = DocumentFormat.from_suffix(Path(input_path).suffix)
    target_format = DocumentFormat.from_suffix(Path(output_path).suffix)

    converter = XmlJsonConverter(config, file_store)
    converter.load(source_format, input_path)

    node = converter.decode(source_format)
    if is_error_node(node):
        return ConversionResult(
            success=False,
            source_format=source_format,
            target_format=target_format,
            errors=[f"Malformed {source_format.value.upper()} in {input_path}"],
        )

    output = converter.encode(target_format, root_tag)
    converter.save(target_format, output_path)

    return ConversionResult(
        success=True,
        source_format=source_format,
        target_format=target_format,
        output=output,
    )


__all__ = ["ConversionResult", "XmlJsonConverter", "convert_file"]

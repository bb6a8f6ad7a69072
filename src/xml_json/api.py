"""Stateless compound conversions.

Each helper is a decode followed by an encode. Malformed XML or JSON input
flows through as its error sentinel, so ``xml_to_json("<r><")`` returns
``'{"xml_error": "true"}'``.
"""

from __future__ import annotations

from typing import Optional, Union

from .config import ConverterConfig
from .csv_codec import decode_csv, encode_csv
from .domain import Node
from .json_codec import decode_json, encode_json
from .parser import decode_xml
from .renderer import encode_xml


def xml_to_json(xml_content: Union[str, bytes], config: Optional[ConverterConfig] = None) -> str:
    return _to_json(decode_xml(xml_content), config)


def json_to_xml(json_content: str, root_tag: Optional[str] = None, config: Optional[ConverterConfig] = None) -> str:
    return _to_xml(decode_json(json_content), root_tag, config)


def csv_to_json(csv_content: str, config: Optional[ConverterConfig] = None) -> str:
    return _to_json(_from_csv(csv_content, config), config)


def json_to_csv(json_content: str, config: Optional[ConverterConfig] = None) -> str:
    return _to_csv(decode_json(json_content), config)


def csv_to_xml(csv_content: str, root_tag: Optional[str] = None, config: Optional[ConverterConfig] = None) -> str:
    return _to_xml(_from_csv(csv_content, config), root_tag, config)


def xml_to_csv(xml_content: Union[str, bytes], config: Optional[ConverterConfig] = None) -> str:
    return _to_csv(decode_xml(xml_content), config)


def _from_csv(csv_content: str, config: Optional[ConverterConfig]) -> Node:
    options = (config or ConverterConfig()).csv
    return decode_csv(
        csv_content,
        delimiter=options.delimiter,
        has_header=options.has_header,
        quote_char=options.quote_char,
    )


def _to_json(node: Node, config: Optional[ConverterConfig]) -> str:
    options = (config or ConverterConfig()).json
    return encode_json(node, indent=options.indent, ensure_ascii=options.ensure_ascii)


def _to_xml(node: Node, root_tag: Optional[str], config: Optional[ConverterConfig]) -> str:
    options = (config or ConverterConfig()).xml
    return encode_xml(
        node,
        root_tag=root_tag or options.root_tag,
        pretty_print=options.pretty_print,
        encoding=options.encoding,
    )


def _to_csv(node: Node, config: Optional[ConverterConfig]) -> str:
    options = (config or ConverterConfig()).csv
    return encode_csv(
        node,
        delimiter=options.delimiter,
        quote_char=options.quote_char,
        union_headers=options.union_headers,
        line_terminator=options.line_terminator,
    )


__all__ = ["csv_to_json", "csv_to_xml", "json_to_csv", "json_to_xml", "xml_to_csv", "xml_to_json"]

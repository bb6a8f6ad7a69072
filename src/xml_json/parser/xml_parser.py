"""XML to generic structure decoder.

Walks the lxml element tree bottom-up and applies the disambiguation rules:

1. Attributes are collected under ``@attributes`` in document order.
2. An element whose only content is text collapses to a ``ScalarNode``, or to
   ``{"@attributes": ..., "_value": text}`` when it carries attributes.
3. Child elements are stored under their tag name. A second sibling with the
   same tag turns the entry into an ``ArrayNode`` and later ones are appended.
4. The document element itself is unwrapped: the result is its content, and
   its tag is reported separately by ``parse_xml_document``.
5. Text beside child elements (mixed content) is joined into one ``#text``
   value, placed where the first text segment appeared.

Malformed markup does not raise by default; it produces the ``xml_error``
sentinel node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from lxml import etree

from ..domain import (
    ATTRIBUTES_KEY,
    TEXT_KEY,
    VALUE_KEY,
    ArrayNode,
    Node,
    ObjectNode,
    ScalarNode,
    xml_error_node,
)
from ..errors import XmlParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class XmlDocument:
    """A decoded document together with the tag of its document element."""

    root_tag: str
    node: Node


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    # Blank text between elements is formatting, not content
    return etree.XMLParser(
        encoding=encoding,
        remove_blank_text=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )


def _parse_root(xml_content: Union[str, bytes]) -> etree._Element:
    if isinstance(xml_content, str):
        # A str has already been decoded, so the declared encoding no longer applies
        return etree.fromstring(xml_content.encode("utf-8"), _make_parser("utf-8"))
    return etree.fromstring(xml_content, _make_parser())


def parse_xml_document(xml_content: Union[str, bytes]) -> XmlDocument:
    """Decode XML text and keep the document element's tag.

    Args:
        xml_content: XML document as text or bytes.

    Returns:
        XmlDocument with the root tag and the decoded content.

    Raises:
        XmlParseError: If the markup is not well-formed.
    """
    try:
        root = _parse_root(xml_content)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise XmlParseError(f"XML parsing error: {e}") from e

    node = decode_element(root)
    root_tag = local_name(root.tag)
    logger.debug(f"Decoded XML document <{root_tag}> into {node.kind.value} node")
    return XmlDocument(root_tag=root_tag, node=node)


def decode_xml(xml_content: Union[str, bytes], strict: bool = False) -> Node:
    """Decode XML text into the generic structure.

    Args:
        xml_content: XML document as text or bytes.
        strict: Raise XmlParseError instead of returning the error sentinel.

    Returns:
        The decoded content of the document element, or
        ``{"xml_error": "true"}`` if the markup is malformed.
    """
    try:
        return parse_xml_document(xml_content).node
    except XmlParseError as e:
        if strict:
            raise
        logger.warning(f"Returning xml_error sentinel: {e}")
        return xml_error_node()


def local_name(name: str) -> str:
    """Strip a ``{namespace}`` prefix from a tag or attribute name."""

    return name.rsplit("}", 1)[-1]


def decode_element(element: etree._Element) -> Node:
    """Decode one element and its subtree."""

    result = ObjectNode()

    if element.attrib:
        result[ATTRIBUTES_KEY] = ObjectNode(
            {local_name(name): ScalarNode(value) for name, value in element.attrib.items()}
        )

    if len(element) == 0:
        if element.text:
            if ATTRIBUTES_KEY not in result:
                return ScalarNode(element.text)
            result[VALUE_KEY] = ScalarNode(element.text)
        return result

    for key, child in _child_nodes(element):
        _insert(result, key, child)

    return result


def _child_nodes(element: etree._Element) -> Iterator[Tuple[str, Node]]:
    """Yield (key, node) for each child element and text segment in order."""

    if element.text:
        yield TEXT_KEY, ScalarNode(element.text)
    for child in element:
        # Unresolved entity references are not elements
        if isinstance(child.tag, str):
            yield local_name(child.tag), decode_element(child)
        if child.tail:
            yield TEXT_KEY, ScalarNode(child.tail)


def _insert(result: ObjectNode, key: str, node: Node) -> None:
    existing = result.get(key)
    if existing is None:
        result[key] = node
    elif key == TEXT_KEY:
        # Text segments join into one value at the position of the first
        result[key] = ScalarNode(existing.text + node.text)
    elif isinstance(existing, ArrayNode):
        # Decoded elements are never arrays, so an array here is a group we built
        existing.append(node)
    else:
        result[key] = ArrayNode([existing, node])


__all__ = [
    "XmlDocument",
    "decode_element",
    "decode_xml",
    "local_name",
    "parse_xml_document",
]

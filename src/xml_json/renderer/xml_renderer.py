"""Generic structure to XML renderer.

The inverse of the decoder's disambiguation rules:

- ``@attributes`` entries become attributes of the current element.
- ``_value`` becomes the text of the element that owns it.
- An ``ArrayNode`` under key ``k`` becomes one ``<k>`` sibling per item.
- Keys that are purely numeric (array indices) are never used as tag names;
  the element takes the tag of the element that contains it instead.
- ``#text`` entries are written back as mixed-content text.

Each helper builds and returns a finished subtree, which the caller attaches.
"""

from __future__ import annotations

import logging

from lxml import etree

from ..domain import (
    ATTRIBUTES_KEY,
    TEXT_KEY,
    VALUE_KEY,
    ArrayNode,
    Node,
    ObjectNode,
    ScalarNode,
)
from ..errors import XmlEncodeError

logger = logging.getLogger(__name__)

DEFAULT_ROOT_TAG = "root"


def encode_xml(
    node: Node,
    root_tag: str = DEFAULT_ROOT_TAG,
    pretty_print: bool = False,
    encoding: str = "UTF-8",
) -> str:
    """Render a node tree as an XML document.

    Args:
        node: The generic structure to render, normally an ObjectNode.
        root_tag: Tag of the document element wrapping ``node``.
        pretty_print: Indent the output.
        encoding: Encoding named in the XML declaration.

    Returns:
        XML text starting with an XML declaration.

    Raises:
        XmlEncodeError: If a key is not a valid tag name, ``@attributes`` is
            not a flat mapping, or text holds characters XML cannot carry.
    """
    try:
        root = build_element(root_tag, node)
        xml_bytes = etree.tostring(
            root,
            pretty_print=pretty_print,
            xml_declaration=True,
            encoding=encoding,
        )
    except ValueError as e:
        raise XmlEncodeError(f"Failed to render XML: {e}") from e

    logger.debug(f"Rendered {node.kind.value} node as <{root_tag}> ({len(xml_bytes)} bytes)")
    return xml_bytes.decode(encoding)


def build_element(tag: str, node: Node) -> etree._Element:
    """Build the element ``<tag>`` holding ``node``."""

    element = etree.Element(tag)

    if isinstance(node, ScalarNode):
        element.text = node.text
    elif isinstance(node, ObjectNode):
        _fill_object(element, tag, node)
    elif isinstance(node, ArrayNode):
        # Items of a bare array inherit the enclosing tag
        for item in node:
            element.append(build_element(tag, item))
    else:
        raise XmlEncodeError(f"Cannot render {type(node).__name__} as XML")

    return element


def _fill_object(element: etree._Element, tag: str, node: ObjectNode) -> None:
    value_text = node.value_text
    if value_text is not None:
        element.text = value_text

    for key, value in node.items():
        if key == ATTRIBUTES_KEY:
            _set_attributes(element, value)
            continue
        if key == VALUE_KEY and isinstance(value, ScalarNode):
            continue
        if key == TEXT_KEY:
            _append_text(element, value)
            continue

        child_tag = tag if key.isdigit() else key
        if isinstance(value, ArrayNode):
            for item in value:
                element.append(build_element(child_tag, item))
        else:
            element.append(build_element(child_tag, value))


def _set_attributes(element: etree._Element, attributes: Node) -> None:
    if not isinstance(attributes, ObjectNode):
        raise XmlEncodeError(f"{ATTRIBUTES_KEY} of <{element.tag}> must be a mapping")
    for name, value in attributes.items():
        if not isinstance(value, ScalarNode):
            raise XmlEncodeError(f"Attribute '{name}' of <{element.tag}> must be a scalar")
        element.set(name, value.text)


def _append_text(element: etree._Element, value: Node) -> None:
    if isinstance(value, ArrayNode):
        for item in value:
            _append_text(element, item)
        return
    if not isinstance(value, ScalarNode):
        raise XmlEncodeError(f"{TEXT_KEY} of <{element.tag}> must be text")

    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + value.text
    else:
        element.text = (element.text or "") + value.text


__all__ = ["DEFAULT_ROOT_TAG", "build_element", "encode_xml"]

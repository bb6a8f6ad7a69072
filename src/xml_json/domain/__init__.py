"""Generic structure model: node variants, reserved keys and adapters."""

from .nodes import (
    ArrayNode,
    Node,
    ObjectNode,
    ScalarNode,
    from_python,
    is_error_node,
    json_error_node,
    scalar_text,
    to_python,
    xml_error_node,
)
from .types import (
    ATTRIBUTES_KEY,
    JSON_ERROR_KEY,
    TEXT_KEY,
    VALUE_KEY,
    XML_ERROR_KEY,
    DocumentFormat,
    NodeKind,
)

__all__ = [
    # Nodes
    "ArrayNode",
    "Node",
    "ObjectNode",
    "ScalarNode",
    # Adapters
    "from_python",
    "scalar_text",
    "to_python",
    # Sentinels
    "is_error_node",
    "json_error_node",
    "xml_error_node",
    # Types
    "ATTRIBUTES_KEY",
    "DocumentFormat",
    "JSON_ERROR_KEY",
    "NodeKind",
    "TEXT_KEY",
    "VALUE_KEY",
    "XML_ERROR_KEY",
]

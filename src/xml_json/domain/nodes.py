"""Generic structure model shared by every codec.

A document is decoded into a tree of three node variants:

- ``ScalarNode``: a leaf string.
- ``ObjectNode``: an ordered mapping from key to node. Insertion order is
  significant because it drives child element order when rendering XML.
- ``ArrayNode``: an ordered sequence of nodes, used for sibling elements that
  share a tag name.

Each codec dispatches on the concrete class (or ``node.kind``), never on the
shape of the data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from .types import ATTRIBUTES_KEY, JSON_ERROR_KEY, VALUE_KEY, XML_ERROR_KEY, NodeKind


@dataclass(frozen=True, slots=True)
class ScalarNode:
    """A leaf value. Numbers and booleans are carried as text."""

    text: str
    kind: ClassVar[NodeKind] = NodeKind.SCALAR

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"ScalarNode text must be str, got {type(self.text).__name__}")

    def copy(self) -> "ScalarNode":
        return self


@dataclass(eq=False, slots=True)
class ObjectNode:
    """An ordered string-keyed mapping of nodes."""

    entries: Dict[str, "Node"] = field(default_factory=dict)
    kind: ClassVar[NodeKind] = NodeKind.OBJECT

    def __post_init__(self) -> None:
        for key, value in self.entries.items():
            _check_entry(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObjectNode):
            return NotImplemented
        # Order-sensitive, unlike plain dict equality
        return list(self.entries.items()) == list(other.entries.items())

    def __getitem__(self, key: str) -> "Node":
        return self.entries[key]

    def __setitem__(self, key: str, value: "Node") -> None:
        _check_entry(key, value)
        self.entries[key] = value

    def __delitem__(self, key: str) -> None:
        del self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: str, default: Optional["Node"] = None) -> Optional["Node"]:
        return self.entries.get(key, default)

    def keys(self):
        return self.entries.keys()

    def values(self):
        return self.entries.values()

    def items(self):
        return self.entries.items()

    @property
    def attributes(self) -> Optional["ObjectNode"]:
        """The ``@attributes`` mapping, if present."""

        value = self.entries.get(ATTRIBUTES_KEY)
        return value if isinstance(value, ObjectNode) else None

    @property
    def value_text(self) -> Optional[str]:
        """The ``_value`` text, if present and scalar."""

        value = self.entries.get(VALUE_KEY)
        return value.text if isinstance(value, ScalarNode) else None

    def copy(self) -> "ObjectNode":
        return ObjectNode({key: value.copy() for key, value in self.entries.items()})


@dataclass(slots=True)
class ArrayNode:
    """An ordered sequence of nodes."""

    items: List["Node"] = field(default_factory=list)
    kind: ClassVar[NodeKind] = NodeKind.ARRAY

    def __post_init__(self) -> None:
        for item in self.items:
            _check_node(item)

    def __getitem__(self, index: int) -> "Node":
        return self.items[index]

    def __iter__(self) -> Iterator["Node"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def append(self, item: "Node") -> None:
        _check_node(item)
        self.items.append(item)

    def copy(self) -> "ArrayNode":
        return ArrayNode([item.copy() for item in self.items])


Node = Union[ScalarNode, ObjectNode, ArrayNode]

_NODE_TYPES = (ScalarNode, ObjectNode, ArrayNode)


def _check_node(value: Any) -> None:
    if not isinstance(value, _NODE_TYPES):
        raise TypeError(f"Expected a node, got {type(value).__name__}")


def _check_entry(key: Any, value: Any) -> None:
    if not isinstance(key, str):
        raise TypeError(f"Object keys must be str, got {type(key).__name__}")
    _check_node(value)


def scalar_text(value: Any) -> str:
    """Render a native scalar the way the generic structure stores it."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Unsupported scalar type: {type(value).__name__}")


def from_python(value: Any) -> Node:
    """Build a node tree from plain dicts, lists and scalars.

    Nodes passed in are returned unchanged, so mixed trees are accepted.
    """

    if isinstance(value, _NODE_TYPES):
        return value
    if isinstance(value, Mapping):
        return ObjectNode({str(key): from_python(item) for key, item in value.items()})
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return ArrayNode([from_python(item) for item in value])
    return ScalarNode(scalar_text(value))


def to_python(node: Node) -> Any:
    """Convert a node tree to plain dicts, lists and strings."""

    if isinstance(node, ScalarNode):
        return node.text
    if isinstance(node, ObjectNode):
        return {key: to_python(value) for key, value in node.items()}
    if isinstance(node, ArrayNode):
        return [to_python(item) for item in node]
    raise TypeError(f"Expected a node, got {type(node).__name__}")


def xml_error_node() -> ObjectNode:
    """Sentinel returned when XML text cannot be parsed."""

    return ObjectNode({XML_ERROR_KEY: ScalarNode("true")})


def json_error_node() -> ObjectNode:
    """Sentinel returned when JSON text cannot be parsed."""

    return ObjectNode({JSON_ERROR_KEY: ScalarNode("true")})


def is_error_node(node: Optional[Node]) -> bool:
    """Return True if ``node`` is one of the fail-soft parse sentinels."""

    return (
        isinstance(node, ObjectNode)
        and len(node) == 1
        and (XML_ERROR_KEY in node or JSON_ERROR_KEY in node)
    )


__all__ = [
    "ArrayNode",
    "Node",
    "ObjectNode",
    "ScalarNode",
    "from_python",
    "is_error_node",
    "json_error_node",
    "scalar_text",
    "to_python",
    "xml_error_node",
]

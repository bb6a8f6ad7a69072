"""JSON text to and from the generic structure.

JSON is already shaped like the generic structure, so this is a direct
mapping. Numbers keep their literal spelling as scalar text.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Union

from .domain import Node, from_python, json_error_node, to_python
from .errors import JsonEncodeError, JsonParseError

logger = logging.getLogger(__name__)


def decode_json(json_content: Union[str, bytes], strict: bool = False) -> Node:
    """Decode JSON text into the generic structure.

    Args:
        json_content: JSON document as text or UTF-8 bytes.
        strict: Raise JsonParseError instead of returning the error sentinel.

    Returns:
        The decoded node, or ``{"json_error": "true"}`` if the text is invalid.
    """
    try:
        data = json.loads(json_content, parse_int=str, parse_float=str, parse_constant=str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if strict:
            raise JsonParseError(f"JSON parsing error: {e}") from e
        logger.warning(f"Returning json_error sentinel: {e}")
        return json_error_node()

    return from_python(data)


def encode_json(node: Node, indent: Optional[int] = None, ensure_ascii: bool = False) -> str:
    """Render a node tree as JSON text.

    Raises:
        JsonEncodeError: If ``node`` is not a node tree.
    """
    try:
        data = to_python(node)
    except TypeError as e:
        raise JsonEncodeError(str(e)) from e
    return json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)


__all__ = ["decode_json", "encode_json"]

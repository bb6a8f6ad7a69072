"""
CSV text to and from a table of generic structure rows.

Decoding with a header row yields an ``ArrayNode`` of flat ``ObjectNode``
rows keyed by the header; without one it yields an ``ArrayNode`` of
``ArrayNode`` rows. Empty lines are skipped; a line holding only
whitespace or a quoted empty field is a row.

Encoding derives the header from the keys of the first row, unless
``union_headers`` is set, in which case every key seen in any row is used in
first-seen order. Fields are quoted only when they contain the delimiter,
the quote character or a line break.
"""

import csv
import io
import logging
from typing import Any, List, Optional

from ..domain import ArrayNode, Node, ObjectNode, ScalarNode, from_python
from ..errors import ShapeError

logger = logging.getLogger(__name__)


def decode_csv(
    csv_content: str,
    delimiter: str = ",",
    has_header: bool = True,
    quote_char: str = '"',
) -> ArrayNode:
    """
    Decode CSV text into rows.

    Args:
        csv_content: CSV content as string
        delimiter: Field delimiter
        has_header: Treat the first non-empty line as column names
        quote_char: Quote character used around fields

    Returns:
        ArrayNode of ObjectNode rows (header mode) or ArrayNode rows

    Raises:
        ShapeError: If a row's field count differs from the header's, the
            header repeats a column name, or the text is not parseable CSV
    """
    records = _read_records(csv_content, delimiter, quote_char)

    if not has_header:
        return ArrayNode([ArrayNode([ScalarNode(value) for value in row]) for _, row in records])

    if not records:
        return ArrayNode()

    header_line, header = records[0]
    duplicates = _find_duplicates(header)
    if duplicates:
        raise ShapeError(f"Duplicate column names: {', '.join(duplicates)}", row=header_line)

    rows = ArrayNode()
    for line_num, row in records[1:]:
        if len(row) != len(header):
            raise ShapeError(
                f"Expected {len(header)} fields to match the header, found {len(row)}",
                row=line_num,
            )
        rows.append(ObjectNode({key: ScalarNode(value) for key, value in zip(header, row)}))

    logger.debug(f"Decoded {len(rows)} CSV rows with {len(header)} columns")
    return rows


def encode_csv(
    rows: Any,
    delimiter: str = ",",
    quote_char: str = '"',
    union_headers: bool = False,
    line_terminator: str = "\r\n",
) -> str:
    """
    Encode rows as CSV text.

    Args:
        rows: ArrayNode (or list) of flat ObjectNode rows, or of ArrayNode rows
            to write without a header
        delimiter: Field delimiter
        quote_char: Quote character for fields that need quoting
        union_headers: Build the header from every row's keys instead of
            only the first row's
        line_terminator: Line ending written after each row

    Returns:
        CSV text

    Raises:
        ShapeError: If there are no rows or no header keys, or a row or
            field is not flat
    """
    table = table_rows(from_python(rows))
    if not table:
        raise ShapeError("No rows to encode; cannot derive a header")

    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        quotechar=quote_char,
        lineterminator=line_terminator,
        quoting=csv.QUOTE_MINIMAL,
    )

    if isinstance(table[0], ArrayNode):
        for row_idx, row in enumerate(table, start=1):
            if not isinstance(row, ArrayNode):
                raise ShapeError("Expected a list of fields", row=row_idx)
            writer.writerow([_field_text(value, row_idx) for value in row])
        return buffer.getvalue()

    if not isinstance(table[0], ObjectNode):
        raise ShapeError("Expected a mapping of column to value", row=1)

    header = _build_header(table, union_headers)
    if not header:
        raise ShapeError("Rows have no keys; cannot derive a header", row=1)
    writer.writerow(header)
    dropped = 0
    for row_idx, row in enumerate(table, start=1):
        if not isinstance(row, ObjectNode):
            raise ShapeError("Expected a mapping of column to value", row=row_idx)
        dropped += sum(1 for key in row if key not in header)
        writer.writerow([_field_text(row.get(key), row_idx, key) for key in header])

    if dropped:
        logger.warning(f"Dropped {dropped} values whose keys are not in the first row's header")
    return buffer.getvalue()


def table_rows(node: Node) -> List[Node]:
    """
    Locate the list of rows inside a node.

    Accepts an ArrayNode of rows directly, or an ObjectNode wrapping it under a
    single key, which is how repeated XML elements decode
    (``<rows><row>..</row><row>..</row></rows>``). A flat ObjectNode, or a
    single ObjectNode wrapped under one key, counts as a one-row table.
    """
    if isinstance(node, ArrayNode):
        return list(node)
    if isinstance(node, ObjectNode):
        if node and all(isinstance(value, ScalarNode) for value in node.values()):
            return [node]
        if len(node) == 1:
            (inner,) = node.values()
            if isinstance(inner, ArrayNode):
                return list(inner)
            if isinstance(inner, ObjectNode):
                return [inner]
    raise ShapeError("Expected a list of rows")


def _read_records(csv_content: str, delimiter: str, quote_char: str) -> List[tuple]:
    reader = csv.reader(io.StringIO(csv_content, newline=""), delimiter=delimiter, quotechar=quote_char)
    records = []
    try:
        for row in reader:
            # csv yields [] only for empty physical lines
            if not row:
                continue
            records.append((reader.line_num, row))
    except csv.Error as e:
        raise ShapeError(f"Malformed CSV: {e}", row=reader.line_num) from e
    return records


def _build_header(table: List[Node], union_headers: bool) -> List[str]:
    first = table[0]
    header = list(first.keys())
    if union_headers:
        seen = set(header)
        for row in table[1:]:
            if not isinstance(row, ObjectNode):
                continue
            for key in row:
                if key not in seen:
                    seen.add(key)
                    header.append(key)
    return header


def _field_text(value: Optional[Node], row_idx: int, key: Optional[str] = None) -> str:
    if value is None:
        return ""
    if isinstance(value, ScalarNode):
        return value.text
    column = f"Column '{key}'" if key is not None else "Field"
    raise ShapeError(f"{column} holds a nested {value.kind.value}, not a scalar", row=row_idx)


def _find_duplicates(items: List[str]) -> List[str]:
    """Find duplicate items in a list."""
    seen = set()
    duplicates = []
    for item in items:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


__all__ = ["decode_csv", "encode_csv", "table_rows"]

"""
CSV Codec Module
================
Converts delimited text to and from tables of generic structure rows.

Part of the xml_json package.
"""

from .codec import decode_csv, encode_csv, table_rows

__all__ = [
    "decode_csv",
    "encode_csv",
    "table_rows",
]

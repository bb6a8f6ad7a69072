"""Utilities for loading converter configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .schema import ConverterConfig, CsvConfig, JsonConfig, XmlConfig


def load_config(path: str | Path) -> ConverterConfig:
    """Load configuration from a YAML file."""

    config_path = Path(path).expanduser().resolve()
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw_data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    return parse_config(raw_data)


def parse_config(raw_data: Any) -> ConverterConfig:
    """Build a ConverterConfig from an already-parsed mapping."""

    if not isinstance(raw_data, dict):
        raise ValueError("Configuration root must be a mapping.")

    return ConverterConfig(
        xml=_parse_xml(_section(raw_data, "xml")),
        json=_parse_json(_section(raw_data, "json")),
        csv=_parse_csv(_section(raw_data, "csv")),
    )


def _section(raw_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    data = raw_data.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {name}.")
    return data


def _parse_xml(data: Dict[str, Any]) -> XmlConfig:
    defaults = XmlConfig()
    root_tag = str(data.get("root_tag") or defaults.root_tag)
    return XmlConfig(
        root_tag=root_tag,
        pretty_print=_parse_bool(data.get("pretty_print"), defaults.pretty_print, "xml.pretty_print"),
        encoding=str(data.get("encoding") or defaults.encoding),
    )


def _parse_json(data: Dict[str, Any]) -> JsonConfig:
    defaults = JsonConfig()
    return JsonConfig(
        indent=_parse_indent(data.get("indent")),
        ensure_ascii=_parse_bool(data.get("ensure_ascii"), defaults.ensure_ascii, "json.ensure_ascii"),
    )


def _parse_csv(data: Dict[str, Any]) -> CsvConfig:
    defaults = CsvConfig()
    return CsvConfig(
        delimiter=_single_char(data.get("delimiter"), defaults.delimiter, "csv.delimiter"),
        quote_char=_single_char(data.get("quote_char"), defaults.quote_char, "csv.quote_char"),
        has_header=_parse_bool(data.get("has_header"), defaults.has_header, "csv.has_header"),
        union_headers=_parse_bool(data.get("union_headers"), defaults.union_headers, "csv.union_headers"),
        line_terminator=str(data.get("line_terminator") or defaults.line_terminator),
    )


def _parse_indent(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("json.indent must be a non-negative integer.")
    return value


def _parse_bool(value: Any, default: bool, name: str) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false.")
    return value


def _single_char(value: Any, default: str, name: str) -> str:
    if value is None:
        return default
    text = str(value)
    if text == "\\t":
        text = "\t"
    if len(text) != 1:
        raise ValueError(f"{name} must be a single character.")
    return text


__all__ = ["load_config", "parse_config"]

"""Configuration management helpers."""

from .loader import load_config, parse_config
from .schema import ConverterConfig, CsvConfig, JsonConfig, XmlConfig

__all__ = ["ConverterConfig", "CsvConfig", "JsonConfig", "XmlConfig", "load_config", "parse_config"]

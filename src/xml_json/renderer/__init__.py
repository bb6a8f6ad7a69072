"""XML rendering module."""

from .xml_renderer import DEFAULT_ROOT_TAG, build_element, encode_xml

__all__ = ["DEFAULT_ROOT_TAG", "build_element", "encode_xml"]

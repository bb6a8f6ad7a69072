"""Tests for the converter facade, file access and stateless helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from xml_json import api
from xml_json.config import ConverterConfig
from xml_json.converter import XmlJsonConverter, convert_file
from xml_json.domain import DocumentFormat, ObjectNode, ScalarNode, from_python, is_error_node, to_python
from xml_json.errors import ConversionError, FileAccessError, ShapeError
from xml_json.files import LocalFileStore

ORDERS_XML = (
    "<orders>"
    "<order><id>1</id><item>a</item><item>b</item></order>"
    "<order><id>2</id><item>c</item></order>"
    "</orders>"
)

ROWS_XML = "<rows><row><a>1</a><b>2</b></row><row><a>3</a><b>4</b></row></rows>"


@pytest.fixture
def converter(memory_store) -> XmlJsonConverter:
    return XmlJsonConverter(file_store=memory_store)


class TestSlots:
    def test_node_getter_returns_copy(self, converter: XmlJsonConverter) -> None:
        converter.node = {"a": "1"}
        node = converter.node
        node["b"] = ScalarNode("2")
        assert converter.node == ObjectNode({"a": ScalarNode("1")})

    def test_node_setter_copies_input(self, converter: XmlJsonConverter) -> None:
        source = from_python({"a": "1"})
        converter.node = source
        source["a"] = ScalarNode("changed")
        assert converter.node == ObjectNode({"a": ScalarNode("1")})

    def test_decode_result_is_not_aliased(self, converter: XmlJsonConverter) -> None:
        converter.xml = "<r><x>1</x></r>"
        node = converter.xml_to_node()
        node["x"] = ScalarNode("changed")
        assert converter.node == ObjectNode({"x": ScalarNode("1")})

    def test_missing_slot_raises(self, converter: XmlJsonConverter) -> None:
        with pytest.raises(ConversionError, match="No XML data loaded"):
            converter.xml_to_node()
        with pytest.raises(ConversionError, match="No generic structure data loaded"):
            converter.node_to_json()


class TestConversions:
    def test_xml_to_json(self, converter: XmlJsonConverter) -> None:
        converter.xml = "<r><x>1</x><x>2</x></r>"
        assert converter.xml_to_json() == '{"x": ["1", "2"]}'
        assert converter.json == '{"x": ["1", "2"]}'

    def test_json_to_xml(self, converter: XmlJsonConverter) -> None:
        converter.json = '{"x": ["1", "2"]}'
        xml = converter.json_to_xml("data")
        assert xml.endswith("<data><x>1</x><x>2</x></data>")
        assert converter.xml == xml

    def test_root_tag_reused_after_xml_decode(self, converter: XmlJsonConverter) -> None:
        converter.xml = ORDERS_XML
        converter.xml_to_node()
        assert converter.root_tag == "orders"
        assert converter.node_to_xml().endswith(ORDERS_XML)

    def test_configured_root_tag_is_default(self, memory_store) -> None:
        config = ConverterConfig()
        config.xml.root_tag = "document"
        converter = XmlJsonConverter(config, memory_store)
        converter.node = {"a": "1"}
        assert converter.node_to_xml().endswith("<document><a>1</a></document>")

    def test_malformed_xml_yields_sentinel(self, converter: XmlJsonConverter) -> None:
        converter.xml = "<r><"
        assert is_error_node(converter.xml_to_node())
        assert converter.xml_to_json() == '{"xml_error": "true"}'

    def test_invalid_json_yields_sentinel(self, converter: XmlJsonConverter) -> None:
        converter.json = "{"
        assert to_python(converter.json_to_node()) == {"json_error": "true"}

    def test_csv_to_json(self, converter: XmlJsonConverter) -> None:
        converter.csv = "a;b\n1;2\n"
        assert converter.csv_to_node(delimiter=";") == from_python([{"a": "1", "b": "2"}])

    def test_xml_to_csv(self, converter: XmlJsonConverter) -> None:
        converter.xml = ROWS_XML
        assert converter.xml_to_csv() == "a,b\r\n1,2\r\n3,4\r\n"

    def test_csv_to_xml_uses_parent_tag_for_rows(self, converter: XmlJsonConverter) -> None:
        converter.csv = "a,b\n1,2\n"
        xml = converter.csv_to_xml("rows")
        assert xml.endswith("<rows><rows><a>1</a><b>2</b></rows></rows>")

    def test_json_to_csv_shape_error_propagates(self, converter: XmlJsonConverter) -> None:
        converter.json = '{"a": {"b": {"c": "1"}}, "d": "2"}'
        with pytest.raises(ShapeError):
            converter.json_to_csv()

    def test_generic_convert(self, converter: XmlJsonConverter) -> None:
        converter.json = '{"a": "1"}'
        assert converter.convert(DocumentFormat.JSON, DocumentFormat.CSV) == "a\r\n1\r\n"

    def test_json_indent_from_config(self, memory_store) -> None:
        config = ConverterConfig()
        config.json.indent = 2
        converter = XmlJsonConverter(config, memory_store)
        converter.xml = "<r><a>1</a></r>"
        assert converter.xml_to_json() == '{\n  "a": "1"\n}'


class TestFileIO:
    def test_load_and_save_through_store(self, converter: XmlJsonConverter, memory_store) -> None:
        memory_store.files["in.json"] = b'{"a": "1"}'
        converter.load_json("in.json")
        converter.json_to_xml("r")
        converter.save_xml("out.xml")
        assert memory_store.files["out.xml"].endswith(b"<r><a>1</a></r>")

    def test_loaded_xml_keeps_bytes(self, converter: XmlJsonConverter, memory_store) -> None:
        memory_store.files["in.xml"] = '<?xml version="1.0" encoding="ISO-8859-1"?><r>é</r>'.encode("latin-1")
        converter.load_xml("in.xml")
        assert isinstance(converter.xml, bytes)
        assert converter.xml_to_node() == ScalarNode("é")

    def test_missing_file(self, converter: XmlJsonConverter) -> None:
        with pytest.raises(FileAccessError):
            converter.load_xml("missing.xml")

    def test_save_without_data(self, converter: XmlJsonConverter) -> None:
        with pytest.raises(ConversionError):
            converter.save_json("out.json")

    def test_load_json_rejects_non_utf8(self, converter: XmlJsonConverter, memory_store) -> None:
        memory_store.files["in.json"] = b'{"a": "\xff"}'
        with pytest.raises(ConversionError):
            converter.load_json("in.json")


class TestLocalFileStore:
    def test_round_trip(self, tmp_path: Path) -> None:
        store = LocalFileStore()
        target = tmp_path / "nested" / "file.bin"
        store.write(target, b"data")
        assert store.read(target) == b"data"

    def test_missing_file_is_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError) as excinfo:
            LocalFileStore().read(tmp_path / "missing.xml")
        assert isinstance(excinfo.value, FileAccessError)
        assert excinfo.value.path.endswith("missing.xml")


class TestConvertFile:
    def test_xml_to_json_file(self, tmp_path: Path) -> None:
        source = tmp_path / "orders.xml"
        source.write_text(ORDERS_XML, encoding="utf-8")
        target = tmp_path / "orders.json"

        result = convert_file(source, target)

        assert result.success
        assert json.loads(target.read_text(encoding="utf-8")) == {
            "order": [
                {"id": "1", "item": ["a", "b"]},
                {"id": "2", "item": "c"},
            ]
        }

    def test_json_to_xml_file_round_trip(self, tmp_path: Path) -> None:
        source = tmp_path / "orders.xml"
        source.write_text(ORDERS_XML, encoding="utf-8")
        convert_file(source, tmp_path / "orders.json")

        result = convert_file(tmp_path / "orders.json", tmp_path / "again.xml", root_tag="orders")

        assert result.success
        assert result.output.endswith(ORDERS_XML)

    def test_xml_to_csv_file(self, tmp_path: Path) -> None:
        source = tmp_path / "rows.xml"
        source.write_text(ROWS_XML, encoding="utf-8")
        target = tmp_path / "rows.csv"

        convert_file(source, target)

        assert target.read_bytes() == b"a,b\r\n1,2\r\n3,4\r\n"

    def test_malformed_source_not_written(self, tmp_path: Path) -> None:
        source = tmp_path / "bad.xml"
        source.write_text("<r><", encoding="utf-8")
        target = tmp_path / "bad.json"

        result = convert_file(source, target)

        assert not result.success
        assert result.errors
        assert not target.exists()
        assert result.to_dict()["source_format"] == "xml"

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            convert_file(tmp_path / "in.txt", tmp_path / "out.json")

    def test_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileAccessError):
            convert_file(tmp_path / "missing.json", tmp_path / "out.xml")


class TestStatelessHelpers:
    def test_xml_to_json(self) -> None:
        assert api.xml_to_json("<r><x>1</x><x>2</x></r>") == '{"x": ["1", "2"]}'

    def test_malformed_xml_to_json(self) -> None:
        assert api.xml_to_json("<r><") == '{"xml_error": "true"}'

    def test_json_to_xml(self) -> None:
        assert api.json_to_xml('{"a": "1"}', "r").endswith("<r><a>1</a></r>")

    def test_json_to_xml_default_root(self) -> None:
        assert api.json_to_xml('{"a": "1"}').endswith("<root><a>1</a></root>")

    def test_csv_json_round_trip(self) -> None:
        text = api.csv_to_json("a,b\n1,2\n")
        assert text == '[{"a": "1", "b": "2"}]'
        assert api.json_to_csv(text) == "a,b\r\n1,2\r\n"

    def test_csv_to_xml_and_back(self) -> None:
        xml = api.csv_to_xml("a,b\n1,2\n3,4\n", "rows")
        assert api.xml_to_csv(xml) == "a,b\r\n1,2\r\n3,4\r\n"

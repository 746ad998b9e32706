"""Tests for the wire format codecs."""

import json

import pytest
import yaml
from lxml import etree

from spdxstore.config import Format
from spdxstore.formats import JsonCodec, PrettyJsonCodec, XmlCodec, YamlCodec, codec_for

TREE = {
    "type": "SpdxDocument",
    "SPDXID": "SPDXRef-DOCUMENT",
    "name": "doc <one> & \"two\"",
    "packages": ["SPDXRef-A", "SPDXRef-B"],
    "elements": [
        {"type": "Package", "SPDXID": "SPDXRef-A", "filesAnalyzed": False},
        {"type": "Package", "SPDXID": "SPDXRef-B", "name": "b"},
    ],
}


@pytest.mark.parametrize("fmt, codec_type", [
    (Format.JSON, JsonCodec),
    (Format.JSON_PRETTY, PrettyJsonCodec),
    (Format.XML, XmlCodec),
    (Format.YAML, YamlCodec),
])
def test_codec_for(fmt, codec_type):
    """Should return one shared codec instance per format."""
    codec = codec_for(fmt)
    assert type(codec) is codec_type
    assert codec.format == fmt
    assert codec_for(fmt) is codec


class TestJson:
    """Tests for the compact and pretty JSON codecs."""

    def test_compact_has_no_whitespace(self):
        """Should write compact JSON without spaces or newlines."""
        data = JsonCodec().encode({"Document": {"a": [1, 2]}})
        assert data == b'{"Document":{"a":[1,2]}}'

    def test_pretty_is_indented(self):
        """Should indent pretty JSON by two spaces."""
        data = PrettyJsonCodec().encode({"Document": {"a": 1}})
        assert data == b'{\n  "Document": {\n    "a": 1\n  }\n}'

    def test_decode(self):
        """Should decode what it encodes."""
        wrapped = {"Document": TREE}
        assert JsonCodec().decode(JsonCodec().encode(wrapped)) == wrapped
        assert json.loads(PrettyJsonCodec().encode(wrapped)) == wrapped

    def test_keeps_unicode(self):
        """Should write non-ASCII text as UTF-8 rather than escapes."""
        assert "é".encode("utf-8") in JsonCodec().encode({"name": "é"})


class TestYaml:
    """Tests for the YAML codec."""

    def test_keeps_key_order(self):
        """Should keep mapping keys in insertion order."""
        text = YamlCodec().encode({"Document": TREE}).decode("utf-8")
        assert text.index("type:") < text.index("SPDXID:") < text.index("name:")

    def test_decode(self):
        """Should decode what it encodes with safe loading."""
        wrapped = {"Document": TREE}
        assert YamlCodec().decode(YamlCodec().encode(wrapped)) == wrapped
        assert yaml.safe_load(YamlCodec().encode(wrapped)) == wrapped


class TestXml:
    """Tests for the XML codec."""

    def test_declaration_and_root(self):
        """Should write a declaration and a Document root element."""
        data = XmlCodec().encode(TREE)
        assert data.startswith(b"<?xml")
        root = etree.fromstring(data)
        assert root.tag == "Document"
        assert root.findtext("SPDXID") == "SPDXRef-DOCUMENT"
        assert root.findtext("name") == "doc <one> & \"two\""

    def test_lists_are_repeated_elements(self):
        """Should write one marked child element per list member."""
        root = etree.fromstring(XmlCodec().encode(TREE))
        packages = root.findall("packages")
        assert [e.text for e in packages] == ["SPDXRef-A", "SPDXRef-B"]
        assert all(e.get("collection") == "true" for e in packages)
        assert len(root.findall("elements")) == 2
        assert root.find("name").get("collection") is None

    def test_is_indented(self):
        """Should pretty print nested elements."""
        assert b"\n  <SPDXID>" in XmlCodec().encode(TREE)

    def test_decode(self):
        """Should decode repeated elements as lists and scalars as text."""
        decoded = XmlCodec().decode(XmlCodec().encode(TREE))
        assert decoded["packages"] == ["SPDXRef-A", "SPDXRef-B"]
        assert decoded["elements"][0] == {"type": "Package", "SPDXID": "SPDXRef-A", "filesAnalyzed": "false"}
        assert decoded["name"] == TREE["name"]

    def test_single_member_list_stays_a_list(self):
        """Should decode a one-member list as a list."""
        tree = {"SPDXID": "SPDXRef-DOCUMENT", "dataLicenses": ["CC0-1.0"]}
        decoded = XmlCodec().decode(XmlCodec().encode(tree))
        assert decoded == {"SPDXID": "SPDXRef-DOCUMENT", "dataLicenses": ["CC0-1.0"]}

    def test_decode_single_child_is_not_a_list(self):
        """Should decode a single unmarked child element as a scalar."""
        decoded = XmlCodec().decode(b"<Document><packages>SPDXRef-A</packages><name/></Document>")
        assert decoded == {"packages": "SPDXRef-A", "name": ""}

    def test_decode_marked_child_is_a_list(self):
        """Should decode a single marked child element as a list."""
        decoded = XmlCodec().decode(b'<Document><notes collection="true">x</notes></Document>')
        assert decoded == {"notes": ["x"]}

    def test_decode_empty_root(self):
        """Should decode an empty root as an empty mapping."""
        assert XmlCodec().decode(b"<Document/>") == {}

    def test_malformed_input_propagates(self):
        """Should let the parser's syntax error through."""
        with pytest.raises(etree.XMLSyntaxError):
            XmlCodec().decode(b"<Document><unclosed></Document>")

    def test_rejects_non_mapping_root(self):
        """Should refuse a tree whose root is not a mapping."""
        with pytest.raises(TypeError):
            XmlCodec().encode(["a"])

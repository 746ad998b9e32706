"""
XML tree codec.

Tree mapping:
    - The tree root (a mapping) becomes the <Document> element
    - Each mapping key becomes a child element
    - A list becomes one repeated child element per member, each marked
      with collection="true"
    - Scalars become element text (booleans as "true"/"false")

Decoding reverses the mapping: repeated child elements become a list, and
leaf elements become text. A marked child element always decodes as a
list, so a one-member collection keeps its shape. XML carries no scalar types, so every decoded
scalar is a string.
"""

from typing import Any, Dict

from lxml import etree

from spdxstore.config import Format
from spdxstore.formats.base import TreeCodec

ROOT_TAG = "Document"
COLLECTION_ATTR = "collection"


def _set_content(element: etree._Element, value: Any) -> None:
    if isinstance(value, dict):
        _fill(element, value)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif value is not None:
        element.text = str(value)


def _fill(element: etree._Element, node: Dict[str, Any]) -> None:
    for key, value in node.items():
        if isinstance(value, list):
            for member in value:
                child = etree.SubElement(element, key)
                child.set(COLLECTION_ATTR, "true")
                _set_content(child, member)
        else:
            _set_content(etree.SubElement(element, key), value)


def _to_tree(element: etree._Element) -> Any:
    children = [c for c in element if isinstance(c.tag, str)]
    if not children:
        return element.text or ""
    node: Dict[str, Any] = {}
    for child in children:
        value = _to_tree(child)
        if child.tag not in node:
            node[child.tag] = [value] if child.get(COLLECTION_ATTR) == "true" else value
        elif isinstance(node[child.tag], list):
            node[child.tag].append(value)
        else:
            node[child.tag] = [node[child.tag], value]
    return node


class XmlCodec(TreeCodec):
    format = Format.XML

    def encode(self, tree: Any) -> bytes:
        if not isinstance(tree, dict):
            raise TypeError(f"XML tree root must be a mapping, got {type(tree).__name__}")
        root = etree.Element(ROOT_TAG)
        _fill(root, tree)
        return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8")

    def decode(self, data: bytes) -> Any:
        # No entity expansion or network access while parsing untrusted input
        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        root = etree.fromstring(data, parser)
        tree = _to_tree(root)
        return tree if isinstance(tree, dict) else {}

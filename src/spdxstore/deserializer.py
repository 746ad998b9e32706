"""
Deserializer: COMPACT tree -> typed items.

Reads a tree produced by a TreeCodec and rebuilds the typed items it
describes. Only COMPACT-shaped input is accepted: every element appears
once as a top-level node (the document node or an entry of its "elements"
list), and every reference is an id string.

Field rules:
    - "type" and "SPDXID" identify the element
    - A list (or a known collection wire name holding one value, as unmarked
      XML input writes a one-member collection) becomes a collection under
      the internal (singular) name
    - A string equal to an element id present in the input is a Reference
    - Any other scalar stays a scalar
    - A nested mapping is an inlined element (STANDARD/FULL shape) and is
      rejected

Installing the items into storage is not done here; see
MultiFormatStore.deserialize.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from spdxstore.config import Format
from spdxstore.errors import (
    EmptyNamespaceError,
    MalformedElementError,
    MissingDocumentError,
    MissingNamespaceError,
    UnsupportedVerbosityForInputError,
)
from spdxstore.model import (
    DOCUMENT_KEY,
    DOCUMENT_TYPE,
    ELEMENTS_FIELD,
    ID_FIELD,
    PROP_DOCUMENT_NAMESPACE,
    TYPE_FIELD,
    Reference,
    TypedItem,
)
from spdxstore.naming import is_collection_name, to_internal_name

logger = logging.getLogger(__name__)


class Deserializer:
    """
    Rebuilds typed items from a decoded tree.

    Usage:
        deserializer = Deserializer(Format.JSON)
        namespace, items = deserializer.read(tree)
    """

    def __init__(self, fmt: Format):
        self.format = fmt

    def document_node(self, tree: Any) -> Dict[str, Any]:
        """
        Unwrap the document node from the tree root.

        Raises:
            MissingDocumentError: if no document node is present
        """
        if self.format == Format.XML:
            doc = tree
        else:
            doc = tree.get(DOCUMENT_KEY) if isinstance(tree, dict) else None
        if not isinstance(doc, dict) or not doc:
            raise MissingDocumentError("Missing SPDX Document")
        return doc

    @staticmethod
    def namespace_of(doc: Dict[str, Any]) -> str:
        """
        The document namespace declared by a document node.

        Raises:
            MissingNamespaceError: if the field is absent
            EmptyNamespaceError: if the field is blank
        """
        value = doc.get(PROP_DOCUMENT_NAMESPACE)
        if value is None:
            raise MissingNamespaceError("Missing document namespace")
        if isinstance(value, (dict, list)):
            raise MalformedElementError("Document namespace must be a string",
                                        field=PROP_DOCUMENT_NAMESPACE)
        namespace = str(value).strip()
        if not namespace:
            raise EmptyNamespaceError("Empty document namespace")
        return namespace

    def read(self, tree: Any) -> Tuple[str, Dict[str, TypedItem]]:
        """Read the namespace and every element of a tree."""
        doc = self.document_node(tree)
        namespace = self.namespace_of(doc)
        return namespace, self.read_elements(doc)

    def read_elements(self, doc: Dict[str, Any]) -> Dict[str, TypedItem]:
        """
        Build a typed item for the document node and every listed element.

        Returns:
            Element id -> TypedItem, document first, in input order

        Raises:
            MalformedElementError: missing type/id, duplicate id, or ambiguous value
            UnsupportedVerbosityForInputError: on inlined (nested) elements
        """
        nodes = [(doc, DOCUMENT_TYPE)] + [(node, None) for node in self._element_nodes(doc)]

        identified: List[Tuple[str, str, Dict[str, Any]]] = []
        known_ids: Set[str] = set()
        for node, default_type in nodes:
            element_id, element_type = self._identify(node, default_type)
            if element_id in known_ids:
                raise MalformedElementError("Duplicate element id", field=ID_FIELD,
                                            element_id=element_id, element_type=element_type)
            known_ids.add(element_id)
            identified.append((element_id, element_type, node))

        items: Dict[str, TypedItem] = {}
        for element_id, element_type, node in identified:
            item = TypedItem(id=element_id, type=element_type)
            for name, value in node.items():
                if name in (TYPE_FIELD, ID_FIELD):
                    continue
                if node is doc and name == ELEMENTS_FIELD:
                    continue
                self._read_property(item, name, value, known_ids)
            items[element_id] = item

        logger.debug("Read %d elements", len(items))
        return items

    @staticmethod
    def _element_nodes(doc: Dict[str, Any]) -> List[Any]:
        listed = doc.get(ELEMENTS_FIELD)
        if listed is None or listed == "":
            return []
        if not isinstance(listed, list):
            listed = [listed]
        for node in listed:
            if not isinstance(node, dict):
                raise MalformedElementError("Element entry is not an object", field=ELEMENTS_FIELD)
        return listed

    @staticmethod
    def _identify(node: Dict[str, Any], default_type: Optional[str]) -> Tuple[str, str]:
        element_type = node.get(TYPE_FIELD) or default_type
        element_id = node.get(ID_FIELD)
        if not isinstance(element_id, str) or not element_id:
            raise MalformedElementError("Missing element id", field=ID_FIELD, element_type=element_type)
        if not isinstance(element_type, str) or not element_type:
            raise MalformedElementError("Missing element type", field=TYPE_FIELD, element_id=element_id)
        return element_id, element_type

    def _read_property(self, item: TypedItem, name: str, value: Any, known_ids: Set[str]) -> None:
        if isinstance(value, list) or is_collection_name(name):
            members = value if isinstance(value, list) else [value]
            item.set(to_internal_name(name),
                     [self._read_value(item, name, m, known_ids) for m in members])
        else:
            item.set(name, self._read_value(item, name, value, known_ids))

    @staticmethod
    def _read_value(item: TypedItem, name: str, value: Any, known_ids: Set[str]) -> Any:
        if isinstance(value, dict):
            raise UnsupportedVerbosityForInputError(
                f"Inlined element in property {name} of {item.id}; "
                "only COMPACT input can be deserialized")
        if isinstance(value, list):
            raise MalformedElementError("Nested collection", field=name,
                                        element_id=item.id, element_type=item.type)
        if value is None:
            raise MalformedElementError("Null property value", field=name,
                                        element_id=item.id, element_type=item.type)
        if isinstance(value, str) and value in known_ids:
            return Reference(value)
        return value

"""
Serializer: document graph -> abstract tree.

Walks a namespace starting at its document element and produces nested
dicts/lists/scalars ready for a TreeCodec.

Element node shape:
    {"type": <type>, "SPDXID": <id>, <property>: <value>, ...}

Value rules:
    - Scalars are written under the internal property name
    - Collections are written under the wire (plural) name as a list
    - References depend on verbosity:
        COMPACT:  the referenced id (license expressions included)
        STANDARD: the referenced element inlined one level below a top-level
                  node; deeper references are ids; license expressions as text
        FULL:     every reference expanded; license expressions as objects
    - A reference back to an element already on the expansion path is always
      written as its id. This rule wins over verbosity.

Every element other than the document is also listed under the document
node's "elements" field. A property whose name would land on "type",
"SPDXID" or (on the document node) "elements" is rejected.

The traversal keeps its own frame stack and path instead of recursing, so
the cycle check is explicit state.

IMPORTANT: The serializer only reads the graph. It never mutates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from spdxstore.config import Format, Verbosity
from spdxstore.errors import MalformedElementError, MissingDocumentError
from spdxstore.graph_store import InMemoryGraphStore
from spdxstore.licenses import license_text
from spdxstore.model import (
    DOCUMENT_ID,
    DOCUMENT_KEY,
    DOCUMENT_RESERVED_FIELDS,
    ELEMENTS_FIELD,
    ID_FIELD,
    LICENSE_PROPERTIES,
    LICENSE_TYPES,
    RESERVED_FIELDS,
    TYPE_FIELD,
    Reference,
    TypedItem,
)
from spdxstore.naming import to_wire_name

logger = logging.getLogger(__name__)


@dataclass
class ExpansionPath:
    """Ids of the elements currently being expanded, outermost first."""

    ids: List[str] = field(default_factory=list)
    _members: Set[str] = field(default_factory=set)

    def push(self, element_id: str) -> None:
        self.ids.append(element_id)
        self._members.add(element_id)

    def pop(self) -> str:
        element_id = self.ids.pop()
        self._members.discard(element_id)
        return element_id

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._members

    def as_set(self) -> Set[str]:
        return set(self._members)


# A slot is one value waiting to be placed:
#   (container, key, property name, value)
# key is None when the container is a list and the value is appended.
Slot = Tuple[Any, Optional[str], str, Any]


@dataclass
class _Frame:
    item: TypedItem
    node: Dict[str, Any]
    depth: int
    slots: Iterator[Slot]


def _check_field(item: TypedItem, field_name: str, reserved: FrozenSet[str]) -> None:
    if field_name in reserved:
        raise MalformedElementError("Property name clashes with a reserved tree field",
                                    field=field_name, element_id=item.id, element_type=item.type)


def _element_slots(item: TypedItem, node: Dict[str, Any],
                   reserved: FrozenSet[str] = RESERVED_FIELDS) -> Iterator[Slot]:
    for name, value in item.properties.items():
        if isinstance(value, list):
            if not value:
                continue
            wire_name = to_wire_name(name)
            _check_field(item, wire_name, reserved)
            members: List[Any] = []
            node[wire_name] = members
            for member in value:
                yield members, None, name, member
        else:
            _check_field(item, name, reserved)
            yield node, name, name, value


def _place(container: Any, key: Optional[str], value: Any) -> None:
    if key is None:
        container.append(value)
    else:
        container[key] = value


class Serializer:
    """
    Flattens one namespace into a tree.

    Usage:
        tree = Serializer(store, Verbosity.STANDARD).document_tree(namespace, Format.JSON)
    """

    def __init__(self, store: InMemoryGraphStore, verbosity: Verbosity):
        self.store = store
        self.verbosity = verbosity
        self._items: Dict[str, TypedItem] = {}

    def document_tree(self, namespace: str, fmt: Format) -> Dict[str, Any]:
        """
        Build the tree for namespace.

        Returns:
            The document node for XML, or {"Document": <document node>} otherwise

        Raises:
            MissingNamespaceError: if the namespace does not exist
            MissingDocumentError: if the namespace holds no document element
        """
        self._items = self.store.items(namespace)
        document = self._find_document(namespace)

        document_node = self.element_node(document, DOCUMENT_RESERVED_FIELDS)
        elements = [
            self.element_node(item)
            for item in list(self._items.values())
            if item.id != document.id
        ]
        if elements:
            document_node[ELEMENTS_FIELD] = elements

        logger.debug("Serialized %d elements of %s at %s", len(elements) + 1,
                     namespace, self.verbosity.value)
        if fmt == Format.XML:
            return document_node
        return {DOCUMENT_KEY: document_node}

    def _find_document(self, namespace: str) -> TypedItem:
        document = self._items.get(DOCUMENT_ID)
        if document is not None:
            return document
        for item in self._items.values():
            if item.is_document:
                return item
        raise MissingDocumentError(f"Namespace {namespace} has no document element")

    def element_node(self, root: TypedItem,
                     reserved: FrozenSet[str] = RESERVED_FIELDS) -> Dict[str, Any]:
        """
        Render root (and whatever the verbosity expands below it) as a node.

        Raises:
            MalformedElementError: if a property name clashes with a tree field
        """
        path = ExpansionPath()
        root_node = self._new_node(root)
        path.push(root.id)
        stack = [_Frame(root, root_node, 0, _element_slots(root, root_node, reserved))]

        while stack:
            frame = stack[-1]
            slot = next(frame.slots, None)
            if slot is None:
                stack.pop()
                path.pop()
                continue

            container, key, name, value = slot
            rendered, expand = self._render_value(name, value, frame.depth, path)
            _place(container, key, rendered)
            if expand is not None:
                path.push(expand.id)
                stack.append(_Frame(expand, rendered, frame.depth + 1, _element_slots(expand, rendered)))

        return root_node

    @staticmethod
    def _new_node(item: TypedItem) -> Dict[str, Any]:
        return {TYPE_FIELD: item.type, ID_FIELD: item.id}

    def _render_value(self, name: str, value: Any, depth: int,
                      path: ExpansionPath) -> Tuple[Any, Optional[TypedItem]]:
        """
        Render one value.

        Returns:
            (rendered value, item to expand into the rendered node or None)
        """
        if not isinstance(value, Reference):
            return value, None

        target = self._items.get(value.element_id)
        if target is None:
            logger.debug("Dangling reference to %s written as id", value.element_id)
            return value.element_id, None
        if target.id in path:
            logger.debug("Cycle back to %s written as id", target.id)
            return target.id, None

        if (name in LICENSE_PROPERTIES and target.type in LICENSE_TYPES
                and self.verbosity == Verbosity.STANDARD):
            return license_text(target, self._items, path.as_set()), None

        if self.verbosity == Verbosity.FULL or (self.verbosity == Verbosity.STANDARD and depth == 0):
            return self._new_node(target), target
        return target.id, None

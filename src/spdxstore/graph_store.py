"""
In-memory reference graph store.

Holds, per document namespace, a mapping from element id to TypedItem.
Property edits go through get/set/add/remove keyed by
(namespace, element id, property name).

INVARIANTS:
    - A namespace either does not exist, or maps every element id it
      contains to exactly one TypedItem
    - Element maps are never replaced once registered; overwriting a
      namespace clears its map in place
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from spdxstore.errors import MissingNamespaceError
from spdxstore.locking import NamespaceLocks
from spdxstore.model import DOCUMENT_ID, DOCUMENT_TYPE, PROP_DOCUMENT_NAMESPACE, Reference, TypedItem, Value

logger = logging.getLogger(__name__)


class InMemoryGraphStore:
    """Namespace registry of typed items."""

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, TypedItem]] = {}
        self._registry_lock = threading.Lock()
        self._locks = NamespaceLocks()

    @contextmanager
    def enter_critical_section(self, namespace: str) -> Iterator[None]:
        """Hold the named lock for namespace for the duration of the block."""
        with self._locks.hold(namespace):
            yield

    # Namespace registry

    def namespaces(self) -> List[str]:
        with self._registry_lock:
            return list(self._documents)

    def has_namespace(self, namespace: str) -> bool:
        return namespace in self._documents

    def element_map(self, namespace: str) -> Optional[Dict[str, TypedItem]]:
        """The live element map of namespace, or None if it does not exist."""
        return self._documents.get(namespace)

    def register_namespace(self, namespace: str) -> Dict[str, TypedItem]:
        """
        Register an empty element map for namespace.

        If another caller registered one first, that map is returned instead,
        so at most one map ever exists per namespace.
        """
        with self._registry_lock:
            element_map = self._documents.setdefault(namespace, {})
        logger.debug("Registered namespace %s", namespace)
        return element_map

    def items(self, namespace: str) -> Dict[str, TypedItem]:
        """
        The element map of namespace.

        Raises:
            MissingNamespaceError: if the namespace does not exist
        """
        element_map = self._documents.get(namespace)
        if element_map is None:
            raise MissingNamespaceError(f"Namespace {namespace} does not exist")
        return element_map

    # Typed items

    def create(self, namespace: str, element_id: str, type_name: str) -> TypedItem:
        """
        Create (or replace) an empty item, registering the namespace if needed.
        """
        with self.enter_critical_section(namespace):
            element_map = self.element_map(namespace)
            if element_map is None:
                element_map = self.register_namespace(namespace)
            item = TypedItem(id=element_id, type=type_name)
            element_map[element_id] = item
        return item

    def create_document(self, namespace: str, **properties: Value) -> TypedItem:
        """Create the document element of namespace."""
        document = self.create(namespace, DOCUMENT_ID, DOCUMENT_TYPE)
        document.set(PROP_DOCUMENT_NAMESPACE, namespace)
        for name, value in properties.items():
            document.set(name, value)
        return document

    def get_item(self, namespace: str, element_id: str) -> Optional[TypedItem]:
        return self.items(namespace).get(element_id)

    def _require_item(self, namespace: str, element_id: str) -> TypedItem:
        item = self.get_item(namespace, element_id)
        if item is None:
            raise KeyError(f"Element {element_id} not found in namespace {namespace}")
        return item

    def get_value(self, namespace: str, element_id: str, name: str) -> Any:
        return self._require_item(namespace, element_id).get(name)

    def set_value(self, namespace: str, element_id: str, name: str, value: Value) -> None:
        self._require_item(namespace, element_id).set(name, value)

    def add_value_to_collection(self, namespace: str, element_id: str, name: str, value: Any) -> None:
        self._require_item(namespace, element_id).add(name, value)

    def add_reference(self, namespace: str, element_id: str, name: str, target_id: str,
                      collection: bool = False) -> None:
        """Point property name of element_id at target_id (appending if collection)."""
        ref = Reference(target_id)
        if collection:
            self.add_value_to_collection(namespace, element_id, name, ref)
        else:
            self.set_value(namespace, element_id, name, ref)

    def remove_property(self, namespace: str, element_id: str, name: str) -> None:
        self._require_item(namespace, element_id).properties.pop(name, None)

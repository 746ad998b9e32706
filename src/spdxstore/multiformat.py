"""
Multi-format document store.

MultiFormatStore serializes a namespace to JSON, pretty JSON, XML or YAML
and installs deserialized documents into an InMemoryGraphStore.

CONCURRENCY:
    One reentrant lock per store instance guards:
        - configuration reads and changes
        - the whole serialize call
        - admission and install during deserialize
    so a serialize started under (format X, verbosity Y) finishes with X, Y
    and the matching codec even if the configuration is changed meanwhile.

    Each namespace also has a named critical section (see locking.py).
    Admission and install run inside it as one step: other holders of the
    section see either the previous contents or the complete new document.
"""

from __future__ import annotations

import io
import logging
import threading
from typing import BinaryIO, Dict, Optional, Union

from spdxstore.config import Format, StoreConfig, Verbosity
from spdxstore.deserializer import Deserializer
from spdxstore.errors import NamespaceAlreadyExistsError, UnsupportedVerbosityForInputError
from spdxstore.formats import codec_for
from spdxstore.graph_store import InMemoryGraphStore
from spdxstore.model import TypedItem
from spdxstore.serializer import Serializer

logger = logging.getLogger(__name__)


class MultiFormatStore:
    """
    Serializes and deserializes document graphs in a configurable format.

    Example:
        store = MultiFormatStore(StoreConfig(Format.JSON_PRETTY))
        with open("doc.json", "wb") as f:
            store.serialize("https://example.org/doc1", f)

        store.set_format(Format.YAML)
        with open("other.yaml", "rb") as f:
            namespace = store.deserialize(f, overwrite=False)
    """

    def __init__(self, config: Optional[StoreConfig] = None,
                 store: Optional[InMemoryGraphStore] = None):
        self._config = config or StoreConfig()
        self.store = store if store is not None else InMemoryGraphStore()
        self._lock = threading.RLock()

    # Configuration

    @property
    def config(self) -> StoreConfig:
        with self._lock:
            return self._config

    @property
    def format(self) -> Format:
        return self.config.format

    @property
    def verbosity(self) -> Verbosity:
        return self.config.verbosity

    def set_config(self, config: StoreConfig) -> None:
        with self._lock:
            self._config = config

    def set_format(self, fmt: Format) -> None:
        with self._lock:
            self._config = self._config.with_format(fmt)

    def set_verbosity(self, verbosity: Verbosity) -> None:
        with self._lock:
            self._config = self._config.with_verbosity(verbosity)

    # Serialization

    def serialize(self, namespace: str, sink: BinaryIO) -> None:
        """
        Write the namespace's document in the configured format to sink.

        The document is fully encoded before anything is written, so a
        failure leaves sink untouched.

        Raises:
            MissingNamespaceError: if the namespace does not exist
            MissingDocumentError: if the namespace holds no document element
        """
        with self._lock:
            config = self._config
            codec = codec_for(config.format)
            with self.store.enter_critical_section(namespace):
                tree = Serializer(self.store, config.verbosity).document_tree(namespace, config.format)
            data = codec.encode(tree)
            sink.write(data)
        logger.info("Serialized %s as %s/%s (%d bytes)", namespace,
                    config.format.value, config.verbosity.value, len(data))

    def dumps(self, namespace: str) -> bytes:
        """serialize() into a bytes value."""
        sink = io.BytesIO()
        self.serialize(namespace, sink)
        return sink.getvalue()

    # Deserialization

    def deserialize(self, source: BinaryIO, overwrite: bool = False) -> str:
        """
        Read one document in the configured format and install it.

        Args:
            source: Stream to read the document from
            overwrite: Replace the namespace's contents if it already exists

        Returns:
            The document namespace

        Raises:
            UnsupportedVerbosityForInputError: if the verbosity is not COMPACT,
                or the input holds inlined elements
            MissingDocumentError, MissingNamespaceError, EmptyNamespaceError,
            MalformedElementError: if the input is incomplete
            NamespaceAlreadyExistsError: if the namespace exists and overwrite is False
        """
        if source is None:
            raise ValueError("Input stream must not be None")
        config = self.config
        if config.verbosity != Verbosity.COMPACT:
            raise UnsupportedVerbosityForInputError(
                "Only COMPACT verbosity is supported for deserialization")

        data = source.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        tree = codec_for(config.format).decode(data)

        deserializer = Deserializer(config.format)
        doc = deserializer.document_node(tree)
        namespace = deserializer.namespace_of(doc)
        if not overwrite and self.store.has_namespace(namespace):
            raise NamespaceAlreadyExistsError(namespace)

        items = deserializer.read_elements(doc)
        self._install(namespace, items, overwrite)
        logger.info("Deserialized %s (%d elements)", namespace, len(items))
        return namespace

    def loads(self, data: Union[bytes, str], overwrite: bool = False) -> str:
        """deserialize() from a bytes or str value."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self.deserialize(io.BytesIO(data), overwrite=overwrite)

    def admit(self, namespace: str, overwrite: bool) -> Dict[str, TypedItem]:
        """
        Obtain an empty element map for namespace.

        - No map yet: a new empty one is registered
        - Map exists, overwrite False: NamespaceAlreadyExistsError
        - Map exists, overwrite True: the map is cleared in place

        Returns:
            The (empty) registered element map
        """
        with self._lock, self.store.enter_critical_section(namespace):
            element_map = self.store.element_map(namespace)
            if element_map is None:
                logger.info("Creating namespace %s", namespace)
                return self.store.register_namespace(namespace)
            if not overwrite:
                raise NamespaceAlreadyExistsError(namespace)
            logger.warning("Overwriting namespace %s (%d elements)", namespace, len(element_map))
            element_map.clear()
            return element_map

    def _install(self, namespace: str, items: Dict[str, TypedItem], overwrite: bool) -> None:
        with self._lock, self.store.enter_critical_section(namespace):
            element_map = self.admit(namespace, overwrite)
            element_map.update(items)

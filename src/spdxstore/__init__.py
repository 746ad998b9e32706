"""
spdxstore: multi-format serialization of SPDX-style document graphs.

A document graph is a namespace of typed, identified elements linked by
reference properties. This package renders such a graph as JSON, pretty
JSON, XML or YAML at one of three verbosities, and installs COMPACT
documents back into storage.

ARCHITECTURAL GUARANTEE:
------------------------
Serialization never mutates the graph.
Deserialization never leaves a half-installed namespace behind.
"""

from spdxstore.config import Format, StoreConfig, Verbosity, load_config
from spdxstore.errors import (
    EmptyNamespaceError,
    MalformedElementError,
    MissingDocumentError,
    MissingNamespaceError,
    NamespaceAlreadyExistsError,
    SpdxStoreError,
    UnsupportedVerbosityForInputError,
)
from spdxstore.graph_store import InMemoryGraphStore
from spdxstore.model import Reference, TypedItem
from spdxstore.multiformat import MultiFormatStore

__version__ = "0.1.0"

__all__ = [
    "Format",
    "Verbosity",
    "StoreConfig",
    "load_config",
    "MultiFormatStore",
    "InMemoryGraphStore",
    "Reference",
    "TypedItem",
    "SpdxStoreError",
    "MissingNamespaceError",
    "MissingDocumentError",
    "EmptyNamespaceError",
    "NamespaceAlreadyExistsError",
    "UnsupportedVerbosityForInputError",
    "MalformedElementError",
]

"""Shared fixtures for spdxstore tests."""

import pytest

from spdxstore.graph_store import InMemoryGraphStore
from spdxstore.examples import EXAMPLE_NAMESPACE, build_example_document


@pytest.fixture()
def graph_store() -> InMemoryGraphStore:
    return InMemoryGraphStore()


@pytest.fixture()
def example_store(graph_store) -> InMemoryGraphStore:
    """Store holding the example document (license set included)."""
    build_example_document(graph_store)
    return graph_store


@pytest.fixture()
def example_namespace() -> str:
    return EXAMPLE_NAMESPACE

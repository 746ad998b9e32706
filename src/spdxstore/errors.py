"""
Errors raised while moving document graphs in and out of storage.

Every error aborts the whole serialize/deserialize call.
Encoder and stream errors are not wrapped; they reach the caller unchanged.
"""

from typing import Optional


class SpdxStoreError(Exception):
    """Base class for all spdxstore errors."""
    pass


class MissingNamespaceError(SpdxStoreError):
    """Raised when a namespace is unknown, or a document has no namespace field."""
    pass


class MissingDocumentError(SpdxStoreError):
    """Raised when no document node (or document element) can be found."""
    pass


class EmptyNamespaceError(SpdxStoreError):
    """Raised when the document namespace field is present but blank."""
    pass


class NamespaceAlreadyExistsError(SpdxStoreError):
    """Raised when deserializing into an existing namespace without overwrite."""

    def __init__(self, namespace: str):
        super().__init__(f"Document namespace {namespace} already exists")
        self.namespace = namespace


class UnsupportedVerbosityForInputError(SpdxStoreError):
    """Raised when deserialization is asked to read non-COMPACT input."""
    pass


class MalformedElementError(SpdxStoreError):
    """
    Raised when an element node is missing a required field, or a property
    value has an ambiguous shape.

    Attributes:
        field: Offending field name (if known)
        element_id: Id of the element being read (if known)
        element_type: Type of the element being read (if known)
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        element_id: Optional[str] = None,
        element_type: Optional[str] = None,
    ):
        details = [
            f"{label}={value}"
            for label, value in (("field", field), ("id", element_id), ("type", element_type))
            if value is not None
        ]
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)
        self.field = field
        self.element_id = element_id
        self.element_type = element_type

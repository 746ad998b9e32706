"""
Core Graph Model Objects

Defines the data structures stored in a document namespace.

These are pure data classes representing:
    - References (links from one element to another by id)
    - Typed items (elements: a type tag plus named property values)

A property value is one of:
    - a scalar (str, int, float, bool)
    - a Reference to another element in the same namespace
    - a collection (a list of scalars and/or References)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about JSON/XML/YAML
        - Know nothing about verbosity
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# Tree field names shared by the serializer and deserializer
TYPE_FIELD = "type"
ID_FIELD = "SPDXID"
DOCUMENT_KEY = "Document"
ELEMENTS_FIELD = "elements"

# Property wire names that would clash with the tree fields above
RESERVED_FIELDS = frozenset({TYPE_FIELD, ID_FIELD})
DOCUMENT_RESERVED_FIELDS = RESERVED_FIELDS | {ELEMENTS_FIELD}

DOCUMENT_ID = "SPDXRef-DOCUMENT"
DOCUMENT_TYPE = "SpdxDocument"
PROP_DOCUMENT_NAMESPACE = "documentNamespace"

# Properties whose value is a license expression
LICENSE_PROPERTIES = frozenset({
    "licenseConcluded",
    "licenseDeclared",
    "licenseInfoFromFiles",
    "licenseInfoInFile",
    "licenseInfoInSnippet",
})

# Element types that form license expressions
LICENSE_TYPES = frozenset({
    "ExtractedLicenseInfo",
    "ListedLicense",
    "ListedLicenseException",
    "ConjunctiveLicenseSet",
    "DisjunctiveLicenseSet",
    "WithExceptionOperator",
    "OrLaterOperator",
    "SpdxNoneLicense",
    "SpdxNoAssertionLicense",
})


@dataclass(frozen=True)
class Reference:
    """
    A link to another element, resolved within the same namespace.

    Example:
        Reference("SPDXRef-Package-A")
    """

    element_id: str


Scalar = Union[str, int, float, bool]
Value = Union[Scalar, Reference, List[Union[Scalar, Reference]]]


@dataclass
class TypedItem:
    """
    A typed, identified node in a document graph.

    Properties:
        id:
            Identifier, unique within its namespace
            Examples: "SPDXRef-DOCUMENT", "SPDXRef-Package-A"

        type:
            Type tag
            Examples: "SpdxDocument", "Package", "Relationship"

        properties:
            Property name -> Value, in insertion order.
            Collection-valued properties are stored under their
            singular (internal) name.
    """

    id: str
    type: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Optional[Any] = None) -> Any:
        return self.properties.get(name, default)

    def set(self, name: str, value: Value) -> None:
        self.properties[name] = value

    def add(self, name: str, value: Union[Scalar, Reference]) -> None:
        """Append a member to a collection property, creating it if needed."""
        self.properties.setdefault(name, []).append(value)

    @property
    def is_document(self) -> bool:
        return self.type == DOCUMENT_TYPE

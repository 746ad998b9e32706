"""
Property name codec.

Collection-valued properties are stored under a singular (internal) name
and written under a plural (wire) name:

    package             -> packages
    hasExtractedLicensingInfo -> hasExtractedLicensingInfos
    licenseInfoFromFiles -> licenseInfoFromFiles   (irregular, unchanged)

Every collection property the model uses is listed in COLLECTION_NAMES so
that to_internal_name(to_wire_name(p)) == p holds for each of them. The
suffix rules are only a fallback for names missing from the table:

    to_wire_name:     "...y" -> "...ies", exempt name unchanged, else "+s"
    to_internal_name: "...ies" -> strip 3 chars, exempt name unchanged,
                      else strip 1 char

The fallback is not a true inverse ("...y" comes back without its "y"), so
new collection properties should be added to the table.
"""

from typing import Dict


EXEMPT_PROPERTY_NAME = "licenseInfoFromFiles"

COLLECTION_NAMES: Dict[str, str] = {
    "annotation": "annotations",
    "attributionText": "attributionTexts",
    "checksum": "checksums",
    "comment": "comments",
    "creator": "creators",
    "documentDescribe": "documentDescribes",
    "externalDocumentRef": "externalDocumentRefs",
    "externalRef": "externalRefs",
    "fileContributor": "fileContributors",
    "fileType": "fileTypes",
    "file": "files",
    "hasExtractedLicensingInfo": "hasExtractedLicensingInfos",
    "hasFile": "hasFiles",
    "licenseInfoInFile": "licenseInfoInFiles",
    "licenseInfoInSnippet": "licenseInfoInSnippets",
    "member": "members",
    "package": "packages",
    "range": "ranges",
    "relationship": "relationships",
    "seeAlso": "seeAlsos",
    "snippet": "snippets",
    EXEMPT_PROPERTY_NAME: EXEMPT_PROPERTY_NAME,
}

_INTERNAL_NAMES: Dict[str, str] = {wire: name for name, wire in COLLECTION_NAMES.items()}


def to_wire_name(property_name: str) -> str:
    """
    Map an internal property name to the name used for its collection.

    Args:
        property_name: Singular property name (e.g. "package")

    Returns:
        Plural wire name (e.g. "packages")
    """
    known = COLLECTION_NAMES.get(property_name)
    if known is not None:
        return known
    if property_name.endswith("y"):
        return property_name[:-1] + "ies"
    if property_name == EXEMPT_PROPERTY_NAME:
        return property_name
    return property_name + "s"


def to_internal_name(wire_name: str) -> str:
    """
    Map a collection wire name back to the internal property name.

    Args:
        wire_name: Plural wire name (e.g. "relationships")

    Returns:
        Singular property name (e.g. "relationship")
    """
    known = _INTERNAL_NAMES.get(wire_name)
    if known is not None:
        return known
    if wire_name.endswith("ies"):
        return wire_name[:-3]
    if wire_name == EXEMPT_PROPERTY_NAME:
        return wire_name
    return wire_name[:-1]


def is_collection_name(wire_name: str) -> bool:
    """True if wire_name is a known collection wire name."""
    return wire_name in _INTERNAL_NAMES

"""
Example document builder.

Builds a small document graph with packages, a file, relationships and a
license expression, used by the demo script and the tests.
"""
from spdxstore.graph_store import InMemoryGraphStore
from spdxstore.model import DOCUMENT_ID, Reference

EXAMPLE_NAMESPACE = "https://example.org/doc1"


def build_example_document(store: InMemoryGraphStore, namespace: str = EXAMPLE_NAMESPACE,
                           with_license_set: bool = True) -> str:
    doc = store.create_document(namespace, name="example-document", specVersion="SPDX-2.3")
    doc.add("creator", "Tool: spdxstore")

    pkg_a = store.create(namespace, "SPDXRef-Package-A", "Package")
    pkg_a.set("name", "package-a")
    pkg_a.set("versionInfo", "1.0.0")
    pkg_a.set("licenseDeclared", "MIT")

    pkg_b = store.create(namespace, "SPDXRef-Package-B", "Package")
    pkg_b.set("name", "package-b")
    pkg_b.set("filesAnalyzed", False)

    source = store.create(namespace, "SPDXRef-File-main", "File")
    source.set("fileName", "./src/main.c")
    source.add("checksum", "SHA1: 85ed0817af83a24ad8da68c2b5094de69833983c")
    pkg_b.add("hasFile", Reference(source.id))

    doc.add("package", Reference(pkg_a.id))
    doc.add("package", Reference(pkg_b.id))

    describes = store.create(namespace, "SPDXRef-Relationship-1", "Relationship")
    describes.set("spdxElementId", Reference(DOCUMENT_ID))
    describes.set("relationshipType", "DESCRIBES")
    describes.set("relatedSpdxElement", Reference(pkg_a.id))

    depends = store.create(namespace, "SPDXRef-Relationship-2", "Relationship")
    depends.set("spdxElementId", Reference(pkg_a.id))
    depends.set("relationshipType", "DEPENDS_ON")
    depends.set("relatedSpdxElement", Reference(pkg_b.id))

    doc.add("relationship", Reference(describes.id))
    doc.add("relationship", Reference(depends.id))

    if with_license_set:
        mit = store.create(namespace, "SPDXRef-License-MIT", "ListedLicense")
        mit.set("licenseId", "MIT")
        apache = store.create(namespace, "SPDXRef-License-Apache", "ListedLicense")
        apache.set("licenseId", "Apache-2.0")
        both = store.create(namespace, "SPDXRef-LicenseSet-1", "ConjunctiveLicenseSet")
        both.add("member", Reference(mit.id))
        both.add("member", Reference(apache.id))
        pkg_b.set("licenseConcluded", Reference(both.id))

    return namespace

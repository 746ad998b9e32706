"""
Flat text rendering of license expressions.

A license expression is held in the graph as license-typed elements:

    ConjunctiveLicenseSet(member=[Ref(MIT), Ref(Apache-2.0)])
        -> "MIT AND Apache-2.0"

    DisjunctiveLicenseSet(member=[Ref(GPL-2.0-only), Ref(<AND set>)])
        -> "GPL-2.0-only OR (MIT AND Apache-2.0)"

    WithExceptionOperator(member=Ref(GPL-2.0-or-later),
                          licenseException=Ref(Classpath-exception-2.0))
        -> "GPL-2.0-or-later WITH Classpath-exception-2.0"

STANDARD and COMPACT output uses this text form; FULL output expands the
elements instead.

IMPORTANT:
    This module renders expressions only. It does not parse or validate
    license expression text.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Set

from spdxstore.model import Reference, TypedItem


class LicenseOperator(Enum):
    """Operators joining license expression operands."""
    AND = "AND"
    OR = "OR"
    WITH = "WITH"


SET_OPERATORS: Dict[str, LicenseOperator] = {
    "ConjunctiveLicenseSet": LicenseOperator.AND,
    "DisjunctiveLicenseSet": LicenseOperator.OR,
}

SPECIAL_LICENSE_TEXT: Dict[str, str] = {
    "SpdxNoneLicense": "NONE",
    "SpdxNoAssertionLicense": "NOASSERTION",
}


def _operand_text(value, items: Dict[str, TypedItem], path: Set[str]) -> str:
    if value is None:
        return SPECIAL_LICENSE_TEXT["SpdxNoAssertionLicense"]
    if not isinstance(value, Reference):
        return str(value)
    target = items.get(value.element_id)
    if target is None or target.id in path:
        return value.element_id
    text = _license_text(target, items, path)
    if target.type in SET_OPERATORS:
        return f"({text})"
    return text


def _license_text(item: TypedItem, items: Dict[str, TypedItem], path: Set[str]) -> str:
    special = SPECIAL_LICENSE_TEXT.get(item.type)
    if special is not None:
        return special

    path.add(item.id)
    try:
        operator = SET_OPERATORS.get(item.type)
        if operator is not None:
            members = item.get("member", [])
            if not isinstance(members, list):
                members = [members]
            parts = [_operand_text(m, items, path) for m in members]
            return f" {operator.value} ".join(parts)

        if item.type == "WithExceptionOperator":
            member = _operand_text(item.get("member"), items, path)
            exception = _operand_text(item.get("licenseException"), items, path)
            return f"{member} {LicenseOperator.WITH.value} {exception}"

        if item.type == "OrLaterOperator":
            return _operand_text(item.get("member"), items, path) + "+"

        if item.type == "ListedLicenseException":
            return str(item.get("licenseExceptionId") or item.id)

        return str(item.get("licenseId") or item.id)
    finally:
        path.discard(item.id)


def license_text(item: TypedItem, items: Dict[str, TypedItem], path: Optional[Set[str]] = None) -> str:
    """
    Render a license-typed element as license expression text.

    Args:
        item: License element to render
        items: Element map of the namespace holding item
        path: Element ids already being rendered (cycles render as ids)

    Returns:
        License expression text, e.g. "MIT OR (Apache-2.0 AND BSD-3-Clause)"
    """
    return _license_text(item, items, set(path) if path else set())

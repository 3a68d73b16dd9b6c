"""
Record normalization: raw generator entries -> SymbolRecord | Rejected.

Raw entries are plain mappings. Both the long key names and the short keys
used by Javadoc search index files are accepted:

    label    / l   display string (required)
    package  / p   dotted package name or sequence of segments
    owner    / c   enclosing type, members only
    target   / url / u   resolvable link
    anchor         member anchor within the owner's page
    category       optional explicit kind hint

Rejection never raises; normalize_entries() counts and returns the rejects so
index construction carries on with partial data.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .records import Category, Rejected, SymbolRecord

logger = logging.getLogger(__name__)

RawEntry = Mapping[str, Any]

LABEL_KEYS = ("label", "l")
PACKAGE_KEYS = ("package", "p")
OWNER_KEYS = ("owner", "c")
TARGET_KEYS = ("target", "url", "u")


def _first_string(raw: RawEntry, keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _package_path(raw: RawEntry) -> Tuple[str, ...]:
    for key in PACKAGE_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return tuple(part for part in value.strip().split(".") if part)
        if isinstance(value, (list, tuple)):
            parts = tuple(str(part).strip() for part in value if str(part).strip())
            if parts:
                return parts
    return ()


def infer_category(package_path: Tuple[str, ...], owner_name: Optional[str]) -> Optional[Category]:
    """Category implied by which fields are present, or None when ambiguous."""
    if owner_name:
        return Category.MEMBER if package_path else None
    if package_path:
        return Category.TYPE
    return Category.TAG


def derive_target_ref(
    category: Category,
    package_path: Tuple[str, ...],
    owner_name: Optional[str],
    label: str,
    anchor: Optional[str] = None,
) -> Optional[str]:
    """
    Build the page reference Javadoc would link to for a record.

    Examples:
        >>> derive_target_ref(Category.TYPE, ("a", "b"), None, "Graph")
        'a/b/Graph.html'

        >>> derive_target_ref(Category.MEMBER, ("a",), "Graph", "size()")
        'a/Graph.html#size()'
    """
    base = "/".join(package_path)
    if category is Category.PACKAGE:
        return f"{base}/package-summary.html"
    if category is Category.TYPE:
        return f"{base}/{label}.html"
    if category is Category.MEMBER:
        return f"{base}/{owner_name}.html#{anchor or label}"
    return None


def normalize_entry(raw: RawEntry) -> Union[SymbolRecord, Rejected]:
    """
    Validate and canonicalize one raw entry.

    Returns a SymbolRecord, or Rejected with a reason when the label is
    missing, the category cannot be inferred, or an explicit category hint
    contradicts the fields present.
    """
    if not isinstance(raw, Mapping):
        return Rejected(f"entry is not a mapping: {type(raw).__name__}")

    label = _first_string(raw, LABEL_KEYS)
    if label is None:
        return Rejected("missing label", raw)

    package_path = _package_path(raw)
    owner_name = _first_string(raw, OWNER_KEYS)
    target = _first_string(raw, TARGET_KEYS)
    anchor = _first_string(raw, ("anchor",))

    hint = raw.get("category")
    if hint is None:
        category = infer_category(package_path, owner_name)
        if category is None:
            return Rejected("cannot infer category: owner without package", raw)
    else:
        try:
            category = hint if isinstance(hint, Category) else Category(str(hint).strip().lower())
        except ValueError:
            return Rejected(f"unknown category: {hint!r}", raw)
        if category is Category.PACKAGE and not package_path:
            package_path = tuple(part for part in label.split(".") if part)

    if target is None:
        target = derive_target_ref(category, package_path, owner_name, label, anchor)

    try:
        return SymbolRecord(
            category=category,
            package_path=package_path,
            owner_name=owner_name,
            label=label,
            target_ref=target,
        )
    except ValueError as e:
        return Rejected(str(e), raw)


def normalize_entries(entries: Iterable[RawEntry]) -> Tuple[List[SymbolRecord], List[Rejected]]:
    """Normalize entries in order, splitting accepted records from rejects."""
    records: List[SymbolRecord] = []
    rejected: List[Rejected] = []

    for raw in entries:
        result = normalize_entry(raw)
        if isinstance(result, Rejected):
            logger.debug("Dropped entry (%s): %r", result.reason, result.raw)
            rejected.append(result)
        else:
            records.append(result)

    return records, rejected

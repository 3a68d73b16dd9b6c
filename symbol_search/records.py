"""
Record types for the symbol search index.

A documented symbol is one of four kinds, each with its own required fields:

    PACKAGE  - package_path (its own segments), no owner
    TYPE     - package_path of the declaring package, no owner
    MEMBER   - package_path and owner_name of the enclosing type
    TAG      - free-standing entry ("All Classes"), no owner

Invalid combinations raise ValueError at construction, so a SymbolRecord that
exists is always well-formed. search_key, segments and initials are derived
from label in __post_init__ and cannot be passed in.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .normalizer import camel_initials, normalize, split_segments


class Category(str, enum.Enum):
    PACKAGE = "package"
    TYPE = "type"
    MEMBER = "member"
    TAG = "tag"


# Tie-break priority used by both the index sort and the ranker.
CATEGORY_PRIORITY: Dict[Category, int] = {
    Category.TYPE: 0,
    Category.MEMBER: 1,
    Category.PACKAGE: 2,
    Category.TAG: 3,
}

# Display order for grouped results.
CATEGORY_ORDER: Tuple[Category, ...] = tuple(
    sorted(CATEGORY_PRIORITY, key=CATEGORY_PRIORITY.__getitem__)
)


@dataclass(frozen=True)
class SymbolRecord:
    """One documented symbol, immutable once built."""
    category: Category
    package_path: Tuple[str, ...]
    owner_name: Optional[str]
    label: str
    target_ref: Optional[str] = None
    search_key: str = field(init=False, compare=False)
    segments: Tuple[str, ...] = field(init=False, compare=False, repr=False)
    initials: str = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label.strip():
            raise ValueError("label must be a non-empty string")
        category = Category(self.category)
        package_path = tuple(self.package_path)
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "package_path", package_path)

        if category is Category.MEMBER:
            if not self.owner_name:
                raise ValueError("member records require an owner_name")
            if not package_path:
                raise ValueError("member records require a package_path")
        elif self.owner_name is not None:
            raise ValueError(f"{category.value} records cannot have an owner_name")
        elif category in (Category.TYPE, Category.PACKAGE) and not package_path:
            raise ValueError(f"{category.value} records require a package_path")

        segments = split_segments(self.label)
        object.__setattr__(self, "search_key", normalize(self.label))
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "initials", camel_initials(segments))

    @property
    def identity(self) -> Tuple[str, Tuple[str, ...], str, str]:
        """Key used for duplicate collapsing; target_ref is not part of it."""
        return (self.category.value, self.package_path, self.owner_name or "", self.label)

    @property
    def package_name(self) -> str:
        return ".".join(self.package_path)

    @property
    def qualified_owner(self) -> str:
        """Dotted package + owner, e.g. 'imagingbook.spectral.dct.Dct1d.Double'."""
        if self.owner_name:
            return ".".join(self.package_path + (self.owner_name,))
        return self.package_name

    def to_public(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "package_path": list(self.package_path),
            "owner_name": self.owner_name,
            "label": self.label,
            "target_ref": self.target_ref,
        }


@dataclass(frozen=True)
class Rejected:
    """A raw entry the normalizer refused, with the reason."""
    reason: str
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)

"""
Index builder for symbol search.

Builds an immutable IndexSnapshot from normalized records. The snapshot is
built once, handed around by reference, and replaced wholesale when the record
list changes; individual records are never patched.

Architecture:
    1. Collapse fully identical records (category, package, owner, label)
    2. Sort by search_key, then category priority, owner, input order
    3. Group records per category, keeping input order inside each group
    4. Build a trigram inverted index: trigram -> snapshot positions

    Trigram index structure:
        {
            "gra": (12, 13, 40, ...),    # positions whose search_key has "gra"
            "rap": (13, 97, ...),
            ...
        }

Usage:
    builder = IndexBuilder(show_progress=True)
    snapshot = builder.build_from_entries(raw_entries)
    print(snapshot.dropped_count)
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from tqdm import tqdm

from .entries import RawEntry, normalize_entries
from .normalizer import extract_trigrams_set
from .records import CATEGORY_ORDER, CATEGORY_PRIORITY, Category, Rejected, SymbolRecord

logger = logging.getLogger(__name__)


class IndexNotBuiltError(RuntimeError):
    """Raised when a query reaches the engine before any index was built."""


@dataclass(frozen=True)
class IndexSnapshot:
    """Read-only, queryable view of a built index."""
    records: Tuple[SymbolRecord, ...]
    by_category: Mapping[Category, Tuple[SymbolRecord, ...]]
    trigram_index: Mapping[str, Tuple[int, ...]] = field(repr=False)
    dropped_count: int = 0
    duplicate_count: int = 0
    rejected: Tuple[Rejected, ...] = field(default=(), repr=False)
    build_seconds: float = 0.0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def category(self, category: Category) -> Tuple[SymbolRecord, ...]:
        return self.by_category.get(Category(category), ())

    def statistics(self) -> Dict[str, Any]:
        """
        Calculate index statistics.

        Returns:
            Dictionary of statistics
        """
        posting_sizes = [len(positions) for positions in self.trigram_index.values()]
        stats: Dict[str, Any] = {
            "total_records": len(self.records),
            "dropped_entries": self.dropped_count,
            "duplicates_collapsed": self.duplicate_count,
            "total_trigrams": len(self.trigram_index),
            "avg_records_per_trigram": (
                sum(posting_sizes) / len(posting_sizes) if posting_sizes else 0
            ),
            "max_records_per_trigram": max(posting_sizes) if posting_sizes else 0,
            "build_seconds": self.build_seconds,
        }
        for category in CATEGORY_ORDER:
            stats[f"{category.value}_records"] = len(self.category(category))
        return stats


def sort_key(record: SymbolRecord, order: int) -> Tuple[str, int, str, int]:
    """Snapshot order: search_key, category priority, owner (absent first), input order."""
    return (
        record.search_key,
        CATEGORY_PRIORITY[record.category],
        record.owner_name or "",
        order,
    )


class IndexBuilder:
    """Build an IndexSnapshot from records or raw entries."""

    def __init__(self, show_progress: bool = False):
        """
        Initialize index builder.

        Args:
            show_progress: Show a tqdm progress bar while indexing
        """
        self.show_progress = show_progress

    def build(
        self,
        records: Iterable[SymbolRecord],
        rejected: Sequence[Rejected] = (),
    ) -> IndexSnapshot:
        """
        Build a snapshot from normalized records.

        Args:
            records: Records in generator order
            rejected: Entries the normalizer dropped, reported on the snapshot

        Returns:
            IndexSnapshot
        """
        start = time.time()

        unique: List[SymbolRecord] = []
        seen = set()
        duplicates = 0
        for record in tqdm(records, desc="Indexing", disable=not self.show_progress):
            if record.identity in seen:
                duplicates += 1
                continue
            seen.add(record.identity)
            unique.append(record)

        ordered = [
            record for order, record in sorted(
                enumerate(unique), key=lambda item: sort_key(item[1], item[0])
            )
        ]

        groups: Dict[Category, List[SymbolRecord]] = {category: [] for category in CATEGORY_ORDER}
        for record in unique:
            groups[record.category].append(record)

        postings: Dict[str, List[int]] = defaultdict(list)
        for position, record in enumerate(ordered):
            for trigram in extract_trigrams_set(record.search_key, normalize_first=False):
                postings[trigram].append(position)

        snapshot = IndexSnapshot(
            records=tuple(ordered),
            by_category=MappingProxyType(
                {category: tuple(items) for category, items in groups.items()}
            ),
            trigram_index=MappingProxyType(
                {trigram: tuple(positions) for trigram, positions in postings.items()}
            ),
            dropped_count=len(rejected),
            duplicate_count=duplicates,
            rejected=tuple(rejected),
            build_seconds=time.time() - start,
        )

        logger.info(
            "Built index with %d records (%d duplicates collapsed, %d trigrams)",
            len(snapshot), duplicates, len(snapshot.trigram_index),
        )
        if rejected:
            logger.warning("Dropped %d malformed entries during normalization", len(rejected))
        return snapshot

    def build_from_entries(self, entries: Iterable[RawEntry]) -> IndexSnapshot:
        """Normalize raw entries, then build; rejects are counted, never fatal."""
        records, rejected = normalize_entries(entries)
        return self.build(records, rejected)


def build(records: Iterable[SymbolRecord]) -> IndexSnapshot:
    return IndexBuilder().build(records)


def build_from_entries(entries: Iterable[RawEntry]) -> IndexSnapshot:
    return IndexBuilder().build_from_entries(entries)

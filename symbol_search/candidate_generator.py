"""
Runtime candidate generation for symbol search.

Given a snapshot and the current query text, returns every record that the
query matches, in snapshot order. Ordering by relevance is the ranker's job.

Architecture:
    Runtime (per keystroke):
        1. User query: "Gra"
        2. Normalize query: "gra"
        3. Extract trigrams: ["gra"]
        4. Intersect trigram postings from the snapshot (queries >= 3 chars)
        5. Verify substring match on each surviving search_key
        6. Scan initials for the camel-case abbreviation match ("gcd")
        7. Return the union in snapshot order

Usage:
    generator = CandidateGenerator(snapshot)
    candidates = generator.generate_candidates("gcd")
"""

import logging
import time
from typing import Dict, List, Optional, Set

from .index_builder import IndexNotBuiltError, IndexSnapshot
from .normalizer import abbreviation_query, extract_trigrams_set, normalize
from .records import SymbolRecord

logger = logging.getLogger(__name__)


def _require_snapshot(snapshot: Optional[IndexSnapshot]) -> IndexSnapshot:
    if snapshot is None:
        raise IndexNotBuiltError("query issued before the symbol index was built")
    return snapshot


class CandidateGenerator:
    """Substring and camel-case candidate lookup over one snapshot."""

    def __init__(self, snapshot: Optional[IndexSnapshot]):
        self.snapshot = _require_snapshot(snapshot)
        self._last_timings: Dict[str, float] = {}

    def substring_positions(self, query_normalized: str) -> Set[int]:
        """Positions whose search_key contains the normalized query."""
        records = self.snapshot.records
        trigrams = extract_trigrams_set(query_normalized, normalize_first=False)

        if not trigrams:
            # Too short for trigram lookup; the index is small enough to scan
            return {
                position for position, record in enumerate(records)
                if query_normalized in record.search_key
            }

        postings = []
        for trigram in trigrams:
            positions = self.snapshot.trigram_index.get(trigram)
            if not positions:
                return set()
            postings.append(positions)

        postings.sort(key=len)
        candidates = set(postings[0])
        for positions in postings[1:]:
            candidates.intersection_update(positions)
            if not candidates:
                return set()

        return {
            position for position in candidates
            if query_normalized in records[position].search_key
        }

    def abbreviation_positions(self, query_normalized: str, exclude: Set[int]) -> Set[int]:
        """Positions whose label initials contain the query as a contiguous run."""
        abbreviation = abbreviation_query(query_normalized)
        if not abbreviation:
            return set()
        return {
            position for position, record in enumerate(self.snapshot.records)
            if position not in exclude and abbreviation in record.initials
        }

    def generate_candidates(self, query: str) -> List[SymbolRecord]:
        """
        Generate candidate records for a query.

        Args:
            query: Raw query text as typed

        Returns:
            Matching records in snapshot order; [] for an empty query
        """
        timings: Dict[str, float] = {}
        start_time = time.time()

        query_normalized = normalize(query)
        if not query_normalized:
            self._last_timings = {"total": time.time() - start_time}
            return []

        t0 = time.time()
        positions = self.substring_positions(query_normalized)
        timings["substring"] = time.time() - t0

        t0 = time.time()
        positions |= self.abbreviation_positions(query_normalized, positions)
        timings["abbreviation"] = time.time() - t0

        records = self.snapshot.records
        result = [records[position] for position in sorted(positions)]

        timings["total"] = time.time() - start_time
        self._last_timings = timings
        logger.debug("Matched %d candidates for %r in %.2fms",
                     len(result), query, timings["total"] * 1000)
        return result

    def get_last_timings(self) -> Dict[str, float]:
        """
        Get timing breakdown from the last generate_candidates call.

        Returns:
            Dictionary with timing information (in seconds):
                - substring: Trigram lookup and substring verification
                - abbreviation: Camel-case initials scan
                - total: Total time for candidate generation
        """
        return dict(self._last_timings)


def match(snapshot: Optional[IndexSnapshot], query: str) -> List[SymbolRecord]:
    """All records matching query, in snapshot order."""
    return CandidateGenerator(snapshot).generate_candidates(query)

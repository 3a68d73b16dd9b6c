"""
Tiered ranking for symbol search candidates.

Candidates are ordered by match quality first:

    1. EXACT       search_key equals the query
    2. PREFIX      search_key starts with the query
    3. SUBSTRING   query appears elsewhere in search_key
    4. CAMEL_CASE  only the initials abbreviation matched

Within a tier, labels with fewer name segments come first (Graph before
GradientCornerDetector), then category priority (type, member, package, tag),
then search_key. list.sort is stable, so records that tie on every key keep
the snapshot order they arrived in.

Usage:
    ranker = Ranker()
    ranked = ranker.rank(candidates, query="gra")
"""

import enum
import logging
import time
from typing import Dict, List, Sequence, Tuple

from .normalizer import abbreviation_query, normalize
from .records import CATEGORY_PRIORITY, SymbolRecord

logger = logging.getLogger(__name__)


class MatchTier(enum.IntEnum):
    EXACT = 1
    PREFIX = 2
    SUBSTRING = 3
    CAMEL_CASE = 4
    NONE = 5


def classify(record: SymbolRecord, query_normalized: str) -> MatchTier:
    """Tier of record for an already-normalized query."""
    key = record.search_key
    if key == query_normalized:
        return MatchTier.EXACT
    if key.startswith(query_normalized):
        return MatchTier.PREFIX
    if query_normalized in key:
        return MatchTier.SUBSTRING
    abbreviation = abbreviation_query(query_normalized)
    if abbreviation and abbreviation in record.initials:
        return MatchTier.CAMEL_CASE
    return MatchTier.NONE


def rank_key(record: SymbolRecord, tier: MatchTier) -> Tuple[int, int, int, str]:
    return (
        int(tier),
        len(record.segments),
        CATEGORY_PRIORITY[record.category],
        record.search_key,
    )


class Ranker:
    """Orders candidates by tier, specificity, category and key."""

    def __init__(self) -> None:
        self._last_timings: Dict[str, float] = {}

    def rank_with_tiers(
        self,
        candidates: Sequence[SymbolRecord],
        query: str,
    ) -> List[Tuple[SymbolRecord, MatchTier]]:
        """
        Rank candidates and keep the tier each one landed in.

        Args:
            candidates: Records from the candidate generator, snapshot order
            query: Query text (normalized here the same way as search keys)

        Returns:
            List of (record, tier) tuples, best first
        """
        if not candidates:
            self._last_timings = {}
            return []

        timings: Dict[str, float] = {}
        start_time = time.time()

        query_normalized = normalize(query)

        t0 = time.time()
        tiered = [(record, classify(record, query_normalized)) for record in candidates]
        timings["classify"] = time.time() - t0

        t0 = time.time()
        tiered.sort(key=lambda item: rank_key(item[0], item[1]))
        timings["sort"] = time.time() - t0

        timings["total"] = time.time() - start_time
        self._last_timings = timings
        return tiered

    def rank(self, candidates: Sequence[SymbolRecord], query: str) -> List[SymbolRecord]:
        return [record for record, _ in self.rank_with_tiers(candidates, query)]

    def get_last_timings(self) -> Dict[str, float]:
        """
        Get timing breakdown from the last ranking call.

        Returns:
            Dictionary with timing information (in seconds):
                - classify: Assigning match tiers
                - sort: Sorting by rank key
                - total: Total time for ranking
        """
        return dict(self._last_timings)


def rank(candidates: Sequence[SymbolRecord], query: str) -> List[SymbolRecord]:
    """Candidates ordered best first."""
    return Ranker().rank(candidates, query)

"""
Session controller for the symbol search box.

Owns the mutable per-interaction state and turns keystrokes into presented
result sets:

    IDLE --keystroke--> QUERYING --results ready (current seq)--> PRESENTING
    PRESENTING --keystroke--> QUERYING
    QUERYING | PRESENTING --clear/close--> IDLE

Every keystroke bumps the session sequence number. A query cycle delivers its
results only if its number is still current when it completes; older cycles
are dropped silently. That is the whole cancellation story for fast typing,
no locks involved.

Usage:
    session = SearchSession(snapshot, presenter=show_results)
    session.keystroke("G")
    session.keystroke("Gr")
    session.keystroke("Gra")      # only this result set reaches show_results
    target = session.select(0)    # opaque link for the navigation layer
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .candidate_generator import CandidateGenerator
from .index_builder import IndexNotBuiltError, IndexSnapshot
from .normalizer import normalize
from .ranker import MatchTier, Ranker
from .records import CATEGORY_ORDER, Category, SymbolRecord

logger = logging.getLogger(__name__)

Presenter = Callable[["SearchResult"], None]
Scheduler = Callable[[float, Callable[[], None]], Any]
SnapshotSource = Union[IndexSnapshot, Callable[[], IndexSnapshot], None]


class SessionState(enum.Enum):
    IDLE = "idle"
    QUERYING = "querying"
    PRESENTING = "presenting"


@dataclass
class SearchResult:
    """Result set handed to the presentation layer."""
    query: str  # original text, so the presenter can spot superseded input
    normalized_query: str
    sequence: int
    records: List[SymbolRecord]
    tiers: List[MatchTier] = field(default_factory=list)
    total_matches: int = 0
    latency_ms: float = 0.0
    gen_timings: Optional[dict] = None
    rank_timings: Optional[dict] = None

    def to_public(self) -> List[Dict[str, Any]]:
        return [record.to_public() for record in self.records]

    def grouped(self) -> List[Tuple[Category, List[SymbolRecord]]]:
        """Records per category in display order, rank order kept inside each group."""
        groups: Dict[Category, List[SymbolRecord]] = {}
        for record in self.records:
            groups.setdefault(record.category, []).append(record)
        return [(category, groups[category]) for category in CATEGORY_ORDER if category in groups]


@dataclass
class QuerySession:
    """Mutable query state, owned by exactly one SearchSession."""
    raw_query: str = ""
    normalized_query: str = ""
    last_result: Optional[SearchResult] = None
    sequence: int = 0
    stale_count: int = 0


class PendingQuery:
    """One query cycle; runs immediately or when the debounce timer fires."""

    def __init__(self, session: "SearchSession", sequence: int, text: str):
        self.session = session
        self.sequence = sequence
        self.text = text
        self.done = False

    @property
    def is_current(self) -> bool:
        return self.sequence == self.session.state.sequence and not self.session.closed

    def run(self) -> Optional[SearchResult]:
        """Match, rank and deliver. Returns the result if it was presented."""
        if self.done:
            return None
        self.done = True
        if not self.is_current:
            self.session._discard(self, "superseded before running")
            return None
        result = self.session._execute(self.sequence, self.text)
        return self.session._deliver(self, result)


class SearchSession:
    """Keystroke-driven search session over a (possibly rebuilt) index."""

    def __init__(
        self,
        index: SnapshotSource,
        presenter: Optional[Presenter] = None,
        debounce_ms: int = 0,
        scheduler: Optional[Scheduler] = None,
        max_results: int = 0,
    ):
        """
        Initialize search session.

        Args:
            index: IndexSnapshot, or a callable returning the current snapshot
                (read at the start of each query cycle so rebuilds are picked up)
            presenter: Called with each SearchResult that survives cancellation
            debounce_ms: Delay before a query cycle runs; needs a scheduler
            scheduler: scheduler(delay_seconds, callback), e.g. an event loop's
                call_later. Without one, cycles run synchronously.
            max_results: Cap on presented records (0 = unlimited)
        """
        if callable(index):
            self._snapshot_source = index
        else:
            self._snapshot_source = lambda: index
        self.presenter = presenter
        self.debounce_ms = debounce_ms
        self.scheduler = scheduler
        self.max_results = max_results
        self.ranker = Ranker()
        self.state = QuerySession()
        self.status = SessionState.IDLE
        self.closed = False

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self.state.last_result

    def current_snapshot(self) -> IndexSnapshot:
        snapshot = self._snapshot_source()
        if snapshot is None:
            raise IndexNotBuiltError("query issued before the symbol index was built")
        return snapshot

    def keystroke(self, text: str) -> Optional[PendingQuery]:
        """
        Handle the new content of the search box.

        An empty (or whitespace-only) box clears the session. Otherwise a new
        query cycle starts; it is returned so callers driving their own
        timing can run it later.
        """
        if self.closed:
            raise RuntimeError("search session is closed")

        normalized = normalize(text)
        if not normalized:
            self.clear()
            return None

        self.state.sequence += 1
        self.state.raw_query = text
        self.state.normalized_query = normalized
        self.status = SessionState.QUERYING
        pending = PendingQuery(self, self.state.sequence, text)

        if self.scheduler is not None:
            self.scheduler(self.debounce_ms / 1000.0, pending.run)
        else:
            pending.run()
        return pending

    def clear(self) -> None:
        """Empty the query; any cycle still in flight becomes stale."""
        self.state.sequence += 1
        self.state.raw_query = ""
        self.state.normalized_query = ""
        self.state.last_result = None
        self.status = SessionState.IDLE

    def close(self) -> None:
        self.clear()
        self.closed = True

    def select(self, item: Union[int, SymbolRecord]) -> Optional[str]:
        """
        Hand back the target_ref of a chosen result, unparsed.

        Args:
            item: A record, or its index in the last presented results

        Raises:
            IndexError: No presented result at that index
        """
        if isinstance(item, SymbolRecord):
            return item.target_ref
        records = self.state.last_result.records if self.state.last_result else []
        if not 0 <= item < len(records):
            raise IndexError(f"no result at position {item}")
        return records[item].target_ref

    def _execute(self, sequence: int, text: str) -> SearchResult:
        start = time.time()
        generator = CandidateGenerator(self.current_snapshot())

        candidates = generator.generate_candidates(text)
        ranked = self.ranker.rank_with_tiers(candidates, text)
        if self.max_results:
            ranked = ranked[:self.max_results]

        return SearchResult(
            query=text,
            normalized_query=normalize(text),
            sequence=sequence,
            records=[record for record, _ in ranked],
            tiers=[tier for _, tier in ranked],
            total_matches=len(candidates),
            latency_ms=(time.time() - start) * 1000,
            gen_timings=generator.get_last_timings(),
            rank_timings=self.ranker.get_last_timings(),
        )

    def _deliver(self, pending: PendingQuery, result: SearchResult) -> Optional[SearchResult]:
        if not pending.is_current:
            self._discard(pending, "superseded while running")
            return None
        self.state.last_result = result
        self.status = SessionState.PRESENTING
        if self.presenter is not None:
            self.presenter(result)
        return result

    def _discard(self, pending: PendingQuery, reason: str) -> None:
        self.state.stale_count += 1
        logger.debug("Discarded query #%d %r (%s)", pending.sequence, pending.text, reason)

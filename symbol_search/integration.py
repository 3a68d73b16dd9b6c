"""Symbol search service: owns the current snapshot and opens search sessions."""

import logging
from typing import Iterable, List, Optional

from .candidate_generator import CandidateGenerator
from .config import SearchConfig
from .entries import RawEntry
from .index_builder import IndexBuilder, IndexNotBuiltError, IndexSnapshot
from .javadoc_index import load_index_dir, load_index_file
from .ranker import Ranker
from .records import SymbolRecord
from .search_ui import Presenter, Scheduler, SearchSession

logger = logging.getLogger(__name__)


class SymbolSearch:
    """
    Holds the active IndexSnapshot.

    rebuild() builds a complete new snapshot before swapping the reference, so
    a query already running keeps reading the old snapshot and every later
    query sees the new one.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self._builder = IndexBuilder(show_progress=self.config.show_progress)
        self._snapshot: Optional[IndexSnapshot] = None

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> IndexSnapshot:
        if self._snapshot is None:
            raise IndexNotBuiltError("symbol index has not been built yet")
        return self._snapshot

    def rebuild(self, entries: Iterable[RawEntry]) -> IndexSnapshot:
        snapshot = self._builder.build_from_entries(entries)
        self._snapshot = snapshot
        return snapshot

    def rebuild_from_records(self, records: Iterable[SymbolRecord]) -> IndexSnapshot:
        snapshot = self._builder.build(records)
        self._snapshot = snapshot
        return snapshot

    def load_javadoc(self, directory: Optional[str] = None) -> IndexSnapshot:
        """Build from a Javadoc output directory (defaults to config.index_dir)."""
        directory = directory or self.config.index_dir
        if not directory:
            raise ValueError("no search index directory given or configured")
        return self.rebuild(load_index_dir(directory))

    def load_files(self, paths: Iterable[str]) -> IndexSnapshot:
        entries: List[RawEntry] = []
        for path in paths:
            entries.extend(load_index_file(path))
        return self.rebuild(entries)

    def search(self, query: str, limit: Optional[int] = None) -> List[SymbolRecord]:
        """One-shot ranked search outside any session."""
        candidates = CandidateGenerator(self.snapshot).generate_candidates(query)
        ranked = Ranker().rank(candidates, query)
        if limit is None:
            limit = self.config.max_results
        return ranked[:limit] if limit else ranked

    def open_session(
        self,
        presenter: Optional[Presenter] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> SearchSession:
        """New session reading whichever snapshot is current at each query."""
        return SearchSession(
            lambda: self.snapshot,
            presenter=presenter,
            debounce_ms=self.config.debounce_ms,
            scheduler=scheduler,
            max_results=self.config.max_results,
        )

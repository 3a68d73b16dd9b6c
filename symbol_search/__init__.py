"""
Symbol Search Package

Index-and-query engine behind an API documentation search box.

Main Components:
    - normalizer: Text normalization, camel-case segments, trigrams
    - entries: Raw entry validation into SymbolRecord / Rejected
    - index_builder: Immutable IndexSnapshot construction
    - candidate_generator: Substring and camel-case matching per keystroke
    - ranker: Tiered ranking of candidates
    - search_ui: Keystroke-driven session with stale-result cancellation
    - javadoc_index: Loader for Javadoc *-search-index.js files

Quick Start:
    from symbol_search import SymbolSearch

    search = SymbolSearch()
    search.load_javadoc("build/docs/javadoc")

    session = search.open_session(presenter=print)
    session.keystroke("gcd")
"""

__version__ = "0.1.0"

from .candidate_generator import CandidateGenerator, match
from .config import SearchConfig
from .entries import normalize_entries, normalize_entry
from .index_builder import IndexBuilder, IndexNotBuiltError, IndexSnapshot, build, build_from_entries
from .integration import SymbolSearch
from .normalizer import normalize
from .ranker import MatchTier, Ranker, rank
from .records import Category, Rejected, SymbolRecord
from .search_ui import PendingQuery, QuerySession, SearchResult, SearchSession, SessionState

__all__ = [
    "Category",
    "CandidateGenerator",
    "IndexBuilder",
    "IndexNotBuiltError",
    "IndexSnapshot",
    "MatchTier",
    "PendingQuery",
    "QuerySession",
    "Ranker",
    "Rejected",
    "SearchConfig",
    "SearchResult",
    "SearchSession",
    "SessionState",
    "SymbolRecord",
    "SymbolSearch",
    "build",
    "build_from_entries",
    "match",
    "normalize",
    "normalize_entries",
    "normalize_entry",
    "rank",
]

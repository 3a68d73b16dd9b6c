#!/usr/bin/env python3
"""
Query a Javadoc symbol search index from the command line.

Default index directory comes from SYMBOL_SEARCH_INDEX_DIR (.env is read).

Usage:
  python tools/symbol_lookup.py --index-dir build/docs/javadoc --query gcd
  python tools/symbol_lookup.py --file type-search-index.js --file member-search-index.js --interactive
  python tools/symbol_lookup.py --index-dir build/docs/javadoc --stats
"""

from __future__ import annotations
import argparse, logging, sys
from dataclasses import replace
from typing import List, Optional

from symbol_search import SearchConfig, SearchResult, SymbolSearch


def format_result(result: SearchResult) -> str:
    if not result.records:
        return f"No matches for: {result.query}"

    lines = [f"{result.total_matches} matches for '{result.query}' ({result.latency_ms:.1f}ms)"]
    for category, records in result.grouped():
        lines.append(f"  {category.value.capitalize()}s:")
        for record in records:
            owner = record.qualified_owner
            where = f"  [{owner}]" if owner else ""
            lines.append(f"    {record.label}{where}  -> {record.target_ref or '-'}")
    return "\n".join(lines)


def _print_result(result: SearchResult) -> None:
    print(format_result(result))


def interactive(search: SymbolSearch) -> None:
    """Each input line is treated as the full content of the search box."""
    session = search.open_session(presenter=_print_result)
    print("Type a query (empty line clears, Ctrl-D quits).")
    try:
        for line in sys.stdin:
            text = line.rstrip("\n")
            if not text.strip():
                session.clear()
                print("(cleared)")
                continue
            session.keystroke(text)
    finally:
        session.close()


def main(argv: Optional[List[str]] = None) -> int:
    config = SearchConfig.from_env()

    ap = argparse.ArgumentParser(description="Search documented packages, types and members.")
    ap.add_argument("--index-dir", default=config.index_dir, help="Javadoc output directory")
    ap.add_argument("--file", action="append", default=[], help="Search index file (repeatable)")
    ap.add_argument("--query", action="append", default=[], help="Query to run (repeatable)")
    ap.add_argument("--interactive", action="store_true", help="Read queries from stdin")
    ap.add_argument("--limit", type=int, default=config.max_results, help="Max results (0 = all)")
    ap.add_argument("--stats", action="store_true", help="Print index statistics")
    ap.add_argument("--progress", action="store_true", default=config.show_progress,
                    help="Show a progress bar while indexing")
    ap.add_argument("--log-level", default=config.log_level, help="Logging level")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s: %(message)s')

    if not args.file and not args.index_dir:
        ap.error("give --index-dir, --file, or set SYMBOL_SEARCH_INDEX_DIR")

    config = replace(config, max_results=max(args.limit, 0), show_progress=args.progress)
    search = SymbolSearch(config)
    if args.file:
        snapshot = search.load_files(args.file)
    else:
        snapshot = search.load_javadoc(args.index_dir)

    print(f"Indexed {len(snapshot):,} symbols ({snapshot.dropped_count} dropped, "
          f"{snapshot.duplicate_count} duplicates collapsed)")

    if args.stats:
        for key, value in snapshot.statistics().items():
            if isinstance(value, float):
                print(f"{key}: {value:.2f}")
            else:
                print(f"{key}: {value:,}")

    if args.interactive:
        interactive(search)
        return 0

    session = search.open_session(presenter=_print_result)
    for query in args.query:
        session.keystroke(query)
    session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

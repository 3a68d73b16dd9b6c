"""
Loader for Javadoc search index files.

Javadoc ships its symbol lists as JavaScript assignments:

    typeSearchIndex = [{"p":"imagingbook.common.math","l":"Arithmetic"}, ...];updateSearchResults();

Each file kind maps to one record category. Short keys are translated to the
raw entry keys understood by symbol_search.entries:

    p -> package    c -> owner    l -> label
    url (members) -> anchor       u / url (others) -> target

Entries without a package in the package and type files ("All Packages",
"All Classes") are links to overview pages and become tags.
"""

import json
import logging
import os
import re
from typing import Any, Dict, Iterator, List, Optional

from .records import Category

logger = logging.getLogger(__name__)

# File name -> category, in load order
INDEX_FILES = (
    ("package-search-index.js", Category.PACKAGE),
    ("type-search-index.js", Category.TYPE),
    ("member-search-index.js", Category.MEMBER),
    ("tag-search-index.js", Category.TAG),
)

_ASSIGNMENT_RE = re.compile(r"^\s*(?:var\s+|let\s+|const\s+)?[A-Za-z_$][\w$]*\s*=\s*")


def parse_index_text(text: str) -> List[Dict[str, Any]]:
    """
    Extract the JSON array from a search index script (or plain JSON).

    Raises:
        ValueError: The text holds no JSON array of objects
    """
    body = _ASSIGNMENT_RE.sub("", text, count=1).strip()
    start = body.find("[")
    if start < 0:
        raise ValueError("no JSON array found in search index text")

    try:
        data, _ = json.JSONDecoder().raw_decode(body, start)
    except json.JSONDecodeError as e:
        raise ValueError(f"malformed search index array: {e}") from e

    if not isinstance(data, list):
        raise ValueError("search index must be a JSON array")
    return [item for item in data if isinstance(item, dict)]


def category_for_file(path: str) -> Optional[Category]:
    name = os.path.basename(path)
    for file_name, category in INDEX_FILES:
        if name == file_name:
            return category
    return None


def to_raw_entry(item: Dict[str, Any], category: Optional[Category]) -> Dict[str, Any]:
    """Translate one Javadoc item into a raw entry for the normalizer."""
    if category is None:
        # .json input is expected to carry long keys already
        return dict(item)

    entry: Dict[str, Any] = {"label": item.get("l")}
    link = item.get("u")

    if category is Category.MEMBER:
        entry.update(category=category, package=item.get("p"), owner=item.get("c"))
        if item.get("url"):
            entry["anchor"] = item["url"]
        if link:
            entry["target"] = link
        return entry

    link = link or item.get("url")
    if category in (Category.PACKAGE, Category.TYPE) and not item.get("p") and link:
        entry.update(category=Category.TAG, target=link)
        return entry

    entry["category"] = category
    if category is Category.TYPE:
        entry["package"] = item.get("p")
    if link:
        entry["target"] = link
    return entry


def load_index_file(path: str) -> List[Dict[str, Any]]:
    """
    Load one search index file as raw entries.

    Raises:
        FileNotFoundError: path does not exist
        ValueError: the file is not a recognizable search index
    """
    category = category_for_file(path)
    if category is None and not path.endswith(".json"):
        raise ValueError(f"not a symbol search index file: {path}")

    with open(path, "r", encoding="utf-8") as f:
        items = parse_index_text(f.read())

    entries = [to_raw_entry(item, category) for item in items]
    logger.info("Loaded %d entries from %s", len(entries), path)
    return entries


def iter_index_files(directory: str) -> Iterator[str]:
    for file_name, _ in INDEX_FILES:
        path = os.path.join(directory, file_name)
        if os.path.exists(path):
            yield path


def load_index_dir(directory: str) -> List[Dict[str, Any]]:
    """Load every recognized index file in a Javadoc output directory."""
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"search index directory not found: {directory}")

    entries: List[Dict[str, Any]] = []
    for path in iter_index_files(directory):
        entries.extend(load_index_file(path))

    if not entries:
        logger.warning("No search index files found in %s", directory)
    return entries

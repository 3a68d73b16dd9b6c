"""
Text normalization for symbol search.

Search keys and queries go through the same normalize() so that matching is a
plain substring test on both sides. Labels are also split into camel-case
segments; the first letter of each segment forms the label's initials, which
back the abbreviation match ("gcd" -> GradientCornerDetector).

Functions:
    normalize(text: str) -> str: Lowercase, trim, collapse whitespace
    split_segments(label: str) -> Tuple[str, ...]: Camel-case / word segments
    camel_initials(segments) -> str: Lowercased first letter of each segment
    extract_trigrams(text: str) -> List[str]: Character trigrams
"""

import re
from typing import Iterable, List, Set, Tuple

_WHITESPACE_RE = re.compile(r"\s+")

# An all-caps run not followed by a lowercase letter ("RGB" in "RGBColor"),
# a word with an optional leading capital, or a digit run.
_SEGMENT_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def normalize(text: str) -> str:
    """
    Normalize text for matching.

    Applies the following transformations:
    1. Lowercase
    2. Strip leading/trailing whitespace
    3. Collapse internal whitespace runs to a single space

    Punctuation is kept: member labels such as "checkSize(double[])" must
    stay searchable by their parameter lists.

    Examples:
        >>> normalize("  All   Classes ")
        'all classes'

        >>> normalize("checkSize(double[], double[])")
        'checksize(double[], double[])'
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.lower().strip())


def split_segments(label: str) -> Tuple[str, ...]:
    """
    Split a label into camel-case and word segments.

    Examples:
        >>> split_segments("GradientCornerDetector")
        ('Gradient', 'Corner', 'Detector')

        >>> split_segments("sRGB65ColorSpace")
        ('s', 'RGB', '65', 'Color', 'Space')

        >>> split_segments("Adaptive_Bernsen")
        ('Adaptive', 'Bernsen')
    """
    if not label:
        return ()
    return tuple(_SEGMENT_RE.findall(label))


def camel_initials(segments: Iterable[str]) -> str:
    """Lowercased first letter of each segment."""
    return "".join(segment[0].lower() for segment in segments if segment)


def abbreviation_query(query: str) -> str:
    """
    Reduce a normalized query to the form compared against initials.

    Whitespace is dropped; anything that is not alphanumeric cannot be an
    abbreviation, so those queries reduce to "".
    """
    compact = "".join(query.split())
    return compact if compact.isalnum() else ""


def extract_trigrams(text: str, normalize_first: bool = True) -> List[str]:
    """
    Extract character trigrams from text.

    Example: "graph" -> ["gra", "rap", "aph"]

    Texts shorter than three characters yield no trigrams.
    """
    if normalize_first:
        text = normalize(text)

    if len(text) < 3:
        return []

    return [text[i:i + 3] for i in range(len(text) - 2)]


def extract_trigrams_set(text: str, normalize_first: bool = True) -> Set[str]:
    """Same as extract_trigrams() but returns a set."""
    return set(extract_trigrams(text, normalize_first))

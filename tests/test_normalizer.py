from __future__ import annotations

from symbol_search.normalizer import (
    abbreviation_query,
    camel_initials,
    extract_trigrams,
    normalize,
    split_segments,
)


def test_normalize_lowercases_trims_and_collapses_whitespace() -> None:
    assert normalize("  All \t  Classes\n") == "all classes"
    assert normalize("") == ""
    assert normalize("   ") == ""


def test_normalize_keeps_signature_punctuation() -> None:
    assert normalize("checkSize(double[], double[])") == "checksize(double[], double[])"


def test_split_segments_handles_camel_case_acronyms_and_digits() -> None:
    assert split_segments("GradientCornerDetector") == ("Gradient", "Corner", "Detector")
    assert split_segments("RGBColor") == ("RGB", "Color")
    assert split_segments("sRGB65ColorSpace") == ("s", "RGB", "65", "Color", "Space")
    assert split_segments("Canny_Edges") == ("Canny", "Edges")
    assert split_segments("checkSize(double[])") == ("check", "Size", "double")


def test_camel_initials_are_lowercased_first_letters() -> None:
    assert camel_initials(split_segments("GradientCornerDetector")) == "gcd"
    assert camel_initials(()) == ""


def test_abbreviation_query_drops_whitespace_and_rejects_punctuation() -> None:
    assert abbreviation_query("g c d") == "gcd"
    assert abbreviation_query("size()") == ""


def test_extract_trigrams_requires_three_characters() -> None:
    assert extract_trigrams("Graph") == ["gra", "rap", "aph"]
    assert extract_trigrams("gr") == []

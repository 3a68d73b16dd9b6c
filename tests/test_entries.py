from __future__ import annotations

import pytest

from symbol_search.entries import derive_target_ref, normalize_entries, normalize_entry
from symbol_search.records import Category, Rejected, SymbolRecord


def test_label_only_entry_becomes_tag() -> None:
    record = normalize_entry({"label": "All Classes", "url": "allclasses-index.html"})

    assert isinstance(record, SymbolRecord)
    assert record.category is Category.TAG
    assert record.package_path == ()
    assert record.target_ref == "allclasses-index.html"


def test_package_only_entry_becomes_type_with_derived_target() -> None:
    record = normalize_entry({"p": "imagingbook.common.math", "l": "Arithmetic"})

    assert isinstance(record, SymbolRecord)
    assert record.category is Category.TYPE
    assert record.package_path == ("imagingbook", "common", "math")
    assert record.target_ref == "imagingbook/common/math/Arithmetic.html"


def test_member_entry_uses_anchor_for_target() -> None:
    record = normalize_entry(
        {
            "package": "imagingbook.spectral.dft",
            "owner": "Dft1d.Double",
            "label": "checkSize(double[], double[])",
            "anchor": "checkSize(double[],double[])",
        }
    )

    assert isinstance(record, SymbolRecord)
    assert record.category is Category.MEMBER
    assert record.owner_name == "Dft1d.Double"
    assert record.target_ref == "imagingbook/spectral/dft/Dft1d.Double.html#checkSize(double[],double[])"


def test_package_hint_uses_label_as_path() -> None:
    record = normalize_entry({"l": "imagingbook.common", "category": "package"})

    assert isinstance(record, SymbolRecord)
    assert record.category is Category.PACKAGE
    assert record.package_path == ("imagingbook", "common")
    assert record.target_ref == "imagingbook/common/package-summary.html"


def test_package_path_accepts_segment_sequence() -> None:
    record = normalize_entry({"label": "Graph", "package": ["a", "b"]})

    assert isinstance(record, SymbolRecord)
    assert record.package_path == ("a", "b")


@pytest.mark.parametrize(
    "raw, reason",
    [
        ({"p": "a.b"}, "missing label"),
        ({"label": "   "}, "missing label"),
        ({"label": "size()", "owner": "Graph"}, "cannot infer category"),
        ({"label": "Graph", "category": "module"}, "unknown category"),
        ({"label": "Graph", "category": "member", "package": "a"}, "owner_name"),
        ({"label": "Graph", "category": "type"}, "package_path"),
    ],
)
def test_invalid_entries_are_rejected_not_raised(raw: dict, reason: str) -> None:
    result = normalize_entry(raw)

    assert isinstance(result, Rejected)
    assert reason in result.reason


def test_non_mapping_entry_is_rejected() -> None:
    result = normalize_entry(["Graph"])  # type: ignore[arg-type]

    assert isinstance(result, Rejected)


def test_normalize_entries_splits_and_counts() -> None:
    records, rejected = normalize_entries(
        [{"label": "Graph"}, {"p": "a"}, {"label": "Grid", "p": "a"}]
    )

    assert [record.label for record in records] == ["Graph", "Grid"]
    assert len(rejected) == 1


def test_tag_target_is_none_without_link() -> None:
    assert derive_target_ref(Category.TAG, (), None, "Overview") is None

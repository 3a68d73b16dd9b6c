from __future__ import annotations

from typing import Dict, List

import pytest

from symbol_search.index_builder import IndexSnapshot, build_from_entries


@pytest.fixture
def entries() -> List[Dict[str, object]]:
    return [
        {"l": "imagingbook.common.corners", "category": "package"},
        {"p": "imagingbook.common.corners", "l": "GradientCornerDetector"},
        {"p": "imagingbook.common.color.edge", "l": "GrayscaleEdgeDetector"},
        {"p": "imagingbook.common.geometry.delaunay", "l": "Graph"},
        {"p": "imagingbook.common.color.edge", "l": "CannyEdgeDetector"},
        {"p": "imagingbook.common.corners", "c": "GradientCornerDetector", "l": "getCorners()"},
        {"p": "imagingbook.common.color.edge", "c": "CannyEdgeDetector", "l": "Parameters"},
        {"p": "imagingbook.common.corners", "c": "GradientCornerDetector", "l": "Parameters"},
        {"l": "All Classes", "url": "allclasses-index.html"},
    ]


@pytest.fixture
def snapshot(entries: List[Dict[str, object]]) -> IndexSnapshot:
    return build_from_entries(entries)

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "tools" / "symbol_lookup.py"

TYPE_INDEX = (
    'typeSearchIndex = [{"p":"imagingbook.common.corners","l":"GradientCornerDetector"},'
    '{"p":"imagingbook.common.geometry.delaunay","l":"Graph"},'
    '{"l":"All Classes","url":"allclasses-index.html"}];updateSearchResults();'
)


def _load_cli_module():
    spec = importlib.util.spec_from_file_location("symbol_lookup", SCRIPT)
    assert spec is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    loader = spec.loader
    assert loader is not None
    loader.exec_module(module)
    return module


@pytest.fixture
def index_dir(tmp_path: Path) -> Path:
    (tmp_path / "type-search-index.js").write_text(TYPE_INDEX, encoding="utf-8")
    return tmp_path


def test_query_prints_grouped_results(index_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    module = _load_cli_module()

    assert module.main(["--index-dir", str(index_dir), "--query", "gcd"]) == 0

    out = capsys.readouterr().out
    assert "Indexed 3 symbols (0 dropped" in out
    assert "GradientCornerDetector  [imagingbook.common.corners]" in out
    assert "imagingbook/common/corners/GradientCornerDetector.html" in out


def test_stats_and_no_match(index_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    module = _load_cli_module()

    module.main(["--file", str(index_dir / "type-search-index.js"), "--stats", "--query", "zzz"])

    out = capsys.readouterr().out
    assert "total_records: 3" in out
    assert "No matches for: zzz" in out


def test_missing_source_is_a_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYMBOL_SEARCH_INDEX_DIR", raising=False)
    module = _load_cli_module()

    with pytest.raises(SystemExit):
        module.main(["--query", "graph"])

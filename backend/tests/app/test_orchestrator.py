"""
Integration checks for the analysis orchestrator.
"""

import sys
from pathlib import Path

import pytest

repo_root = Path(__file__).resolve().parents[3]
sys.path.insert(0, str(repo_root))

from backend.app.orchestrator import build_report, run_analysis, run_fix
from backend.app.store import history_store


def test_run_analysis_detects_language_and_records(buggy_python_code):
    result = run_analysis(buggy_python_code)

    assert result["language"] == "python"
    assert result["language_detected"] is True
    assert result["health_score"] == 100 - 15 - 5 - 5
    assert result["score_band"] == "fair"
    assert result["counts"] == {"Critical": 1, "Warning": 2, "Info": 0}
    assert {i["rule_id"] for i in result["issues"]} == {"mutable-default", "deprecated-time-clock", "bare-except"}

    entries = history_store.list_entries()
    assert [e.entry_id for e in entries] == [result["analysis_id"]]
    assert entries[0].issue_count == 3


def test_language_hint_wins():
    result = run_analysis("def f():\n    pass", language="javascript", record=False)
    assert result["language"] == "javascript"
    assert result["language_detected"] is False
    assert result["analysis_id"] is None
    assert history_store.list_entries() == []


def test_run_fix_applies_and_rescans():
    code = "const a = []; a.isEmpty();"
    issue_id = run_analysis(code, "javascript", record=False)["issues"][0]["id"]

    result = run_fix(code, issue_id, "javascript")
    assert result["code"] == "const a = []; a.length === 0;"
    assert "+const a = []; a.length === 0;" in result["diff"]
    assert result["issues"] == []
    assert result["health_score"] == 100


def test_run_fix_unknown_issue():
    with pytest.raises(LookupError):
        run_fix("var x = 1;", "nope-0", "javascript")


def test_run_fix_structural_issue():
    with pytest.raises(ValueError):
        run_fix("const r = fetch('/api');", "missing-await-fetch-0", "javascript")


def test_build_report_detects_language():
    report = build_report("def process(items=[]):\n    items.append(1)")
    assert "### [Critical] Runtime Error (Line 1)" in report

"""
Tests for the health score and its display band.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from backend.analyzers.codescan.models import Issue
from backend.analyzers.codescan.scoring import calculate_health_score, count_by_severity, score_band


def _issue(severity):
    return Issue(
        id=f"rule-{severity}",
        rule_id="rule",
        line=1,
        category="Code Quality",
        severity=severity,
        description="",
        fix_description="",
        rationale="",
        start_index=0,
        end_index=0,
        replacement="",
    )


def test_perfect_score():
    assert calculate_health_score([]) == 100


def test_weighted_penalties():
    issues = [_issue("Critical"), _issue("Warning"), _issue("Info")]
    assert calculate_health_score(issues) == 100 - 15 - 5 - 1


def test_never_negative():
    assert calculate_health_score([_issue("Critical")] * 20) == 0


@pytest.mark.parametrize("score,band", [(100, "good"), (90, "good"), (89, "fair"), (70, "fair"), (69, "poor"), (0, "poor")])
def test_score_band(score, band):
    assert score_band(score) == band


def test_count_by_severity():
    issues = [_issue("Critical"), _issue("Critical"), _issue("Info")]
    assert count_by_severity(issues) == {"Critical": 2, "Warning": 0, "Info": 1}

"""
Health score derived from a list of findings.
"""

from typing import Dict, Iterable

from .models import SEVERITY_CRITICAL, SEVERITY_INFO, SEVERITY_WARNING, Issue

SCORE_PENALTIES = {SEVERITY_CRITICAL: 15, SEVERITY_WARNING: 5, SEVERITY_INFO: 1}


def calculate_health_score(issues: Iterable[Issue]) -> int:
    """100 minus the severity penalties, floored at 0."""
    penalty = sum(SCORE_PENALTIES.get(issue.severity, 0) for issue in issues)
    return max(0, 100 - penalty)


def score_band(score: int) -> str:
    """
    Map a health score to a display band.

    Thresholds:
      - good: >= 90
      - fair: >= 70
      - poor: < 70
    """
    if score >= 90:
        return "good"
    if score >= 70:
        return "fair"
    return "poor"


def count_by_severity(issues: Iterable[Issue]) -> Dict[str, int]:
    """Count issues by severity level."""
    counts = {SEVERITY_CRITICAL: 0, SEVERITY_WARNING: 0, SEVERITY_INFO: 0}
    for issue in issues:
        if issue.severity in counts:
            counts[issue.severity] += 1
    return counts

"""
CodeScan - pattern-based detection of bugs, hallucinated APIs and risky code in snippets.
"""

from .language import detect_language
from .models import SUPPORTED_LANGUAGES, DetectionRule, Issue, RuleGroup
from .rules import rule_catalog, rule_groups_for
from .scanner import MAX_ISSUES, rank_issues, scan_code
from .scoring import calculate_health_score, count_by_severity, score_band

__all__ = [
    "detect_language",
    "scan_code",
    "rank_issues",
    "rule_catalog",
    "rule_groups_for",
    "calculate_health_score",
    "count_by_severity",
    "score_band",
    "DetectionRule",
    "Issue",
    "RuleGroup",
    "MAX_ISSUES",
    "SUPPORTED_LANGUAGES",
]

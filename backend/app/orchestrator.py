from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from backend.analyzers.codescan import (
    calculate_health_score,
    count_by_severity,
    detect_language,
    scan_code,
    score_band,
)
from backend.analyzers.codescan.models import Issue
from backend.analyzers.patcher.generator import apply_fix, build_fix_preview
from backend.analyzers.report.markdown import build_markdown_report

from .store import history_store


logger = logging.getLogger(__name__)


def resolve_language(code: str, language: Optional[str]) -> Tuple[str, bool]:
    """Return (language, detected); the hint wins when given."""
    if language:
        return language, False
    return detect_language(code), True


def run_analysis(code: str, language: Optional[str] = None, record: bool = True) -> Dict[str, Any]:
    resolved, detected = resolve_language(code, language)
    issues = scan_code(code, resolved)
    health_score = calculate_health_score(issues)

    analysis_id = None
    if record:
        entry = history_store.record(
            language=resolved,
            code=code,
            health_score=health_score,
            issue_count=len(issues),
        )
        analysis_id = entry.entry_id

    logger.info(
        "Analysis complete language=%s issues=%d score=%d", resolved, len(issues), health_score
    )
    return {
        "analysis_id": analysis_id,
        "language": resolved,
        "language_detected": detected,
        "health_score": health_score,
        "score_band": score_band(health_score),
        "counts": count_by_severity(issues),
        "issues": [issue.to_dict() for issue in issues],
    }


def _find_issue(issues: List[Issue], issue_id: str) -> Issue:
    for issue in issues:
        if issue.id == issue_id:
            return issue
    raise LookupError(f"issue {issue_id} not found")


def run_fix(code: str, issue_id: str, language: Optional[str] = None) -> Dict[str, Any]:
    """
    Apply one issue's replacement and rescan the result.

    Raises:
        LookupError: issue_id is not produced by a scan of code
        ValueError: the issue is structural and has no applicable fix
    """
    resolved, _ = resolve_language(code, language)
    issue = _find_issue(scan_code(code, resolved), issue_id)

    preview = build_fix_preview(code, issue)
    fixed_code = apply_fix(code, issue)

    remaining = scan_code(fixed_code, resolved)
    logger.info("Applied fix %s (%d issues remain)", issue_id, len(remaining))
    return {
        "code": fixed_code,
        "diff": preview["diff"],
        "issues": [i.to_dict() for i in remaining],
        "health_score": calculate_health_score(remaining),
    }


def build_report(code: str, language: Optional[str] = None) -> str:
    resolved, _ = resolve_language(code, language)
    issues = scan_code(code, resolved)
    return build_markdown_report(issues, calculate_health_score(issues))

"""
Markdown export of an analysis, matching the results view's "Export Report" download.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..codescan.models import Issue

NO_ISSUES_MESSAGE = "No issues found. Good job!"


def build_markdown_report(
    issues: Sequence[Issue],
    health_score: int,
    generated_at: Optional[datetime] = None,
) -> str:
    generated_at = generated_at or datetime.now(timezone.utc)
    stamp = generated_at.strftime("%Y-%m-%d %H:%M:%S")

    parts: List[str] = [
        f"# AI Debug Report - {stamp}\n",
        f"Health Score: {health_score}/100\n\n",
        "## Detected Issues\n\n",
    ]

    if not issues:
        parts.append(NO_ISSUES_MESSAGE)
        return "".join(parts)

    for issue in issues:
        parts.append(f"### [{issue.severity}] {issue.category} (Line {issue.line})\n")
        parts.append(f"**Description:** {issue.description}\n")
        parts.append(f"**Why:** {issue.rationale}\n")
        parts.append(f"**Fix:** `{issue.fix_description}`\n")
        parts.append(f"**Replacement Code:**\n```\n{issue.replacement}\n```\n\n")
    return "".join(parts)

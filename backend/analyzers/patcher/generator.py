from __future__ import annotations

import difflib
from typing import Any, Dict, Iterable, List

from ..codescan.models import Issue


DEFAULT_FILE_LABEL = "snippet"


def apply_fix(code: str, issue: Issue) -> str:
    """
    Splice an issue's replacement over its span.

    Raises ValueError for structural issues (no span to replace) and for
    spans that do not fit the text.
    """
    if issue.structural:
        raise ValueError(f"Issue {issue.id} is structural and has no applicable fix")
    if not 0 <= issue.start_index <= issue.end_index <= len(code):
        raise ValueError(
            f"Issue {issue.id} span {issue.start_index}:{issue.end_index} is outside the code"
        )
    return code[: issue.start_index] + issue.replacement + code[issue.end_index :]


def apply_fixes(code: str, issues: Iterable[Issue]) -> str:
    """
    Apply every applicable fix in one pass.

    Fixes are applied from the end of the text backwards so earlier offsets
    stay valid. Structural issues and spans overlapping an already applied
    fix are left alone.
    """
    applicable = [issue for issue in issues if not issue.structural]
    applicable.sort(key=lambda issue: (issue.start_index, issue.end_index), reverse=True)

    patched = code
    boundary = len(code)
    for issue in applicable:
        if issue.end_index > boundary or issue.end_index > len(code):
            continue
        patched = apply_fix(patched, issue)
        boundary = issue.start_index
    return patched


def build_fix_preview(
    code: str, issue: Issue, file_label: str = DEFAULT_FILE_LABEL
) -> Dict[str, Any]:
    patched = apply_fix(code, issue)
    return {
        "id": f"fix_{issue.id}",
        "issue_id": issue.id,
        "diff": _build_unified_diff(file_label, code.splitlines(), patched.splitlines()),
        "summary": issue.fix_description,
        "line": issue.line,
    }


def _build_unified_diff(file_path: str, before: List[str], after: List[str]) -> str:
    diff_lines = difflib.unified_diff(
        before,
        after,
        fromfile=f"a/{file_path}",
        tofile=f"b/{file_path}",
        lineterm="",
    )
    diff_text = "\n".join(diff_lines)
    if diff_text:
        return diff_text + "\n"
    return ""

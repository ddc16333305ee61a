"""
Line-oriented JavaScript/TypeScript checks that a single regex cannot express.

Both checks report at a line rather than a span: their issues carry a zero
span, an empty replacement and structural=True, so they can't be applied as
fixes.
"""

from typing import List

import regex

from .models import (
    CATEGORY_LOGIC,
    CATEGORY_RUNTIME,
    SEVERITY_CRITICAL,
    SEVERITY_WARNING,
    DetectionRule,
    Issue,
)

STRUCTURAL_LANGUAGES = frozenset({"javascript", "typescript"})

MISSING_AWAIT_FETCH = DetectionRule(
    rule_id="missing-await-fetch",
    category=CATEGORY_RUNTIME,
    severity=SEVERITY_CRITICAL,
    pattern=r"fetch\(",
    description="fetch() called without await",
    fix_description="Add await keyword",
    rationale="fetch() returns a Promise. Without await, you get Promise object, not response.",
)

MISSING_RETURN = DetectionRule(
    rule_id="missing-return",
    category=CATEGORY_LOGIC,
    severity=SEVERITY_WARNING,
    pattern=r"function\s+(?:get|calculate|compute|create|find|fetch)\w*",
    flags=regex.IGNORECASE,
    description="Function should return a value",
    fix_description="Add return statement",
    rationale="Functions named get*/calculate*/find* typically should return something.",
)


def _structural_issue(rule: DetectionRule, line_index: int) -> Issue:
    return Issue(
        id=f"{rule.rule_id}-{line_index}",
        rule_id=rule.rule_id,
        line=line_index + 1,
        category=rule.category,
        severity=rule.severity,
        description=rule.description,
        fix_description=rule.fix_description,
        rationale=rule.rationale,
        start_index=0,
        end_index=0,
        replacement="",
        structural=True,
    )


def check_missing_await(code: str) -> List[Issue]:
    """Lines that call fetch() without awaiting, chaining or returning it."""
    issues = []
    for idx, line in enumerate(code.split("\n")):
        if "fetch(" not in line:
            continue
        if "await " in line or ".then(" in line or "return fetch" in line:
            continue
        issues.append(_structural_issue(MISSING_AWAIT_FETCH, idx))
    return issues


def check_missing_return(code: str) -> List[Issue]:
    """
    Getter-style functions (get*, calculate*, compute*, create*, find*, fetch*)
    whose body closes without a `return ` token.

    Brace depth is counted per line from the function header; the function
    ends on the first line with a closing brace that brings the depth to zero
    or below. A nested function header restarts tracking.
    """
    issues = []
    inside_func = False
    expect_return = False
    func_start = 0
    depth = 0

    for idx, line in enumerate(code.split("\n")):
        if MISSING_RETURN.search(line):
            inside_func = True
            expect_return = True
            func_start = idx
            depth = 0

        if not inside_func:
            continue

        depth += line.count("{") - line.count("}")
        if "return " in line:
            expect_return = False

        if depth <= 0 and "}" in line:
            if expect_return:
                issues.append(_structural_issue(MISSING_RETURN, func_start))
            inside_func = False
            expect_return = False

    return issues


def run_structural_checks(code: str, language: str) -> List[Issue]:
    if language not in STRUCTURAL_LANGUAGES:
        return []
    return check_missing_await(code) + check_missing_return(code)

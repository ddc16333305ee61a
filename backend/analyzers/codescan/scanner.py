"""
Main scanning logic for CodeScan.
Applies rule groups to a snippet, filters and dedupes matches, then ranks and caps the findings.
"""

import logging
from typing import Iterable, List, Optional, Set, Tuple

from .context_filter import is_inside_comment_or_string
from .models import DetectionRule, Issue, line_number_at
from .rules import rule_groups_for
from .structural import run_structural_checks

# Set up logging
logger = logging.getLogger(__name__)

MAX_ISSUES = 20


class ScanState:
    """Issues collected so far plus the dedupe index over (rule_id, start_index)."""

    def __init__(self, code: str, language: Optional[str]):
        self.code = code
        self.language = language
        self.issues: List[Issue] = []
        self.seen: Set[Tuple[str, int]] = set()

    def apply_rule(self, rule: DetectionRule) -> None:
        """
        Collect every match of one rule.

        Candidates are staged first so a rule that fails midway (bad pattern or
        failing correction) or runs past its time budget contributes nothing.
        """
        pending: List[Issue] = []
        pending_keys: Set[Tuple[str, int]] = set()
        try:
            for match in rule.finditer(self.code):
                start = match.start()
                key = (rule.rule_id, start)
                if key in self.seen or key in pending_keys:
                    continue
                if is_inside_comment_or_string(self.code, start, self.language):
                    continue

                pending_keys.add(key)
                pending.append(Issue(
                    id=f"{rule.rule_id}-{start}",
                    rule_id=rule.rule_id,
                    line=line_number_at(self.code, start),
                    category=rule.category,
                    severity=rule.severity,
                    description=rule.description,
                    fix_description=rule.fix_description,
                    rationale=rule.rationale,
                    start_index=start,
                    end_index=match.end(),
                    replacement=rule.correction(match.group(0)),
                ))
        except TimeoutError:
            logger.debug(f"Skipping rule {rule.rule_id}: timed out")
            return
        except Exception as e:
            logger.debug(f"Skipping rule {rule.rule_id}: {e}")
            return

        self.issues.extend(pending)
        self.seen.update(pending_keys)

    def add_structural(self, issues: Iterable[Issue]) -> None:
        # structural ids are keyed by line index, so they never collide with table issues
        self.issues.extend(issues)


def rank_issues(issues: Iterable[Issue]) -> List[Issue]:
    """Severity weight descending, then line ascending. Ties keep their order."""
    return sorted(issues, key=lambda issue: (-issue.severity_weight, issue.line))


def scan_code(code: str, language: Optional[str]) -> List[Issue]:
    """
    Scan a snippet and return at most MAX_ISSUES ranked findings.

    Args:
        code: Raw source text
        language: One of the supported languages; anything else only gets
            the universal rule groups

    Returns:
        Issues ordered by severity then line
    """
    state = ScanState(code, language)

    for group in rule_groups_for(language):
        for rule in group.rules:
            state.apply_rule(rule)

        # structural checks run alongside the language table
        if not group.is_universal:
            state.add_structural(run_structural_checks(code, language or ""))

    ranked = rank_issues(state.issues)
    logger.debug(f"Scan found {len(ranked)} candidate issues ({language})")
    return ranked[:MAX_ISSUES]

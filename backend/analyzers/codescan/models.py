"""
Record types shared by the CodeScan analyzer.
Rules and rule groups are built once at import; issues are built per scan.

Patterns are compiled with the third-party ``regex`` engine so every match
runs under a time budget. A rule that exceeds RULE_TIMEOUT_SECONDS raises
TimeoutError, which the scanner treats like any other failing rule.
"""

import time
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, Iterator, List, Literal, Optional, Tuple, get_args

import regex


Language = Literal["javascript", "typescript", "python", "go", "rust", "java", "cpp"]
SUPPORTED_LANGUAGES: Tuple[str, ...] = get_args(Language)
DEFAULT_LANGUAGE = "javascript"

# Total matching time one rule may spend on one snippet.
RULE_TIMEOUT_SECONDS = 0.25

SEVERITY_CRITICAL = "Critical"
SEVERITY_WARNING = "Warning"
SEVERITY_INFO = "Info"
SEVERITY_WEIGHTS = {SEVERITY_CRITICAL: 3, SEVERITY_WARNING: 2, SEVERITY_INFO: 1}

CATEGORY_SECURITY = "Security Risk"
CATEGORY_RUNTIME = "Runtime Error"
CATEGORY_HALLUCINATION = "Hallucination"
CATEGORY_DEPRECATED = "Deprecated"
CATEGORY_ERROR_HANDLING = "Missing Error Handling"
CATEGORY_LOGIC = "Logic Error"
CATEGORY_QUALITY = "Code Quality"


def keep_match(match: str) -> str:
    return match


def drop_match(_match: str) -> str:
    return ""


@lru_cache(maxsize=None)
def _compile(pattern: str, flags: int) -> "regex.Pattern":
    return regex.compile(pattern, flags)


@dataclass(frozen=True)
class DetectionRule:
    """A single detection: regex pattern, explanation text and a correction."""

    rule_id: str
    category: str
    severity: str  # "Critical", "Warning", "Info"
    pattern: str
    description: str
    fix_description: str
    rationale: str
    correction: Callable[[str], str] = keep_match
    flags: int = 0

    def finditer(self, content: str, timeout: float = RULE_TIMEOUT_SECONDS) -> Iterator["regex.Match"]:
        """
        Iterate over every non-overlapping match in content.

        All matches are collected before the first one is returned, so the
        budget covers only engine time. The pattern is compiled on first use:
        a malformed pattern raises regex.error here, and a search that runs
        past the budget raises TimeoutError.
        """
        compiled = _compile(self.pattern, self.flags)
        deadline = time.monotonic() + timeout
        matches: List["regex.Match"] = []
        pos = 0
        while pos <= len(content):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"rule {self.rule_id} exceeded {timeout}s")
            match = compiled.search(content, pos, timeout=remaining)
            if match is None:
                break
            matches.append(match)
            # step past empty matches so the scan always advances
            pos = match.end() if match.end() > match.start() else match.end() + 1
        return iter(matches)

    def search(self, content: str, timeout: float = RULE_TIMEOUT_SECONDS) -> Optional["regex.Match"]:
        return _compile(self.pattern, self.flags).search(content, timeout=timeout)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "category": self.category,
            "severity": self.severity,
            "pattern": self.pattern,
            "description": self.description,
            "fix_description": self.fix_description,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class RuleGroup:
    """Ordered rules sharing an evaluation phase. language=None means universal."""

    name: str
    rules: Tuple[DetectionRule, ...]
    language: Optional[str] = None

    @property
    def is_universal(self) -> bool:
        return self.language is None


@dataclass(frozen=True)
class Issue:
    """One finding at one location of the scanned text."""

    id: str
    rule_id: str
    line: int
    category: str
    severity: str
    description: str
    fix_description: str
    rationale: str
    start_index: int
    end_index: int
    replacement: str
    structural: bool = False

    @property
    def severity_weight(self) -> int:
        return SEVERITY_WEIGHTS.get(self.severity, 0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def line_number_at(content: str, index: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, index) + 1

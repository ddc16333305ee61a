"""
Language classification from raw source text.
A first-match waterfall of textual fingerprints; no tokenizer, no scoring.
"""

import logging
from typing import Tuple

import regex

from .models import DEFAULT_LANGUAGE, RULE_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def _any_of(*patterns: str) -> Tuple["regex.Pattern", ...]:
    return tuple(regex.compile(p) for p in patterns)

# Order matters: earlier languages win when fingerprints overlap.
LANGUAGE_FINGERPRINTS = (
    ("python", _any_of(
        r"\bdef\s+\w+\s*\([^)]*\)\s*:",
        r"(?m)^import\s+\w+|^from\s+\w+\s+import",
        r"(?m)^\s*class\s+\w+\s*:",
    )),
    ("rust", _any_of(
        r"\bfn\s+\w+\s*[<(]",
        r"->\s*(?:Result|Option|Self|&|\w+)",
        r"\blet\s+mut\s+",
        r"\bimpl\s+\w+",
        r"\buse\s+std::",
    )),
    ("go", _any_of(
        r"(?m)^package\s+\w+",
        r"\bfunc\s+\w+\s*\(",
    )),
    ("java", _any_of(
        r"\bpublic\s+class\s+\w+",
        r"\bprivate\s+\w+\s+\w+\s*\(",
        r"System\.out\.print",
    )),
    ("cpp", _any_of(
        r"#include\s*<",
        r"\bstd::",
    )),
    ("typescript", _any_of(
        r":\s*(?:string|number|boolean|any)\b",
        r"interface\s+\w+\s*\{",
        r"\btype\s+\w+\s*=",
    )),
    ("javascript", _any_of(
        r"\b(?:const|let|var)\s+\w+\s*=",
        r"\bfunction\s+\w+\s*\(",
        r"=>\s*\{",
    )),
)

# Fingerprints that need two independent signals.
_GO_SHORT_ASSIGN = regex.compile(r":=")
_GO_FMT_CALL = regex.compile(r"\bfmt\.")
_CPP_MAIN = regex.compile(r"\bint\s+main\s*\(")
_CPP_INCLUDE = regex.compile(r"#include")


def _found(fingerprint: "regex.Pattern", code: str) -> bool:
    # a fingerprint that runs out of time counts as absent
    try:
        return fingerprint.search(code, timeout=RULE_TIMEOUT_SECONDS) is not None
    except TimeoutError:
        logger.debug(f"Fingerprint {fingerprint.pattern!r} timed out")
        return False


def _paired_fingerprint(language: str, code: str) -> bool:
    if language == "go":
        return bool(_found(_GO_SHORT_ASSIGN, code) and _found(_GO_FMT_CALL, code))
    if language == "cpp":
        return bool(_found(_CPP_MAIN, code) and _found(_CPP_INCLUDE, code))
    return False


def detect_language(code: str) -> str:
    """
    Guess the language of a snippet.

    Always returns one of the supported languages; text with no recognizable
    fingerprint (including the empty string) is treated as javascript.
    """
    for language, fingerprints in LANGUAGE_FINGERPRINTS:
        if any(_found(fp, code) for fp in fingerprints):
            return language
        if _paired_fingerprint(language, code):
            return language
    return DEFAULT_LANGUAGE

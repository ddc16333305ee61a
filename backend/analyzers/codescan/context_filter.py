"""
False-positive suppression for pattern matches.

The check is line-local and syntax-unaware: it only looks at the text between
the start of the match's line and the match itself. Escaped quotes, block
comments and multi-line strings are not tracked.
"""

from typing import Optional

SLASH_COMMENT_LANGUAGES = frozenset({"javascript", "typescript", "java", "cpp", "go", "rust"})
HASH_COMMENT_LANGUAGES = frozenset({"python"})


def line_prefix(code: str, index: int) -> str:
    """Text from the start of the line containing index up to index."""
    line_start = code.rfind("\n", 0, index) + 1
    return code[line_start:index]


def is_inside_comment_or_string(code: str, index: int, language: Optional[str]) -> bool:
    prefix = line_prefix(code, index)

    if language in SLASH_COMMENT_LANGUAGES and "//" in prefix:
        return True
    if language in HASH_COMMENT_LANGUAGES and "#" in prefix:
        return True

    # an odd quote count means an unterminated literal is open
    if prefix.count('"') % 2 == 1:
        return True
    if prefix.count("'") % 2 == 1:
        return True
    return False

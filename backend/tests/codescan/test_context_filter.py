"""
Tests for comment/string suppression.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from backend.analyzers.codescan.context_filter import is_inside_comment_or_string, line_prefix


def test_line_prefix_is_line_local():
    code = "first line\nsecond eval(x)"
    assert line_prefix(code, code.index("eval")) == "second "


def test_slash_comment():
    code = "x = 1; // eval(y)"
    assert is_inside_comment_or_string(code, code.index("eval"), "javascript")


def test_slash_comment_ignored_for_python():
    code = "x = 1 // eval(y)"
    assert not is_inside_comment_or_string(code, code.index("eval"), "python")


def test_hash_comment_python_only():
    code = "x = 1 # eval(y)"
    assert is_inside_comment_or_string(code, code.index("eval"), "python")
    assert not is_inside_comment_or_string(code, code.index("eval"), "go")


def test_open_double_quote():
    code = 'msg = "call eval(y)"'
    assert is_inside_comment_or_string(code, code.index("eval"), "javascript")


def test_open_single_quote():
    code = "msg = 'call eval(y)'"
    assert is_inside_comment_or_string(code, code.index("eval"), "javascript")


def test_closed_quotes_do_not_suppress():
    code = 'msg = "a"; eval(y)'
    assert not is_inside_comment_or_string(code, code.index("eval"), "javascript")


def test_previous_line_comment_does_not_leak():
    code = "// note\neval(y)"
    assert not is_inside_comment_or_string(code, code.index("eval"), "javascript")


def test_quote_parity_applies_to_unknown_language():
    code = 'say "eval(y)'
    assert is_inside_comment_or_string(code, code.index("eval"), None)

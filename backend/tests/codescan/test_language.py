"""
Tests for language auto-detection.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from backend.analyzers.codescan.language import detect_language


class TestDetectLanguage:
    """First-match fingerprint waterfall."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("def my_func():\n    pass", "python"),
            ("import os\nprint(os.getcwd())", "python"),
            ("from typing import List", "python"),
            ("class Widget:\n    pass", "python"),
            ("fn main() -> Result<(), Error> {\n    Ok(())\n}", "rust"),
            ("let mut total = 0;", "rust"),
            ("use std::io;", "rust"),
            ("package main\n\nfunc main() {}", "go"),
            ("x := 1\nfmt.Println(x)", "go"),
            ("public class App {\n}", "java"),
            ('System.out.println("hi");', "java"),
            ("#include <stdio.h>\nint main() { return 0; }", "cpp"),
            ("auto v = std::vector<int>();", "cpp"),
            ("interface User {\n  name: string;\n}", "typescript"),
            ("type Id = number", "typescript"),
            ("const x = 1;", "javascript"),
            ("items.forEach(item => { use(item); });", "javascript"),
        ],
    )
    def test_detects(self, code, expected):
        assert detect_language(code) == expected

    def test_empty_defaults_to_javascript(self):
        assert detect_language("") == "javascript"

    def test_unrecognized_defaults_to_javascript(self):
        assert detect_language("hello world") == "javascript"

    def test_python_wins_over_rust(self):
        """Earlier fingerprints take precedence even when later ones also match."""
        assert detect_language("def f() -> int:\n    return 1") == "python"

    def test_rust_arrow_shadows_cpp(self):
        """A C++ trailing return type is classified as rust by precedence."""
        assert detect_language("auto f() -> int { return std::max(1, 2); }") == "rust"

    def test_main_without_include_is_not_cpp(self):
        """int main( needs an #include to count as C++."""
        assert detect_language("int main() { return 0; }") == "javascript"

"""
Tests for the rule tables: group ordering, catalogue and individual patterns.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3]))

from backend.analyzers.codescan.language_rules import LANGUAGE_RULE_GROUPS
from backend.analyzers.codescan.models import SEVERITY_WEIGHTS, SUPPORTED_LANGUAGES
from backend.analyzers.codescan.rules import (
    QUALITY_GROUP,
    RUNTIME_GROUP,
    SECURITY_GROUP,
    rule_catalog,
    rule_groups_for,
)
from backend.analyzers.codescan.scanner import scan_code

CATEGORIES = {
    "Security Risk",
    "Runtime Error",
    "Hallucination",
    "Deprecated",
    "Missing Error Handling",
    "Logic Error",
    "Code Quality",
}


def _rule_hits(code, language, rule_id):
    return [i for i in scan_code(code, language) if i.rule_id == rule_id]


class TestRuleTables:
    """Static shape of the pattern library."""

    def test_every_language_has_a_group(self):
        """Each supported language maps to a language-specific group."""
        assert set(LANGUAGE_RULE_GROUPS) == set(SUPPORTED_LANGUAGES)

    def test_typescript_shares_javascript_table(self):
        assert LANGUAGE_RULE_GROUPS["typescript"] is LANGUAGE_RULE_GROUPS["javascript"]

    def test_group_order(self):
        """security, runtime, language, quality."""
        groups = rule_groups_for("python")
        assert groups == [SECURITY_GROUP, RUNTIME_GROUP, LANGUAGE_RULE_GROUPS["python"], QUALITY_GROUP]

    def test_unknown_language_gets_universal_groups(self):
        assert rule_groups_for("cobol") == [SECURITY_GROUP, RUNTIME_GROUP, QUALITY_GROUP]
        assert rule_groups_for(None) == [SECURITY_GROUP, RUNTIME_GROUP, QUALITY_GROUP]

    def test_rule_ids_unique_within_group(self):
        for group in [SECURITY_GROUP, RUNTIME_GROUP, QUALITY_GROUP, *LANGUAGE_RULE_GROUPS.values()]:
            ids = [rule.rule_id for rule in group.rules]
            assert len(ids) == len(set(ids)), group.name

    def test_metadata_is_valid(self):
        """Every rule uses a known category and severity."""
        for group in [SECURITY_GROUP, RUNTIME_GROUP, QUALITY_GROUP, *LANGUAGE_RULE_GROUPS.values()]:
            for rule in group.rules:
                assert rule.category in CATEGORIES, rule.rule_id
                assert rule.severity in SEVERITY_WEIGHTS, rule.rule_id
                assert rule.description and rule.fix_description and rule.rationale

    def test_catalog_all_groups(self):
        """Without a language the catalogue lists every group once."""
        catalog = rule_catalog()
        assert list(catalog) == ["security", "runtime", "javascript", "python", "java", "go", "rust", "cpp", "quality"]

    def test_catalog_for_language(self):
        catalog = rule_catalog("rust")
        assert list(catalog) == ["security", "runtime", "rust", "quality"]
        assert catalog["rust"][0]["rule_id"] == "unwrap-usage"
        assert set(catalog["rust"][0]) == {
            "rule_id", "category", "severity", "pattern", "description", "fix_description", "rationale",
        }


class TestPatterns:
    """Representative detections and corrections per group."""

    def test_sql_injection(self):
        hits = _rule_hits('query = "SELECT * FROM users WHERE id=" + userId', "javascript", "sql-injection")
        assert len(hits) == 1
        assert hits[0].replacement.startswith("/* SQL INJECTION RISK: ")

    def test_division_by_zero(self):
        assert _rule_hits("x = y / 0;", "javascript", "division-by-zero")
        assert _rule_hits("x = y / 0", "python", "division-by-zero")
        assert not _rule_hits("x = y / 0.5;", "javascript", "division-by-zero")
        assert not _rule_hits("x = y / 10;", "javascript", "division-by-zero")

    def test_infinite_loop(self):
        assert _rule_hits("while (true) { step(); }", "javascript", "infinite-loop")

    def test_empty_catch_correction(self):
        hits = _rule_hits("try { a(); } catch (err) {}", "javascript", "empty-catch")
        assert hits[0].replacement == "catch (err) { console.error(err); }"

    def test_todo_removed(self):
        hits = _rule_hits("# FIXME: later\nx = 1", "python", "todo-comment")
        assert hits[0].replacement == ""

    def test_contains_to_includes(self):
        hits = _rule_hits("if (list.contains(x)) {}", "javascript", "hallucinated-contains")
        assert hits[0].replacement == ".includes("

    def test_var_replaced_once(self):
        hits = _rule_hits("var variable = 1;", "javascript", "var-usage")
        assert hits[0].replacement == "const variable"

    def test_awaited_json_not_flagged(self):
        assert not _rule_hits("const data = await response.json();", "javascript", "missing-await-json")
        assert _rule_hits("const data = response.json();", "javascript", "missing-await-json")

    def test_await_with_wider_whitespace_not_flagged(self):
        assert not _rule_hits("const data = await  response.json();", "javascript", "missing-await-json")
        assert not _rule_hits("const body = await\tresponse.text();", "javascript", "missing-await-text")
        assert not _rule_hits("const data = await\n    response.json();", "javascript", "missing-await-json")

    def test_secret_names_match_any_case(self):
        hits = _rule_hits('password = "hunter22"', "python", "hardcoded-secrets")
        assert len(hits) == 1
        assert hits[0].severity == "Critical"
        assert hits[0].replacement == "password = process.env.PASSWORD"

    def test_lowercase_todo_is_detected(self):
        assert _rule_hits("# todo: later\nx = 1", "python", "todo-comment")

    def test_sql_keywords_match_any_case(self):
        assert _rule_hits('q = "select * from users where id=" + uid', "javascript", "sql-injection")

    def test_async_arrow_without_try(self):
        assert _rule_hits("const f = async () => {\n  await go();\n};", "javascript", "async-no-try")
        assert not _rule_hits("async function f(a) {\n  try { await go(); } catch (e) { log(e); }\n}",
                              "javascript", "async-no-try")

    def test_python_is_literal(self):
        hits = _rule_hits("if name is 'bob':\n    pass", "python", "is-literal")
        assert hits[0].replacement == " == '"

    def test_python_missing_self(self):
        hits = _rule_hits("def run():\n    pass", "python", "missing-self")
        assert hits[0].replacement == "def run(self):"

    def test_go_missing_defer_close(self):
        assert _rule_hits('f, err := os.Open("a.txt")\nuse(f)', "go", "missing-defer-close")
        assert not _rule_hits('f, err := os.Open("a.txt")\ndefer f.Close()', "go", "missing-defer-close")

    def test_go_err_shadow(self):
        assert _rule_hits("a, err := one()\nb, err := two()", "go", "err-shadow")

    def test_rust_unwrap_to_question_mark(self):
        hits = _rule_hits("let x = maybe.unwrap();", "rust", "unwrap-usage")
        assert hits[0].replacement == "?"

    def test_cpp_raw_pointer(self):
        assert _rule_hits("Widget* w = new Widget();", "cpp", "raw-pointer")

    def test_java_raw_type(self):
        assert _rule_hits("List items = getItems();", "java", "raw-type")

    @pytest.mark.parametrize(
        "code,language,rule_id",
        [
            ("unsafe {\n    *ptr = 5;\n}", "rust", "unsafe-block"),
            ("gets(buf);", "cpp", "gets-usage"),
            ("strcpy(dest, src);", "cpp", "strcpy-usage"),
            ("sprintf(buf, fmt);", "cpp", "sprintf-usage"),
            ("using namespace std;", "cpp", "using-namespace-std"),
            ("result, _ := someFunc()", "go", "ignored-error"),
            ("e.printStackTrace();", "java", "printStackTrace"),
            ("System.exit(1);", "java", "system-exit"),
            ("catch (Exception e) {", "java", "generic-exception-catch"),
            ("import tensorflow.utilities", "python", "hallucinated-tf"),
            ("out = os.popen(cmd)", "python", "deprecated-os-popen"),
            ("requests.get(url)", "python", "requests-no-try"),
            ("el.innerHTML; <div dangerouslySetInnerHTML={x} />", "javascript", "dangerously-set-html"),
            ("document.write(html);", "javascript", "document-write"),
            ("debugger;", "javascript", "debug-code"),
        ],
    )
    def test_detects(self, code, language, rule_id):
        assert _rule_hits(code, language, rule_id)

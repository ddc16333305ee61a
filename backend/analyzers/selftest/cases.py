"""
Built-in self-test cases for the detection engine.
Each case feeds a known snippet through scan_code or detect_language and checks the outcome.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..codescan import detect_language, scan_code
from ..codescan.models import CATEGORY_ERROR_HANDLING, CATEGORY_HALLUCINATION, Issue


@dataclass(frozen=True)
class SelfTestCase:
    id: int
    name: str
    description: str
    code: str
    language: Optional[str]  # None runs language detection instead of a scan
    check: Callable[[Any], Tuple[bool, str]]


def _has_rule(rule_id: str, label: str) -> Callable[[List[Issue]], Tuple[bool, str]]:
    def check(issues: List[Issue]) -> Tuple[bool, str]:
        passed = any(rule_id in issue.id for issue in issues)
        return passed, (f"Detected {label}" if passed else "Failed")
    return check


def _description_mentions(text: str, label: str) -> Callable[[List[Issue]], Tuple[bool, str]]:
    def check(issues: List[Issue]) -> Tuple[bool, str]:
        passed = any(text in issue.description for issue in issues)
        return passed, (f"Detected {label}" if passed else "Failed")
    return check


def _has_category(category: str, label: str) -> Callable[[List[Issue]], Tuple[bool, str]]:
    def check(issues: List[Issue]) -> Tuple[bool, str]:
        passed = any(issue.category == category for issue in issues)
        return passed, (label if passed else "Failed")
    return check


def _detects(expected: str) -> Callable[[str], Tuple[bool, str]]:
    def check(language: str) -> Tuple[bool, str]:
        return language == expected, f"Detected: {language}"
    return check


def _comment_suppressed(issues: List[Issue]) -> Tuple[bool, str]:
    eval_lines = sorted(issue.line for issue in issues if issue.rule_id == "eval-usage")
    return eval_lines == [2], f"eval reported on lines {eval_lines}"


def _tf_hallucination(issues: List[Issue]) -> Tuple[bool, str]:
    passed = any("hallucinated" in issue.id for issue in issues)
    return passed, f"Found {len(issues)} issues"


SELF_TEST_CASES = (
    # JavaScript / TypeScript
    SelfTestCase(1, "[JS] Detect isEmpty() Hallucination", "Array.isEmpty() does not exist in JavaScript",
                 "const a = []; a.isEmpty();", "javascript",
                 _description_mentions("isEmpty", "isEmpty hallucination")),
    SelfTestCase(2, "[JS] Detect Promise without catch()", "fetch().then() should have .catch()",
                 'fetch("url").then(r => r.json())', "javascript",
                 _has_category(CATEGORY_ERROR_HANDLING, "Found missing catch")),
    SelfTestCase(3, "[JS] Detect var Usage", "var should be replaced with let/const",
                 "var x = 1;", "javascript", _has_rule("var-usage", "var usage")),
    SelfTestCase(4, "[JS] Detect Hardcoded Secrets", "API_KEY should use env variables",
                 'const API_KEY = "sk-12345abcdef"', "javascript", _has_rule("hardcoded-secrets", "secret")),
    SelfTestCase(5, "[JS] Detect Loose Equality", "== should be ===",
                 "if (x == 5) {}", "javascript", _has_rule("loose-equality", "loose equality")),
    # Python
    SelfTestCase(6, "[PY] Detect Hallucinated TensorFlow", "tensorflow.advanced does not exist",
                 "import tensorflow.advanced as tf", "python", _tf_hallucination),
    SelfTestCase(7, "[PY] Detect time.clock() Deprecated", "time.clock() removed in Python 3.8",
                 "import time\nresult = time.clock()", "python",
                 _description_mentions("deprecated", "deprecated")),
    SelfTestCase(8, "[PY] Detect Mutable Default Arg", "def func(items=[]) is dangerous",
                 "def process(items=[]):\n    items.append(1)", "python",
                 _has_rule("mutable-default", "mutable default")),
    SelfTestCase(9, "[PY] Detect Bare Except", "except: should specify exception type",
                 "try:\n    x = 1\nexcept:\n    pass", "python", _has_rule("bare-except", "bare except")),
    # Go
    SelfTestCase(10, "[GO] Detect Ignored Error", "Error ignored with underscore",
                 "result, _ := someFunc()", "go", _has_rule("ignored-error", "ignored error")),
    SelfTestCase(11, "[GO] Detect try/catch Hallucination", "Go does not have try/catch",
                 "try {\n    doSomething()\n}", "go", _has_rule("try-catch-go", "try/catch")),
    SelfTestCase(12, "[GO] Detect panic() Usage", "panic() should be avoided",
                 'func main() {\n    panic("error")\n}', "go", _has_rule("panic-usage", "panic")),
    # Rust
    SelfTestCase(13, "[RS] Detect .unwrap() Usage", ".unwrap() can panic at runtime",
                 "let x = some_option.unwrap();", "rust", _has_rule("unwrap-usage", "unwrap")),
    SelfTestCase(14, "[RS] Detect Unsafe Block", "Unsafe blocks bypass Rust safety",
                 "unsafe {\n    *ptr = 5;\n}", "rust", _has_rule("unsafe-block", "unsafe")),
    SelfTestCase(15, "[RS] Detect &String Instead of &str", "&str is preferred over &String",
                 "fn greet(name: &String) {}", "rust", _has_rule("string-borrow", "&String")),
    # C++
    SelfTestCase(16, "[C++] Detect gets() Usage", "gets() is unsafe, use fgets()",
                 "char buf[100];\ngets(buf);", "cpp", _has_rule("gets-usage", "gets")),
    SelfTestCase(17, "[C++] Detect malloc Usage", "Use new/smart pointers in C++",
                 "int* ptr = (int*)malloc(sizeof(int));", "cpp", _has_rule("malloc-usage", "malloc")),
    SelfTestCase(18, "[C++] Detect strcpy() Usage", "strcpy() is unsafe",
                 "strcpy(dest, src);", "cpp", _has_rule("strcpy-usage", "strcpy")),
    # Java
    SelfTestCase(19, "[JAVA] Detect String == Comparison", "Use .equals() for strings",
                 'if (str == "hello") {}', "java", _has_rule("string-equals", "string ==")),
    SelfTestCase(20, "[JAVA] Detect printStackTrace()", "Use proper logging instead",
                 "catch (Exception e) {\n    e.printStackTrace();\n}", "java",
                 _has_rule("printStackTrace", "printStackTrace")),
    # Universal
    SelfTestCase(21, "[ALL] Detect SQL Injection Risk", "String concatenation in SQL",
                 'query = "SELECT * FROM users WHERE id=" + userId', "javascript",
                 _has_rule("sql-injection", "SQL injection")),
    SelfTestCase(22, "[ALL] Detect eval() Usage", "eval() is a security risk",
                 "eval(userInput);", "javascript", _has_rule("eval-usage", "eval")),
    SelfTestCase(23, "[ALL] Detect TODO Comments", "TODO should be resolved",
                 "// TODO: fix this later\nconst x = 1;", "javascript", _has_rule("todo-comment", "TODO")),
    SelfTestCase(24, "[ALL] Ignore Matches in Comments", "Commented-out eval() is not reported",
                 "// eval(x) is unsafe\neval(userInput);", "javascript", _comment_suppressed),
    SelfTestCase(25, "[GO] Detect Hallucinated catch()", "catch() is flagged as a Go hallucination",
                 "catch (err) {\n}", "go", _has_category(CATEGORY_HALLUCINATION, "Detected catch")),
    # Language detection
    SelfTestCase(26, "Language Detection: Python", "Detect Python from code",
                 "def my_func():\n    pass", None, _detects("python")),
    SelfTestCase(27, "Language Detection: Rust", "Detect Rust from code",
                 "fn main() -> Result<(), Error> {\n    Ok(())\n}", None, _detects("rust")),
    SelfTestCase(28, "Language Detection: TypeScript", "Detect TypeScript from code",
                 "interface User {\n  name: string;\n}", None, _detects("typescript")),
)


def run_case(case: SelfTestCase) -> Dict[str, Any]:
    start = time.perf_counter()
    if case.language is None:
        outcome: Any = detect_language(case.code)
    else:
        outcome = scan_code(case.code, case.language)
    passed, details = case.check(outcome)
    elapsed_ms = (time.perf_counter() - start) * 1000
    return {
        "id": case.id,
        "name": case.name,
        "passed": passed,
        "details": details,
        "time_ms": round(elapsed_ms, 3),
    }


def run_self_test() -> Dict[str, Any]:
    """
    Run every built-in case.

    Returns:
        {"total", "passed", "pass_rate", "results"}; pass_rate is a percentage
    """
    results = [run_case(case) for case in SELF_TEST_CASES]
    passed = sum(1 for r in results if r["passed"])
    total = len(results)
    return {
        "total": total,
        "passed": passed,
        "pass_rate": round(passed / total * 100, 1) if total else 0.0,
        "results": results,
    }

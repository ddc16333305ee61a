"""
Language-specific detection rules for the CodeScan analyzer.
Mostly APIs that AI assistants borrow from the wrong language, plus common pitfalls.
"""

from typing import Dict

import regex

from .models import (
    CATEGORY_DEPRECATED,
    CATEGORY_ERROR_HANDLING,
    CATEGORY_HALLUCINATION,
    CATEGORY_LOGIC,
    CATEGORY_QUALITY,
    CATEGORY_RUNTIME,
    CATEGORY_SECURITY,
    SEVERITY_CRITICAL,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    DetectionRule,
    RuleGroup,
)


# ============================================
# JavaScript / TypeScript
# ============================================

JS_TS_GROUP = RuleGroup(
    name="javascript",
    language="javascript",
    rules=(
        DetectionRule(
            rule_id="hallucinated-isempty",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\.\s*isEmpty\s*\(\s*\)",
            description="Array.isEmpty() does not exist in JS",
            fix_description="Use .length === 0",
            correction=lambda _match: ".length === 0",
            rationale="AI often hallucinates .isEmpty() from Java. In JS, use .length === 0.",
        ),
        DetectionRule(
            rule_id="hallucinated-contains",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\.\s*contains\s*\(",
            description="Array.contains() does not exist in JS",
            fix_description="Use .includes()",
            correction=lambda match: match.replace("contains", "includes", 1),
            rationale="Use .includes() for arrays or strings in JavaScript.",
        ),
        DetectionRule(
            rule_id="var-usage",
            category=CATEGORY_DEPRECATED,
            severity=SEVERITY_WARNING,
            pattern=r"\bvar\s+\w+",
            description="Using var instead of let/const",
            fix_description="Use let or const",
            correction=lambda match: match.replace("var", "const", 1),
            rationale="var has function scope which leads to bugs. Use block-scoped let/const.",
        ),
        DetectionRule(
            rule_id="loose-equality",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"[^!=]==(?!=)",
            description="Loose equality (==)",
            fix_description="Use strict equality (===)",
            correction=lambda match: match.replace("==", "===", 1),
            rationale="Type coercion in == leads to unexpected comparisons.",
        ),
        DetectionRule(
            rule_id="console-log",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"console\.(?:log|warn|error|info)\s*\([^;]*\);?",
            description="Console statement in code",
            fix_description="Comment out console statements",
            correction=lambda match: "// " + match,
            rationale="Console statements should be removed in production code.",
        ),
        DetectionRule(
            rule_id="promise-no-catch",
            category=CATEGORY_ERROR_HANDLING,
            severity=SEVERITY_WARNING,
            pattern=r"\.then\s*\([^)]*\)(?!\s*\.catch)",
            description="Promise without .catch()",
            fix_description="Add .catch() handler",
            correction=lambda match: match + ".catch(err => console.error(err))",
            rationale="Unhandled promise rejections can crash the application.",
        ),
        DetectionRule(
            rule_id="async-no-try",
            category=CATEGORY_ERROR_HANDLING,
            severity=SEVERITY_WARNING,
            pattern=r"async\s+(?:function\s+\w+\s*\([^)]*\)|\([^)]*\)\s*=>|\w+\s*=>)\s*\{(?![^}]*try)",
            description="Async function without try-catch",
            fix_description="Wrap in try-catch",
            rationale="Async functions should handle errors with try-catch.",
        ),
        DetectionRule(
            rule_id="dangerously-set-html",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_CRITICAL,
            pattern=r"dangerouslySetInnerHTML",
            description="dangerouslySetInnerHTML usage",
            fix_description="Sanitize HTML or avoid",
            rationale="Can lead to XSS attacks if HTML is not properly sanitized.",
        ),
        DetectionRule(
            rule_id="document-write",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_WARNING,
            pattern=r"document\.write\s*\(",
            description="document.write() usage",
            fix_description="Use DOM manipulation",
            rationale="document.write() is outdated and can cause security/performance issues.",
        ),
        DetectionRule(
            rule_id="hallucinated-isnotempty",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\.\s*isNotEmpty\s*\(\s*\)",
            description="Array.isNotEmpty() does not exist in JS",
            fix_description="Use .length > 0",
            correction=lambda _match: ".length > 0",
            rationale="AI hallucinates .isNotEmpty() from other languages. Use .length > 0.",
        ),
        DetectionRule(
            rule_id="hallucinated-remove",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\.\s*remove\s*\([^)]+\)",
            description="Array.remove() does not exist in JS",
            fix_description="Use .filter() or .splice()",
            correction=lambda match: match.replace(".remove", ".filter", 1),
            rationale="Use .filter() to create a new array without the element, or .splice() to modify in place.",
        ),
        DetectionRule(
            rule_id="hallucinated-clear",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\b\w+\.\s*clear\s*\(\s*\)",
            description="Array.clear() does not exist in JS",
            fix_description="Use arr.length = 0",
            correction=lambda match: match.replace(".clear()", ".length = 0", 1),
            rationale="To clear an array in JS, set .length = 0 or reassign to [].",
        ),
        DetectionRule(
            rule_id="missing-await-json",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_CRITICAL,
            pattern=r"(?<!await\s+)response\.json\s*\(\s*\)",
            description="Missing await on .json()",
            fix_description="Add await keyword",
            correction=lambda match: "await " + match,
            rationale="response.json() returns a Promise. Without await, you get the Promise, not the data.",
        ),
        DetectionRule(
            rule_id="missing-await-text",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_CRITICAL,
            pattern=r"(?<!await\s+)response\.text\s*\(\s*\)",
            description="Missing await on .text()",
            fix_description="Add await keyword",
            correction=lambda match: "await " + match,
            rationale="response.text() returns a Promise. Without await, you get the Promise, not the text.",
        ),
    ),
)


# ============================================
# Python
# ============================================

_MUTABLE_DEFAULT = r"=\s*(?:\[\]|\{\}|set\(\))"

PYTHON_GROUP = RuleGroup(
    name="python",
    language="python",
    rules=(
        DetectionRule(
            rule_id="mutable-default",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_CRITICAL,
            pattern=r"def\s+\w+\s*\([^)]*" + _MUTABLE_DEFAULT + r"[^)]*\)\s*:",
            description="Mutable default argument",
            fix_description="Use None as default",
            correction=lambda match: regex.sub(_MUTABLE_DEFAULT, "=None", match, count=1),
            rationale="Mutable defaults are shared between calls, causing unexpected behavior.",
        ),
        DetectionRule(
            rule_id="bare-except",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"except\s*:",
            description="Bare except clause",
            fix_description="Specify exception type",
            correction=lambda _match: "except Exception:",
            rationale="Bare except catches all exceptions including KeyboardInterrupt.",
        ),
        DetectionRule(
            rule_id="is-literal",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_WARNING,
            pattern=r"(?<!\s)\s+is\s+(?:['\"]|[0-9])",
            description='Using "is" with literals',
            fix_description="Use == for comparison",
            correction=lambda match: match.replace(" is ", " == ", 1),
            rationale='"is" checks identity, not equality. Use == for value comparison.',
        ),
        DetectionRule(
            rule_id="print-statement",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"\bprint\s*\(",
            description="Print statement in code",
            fix_description="Use logging module",
            rationale="Use the logging module for production code.",
        ),
        DetectionRule(
            rule_id="deprecated-time-clock",
            category=CATEGORY_DEPRECATED,
            severity=SEVERITY_WARNING,
            pattern=r"time\.clock\s*\(\s*\)",
            description="time.clock() is deprecated",
            fix_description="Use time.perf_counter()",
            correction=lambda _match: "time.perf_counter()",
            rationale="Removed in Python 3.8. Use perf_counter() or process_time().",
        ),
        DetectionRule(
            rule_id="deprecated-os-popen",
            category=CATEGORY_DEPRECATED,
            severity=SEVERITY_WARNING,
            pattern=r"os\.popen\s*\(",
            description="os.popen() is deprecated",
            fix_description="Use subprocess.run()",
            correction=lambda _match: "subprocess.run(",
            rationale="os.popen is deprecated. Use subprocess for process handling.",
        ),
        DetectionRule(
            rule_id="hallucinated-tf",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"import\s+tensorflow\.(?:advanced|extras|utilities)",
            description="Hallucinated TensorFlow module",
            fix_description="Check TensorFlow API docs",
            correction=lambda _match: "# Invalid import",
            rationale="AI often invents non-existent TensorFlow submodules.",
        ),
        DetectionRule(
            rule_id="f-string-no-f",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_WARNING,
            pattern=r"[^f]['\"].*\{[^}]+\}.*['\"]",
            description="String with {} but no f-prefix",
            fix_description="Add f prefix for f-string",
            correction=lambda match: "f" + match,
            rationale="Curly braces without f-prefix are literal characters, not interpolation.",
        ),
        DetectionRule(
            rule_id="pandas-isempty",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\.isEmpty\s*\(\s*\)",
            description="DataFrame.isEmpty() does not exist",
            fix_description="Use .empty property",
            correction=lambda _match: ".empty",
            rationale="pandas DataFrames use .empty property, not .isEmpty() method.",
        ),
        DetectionRule(
            rule_id="missing-self",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_CRITICAL,
            pattern=r"def\s+\w+\s*\(\s*\)\s*:",
            description="Method possibly missing self parameter",
            fix_description="Add self as first parameter",
            correction=lambda match: match.replace("()", "(self)", 1),
            rationale="Instance methods require self as the first parameter.",
        ),
        DetectionRule(
            rule_id="requests-no-try",
            category=CATEGORY_ERROR_HANDLING,
            severity=SEVERITY_WARNING,
            pattern=r"requests\.(?:get|post|put|delete|patch)\s*\(",
            description="HTTP request without error handling",
            fix_description="Wrap in try/except",
            rationale="Network requests can fail. Handle requests.exceptions.RequestException.",
        ),
    ),
)


# ============================================
# Java
# ============================================

JAVA_GROUP = RuleGroup(
    name="java",
    language="java",
    rules=(
        DetectionRule(
            rule_id="string-equals",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_CRITICAL,
            pattern=r"==\s*[\"'][^\"']*[\"']",
            description="String comparison with ==",
            fix_description="Use .equals()",
            correction=lambda match: match.replace("==", ".equals(", 1),
            rationale="== compares references, not values. Use .equals() for strings.",
        ),
        DetectionRule(
            rule_id="raw-type",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"(?:List|Map|Set|ArrayList|HashMap|HashSet)\s+\w+\s*=",
            description="Raw type without generics",
            fix_description="Add type parameters",
            rationale="Raw types bypass type safety. Use generics like List<String>.",
        ),
        DetectionRule(
            rule_id="system-exit",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"System\.exit\s*\(",
            description="System.exit() in code",
            fix_description="Throw exception instead",
            rationale="System.exit() prevents cleanup and is bad for testing.",
        ),
        DetectionRule(
            rule_id="printStackTrace",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"\.printStackTrace\s*\(\s*\)",
            description="printStackTrace() usage",
            fix_description="Use proper logging",
            rationale="Use a logging framework instead of printStackTrace().",
        ),
        DetectionRule(
            rule_id="null-pointer-risk",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"\.\w+\(\)(?!\s*!=\s*null)",
            description="Potential null pointer",
            fix_description="Add null check",
            rationale="Method chains without null checks can throw NullPointerException.",
        ),
        DetectionRule(
            rule_id="generic-exception-catch",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"catch\s*\(\s*Exception\s+\w+\s*\)",
            description="Catching generic Exception",
            fix_description="Catch specific exception types",
            rationale="Catching the generic Exception type hides bugs and makes debugging harder.",
        ),
        DetectionRule(
            rule_id="resource-leak",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"new\s+(?:FileInputStream|FileOutputStream|BufferedReader|BufferedWriter|FileReader|FileWriter)\s*\(",
            description="Resource opened without try-with-resources",
            fix_description="Use try-with-resources",
            rationale="Streams should be closed with try-with-resources to prevent resource leaks.",
        ),
        DetectionRule(
            rule_id="string-concat-loop",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"for\s*\([^)]*\)[^}]*\+=\s*[\"']",
            description="String concatenation in loop",
            fix_description="Use StringBuilder",
            rationale="String concatenation in loops creates many temporary objects. Use StringBuilder.",
        ),
    ),
)


# ============================================
# Go
# ============================================

GO_GROUP = RuleGroup(
    name="go",
    language="go",
    rules=(
        DetectionRule(
            rule_id="ignored-error",
            category=CATEGORY_ERROR_HANDLING,
            severity=SEVERITY_CRITICAL,
            pattern=r",\s*_\s*:?=\s*\w+\([^)]*\)",
            description="Error ignored with underscore",
            fix_description="Handle the error",
            rationale="Ignoring errors with _ is a common source of bugs in Go.",
        ),
        DetectionRule(
            rule_id="panic-usage",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"\bpanic\s*\(",
            description="panic() usage",
            fix_description="Return error instead",
            rationale="Prefer returning errors over panicking in library code.",
        ),
        DetectionRule(
            rule_id="fmt-print",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"fmt\.Print(?:ln|f)?\s*\(",
            description="fmt.Print in production",
            fix_description="Use proper logging",
            rationale="Use log package or structured logging for production.",
        ),
        DetectionRule(
            rule_id="goroutine-leak",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"go\s+func\s*\([^)]*\)\s*\{[^}]*for\s*\{",
            description="Potential goroutine leak",
            fix_description="Add cancellation context",
            rationale="Goroutines with infinite loops need proper cancellation.",
        ),
        DetectionRule(
            rule_id="try-catch-go",
            category=CATEGORY_HALLUCINATION,
            severity=SEVERITY_CRITICAL,
            pattern=r"\btry\s*\{|\bcatch\s*\(",
            description="try/catch does not exist in Go",
            fix_description="Use error returns and if err != nil",
            correction=lambda _match: "// Use: if err != nil { return err }",
            rationale="Go uses explicit error returns, not try/catch exceptions.",
        ),
        DetectionRule(
            rule_id="missing-defer-close",
            category=CATEGORY_ERROR_HANDLING,
            severity=SEVERITY_WARNING,
            pattern=r"os\.Open\s*\([^)]*\)(?![\s\S]*?defer[\s\S]*?\.Close)",
            description="File opened without defer Close()",
            fix_description="Add defer file.Close()",
            rationale="Files should be closed with defer to prevent resource leaks.",
        ),
        DetectionRule(
            rule_id="err-shadow",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_WARNING,
            pattern=r"err\s*:=.*\n.*err\s*:=",
            description="Error variable shadowing",
            fix_description="Use = instead of := for reassignment",
            rationale="Using := shadows the outer err variable, losing error information.",
        ),
    ),
)


# ============================================
# Rust
# ============================================

RUST_GROUP = RuleGroup(
    name="rust",
    language="rust",
    rules=(
        DetectionRule(
            rule_id="unwrap-usage",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"\.unwrap\s*\(\s*\)",
            description=".unwrap() can panic",
            fix_description="Use ? or match",
            correction=lambda match: match.replace(".unwrap()", "?", 1),
            rationale="unwrap() panics on None/Err. Use ? operator or pattern matching.",
        ),
        DetectionRule(
            rule_id="expect-usage",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_INFO,
            pattern=r"\.expect\s*\(",
            description=".expect() can panic",
            fix_description="Use ? or match",
            rationale="expect() panics with a message. Consider proper error handling.",
        ),
        DetectionRule(
            rule_id="clone-overuse",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"\.clone\s*\(\s*\)",
            description="Clone usage - performance impact",
            fix_description="Consider borrowing",
            rationale="Excessive cloning impacts performance. Consider borrowing instead.",
        ),
        DetectionRule(
            rule_id="unsafe-block",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_WARNING,
            pattern=r"\bunsafe\s*\{",
            description="Unsafe block detected",
            fix_description="Minimize unsafe code",
            rationale="Unsafe blocks bypass Rust safety guarantees. Use sparingly.",
        ),
        DetectionRule(
            rule_id="multiple-unwrap",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"\.unwrap\(\).*\.unwrap\(\)",
            description="Multiple .unwrap() in chain",
            fix_description="Use ? operator with Result",
            rationale="Chained unwraps make debugging difficult. Use proper error propagation.",
        ),
        DetectionRule(
            rule_id="string-borrow",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"&String(?!\s*,)",
            description="Borrowing String instead of &str",
            fix_description="Use &str for string references",
            correction=lambda match: match.replace("&String", "&str", 1),
            rationale="&str is more flexible than &String for function parameters.",
        ),
        DetectionRule(
            rule_id="missing-lifetime",
            category=CATEGORY_LOGIC,
            severity=SEVERITY_WARNING,
            pattern=r"fn\s+\w+\s*\([^)]*&[^'\s][^)]*\)\s*->\s*&",
            description="Possible missing lifetime annotation",
            fix_description="Add lifetime parameter",
            rationale="Functions returning references usually need explicit lifetimes.",
        ),
    ),
)


# ============================================
# C++
# ============================================

CPP_GROUP = RuleGroup(
    name="cpp",
    language="cpp",
    rules=(
        DetectionRule(
            rule_id="raw-pointer",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"\b\w+\s*\*\s+\w+\s*=\s*new\s+",
            description="Raw pointer with new",
            fix_description="Use smart pointers",
            rationale="Raw pointers cause memory leaks. Use unique_ptr or shared_ptr.",
        ),
        DetectionRule(
            rule_id="delete-mismatch",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_CRITICAL,
            pattern=r"delete\s+\w+(?!\s*\[\])",
            description="Single delete on array?",
            fix_description="Use delete[] for arrays",
            rationale="Using delete instead of delete[] on arrays causes undefined behavior.",
        ),
        DetectionRule(
            rule_id="printf-format",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_WARNING,
            pattern=r"printf\s*\(\s*\w+\s*\)",
            description="printf with variable format",
            fix_description='Use "%s" format',
            rationale="Variable format strings enable format string attacks.",
        ),
        DetectionRule(
            rule_id="gets-usage",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_CRITICAL,
            pattern=r"\bgets\s*\(",
            description="gets() is dangerous",
            fix_description="Use fgets()",
            correction=lambda match: match.replace("gets", "fgets", 1),
            rationale="gets() has no bounds checking, causing buffer overflows.",
        ),
        DetectionRule(
            rule_id="strcpy-usage",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_WARNING,
            pattern=r"\bstrcpy\s*\(",
            description="strcpy() is unsafe",
            fix_description="Use strncpy()",
            correction=lambda match: match.replace("strcpy", "strncpy", 1),
            rationale="strcpy() has no bounds checking. Use strncpy() or std::string.",
        ),
        DetectionRule(
            rule_id="cout-debug",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"(?:std::)?cout\s*<<",
            description="cout in production code",
            fix_description="Use proper logging",
            rationale="Use a logging library instead of cout for production.",
        ),
        DetectionRule(
            rule_id="malloc-usage",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"\bmalloc\s*\(",
            description="Using malloc in C++",
            fix_description="Use new or smart pointers",
            rationale="In C++, prefer new/delete or smart pointers over malloc/free.",
        ),
        DetectionRule(
            rule_id="new-no-delete",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"\bnew\s+\w+(?![^;]*delete)",
            description="new without corresponding delete",
            fix_description="Use smart pointers or add delete",
            rationale="Memory allocated with new must be freed to prevent leaks.",
        ),
        DetectionRule(
            rule_id="sprintf-usage",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_WARNING,
            pattern=r"\bsprintf\s*\(",
            description="sprintf() is unsafe",
            fix_description="Use snprintf() instead",
            correction=lambda match: match.replace("sprintf", "snprintf", 1),
            rationale="sprintf has no buffer size limit, causing potential overflows.",
        ),
        DetectionRule(
            rule_id="using-namespace-std",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"using\s+namespace\s+std\s*;",
            description="using namespace std in header",
            fix_description="Use std:: prefix instead",
            rationale="Pollutes global namespace. Use explicit std:: prefix.",
        ),
    ),
)


# typescript reuses the javascript table
LANGUAGE_RULE_GROUPS: Dict[str, RuleGroup] = {
    "javascript": JS_TS_GROUP,
    "typescript": JS_TS_GROUP,
    "python": PYTHON_GROUP,
    "java": JAVA_GROUP,
    "go": GO_GROUP,
    "rust": RUST_GROUP,
    "cpp": CPP_GROUP,
}

"""
Universal detection rules for the CodeScan analyzer.
Groups run in a fixed order: security, runtime, language-specific, quality.
"""

from typing import Dict, List, Optional

import regex

from .language_rules import LANGUAGE_RULE_GROUPS
from .models import (
    CATEGORY_QUALITY,
    CATEGORY_RUNTIME,
    CATEGORY_SECURITY,
    SEVERITY_CRITICAL,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    DetectionRule,
    RuleGroup,
    drop_match,
)


def _secret_to_env(match: str) -> str:
    name = match.split("=")[0]
    env_key = regex.sub(r"\s", "_", name.strip().upper())
    return f"{name}= process.env.{env_key}"


SECURITY_GROUP = RuleGroup(
    name="security",
    rules=(
        DetectionRule(
            rule_id="hardcoded-secrets",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_CRITICAL,
            pattern=r"(API_KEY|SECRET|TOKEN|PASSWORD|PRIVATE_KEY|ACCESS_KEY|AUTH_TOKEN)\s*=\s*['\"][^'\"]{5,}['\"]",
            flags=regex.IGNORECASE,
            description="Hardcoded secret detected",
            fix_description="Use environment variables",
            correction=_secret_to_env,
            rationale="Hardcoding secrets exposes them in version control. Use environment variables or secret managers.",
        ),
        DetectionRule(
            rule_id="sql-injection",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_CRITICAL,
            # String literals are line-local, so the literal body never spans a newline.
            pattern=r"=\s*[\"'][^\"'\n]*(?:SELECT|INSERT|UPDATE|DELETE|FROM|WHERE)[^\"'\n]*[\"']\s*\+\s*\w+",
            flags=regex.IGNORECASE,
            description="Potential SQL injection vulnerability",
            fix_description="Use parameterized queries",
            correction=lambda match: "/* SQL INJECTION RISK: " + match + " */",
            rationale="String concatenation in SQL queries allows attackers to inject malicious SQL code.",
        ),
        DetectionRule(
            rule_id="eval-usage",
            category=CATEGORY_SECURITY,
            severity=SEVERITY_CRITICAL,
            pattern=r"\beval\s*\(",
            description="eval() usage detected",
            fix_description="Avoid eval, use safer alternatives",
            correction=lambda match: "// REMOVED: " + match,
            rationale="eval() executes arbitrary code and is a major security vulnerability.",
        ),
    ),
)

RUNTIME_GROUP = RuleGroup(
    name="runtime",
    rules=(
        DetectionRule(
            rule_id="infinite-loop",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_CRITICAL,
            pattern=r"while\s*\((?:true|1|True)\)",
            description="Potential infinite loop",
            fix_description="Ensure break condition exists",
            rationale="Infinite loops freeze the application, causing denial of service.",
        ),
        DetectionRule(
            rule_id="division-by-zero",
            category=CATEGORY_RUNTIME,
            severity=SEVERITY_WARNING,
            pattern=r"/\s*0(?:[^\d.]|\Z)",
            description="Potential division by zero",
            fix_description="Add zero check",
            rationale="Division by zero causes runtime errors or undefined behavior.",
        ),
    ),
)

QUALITY_GROUP = RuleGroup(
    name="quality",
    rules=(
        DetectionRule(
            rule_id="todo-comment",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"(?://|#|/\*)\s*(?:TODO|FIXME|HACK|XXX|BUG):?",
            flags=regex.IGNORECASE,
            description="Unresolved TODO/FIXME comment",
            fix_description="Address or remove",
            correction=drop_match,
            rationale="Production code should not have unresolved tasks.",
        ),
        DetectionRule(
            rule_id="debug-code",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_INFO,
            pattern=r"(?:debugger|console\.debug|System\.out\.print|fmt\.Print|println!)",
            description="Debug code left in production",
            fix_description="Remove debug statements",
            correction=drop_match,
            rationale="Debug statements should be removed before production.",
        ),
        DetectionRule(
            rule_id="empty-catch",
            category=CATEGORY_QUALITY,
            severity=SEVERITY_WARNING,
            pattern=r"catch\s*\([^)]*\)\s*\{\s*\}",
            description="Empty catch block",
            fix_description="Handle or log the error",
            correction=lambda match: match.replace("{}", "{ console.error(err); }", 1),
            rationale="Empty catch blocks silently swallow errors, making debugging difficult.",
        ),
    ),
)


def rule_groups_for(language: Optional[str]) -> List[RuleGroup]:
    """
    Rule groups applicable to a language, in evaluation order.

    Languages without a dedicated table only get the universal groups.
    """
    groups = [SECURITY_GROUP, RUNTIME_GROUP]
    language_group = LANGUAGE_RULE_GROUPS.get(language or "")
    if language_group is not None:
        groups.append(language_group)
    groups.append(QUALITY_GROUP)
    return groups


def rule_catalog(language: Optional[str] = None) -> Dict[str, List[Dict[str, str]]]:
    """Rules by group name; all groups when no language is given."""
    if language is None:
        groups = [SECURITY_GROUP, RUNTIME_GROUP, *LANGUAGE_RULE_GROUPS.values(), QUALITY_GROUP]
    else:
        groups = rule_groups_for(language)

    catalog: Dict[str, List[Dict[str, str]]] = {}
    for group in groups:
        # javascript and typescript share one table
        if group.name in catalog:
            continue
        catalog[group.name] = [rule.to_dict() for rule in group.rules]
    return catalog

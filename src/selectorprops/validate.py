from collections.abc import Sequence

from selectorprops.config import AutocaptureConfig
from selectorprops.core.models import (
    DefaultRule,
    Rule,
    UnrecognizedRule,
    UrlContainsRule,
)
from selectorprops.core.strategies import url_pattern_error
from selectorprops.core.validate import Issue, Severity, rule_location

CODE_UNKNOWN_STRATEGY = "UNKNOWN_STRATEGY"
CODE_MISSING_CONTAINS = "MISSING_CONTAINS"
CODE_INVALID_PATTERN = "INVALID_PATTERN"
CODE_EMPTY_RULESET = "EMPTY_RULESET"
CODE_SHADOWED_RULE = "SHADOWED_RULE"
CODE_SELECTOR_NOT_ALLOWLISTED = "SELECTOR_NOT_ALLOWLISTED"


def _validate_rule(selector: str, index: int, rule: Rule) -> list[Issue]:
    location = rule_location(selector, index)
    match rule:
        case UnrecognizedRule(strategy=strategy):
            return [
                Issue(
                    code=CODE_UNKNOWN_STRATEGY,
                    severity=Severity.WARNING,
                    message=(
                        f"Unknown strategy {strategy!r}; rule will be skipped"
                    ),
                    location=location,
                    selector=selector,
                )
            ]
        case UrlContainsRule(contains=None | ""):
            return [
                Issue(
                    code=CODE_MISSING_CONTAINS,
                    severity=Severity.ERROR,
                    message="urlContains rule has no 'contains' pattern",
                    location=location,
                    selector=selector,
                )
            ]
        case UrlContainsRule(contains=str() as contains):
            error = url_pattern_error(contains)
            if error is None:
                return []
            return [
                Issue(
                    code=CODE_INVALID_PATTERN,
                    severity=Severity.ERROR,
                    message=f"Invalid pattern {contains!r}: {error}",
                    location=location,
                    selector=selector,
                )
            ]
        case UrlContainsRule(contains=contains):
            return [
                Issue(
                    code=CODE_INVALID_PATTERN,
                    severity=Severity.ERROR,
                    message=(
                        f"Pattern {contains!r} is not a string; "
                        "rule will be skipped"
                    ),
                    location=location,
                    selector=selector,
                )
            ]
    return []


def _shadowed_rule_issues(selector: str, rules: Sequence[Rule]) -> list[Issue]:
    ordered = sorted(enumerate(rules), key=lambda pair: pair[1].priority)
    issues: list[Issue] = []
    blocker: int | None = None
    for index, rule in ordered:
        if blocker is not None:
            issues.append(
                Issue(
                    code=CODE_SHADOWED_RULE,
                    severity=Severity.WARNING,
                    message=(
                        f"Rule {index} is unreachable (default rule "
                        f"{blocker} is evaluated before it)"
                    ),
                    location=rule_location(selector, index),
                    selector=selector,
                )
            )
        elif isinstance(rule, DefaultRule):
            blocker = index
    return issues


def validate_rule_set(selector: str, rules: Sequence[Rule]) -> list[Issue]:
    """Validate the rules registered for one selector."""
    if not rules:
        return [
            Issue(
                code=CODE_EMPTY_RULESET,
                severity=Severity.WARNING,
                message="Selector has no rules; it never adds properties",
                location=rule_location(selector),
                selector=selector,
            )
        ]
    issues: list[Issue] = []
    for index, rule in enumerate(rules):
        issues.extend(_validate_rule(selector, index, rule))
    issues.extend(_shadowed_rule_issues(selector, rules))
    return issues


def validate_config(config: AutocaptureConfig) -> list[Issue]:
    """Report configuration problems that resolution would silently skip.

    Args:
        config: A loaded autocapture configuration.

    Returns:
        Issues in selector order, errors and warnings mixed.
    """
    rule_sets = config.css_selector_allowlist_extra_properties or {}
    allowlist = config.css_selector_allowlist
    issues: list[Issue] = []
    for selector, rules in rule_sets.items():
        if allowlist is not None and selector not in allowlist:
            issues.append(
                Issue(
                    code=CODE_SELECTOR_NOT_ALLOWLISTED,
                    severity=Severity.WARNING,
                    message=(
                        f"Selector {selector!r} is not in "
                        "css_selector_allowlist; its rules are never used"
                    ),
                    location=rule_location(selector),
                    selector=selector,
                )
            )
        issues.extend(validate_rule_set(selector, rules))
    return issues

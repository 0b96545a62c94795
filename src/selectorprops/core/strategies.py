"""Strategy evaluators: does a rule match the current runtime context?

Every evaluator is a pure predicate. Malformed configuration (missing or
invalid ``contains`` pattern, unknown strategy tag) is answered with
``False`` so a single bad rule is skipped instead of aborting the capture.
"""

import logging
import re
from functools import lru_cache
from typing import Any

from selectorprops.core.models import (
    DefaultRule,
    Rule,
    RuntimeContext,
    UnrecognizedRule,
    UrlContainsRule,
)

_LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def compile_url_pattern(pattern: str) -> re.Pattern[str] | None:
    """Compile a ``contains`` pattern, returning None when it is invalid."""
    try:
        return re.compile(pattern)
    except re.error:
        _LOGGER.debug("invalid urlContains pattern %r", pattern, exc_info=True)
        return None


def url_pattern_error(pattern: str) -> str | None:
    """Return the compiler's message for an invalid pattern, else None."""
    try:
        re.compile(pattern)
    except re.error as err:
        return str(err)
    return None


def eval_url_contains(contains: Any, url: str | None) -> bool:
    if not isinstance(contains, str) or not contains or url is None:
        return False
    compiled = compile_url_pattern(contains)
    if compiled is None:
        return False
    return compiled.search(url) is not None


def eval_strategy(rule: Rule, context: RuntimeContext) -> bool:
    match rule:
        case DefaultRule():
            return True
        case UrlContainsRule(contains=contains):
            return eval_url_contains(contains, context.url)
        case UnrecognizedRule(strategy=strategy):
            _LOGGER.debug("skipping rule with unknown strategy %r", strategy)
            return False
        case _:
            _LOGGER.debug("skipping unsupported rule object %r", rule)
            return False


def _describe_properties(rule: Rule) -> str:
    if not rule.properties:
        return "{}"
    parts = [f"{key}={value!r}" for key, value in rule.properties.items()]
    return "{" + ", ".join(parts) + "}"


def describe_rule(rule: Rule) -> str:
    """One-line description of a rule, e.g. for listing a configuration."""
    match rule:
        case DefaultRule():
            condition = "always"
        case UrlContainsRule(contains=None | ""):
            condition = "url pattern missing (never matches)"
        case UrlContainsRule(contains=str() as contains):
            condition = f"url matches /{contains}/"
        case UrlContainsRule(contains=contains):
            condition = (
                f"url pattern {contains!r} is not a string (never matches)"
            )
        case UnrecognizedRule(strategy=strategy):
            condition = f"unknown strategy {strategy!r} (never matches)"
        case _:
            condition = "unsupported rule (never matches)"
    return (
        f"priority {rule.priority}: {condition} -> "
        f"{_describe_properties(rule)}"
    )

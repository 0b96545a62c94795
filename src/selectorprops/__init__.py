"""selectorprops: extra event properties for allowlisted autocapture selectors."""

from selectorprops.allowlist import (
    extra_properties_for_event,
    first_matching_selector,
    merge_extra_properties,
)
from selectorprops.config import (
    AutocaptureConfig,
    ConfigLoadError,
    load_config,
    parse_config,
)
from selectorprops.core.models import (
    DefaultRule,
    PropertyMap,
    Rule,
    RuleStrategy,
    RuntimeContext,
    SelectorRuleSets,
    UnrecognizedRule,
    UrlContainsRule,
)
from selectorprops.core.strategies import describe_rule, eval_strategy
from selectorprops.resolver import (
    resolve_extra_properties,
    resolve_rules,
    select_rule,
    sort_rules,
)
from selectorprops.validate import validate_config

__all__ = [
    "AutocaptureConfig",
    "ConfigLoadError",
    "DefaultRule",
    "PropertyMap",
    "Rule",
    "RuleStrategy",
    "RuntimeContext",
    "SelectorRuleSets",
    "UnrecognizedRule",
    "UrlContainsRule",
    "describe_rule",
    "eval_strategy",
    "extra_properties_for_event",
    "first_matching_selector",
    "load_config",
    "merge_extra_properties",
    "parse_config",
    "resolve_extra_properties",
    "resolve_rules",
    "select_rule",
    "sort_rules",
    "validate_config",
]

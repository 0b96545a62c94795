from collections.abc import Mapping, Sequence

from selectorprops.core.models import PropertyMap, Rule, RuntimeContext
from selectorprops.core.strategies import eval_strategy


def sort_rules(rules: Sequence[Rule]) -> list[Rule]:
    """Evaluation order: ascending priority, equal priorities keep list order.

    ``sorted`` is stable, which is what keeps same-priority rules in the
    order they were configured.
    """
    return sorted(rules, key=lambda rule: rule.priority)


def select_rule(
    rules: Sequence[Rule] | None, context: RuntimeContext
) -> Rule | None:
    """Return the first rule, in evaluation order, that matches context."""
    if not rules:
        return None
    for rule in sort_rules(rules):
        if eval_strategy(rule, context):
            return rule
    return None


def resolve_rules(
    rules: Sequence[Rule] | None, context: RuntimeContext
) -> PropertyMap | None:
    """Evaluate rules with first-match-wins semantics.

    Returns a copy of the winning rule's properties (an empty dict is a
    valid "matched, nothing to add" result) or None when nothing matched.
    """
    rule = select_rule(rules, context)
    if rule is None:
        return None
    return dict(rule.properties)


def resolve_extra_properties(
    matched_selector: str | None,
    selector_rule_sets: Mapping[str, Sequence[Rule] | None] | None,
    current_url: str | None = None,
) -> PropertyMap | None:
    """Resolve the extra event properties for the selector that matched.

    Args:
        matched_selector: Allowlist selector chosen upstream for the element.
        selector_rule_sets: Selector -> rules configuration, None when the
            host has no extra-properties configuration.
        current_url: Page URL at interaction time, None when unavailable.

    Returns:
        The properties to merge into the event, or None when the selector
        has no rules or none of them matched.
    """
    if matched_selector is None or not selector_rule_sets:
        return None
    rules = selector_rule_sets.get(matched_selector)
    return resolve_rules(rules, RuntimeContext(url=current_url))

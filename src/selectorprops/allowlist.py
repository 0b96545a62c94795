from collections.abc import Callable, Mapping, Sequence
from typing import Any

from selectorprops.config import AutocaptureConfig
from selectorprops.core.models import PropertyMap
from selectorprops.resolver import resolve_extra_properties

SelectorMatcher = Callable[[str], bool]


def first_matching_selector(
    allowlist: Sequence[str] | None, is_match: SelectorMatcher
) -> str | None:
    """First allowlist selector, in configured order, that is_match accepts.

    ``is_match`` is supplied by the host and performs the actual element
    matching (e.g. a ``closest()`` lookup).
    """
    if not allowlist:
        return None
    for selector in allowlist:
        if is_match(selector):
            return selector
    return None


def merge_extra_properties(
    event_properties: Mapping[str, Any], extra: PropertyMap | None
) -> dict[str, Any]:
    merged = dict(event_properties)
    if extra:
        merged.update(extra)
    return merged


def extra_properties_for_event(
    config: AutocaptureConfig,
    is_match: SelectorMatcher,
    current_url: str | None = None,
) -> PropertyMap | None:
    """Resolve the extra properties for an interaction under config."""
    rule_sets = config.css_selector_allowlist_extra_properties
    if not rule_sets:
        return None
    selector = first_matching_selector(config.css_selector_allowlist, is_match)
    return resolve_extra_properties(selector, rule_sets, current_url)

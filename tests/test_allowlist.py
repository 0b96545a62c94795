from selectorprops.allowlist import (
    extra_properties_for_event,
    first_matching_selector,
    merge_extra_properties,
)
from selectorprops.config import parse_config


def _matcher(*matching: str):
    matching_set = set(matching)
    return lambda selector: selector in matching_set


class TestFirstMatchingSelector:
    def test_allowlist_order_wins(self) -> None:
        allowlist = [".btn", ".primary", "[data-track]"]
        is_match = _matcher("[data-track]", ".primary", ".btn")
        assert first_matching_selector(allowlist, is_match) == ".btn"

    def test_skips_non_matching(self) -> None:
        allowlist = [".btn", ".primary"]
        assert first_matching_selector(allowlist, _matcher(".primary")) == (
            ".primary"
        )

    def test_no_match(self) -> None:
        assert first_matching_selector([".btn"], _matcher(".other")) is None

    def test_absent_allowlist(self) -> None:
        assert first_matching_selector(None, _matcher(".btn")) is None
        assert first_matching_selector([], _matcher(".btn")) is None

    def test_stops_at_first_match(self) -> None:
        seen: list[str] = []

        def is_match(selector: str) -> bool:
            seen.append(selector)
            return selector == ".b"

        first_matching_selector([".a", ".b", ".c"], is_match)
        assert seen == [".a", ".b"]


class TestMergeExtraProperties:
    def test_overwrites_keys(self) -> None:
        event = {"$event_type": "click", "custom-id": "old"}
        merged = merge_extra_properties(event, {"custom-id": "123"})
        assert merged == {"$event_type": "click", "custom-id": "123"}
        assert event["custom-id"] == "old"

    def test_none_or_empty_is_noop(self) -> None:
        event = {"$event_type": "click"}
        assert merge_extra_properties(event, None) == event
        assert merge_extra_properties(event, {}) == event


class TestExtraPropertiesForEvent:
    def test_first_matching_selector_properties(self) -> None:
        config = parse_config(
            {
                "css_selector_allowlist": [".btn", ".primary", "[data-track]"],
                "css_selector_allowlist_extra_properties": {
                    ".btn": {"button-type": "btn-class"},
                    ".primary": {"button-type": "primary-class"},
                    "[data-track]": {"button-type": "data-attribute"},
                },
            }
        )
        result = extra_properties_for_event(
            config, _matcher(".btn", ".primary", "[data-track]")
        )
        assert result == {"button-type": "btn-class"}

    def test_url_rules(self) -> None:
        config = parse_config(
            {
                "css_selector_allowlist": [".track-me"],
                "css_selector_allowlist_extra_properties": {
                    ".track-me": [
                        {
                            "strategy": "urlContains",
                            "priority": 1,
                            "contains": "/dash",
                            "properties": {"x": 1},
                        },
                        {
                            "strategy": "default",
                            "priority": 2,
                            "properties": {"x": 2},
                        },
                    ]
                },
            }
        )
        is_match = _matcher(".track-me")
        assert extra_properties_for_event(
            config, is_match, "https://example.com/dash"
        ) == {"x": 1}
        assert extra_properties_for_event(
            config, is_match, "https://example.com/settings"
        ) == {"x": 2}

    def test_extra_properties_not_configured(self) -> None:
        config = parse_config({"css_selector_allowlist": [".track-me"]})
        assert extra_properties_for_event(config, _matcher(".track-me")) is None

    def test_allowlist_not_configured(self) -> None:
        config = parse_config(
            {
                "css_selector_allowlist_extra_properties": {
                    ".track-me": {"custom-id": "123"}
                }
            }
        )
        assert extra_properties_for_event(config, _matcher(".track-me")) is None

    def test_selector_without_extra_properties(self) -> None:
        config = parse_config(
            {
                "css_selector_allowlist": [".track-me"],
                "css_selector_allowlist_extra_properties": {
                    ".other-selector": {"custom-id": "123"}
                },
            }
        )
        assert extra_properties_for_event(config, _matcher(".track-me")) is None

    def test_empty_property_map_matches(self) -> None:
        config = parse_config(
            {
                "css_selector_allowlist": [".track-me"],
                "css_selector_allowlist_extra_properties": {".track-me": {}},
            }
        )
        assert extra_properties_for_event(config, _matcher(".track-me")) == {}

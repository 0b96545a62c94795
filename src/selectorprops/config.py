"""Autocapture configuration: parsed and validated once at load time.

Per-selector extra-properties entries are accepted in three shapes and
normalized to a list of rules before validation:

* a list of rule objects,
* a ``{"rules": [...]}`` wrapper,
* a flat property map, which becomes a single ``default`` rule.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import srsly
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from selectorprops.core.models import RuleStrategy, SelectorRuleSets
from selectorprops.core.validate import format_error_location

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class ConfigLoadError(ValueError):
    def __init__(self, *, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"invalid configuration in {source}: {reason}")


def _legacy_rule(properties: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "strategy": RuleStrategy.DEFAULT.value,
        "priority": 0,
        "properties": dict(properties),
    }


def _normalize_rule_entry(entry: Any) -> Any:
    if entry is None:
        return []
    if isinstance(entry, list):
        return entry
    if isinstance(entry, Mapping):
        rules = entry.get("rules")
        if isinstance(rules, list):
            return rules
        return [_legacy_rule(entry)]
    # Leave anything else for the model to reject.
    return entry


class AutocaptureConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    css_selector_allowlist: list[str] | None = None
    css_selector_allowlist_extra_properties: SelectorRuleSets | None = None

    @field_validator("css_selector_allowlist_extra_properties", mode="before")
    @classmethod
    def normalize_rule_sets(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {
            selector: _normalize_rule_entry(entry)
            for selector, entry in value.items()
        }


def _describe_validation_error(err: ValidationError) -> str:
    first_error = err.errors(include_url=False)[0]
    loc = format_error_location(first_error["loc"])
    message = first_error["msg"]
    if not loc:
        return message
    return f"'{loc}': {message}"


def parse_config(data: Any, *, source: str = "<data>") -> AutocaptureConfig:
    """Validate an in-memory configuration mapping."""
    try:
        return AutocaptureConfig.model_validate(data)
    except ValidationError as err:
        raise ConfigLoadError(
            source=source, reason=_describe_validation_error(err)
        ) from err


def _read_raw(path: Path) -> Any:
    if path.suffix.lower() in _YAML_SUFFIXES:
        return srsly.read_yaml(path)
    return srsly.read_json(path)


def load_config(path: str | Path) -> AutocaptureConfig:
    """Read a JSON or YAML configuration file into an AutocaptureConfig."""
    path = Path(path)
    if not path.is_file():
        raise ConfigLoadError(source=str(path), reason="file not found")
    try:
        raw = _read_raw(path)
    except ValueError as err:
        raise ConfigLoadError(
            source=str(path), reason=f"unreadable file ({err})"
        ) from err
    config = parse_config(raw, source=str(path))
    rule_sets = config.css_selector_allowlist_extra_properties or {}
    logger.debug(
        "loaded %s: %d allowlisted selectors, %d selectors with rules",
        path,
        len(config.css_selector_allowlist or []),
        len(rule_sets),
    )
    return config

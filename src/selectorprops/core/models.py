from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
)

PropertyValue = bool | int | float | str
PropertyMap = dict[str, PropertyValue]

UNRECOGNIZED_TAG = "unrecognized"


class RuleStrategy(str, Enum):
    DEFAULT = "default"
    URL_CONTAINS = "urlContains"


class _RuleBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: int = 0
    properties: PropertyMap = Field(default_factory=dict)

    @field_validator("priority", mode="before")
    @classmethod
    def reject_bool_priority(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("priority must be an integer, not a bool")
        return v


class DefaultRule(_RuleBase):
    """Unconditional rule, typically the last link of a fallback chain."""

    strategy: Literal["default"] = "default"


class UrlContainsRule(_RuleBase):
    """Matches when ``contains`` is found anywhere in the current page URL."""

    strategy: Literal["urlContains"] = "urlContains"
    # Kept as given; a non-string pattern makes the rule never match.
    contains: Any = None


class UnrecognizedRule(_RuleBase):
    """Rule whose strategy tag this version does not know; never matches."""

    # Raw tag as configured, possibly not a string.
    strategy: Any = None


_KNOWN_TAGS = frozenset(s.value for s in RuleStrategy)


def _strategy_tag(value: Any) -> str:
    # Unknown or missing tags route to UnrecognizedRule instead of failing.
    if isinstance(value, UnrecognizedRule):
        return UNRECOGNIZED_TAG
    if isinstance(value, dict):
        strategy = value.get("strategy")
    else:
        strategy = getattr(value, "strategy", None)
    if isinstance(strategy, str) and strategy in _KNOWN_TAGS:
        return strategy
    return UNRECOGNIZED_TAG


Rule = Annotated[
    Union[
        Annotated[DefaultRule, Tag(RuleStrategy.DEFAULT.value)],
        Annotated[UrlContainsRule, Tag(RuleStrategy.URL_CONTAINS.value)],
        Annotated[UnrecognizedRule, Tag(UNRECOGNIZED_TAG)],
    ],
    Discriminator(_strategy_tag),
]

SelectorRuleSets = dict[str, list[Rule]]


class RuntimeContext(BaseModel):
    """Read-only snapshot of the page at the time of the interaction."""

    model_config = ConfigDict(frozen=True)

    url: str | None = Field(
        default=None, description="Current page URL, None outside a browser"
    )

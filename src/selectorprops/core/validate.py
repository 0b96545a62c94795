from collections.abc import Iterable, Sequence
from enum import Enum

from pydantic import BaseModel, Field

from selectorprops.core.models import UNRECOGNIZED_TAG, RuleStrategy

RULE_SETS_KEY = "css_selector_allowlist_extra_properties"

_UNION_TAGS = frozenset(s.value for s in RuleStrategy) | {UNRECOGNIZED_TAG}


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Issue(BaseModel):
    code: str = Field(description="Issue code, e.g. INVALID_PATTERN")
    severity: Severity = Field(description="Error or warning")
    message: str = Field(description="Human-readable description")
    location: str = Field(
        description="Config path, e.g. "
        "css_selector_allowlist_extra_properties[.track-me][1]"
    )
    selector: str | None = Field(
        default=None, description="Selector the issue belongs to, if any"
    )

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


def count_issues(issues: Iterable[Issue]) -> tuple[int, int]:
    """Return (errors, warnings)."""
    n_errors = 0
    n_warnings = 0
    for issue in issues:
        if issue.is_error:
            n_errors += 1
        else:
            n_warnings += 1
    return n_errors, n_warnings


def rule_location(selector: str, index: int | None = None) -> str:
    if index is None:
        return f"{RULE_SETS_KEY}[{selector}]"
    return f"{RULE_SETS_KEY}[{selector}][{index}]"


def format_error_location(loc: Sequence[int | str]) -> str:
    """Render a pydantic error ``loc`` as a config path.

    Rule errors use the same ``[selector][index]`` form as lint issues, and
    the union tag pydantic inserts after the index is dropped, e.g.
    ``css_selector_allowlist_extra_properties[.x][0].priority``.
    """
    parts = list(loc)
    if len(parts) < 2 or parts[0] != RULE_SETS_KEY:
        return ".".join(str(part) for part in parts)

    index: int | None = None
    rest = parts[2:]
    if rest and isinstance(rest[0], int):
        index = rest[0]
        rest = rest[1:]
        if rest and rest[0] in _UNION_TAGS:
            rest = rest[1:]

    path = rule_location(str(parts[1]), index)
    if rest:
        path += "." + ".".join(str(part) for part in rest)
    return path

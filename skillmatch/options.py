"""Match option bundle: fuzzy threshold plus per-category weights."""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Union

from .logger import get_logger

DEFAULT_FUZZY_THRESHOLD = 0.85

# camelCase keys accepted for payloads coming from the marketplace API
_CAMEL_CASE_KEYS = {
    "fuzzyThreshold": "fuzzy_threshold",
    "exactMatchWeight": "exact_match_weight",
    "abbreviationMatchWeight": "abbreviation_match_weight",
    "partialMatchWeight": "partial_match_weight",
    "fuzzyMatchWeight": "fuzzy_match_weight",
}


@dataclass(frozen=True)
class MatchOptions:
    """
    Thresholds and weights used when aggregating skill matches.

    Values are used as given; out-of-range values are accepted and only
    reported through a logged warning, once per options object.
    """

    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    exact_match_weight: float = 1.0
    abbreviation_match_weight: float = 0.98
    partial_match_weight: float = 0.85
    fuzzy_match_weight: float = 0.6

    def __post_init__(self):
        problems = self.out_of_range()
        if problems:
            get_logger().warning("Match options outside [0, 1] used as-is", **problems)

    def weight_for(self, category: str) -> float:
        """Weight applied to a match of the given category (0 for no match)."""
        return {
            "exact": self.exact_match_weight,
            "abbreviation": self.abbreviation_match_weight,
            "partial": self.partial_match_weight,
            "fuzzy": self.fuzzy_match_weight,
        }.get(category, 0.0)

    def out_of_range(self) -> Dict[str, float]:
        """Fields holding values that will produce scores outside [0, 1]."""
        problems = {}
        if not 0.0 <= self.fuzzy_threshold <= 1.0:
            problems["fuzzy_threshold"] = self.fuzzy_threshold
        for f in fields(self):
            if f.name.endswith("_weight"):
                value = getattr(self, f.name)
                if not 0.0 <= value <= 1.0:
                    problems[f.name] = value
        return problems

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, data: Mapping) -> "MatchOptions":
        """Build options from snake_case or camelCase keys; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, float] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in known and value is not None:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise TypeError(f"Option '{key}' must be a number, got {type(value).__name__}")
                values[name] = float(value)
        return cls(**values)


OptionsLike = Union[MatchOptions, Mapping, None]


def resolve_options(options: OptionsLike = None) -> MatchOptions:
    """
    Coerce caller-supplied options into MatchOptions, filling in defaults.

    MatchOptions instances pass through untouched; only building new
    options can log the out-of-range warning.
    """
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, MatchOptions):
        return options
    if isinstance(options, Mapping):
        return MatchOptions.from_mapping(options)
    raise TypeError(f"Unsupported options type: {type(options).__name__}")


def with_overrides(options: OptionsLike = None, **overrides: Optional[Any]) -> MatchOptions:
    """Copy of resolved options with non-None overrides applied."""
    base = resolve_options(options)
    changes = {k: float(v) for k, v in overrides.items() if v is not None}
    return replace(base, **changes) if changes else base


DEFAULT_OPTIONS = MatchOptions()

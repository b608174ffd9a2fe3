"""
Tests for match option handling.
"""

import dataclasses

import pytest
from skillmatch.options import DEFAULT_OPTIONS, MatchOptions, resolve_options, with_overrides


class TestMatchOptions:
    """Defaults, weights and construction from mappings."""

    def test_defaults(self):
        assert DEFAULT_OPTIONS.to_dict() == {
            "fuzzy_threshold": 0.85,
            "exact_match_weight": 1.0,
            "abbreviation_match_weight": 0.98,
            "partial_match_weight": 0.85,
            "fuzzy_match_weight": 0.6,
        }

    def test_weight_for(self):
        assert DEFAULT_OPTIONS.weight_for("exact") == 1.0
        assert DEFAULT_OPTIONS.weight_for("abbreviation") == 0.98
        assert DEFAULT_OPTIONS.weight_for("partial") == 0.85
        assert DEFAULT_OPTIONS.weight_for("fuzzy") == 0.6
        assert DEFAULT_OPTIONS.weight_for("none") == 0.0

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_OPTIONS.fuzzy_threshold = 0.5

    def test_from_camel_case(self):
        options = MatchOptions.from_mapping({"fuzzyThreshold": 0.9, "partialMatchWeight": 1})
        assert options.fuzzy_threshold == 0.9
        assert options.partial_match_weight == 1.0
        assert options.exact_match_weight == 1.0

    def test_unknown_keys_ignored(self):
        assert MatchOptions.from_mapping({"minMatch": 90}) == DEFAULT_OPTIONS

    @pytest.mark.parametrize("value", ["0.9", True, [0.9]])
    def test_type_checked(self, value):
        with pytest.raises(TypeError):
            MatchOptions.from_mapping({"fuzzyThreshold": value})

    def test_out_of_range_detected(self):
        options = MatchOptions(fuzzy_threshold=1.5, fuzzy_match_weight=-1)
        assert options.out_of_range() == {"fuzzy_threshold": 1.5, "fuzzy_match_weight": -1}
        assert DEFAULT_OPTIONS.out_of_range() == {}


class TestResolveOptions:
    """Coercion of caller-supplied options."""

    def test_none_and_empty(self):
        assert resolve_options(None) is DEFAULT_OPTIONS
        assert resolve_options({}) == DEFAULT_OPTIONS

    def test_instance_passthrough(self):
        options = MatchOptions(fuzzy_threshold=0.7)
        assert resolve_options(options) is options

    def test_out_of_range_kept(self):
        """Permissive: out-of-range values are used as given."""
        assert resolve_options({"fuzzyThreshold": 2.0}).fuzzy_threshold == 2.0

    def test_out_of_range_warned_on_construction(self, caplog):
        options = resolve_options({"fuzzyThreshold": 2.0})
        resolve_options(options)
        with_overrides(None, fuzzy_threshold=1.5)
        warnings = [r for r in caplog.records if "outside [0, 1]" in r.getMessage()]
        assert len(warnings) == 2
        assert "fuzzy_threshold" in warnings[1].getMessage()

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            resolve_options("strict")

    def test_with_overrides(self):
        assert with_overrides(None, fuzzy_threshold=0.7).fuzzy_threshold == 0.7
        assert with_overrides(None, fuzzy_threshold=None) is DEFAULT_OPTIONS

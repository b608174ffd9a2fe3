"""
Tests for skill pair matching and the abbreviation map.
"""

import dataclasses

import pytest
from skillmatch.abbreviations import DEFAULT_ABBREVIATIONS, AbbreviationMap
from skillmatch.matcher import MatchResult, SkillPairMatcher, check_skill_match


class TestExactMatch:
    """Exact matches win over every other rule."""

    def test_case_insensitive(self):
        result = check_skill_match("React", "react", 0.5)
        assert result == MatchResult(True, 1.0, "exact")

    def test_trimmed(self):
        result = check_skill_match("  Node.js ", "node.js")
        assert result.category == "exact"
        assert result.score == 1.0

    @pytest.mark.parametrize("threshold", [0.0, 0.85, 1.0, 5.0])
    def test_any_threshold(self, threshold):
        assert check_skill_match("SQL", "sql", threshold).category == "exact"


class TestAbbreviationMatch:
    """Known synonyms match at a fixed 0.98 score."""

    def test_js_javascript(self):
        """Abbreviation must not be shadowed by any fuzzy score."""
        result = check_skill_match("js", "javascript")
        assert result == MatchResult(True, 0.98, "abbreviation")

    def test_both_directions(self):
        assert check_skill_match("javascript", "js").category == "abbreviation"
        assert check_skill_match("Machine Learning", "ML").category == "abbreviation"
        assert check_skill_match("ml", "machine learning").category == "abbreviation"

    def test_variants_in_same_group(self):
        assert check_skill_match("node", "node.js").category == "abbreviation"
        assert check_skill_match("nodejs", "node.js").category == "abbreviation"
        assert check_skill_match("Express.js", "express").category == "abbreviation"

    def test_beats_partial(self):
        """css/css3 is a substring pair but the synonym rule comes first."""
        result = check_skill_match("css3", "css")
        assert result.category == "abbreviation"
        assert result.score == 0.98


class TestPartialMatch:
    """Substring containment scored by length ratio."""

    def test_suffixed_variant(self):
        result = check_skill_match("javascript es6", "javascript")
        assert result.is_match
        assert result.category == "partial"
        assert result.score == pytest.approx(0.9 * 10 / 14)

    def test_short_substring_falls_through(self):
        """java/javascript has ratio 0.4, below the 0.7 cutoff."""
        result = check_skill_match("java", "javascript")
        assert not result.is_match
        assert result.category == "none"
        assert result.score == pytest.approx(0.4)

    def test_ratio_at_cutoff(self):
        result = check_skill_match("abcdefg", "abcdefghij")
        assert result.category == "partial"
        assert result.score == pytest.approx(0.9 * 0.7)


class TestFuzzyMatch:
    """Typo tolerance via similarity threshold."""

    def test_typo(self):
        result = check_skill_match("javascrpt", "javascript")
        assert result.is_match
        assert result.category == "fuzzy"
        assert result.score == pytest.approx(0.9 * 0.8)

    def test_threshold_respected(self):
        result = check_skill_match("javascrpt", "javascript", 0.95)
        assert not result.is_match
        assert result.category == "none"
        assert result.score == pytest.approx(0.9)

    def test_default_threshold(self):
        matcher = SkillPairMatcher()
        assert matcher.match("javascrpt", "javascript", None).category == "fuzzy"
        assert matcher.match("pyton", "python", None).category == "none"


class TestNoMatch:
    """Unrelated skills."""

    def test_python_java(self):
        result = check_skill_match("python", "java", 0.85)
        assert not result.is_match
        assert result.category == "none"
        assert 0.0 <= result.score < 0.85

    def test_result_is_immutable(self):
        result = check_skill_match("python", "java")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.score = 1.0

    def test_to_dict(self):
        assert check_skill_match("js", "javascript").to_dict() == {
            "isMatch": True,
            "score": 0.98,
            "category": "abbreviation",
        }


class TestAbbreviationMap:
    """Canonical synonym table."""

    REQUIRED_PAIRS = [
        ("js", "javascript"), ("ts", "typescript"), ("py", "python"),
        ("c#", "csharp"), ("c++", "cplusplus"), ("css", "css3"),
        ("html", "html5"), ("node", "nodejs"), ("node", "node.js"),
        ("react", "reactjs"), ("react", "react.js"), ("vue", "vuejs"),
        ("vue", "vue.js"), ("angular", "angularjs"), ("ml", "machine learning"),
        ("ai", "artificial intelligence"), ("db", "database"),
        ("sql", "structured query language"), ("mongodb", "mongo"),
        ("postgresql", "postgres"), ("express", "expressjs"), ("express", "express.js"),
    ]

    @pytest.mark.parametrize("a,b", REQUIRED_PAIRS)
    def test_known_pairs_both_directions(self, a, b):
        assert DEFAULT_ABBREVIATIONS.are_equivalent(a, b)
        assert DEFAULT_ABBREVIATIONS.are_equivalent(b, a)

    def test_symmetric_by_construction(self):
        for group in (("javascript", "js"), ("nodejs", "node", "node.js")):
            for term in group:
                for other in DEFAULT_ABBREVIATIONS.synonyms(term):
                    assert term in DEFAULT_ABBREVIATIONS.synonyms(other)

    def test_canonical_form(self):
        assert DEFAULT_ABBREVIATIONS.canonical("js") == "javascript"
        assert DEFAULT_ABBREVIATIONS.canonical("node.js") == "nodejs"
        assert DEFAULT_ABBREVIATIONS.canonical("cobol") is None

    def test_not_equivalent_to_itself(self):
        assert not DEFAULT_ABBREVIATIONS.are_equivalent("js", "js")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_ABBREVIATIONS._synonyms["go"] = frozenset({"golang"})

    def test_injected_map(self):
        """A matcher only knows the synonyms it was given."""
        matcher = SkillPairMatcher(AbbreviationMap([("kubernetes", "k8s")]))
        assert matcher.match("K8s", "Kubernetes").category == "abbreviation"
        assert matcher.match("js", "javascript").category == "none"
        assert "k8s" in matcher.abbreviations
        assert len(matcher.abbreviations) == 2

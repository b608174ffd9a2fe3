"""
Skill pair matching.

Classifies one candidate skill against one required skill. Rules are
evaluated in strict priority order and the first one that applies wins:

    exact -> abbreviation -> partial substring -> fuzzy -> none

Exact and known-synonym matches are never shadowed by a high fuzzy score,
and fuzzy scores are discounted so they rank below structural matches of
the same raw similarity.
"""

from dataclasses import dataclass
from typing import Optional

from .abbreviations import DEFAULT_ABBREVIATIONS, AbbreviationMap
from .normalize import normalize_skill
from .options import DEFAULT_FUZZY_THRESHOLD
from .similarity import similarity

EXACT = "exact"
ABBREVIATION = "abbreviation"
PARTIAL = "partial"
FUZZY = "fuzzy"
NONE = "none"

CATEGORIES = (EXACT, ABBREVIATION, PARTIAL, FUZZY, NONE)

ABBREVIATION_SCORE = 0.98
PARTIAL_MIN_RATIO = 0.7
PARTIAL_SCORE_FACTOR = 0.9
FUZZY_SCORE_FACTOR = 0.8


@dataclass(frozen=True)
class MatchResult:
    """Outcome of comparing one candidate skill with one required skill."""

    is_match: bool
    score: float
    category: str

    def to_dict(self) -> dict:
        return {"isMatch": self.is_match, "score": self.score, "category": self.category}


NO_MATCH = MatchResult(False, 0.0, NONE)


class SkillPairMatcher:
    """Skill pair classifier bound to an abbreviation map."""

    def __init__(self, abbreviations: Optional[AbbreviationMap] = None):
        self.abbreviations = abbreviations or DEFAULT_ABBREVIATIONS

    def match(
        self,
        candidate_skill: str,
        required_skill: str,
        fuzzy_threshold: Optional[float] = None,
    ) -> MatchResult:
        if fuzzy_threshold is None:
            fuzzy_threshold = DEFAULT_FUZZY_THRESHOLD

        candidate = normalize_skill(candidate_skill)
        required = normalize_skill(required_skill)

        if candidate == required:
            return MatchResult(True, 1.0, EXACT)

        if self.abbreviations.are_equivalent(candidate, required):
            return MatchResult(True, ABBREVIATION_SCORE, ABBREVIATION)

        if candidate in required or required in candidate:
            shorter, longer = sorted((candidate, required), key=len)
            ratio = len(shorter) / len(longer)
            if ratio >= PARTIAL_MIN_RATIO:
                return MatchResult(True, PARTIAL_SCORE_FACTOR * ratio, PARTIAL)

        score = similarity(candidate, required)
        if score >= fuzzy_threshold:
            return MatchResult(True, score * FUZZY_SCORE_FACTOR, FUZZY)

        return MatchResult(False, score, NONE)


DEFAULT_MATCHER = SkillPairMatcher()


def check_skill_match(
    candidate_skill: str,
    required_skill: str,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> MatchResult:
    """Classify a skill pair with the built-in abbreviation map."""
    return DEFAULT_MATCHER.match(candidate_skill, required_skill, fuzzy_threshold)

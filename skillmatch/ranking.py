"""
Candidate ranking.

Scores a pool of candidates against one job's required skills, keeps those
at or above a minimum percentage and orders them best first. Ties keep the
pool's original order.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, List, Optional

from .logger import get_logger
from .matcher import SkillPairMatcher
from .normalize import is_list_shaped
from .options import OptionsLike, resolve_options
from .scoring import SCORING_ERRORS, calculate_match_percentage

DEFAULT_MIN_MATCH_PERCENTAGE = 30.0


@dataclass(frozen=True)
class CandidateScore:
    """A candidate's match percentage for one job."""

    candidate_id: Any
    match_percentage: float
    candidate_data: Any = field(default=None, compare=False, repr=False)

    def to_record(self) -> dict:
        """Shape stored on the job record: {student, matchPercentage}."""
        return {"student": self.candidate_id, "matchPercentage": self.match_percentage}


def candidate_field(candidate: Any, name: str, default: Any = None) -> Any:
    """Read a field from a dict record or an object with attributes."""
    if isinstance(candidate, Mapping):
        return candidate.get(name, default)
    return getattr(candidate, name, default)


def candidate_id(candidate: Any) -> Any:
    value = candidate_field(candidate, "id")
    if value is None:
        value = candidate_field(candidate, "_id")
    return value


def find_matching_candidates(
    candidates: Any,
    required_skills: Any,
    min_match_percentage: float = DEFAULT_MIN_MATCH_PERCENTAGE,
    options: OptionsLike = None,
    matcher: Optional[SkillPairMatcher] = None,
) -> List[CandidateScore]:
    """
    Rank candidates by match percentage, best first.

    Candidates without a well-formed skills list are skipped. A malformed
    pool, or an expected fault while ranking, yields an empty list.

    Args:
        candidates: Records exposing `id` (or `_id`) and `skills`
        required_skills: The job's required skills
        min_match_percentage: Inclusive lower bound on the percentage
        options: Match options (see MatchOptions)
        matcher: Skill pair matcher override

    Returns:
        List of CandidateScore sorted by match_percentage descending
    """
    logger = get_logger()

    if not is_list_shaped(candidates) or not is_list_shaped(required_skills):
        return []

    try:
        resolved = resolve_options(options)
        matches: List[CandidateScore] = []

        for candidate in candidates:
            skills = candidate_field(candidate, "skills")
            if not is_list_shaped(skills):
                logger.record_candidate_skipped()
                continue

            percentage = calculate_match_percentage(skills, required_skills, resolved, matcher)
            logger.record_candidate_scored()

            if percentage >= min_match_percentage:
                logger.record_candidate_matched()
                matches.append(CandidateScore(candidate_id(candidate), percentage, candidate))

        # sorted() is stable, so equal percentages keep pool order
        return sorted(matches, key=lambda m: m.match_percentage, reverse=True)

    except SCORING_ERRORS as e:
        logger.record_scoring_error(type(e).__name__)
        logger.error("Error finding matching candidates", error=str(e))
        return []


def filter_by_match_percentage(matches: Any, min_percentage: Any) -> list:
    """
    Re-filter an already ranked list against a new threshold.

    Accepts CandidateScore items or dicts carrying `matchPercentage` /
    `match_percentage`. Scores are not recomputed. Non-list input or a
    non-numeric threshold yields an empty list.
    """
    if not is_list_shaped(matches):
        return []
    if isinstance(min_percentage, bool) or not isinstance(min_percentage, Real):
        return []

    kept = []
    for match in matches:
        percentage = _percentage_of(match)
        if percentage is not None and percentage >= min_percentage:
            kept.append(match)
    return kept


def _percentage_of(match: Any) -> Optional[float]:
    if isinstance(match, CandidateScore):
        return match.match_percentage
    value = candidate_field(match, "matchPercentage")
    if value is None:
        value = candidate_field(match, "match_percentage")
    if isinstance(value, Real) and not isinstance(value, bool):
        return float(value)
    return None

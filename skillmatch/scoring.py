"""
Aggregate skill-set scoring.

calculate_match_percentage() returns a percentage in [0, 100] (for weights
within [0, 1]). It never raises on bad input: malformed or empty skill lists
score 0, and expected faults while scoring (type or value problems inside
the records) are logged and also score 0, so a scoring problem can never
block job creation.
"""

import math
from typing import Any, List, Optional, Sequence

from .logger import get_logger
from .matcher import DEFAULT_MATCHER, NO_MATCH, SkillPairMatcher
from .normalize import is_list_shaped, normalize_required_skills, normalize_skill_list
from .options import MatchOptions, OptionsLike, resolve_options

# Faults that degrade to a zero score instead of propagating
SCORING_ERRORS = (TypeError, ValueError, AttributeError, KeyError)


def round_percentage(value: float) -> float:
    """Round to 2 decimals with halves going up (3.125 -> 3.13)."""
    return math.floor(value * 100 + 0.5) / 100


def best_match(
    candidate_skills: Sequence[str],
    required_skill: str,
    fuzzy_threshold: float,
    matcher: SkillPairMatcher = DEFAULT_MATCHER,
) -> tuple:
    """
    Best matching candidate skill for one required skill.

    Returns (candidate_skill, MatchResult); the candidate skill is None and
    the result is NO_MATCH when nothing matches.
    """
    best_skill = None
    best = NO_MATCH
    for skill in candidate_skills:
        result = matcher.match(skill, required_skill, fuzzy_threshold)
        if result.is_match and result.score > best.score:
            best_skill, best = skill, result
    return best_skill, best


def _score_breakdown(
    candidate_skills: List[str],
    required_skills: List[str],
    options: MatchOptions,
    matcher: SkillPairMatcher,
) -> List[dict]:
    breakdown = []
    for required in required_skills:
        skill, result = best_match(candidate_skills, required, options.fuzzy_threshold, matcher)
        weighted = result.score * options.weight_for(result.category) if result.is_match else 0.0
        breakdown.append({
            "required_skill": required,
            "candidate_skill": skill,
            "category": result.category,
            "score": result.score,
            "weighted_score": weighted,
        })
    return breakdown


def _prepare(candidate_skills: Any, required_skills: Any):
    if not is_list_shaped(candidate_skills) or not is_list_shaped(required_skills):
        return None, None
    if not candidate_skills or not required_skills:
        return None, None
    required = normalize_required_skills(required_skills)
    candidate = normalize_skill_list(candidate_skills)
    if not required or not candidate:
        return None, None
    return candidate, required


def calculate_match_percentage(
    candidate_skills: Any,
    required_skills: Any,
    options: OptionsLike = None,
    matcher: Optional[SkillPairMatcher] = None,
) -> float:
    """
    Weighted percentage of a job's required skills covered by a candidate.

    Args:
        candidate_skills: List of candidate skill names
        required_skills: List of bare strings or {"skill": ...} records
        options: MatchOptions, a mapping of option values, or None for defaults
        matcher: Skill pair matcher (default: built-in abbreviation map)

    Returns:
        Percentage rounded to 2 decimals; 0 for malformed or empty input
    """
    try:
        candidate, required = _prepare(candidate_skills, required_skills)
        if candidate is None:
            return 0.0

        resolved = resolve_options(options)
        breakdown = _score_breakdown(candidate, required, resolved, matcher or DEFAULT_MATCHER)
        total = sum(entry["weighted_score"] for entry in breakdown)

        logger = get_logger()
        for entry in breakdown:
            if entry["candidate_skill"] is not None:
                logger.record_skill_match(entry["category"])

        return round_percentage(total / len(required) * 100)

    except SCORING_ERRORS as e:
        logger = get_logger()
        logger.record_scoring_error(type(e).__name__)
        logger.error("Error calculating match percentage", error=str(e))
        return 0.0


def explain_match(
    candidate_skills: Any,
    required_skills: Any,
    options: OptionsLike = None,
    matcher: Optional[SkillPairMatcher] = None,
) -> List[dict]:
    """
    Per-required-skill breakdown behind calculate_match_percentage().

    Each entry holds the required skill, the best candidate skill (or None),
    the match category, the raw score and the weighted score. Malformed
    input, or an expected fault while scoring, yields an empty list.
    """
    try:
        candidate, required = _prepare(candidate_skills, required_skills)
        if candidate is None:
            return []
        return _score_breakdown(candidate, required, resolve_options(options), matcher or DEFAULT_MATCHER)

    except SCORING_ERRORS as e:
        logger = get_logger()
        logger.record_scoring_error(type(e).__name__)
        logger.error("Error explaining match", error=str(e))
        return []

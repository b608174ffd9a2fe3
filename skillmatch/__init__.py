"""Skill matching and candidate ranking for job postings."""

__version__ = "0.1.0"

from .abbreviations import AbbreviationMap, DEFAULT_ABBREVIATIONS
from .matcher import MatchResult, SkillPairMatcher, check_skill_match
from .options import MatchOptions
from .ranking import CandidateScore, filter_by_match_percentage, find_matching_candidates
from .scoring import calculate_match_percentage, explain_match
from .search import fuzzy_filter, fuzzy_text_match, fuzzy_text_search
from .similarity import edit_distance, similarity

__all__ = [
    "AbbreviationMap",
    "CandidateScore",
    "DEFAULT_ABBREVIATIONS",
    "MatchOptions",
    "MatchResult",
    "SkillPairMatcher",
    "calculate_match_percentage",
    "check_skill_match",
    "edit_distance",
    "explain_match",
    "filter_by_match_percentage",
    "find_matching_candidates",
    "fuzzy_filter",
    "fuzzy_text_match",
    "fuzzy_text_search",
    "similarity",
]

"""
Typo-tolerant text search over arbitrary records.

Independent of the skill domain: used to filter employers, students or jobs
by free-text fields such as industry, location or name.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from .logger import get_logger
from .normalize import is_list_shaped
from .similarity import similarity

DEFAULT_SEARCH_THRESHOLD = 0.6
CONTAINS_SCORE = 0.8

_SEARCH_ERRORS = (TypeError, ValueError, AttributeError, KeyError)


def _prepare_text(value: Any, case_sensitive: bool) -> str:
    text = str(value).strip()
    return text if case_sensitive else text.lower()


def _field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def fuzzy_text_match(
    text: Any,
    search_term: Any,
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
    case_sensitive: bool = False,
) -> bool:
    """
    True when every word of `search_term` appears in `text`, either as a
    substring or as a word at least `threshold` similar.
    """
    target = _prepare_text(text, case_sensitive)
    words = _prepare_text(search_term, case_sensitive).split()
    if not words:
        return True

    target_words = target.split()
    for word in words:
        if word in target:
            continue
        if any(similarity(word, candidate) >= threshold for candidate in target_words):
            continue
        return False
    return True


def _value_matches(
    value: Any,
    wanted: Any,
    threshold: float,
    enable_fuzzy_search: bool,
    case_sensitive: bool,
) -> bool:
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(
            _value_matches(item, wanted, threshold, enable_fuzzy_search, case_sensitive)
            for item in value
            if item is not None
        )

    item_text = _prepare_text(value, case_sensitive)
    wanted_text = _prepare_text(wanted, case_sensitive)

    if item_text == wanted_text:
        return True
    if enable_fuzzy_search:
        return fuzzy_text_match(item_text, wanted_text, threshold, case_sensitive=True)
    return wanted_text in item_text


def fuzzy_filter(
    records: Any,
    filters: Optional[Dict[str, Any]],
    fuzzy_threshold: float = DEFAULT_SEARCH_THRESHOLD,
    enable_fuzzy_search: bool = True,
    case_sensitive: bool = False,
) -> Any:
    """
    Keep records whose fields match every non-empty filter value.

    Array-valued fields pass when any element matches. With fuzzy search
    disabled only exact and substring matches count. Malformed input, or an
    expected fault while filtering, returns `records` unchanged.
    """
    if not is_list_shaped(records) or not isinstance(filters, Mapping):
        return records

    active = {k: v for k, v in filters.items() if v is not None and v != ""}
    if not active:
        return list(records)

    try:
        kept = []
        for record in records:
            for name, wanted in active.items():
                value = _field_value(record, name)
                if value is None:
                    break
                if not _value_matches(value, wanted, fuzzy_threshold, enable_fuzzy_search, case_sensitive):
                    break
            else:
                kept.append(record)
        return kept

    except _SEARCH_ERRORS as e:
        get_logger().error("Error in fuzzy filter", error=str(e), filters=list(active))
        return records


def fuzzy_text_search(
    records: Any,
    search_term: Any,
    search_fields: Iterable[str],
    fuzzy_threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> Any:
    """
    Score records against a search term over the given fields.

    Exact field matches score 1.0, containment 0.8, otherwise the string
    similarity when it reaches `fuzzy_threshold`. Hits are returned as
    copies annotated with `search_score` and `matched_field`, best first.
    A missing or blank search term returns `records` unchanged.
    """
    if not is_list_shaped(records) or not isinstance(search_term, str):
        return records
    fields = list(search_fields) if search_fields is not None else []
    term = search_term.strip().lower()
    if not term or not fields:
        return records

    try:
        scored: List[dict] = []
        for record in records:
            best_score = 0.0
            matched_field = ""
            for name in fields:
                value = _field_value(record, name)
                if not value:
                    continue
                text = str(value).strip().lower()

                if text == term:
                    best_score, matched_field = 1.0, name
                    break
                if term in text and CONTAINS_SCORE > best_score:
                    best_score, matched_field = CONTAINS_SCORE, name

                score = similarity(text, term)
                if score > best_score and score >= fuzzy_threshold:
                    best_score, matched_field = score, name

            if best_score >= fuzzy_threshold:
                base = dict(record) if isinstance(record, Mapping) else dict(vars(record))
                base.update(search_score=best_score, matched_field=matched_field)
                scored.append(base)

        return sorted(scored, key=lambda r: r["search_score"], reverse=True)

    except _SEARCH_ERRORS as e:
        get_logger().error("Error in fuzzy text search", error=str(e))
        return records

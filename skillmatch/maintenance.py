"""
Recalculation of stored job matches.

Re-ranks the candidate pool for one or many jobs and replaces the matches
stored for each job. A per-match callback lets the caller dispatch
"job matched" notifications; this module sends nothing itself.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .database import init_database, get_session
from .logger import get_logger
from .ranking import CandidateScore, candidate_field, candidate_id, find_matching_candidates
from .options import OptionsLike
from .schema import required_skills_of, validate_job
from .storage import save_job_matches, match_statistics

RECALCULATION_MIN_MATCH_PERCENTAGE = 95.0

OnMatch = Callable[[str, CandidateScore], None]


def _flag(candidate: Any, snake: str, camel: str) -> bool:
    value = candidate_field(candidate, snake)
    if value is None:
        value = candidate_field(candidate, camel)
    return bool(value)


def select_open_candidates(candidates: Iterable[Any]) -> List[Any]:
    """
    Keep public, open-to-work candidates that list at least one skill.

    A missing visibility flag counts as False.
    """
    selected = []
    for candidate in candidates:
        skills = candidate_field(candidate, "skills")
        if not isinstance(skills, (list, tuple)) or not skills:
            continue
        if not _flag(candidate, "is_public", "isPublic"):
            continue
        if not _flag(candidate, "is_open_to_work", "isOpenToWork"):
            continue
        selected.append(candidate)
    return selected


def recalculate_job_matches(
    job: Dict[str, Any],
    candidates: List[Any],
    db_path: Path,
    min_match_percentage: float = RECALCULATION_MIN_MATCH_PERCENTAGE,
    options: OptionsLike = None,
    on_match: Optional[OnMatch] = None,
) -> Dict[str, Any]:
    """
    Recalculate and store the matched candidates of a single job.

    Args:
        job: Job record with an id and required skills
        candidates: Candidate pool (visibility already applied)
        db_path: Path to SQLite database file
        min_match_percentage: Inclusive threshold for storing a match
        options: Match options
        on_match: Called as on_match(job_id, CandidateScore) after saving

    Returns:
        {"success": True, "job_id", "matches_found", "previous_matches", "status",
        "matches"} or {"success": False, "error"}; "matches" holds the stored
        CandidateScore list, best first
    """
    logger = get_logger()

    errors = validate_job(job)
    if errors:
        return {"success": False, "error": "; ".join(errors)}

    job_id = str(candidate_id(job))
    matches = find_matching_candidates(
        candidates, required_skills_of(job), min_match_percentage, options
    )

    init_database(db_path)
    session = get_session(db_path)
    try:
        outcome = save_job_matches(session, job_id, matches)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to store job matches", job_id=job_id, error=str(e))
        return {"success": False, "error": str(e)}
    finally:
        session.close()

    logger.info(
        f"Updated job {job_id} with {len(matches)} matches",
        job_id=job_id,
        previous_matches=outcome["previous"],
        status=outcome["status"],
    )

    if on_match is not None:
        for match in matches:
            on_match(job_id, match)

    return {
        "success": True,
        "job_id": job_id,
        "matches_found": len(matches),
        "previous_matches": outcome["previous"],
        "status": outcome["status"],
        "matches": matches,
    }


def recalculate_all_job_matches(
    jobs: Iterable[Dict[str, Any]],
    candidates: List[Any],
    db_path: Path,
    min_match_percentage: float = RECALCULATION_MIN_MATCH_PERCENTAGE,
    options: OptionsLike = None,
    on_match: Optional[OnMatch] = None,
) -> Dict[str, Any]:
    """
    Recalculate matches for every job; a failing job never aborts the batch.

    Returns:
        {"success": True, "message", "stats": {total_jobs, updated, failed,
        total_matches_found, errors}}
    """
    logger = get_logger()
    stats: Dict[str, Any] = {
        "total_jobs": 0,
        "updated": 0,
        "failed": 0,
        "total_matches_found": 0,
        "errors": [],
    }

    for job in jobs:
        stats["total_jobs"] += 1
        result = recalculate_job_matches(
            job, candidates, db_path, min_match_percentage, options, on_match
        )
        if result["success"]:
            stats["updated"] += 1
            stats["total_matches_found"] += result["matches_found"]
        else:
            stats["failed"] += 1
            job_ref = candidate_id(job) if isinstance(job, dict) else None
            stats["errors"].append({"job_id": job_ref, "error": result["error"]})
            logger.warning("Job recalculation failed", job_id=job_ref, error=result["error"])

    message = (
        f"Bulk recalculation completed. Updated {stats['updated']} jobs, "
        f"failed {stats['failed']}"
    )
    logger.info(message)
    return {"success": True, "message": message, "stats": stats}


def get_matching_statistics(db_path: Path) -> Dict[str, Any]:
    """Jobs with matches, total stored matches and average match percentage."""
    init_database(db_path)
    session = get_session(db_path)
    try:
        return match_statistics(session)
    finally:
        session.close()

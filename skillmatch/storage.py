from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func

from .database import JobMatch
from .ranking import CandidateScore
from .scoring import round_percentage


def save_job_matches(
    session,
    job_id: str,
    matches: Iterable[CandidateScore],
    matched_at: Optional[datetime] = None,
) -> Dict[str, object]:
    """
    Replace the stored match set of a job and commit.

    Returns {"status": "new" | "updated" | "no-change", "previous": n, "current": m}.
    """
    job_id = str(job_id)
    matched_at = matched_at or datetime.now()

    existing = session.query(JobMatch).filter_by(job_id=job_id).all()
    old = {row.candidate_id: row.match_percentage for row in existing}
    new: Dict[str, float] = {}
    for m in matches:
        new.setdefault(str(m.candidate_id), m.match_percentage)

    for row in existing:
        session.delete(row)
    session.flush()

    for candidate_id, percentage in new.items():
        session.add(JobMatch(
            job_id=job_id,
            candidate_id=candidate_id,
            match_percentage=percentage,
            matched_at=matched_at,
        ))
    session.commit()

    if not existing:
        status = "new"
    elif old != new:
        status = "updated"
    else:
        status = "no-change"
    return {"status": status, "previous": len(old), "current": len(new)}


def load_job_matches(session, job_id: str) -> List[JobMatch]:
    return (
        session.query(JobMatch)
        .filter_by(job_id=str(job_id))
        .order_by(JobMatch.match_percentage.desc(), JobMatch.id)
        .all()
    )


def count_job_matches(session, job_id: Optional[str] = None) -> int:
    query = session.query(JobMatch)
    if job_id is not None:
        query = query.filter_by(job_id=str(job_id))
    return query.count()


def match_statistics(session) -> Dict[str, float]:
    jobs, total, average = session.query(
        func.count(func.distinct(JobMatch.job_id)),
        func.count(JobMatch.id),
        func.avg(JobMatch.match_percentage),
    ).one()
    return {
        "jobs_with_matches": jobs or 0,
        "total_matches": total or 0,
        "average_match_percentage": round_percentage(average) if average is not None else 0.0,
    }

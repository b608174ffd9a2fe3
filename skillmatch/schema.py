from collections.abc import Mapping
from typing import Any, Dict, List


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _has_id(data: Dict[str, Any]) -> bool:
    for key in ("id", "_id"):
        v = data.get(key)
        if _is_non_empty_str(v) or (isinstance(v, int) and not isinstance(v, bool)):
            return True
    return False


def required_skills_of(job: Dict[str, Any]) -> Any:
    """A job's required skills, under either the snake_case or API key."""
    if "skills_required" in job:
        return job["skills_required"]
    return job.get("skillsRequired")


def validate_candidate(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, Mapping):
        return ["Candidate must be an object"]

    errors: List[str] = []
    if not _has_id(data):
        errors.append("Missing required field: id")

    skills = data.get("skills")
    if skills is None:
        errors.append("Missing required field: skills")
    elif not isinstance(skills, list):
        errors.append("Field 'skills' must be a list")
    else:
        for i, skill in enumerate(skills):
            if not isinstance(skill, str):
                errors.append(f"Skill #{i} must be a string")

    return errors


def validate_job(data: Any) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, Mapping):
        return ["Job must be an object"]

    errors: List[str] = []
    if not _has_id(data):
        errors.append("Missing required field: id")

    required = required_skills_of(data)
    if required is None:
        errors.append("Missing required field: skills_required")
        return errors
    if not isinstance(required, list):
        errors.append("Field 'skills_required' must be a list")
        return errors
    if not required:
        errors.append("Field 'skills_required' must not be empty")

    for i, entry in enumerate(required):
        if isinstance(entry, str):
            if not entry.strip():
                errors.append(f"Required skill #{i} must be a non-empty string")
        elif isinstance(entry, Mapping):
            if not _is_non_empty_str(entry.get("skill")):
                errors.append(f"Required skill #{i} must have a non-empty 'skill'")
        else:
            errors.append(f"Required skill #{i} must be a string or an object with 'skill'")

    return errors

from collections.abc import Mapping
from typing import Any, Iterable, List


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def extract_skill_name(entry: Any) -> str:
    """Reduce a required-skill entry (bare string or {"skill": ...}) to a skill token."""
    if isinstance(entry, str):
        return normalize_skill(entry)
    if isinstance(entry, Mapping):
        name = entry.get("skill")
    else:
        name = getattr(entry, "skill", None)
    if isinstance(name, str):
        return normalize_skill(name)
    return ""


def normalize_required_skills(required_skills: Iterable[Any]) -> List[str]:
    names = (extract_skill_name(entry) for entry in required_skills)
    return [name for name in names if name]


def normalize_skill_list(skills: Iterable[Any]) -> List[str]:
    return [normalize_skill(s) for s in skills if isinstance(s, str) and s.strip()]


def is_list_shaped(value: Any) -> bool:
    return isinstance(value, (list, tuple))

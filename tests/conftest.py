"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from pathlib import Path
from typing import Any, Dict, List

from skillmatch.logger import reset_logger


@pytest.fixture(autouse=True)
def fresh_logger():
    """Give every test its own global logger and metrics."""
    reset_logger()
    yield
    reset_logger()


# Distinct skills that never match each other except exactly
DISTINCT_SKILLS = [
    "python", "java", "golang", "rust", "kotlin",
    "swift", "docker", "kubernetes", "terraform", "ansible",
    "redis", "kafka", "spark", "hadoop", "tableau",
    "excel", "figma", "jira", "linux", "graphql",
]


@pytest.fixture
def distinct_skills() -> List[str]:
    return list(DISTINCT_SKILLS)


@pytest.fixture
def fullstack_job() -> Dict[str, Any]:
    """Job as posted through the marketplace API."""
    return {
        "id": "job-1",
        "jobTitle": "Full Stack Developer",
        "skillsRequired": [
            {"skill": "JavaScript", "proficiency": "Advanced"},
            {"skill": "React", "proficiency": "Intermediate"},
        ],
    }


@pytest.fixture
def student_pool() -> List[Dict[str, Any]]:
    """Candidates with known scores against fullstack_job."""
    return [
        {"id": "s1", "skills": ["JavaScript", "React"], "isPublic": True, "isOpenToWork": True},
        {"id": "s2", "skills": ["js", "react.js"], "isPublic": True, "isOpenToWork": True},
        {"id": "s3", "skills": ["Python", "Django"], "isPublic": True, "isOpenToWork": True},
        {"id": "s4", "skills": ["JavaScript", "React"], "isPublic": False, "isOpenToWork": True},
        {"id": "s5", "skills": [], "isPublic": True, "isOpenToWork": True},
    ]


@pytest.fixture
def companies() -> List[Dict[str, Any]]:
    return [
        {"name": "Acme", "industry": "Technology", "tags": ["remote", "python"]},
        {"name": "Beta Health", "industry": "Healthcare", "tags": ["onsite"]},
        {"name": "Gamma", "industry": None, "tags": []},
    ]


@pytest.fixture
def write_json(tmp_path):
    """Write an object to a JSON file under tmp_path and return its path."""
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path
    return _write

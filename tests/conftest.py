"""
Shared fixtures for the req2graph tests.

The catalog below is a small slice of a real course listing, chosen so
that every grammar rule and every kind of call number shows up at least
once.
"""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
repo_dir = Path(__file__).parent.parent
sys.path.insert(0, str(repo_dir))

from req2graph.models import Course


def _course(subject, call_number, description, title="", subject_long=""):
    return {
        "subjectId": subject,
        "subjectLong": subject_long,
        "callNumber": call_number,
        "title": title,
        "description": description,
    }


CATALOG = [
    _course("CSE", "2221", "Intro to software components. Prereq: Math 1151.",
            title="Software I", subject_long="Computer Science and Engineering"),
    _course("CSE", "2231", "Prereq: 2221 (221).", title="Software II"),
    _course("CSE", "2321", "Prereq: 2221, and Math 1151.", title="Foundations I"),
    _course("CSE", "3521",
            "Prereq: 2231, 2321, and Stat 3460 or 3470. "
            "Not open to students with credit for 630.",
            title="Survey of Artificial Intelligence I"),
    _course("CSE", "5520H", "Prereq or concur: 3521.", title="Honors Seminar"),
    _course("STAT", "3460", "Prereq: Math 1151.", title="Intro to Statistics"),
    _course("STAT", "3470", "Prereq: Math 1151 or 1161.", title="Probability"),
    _course("MATH", "1151", "Prereq: permission of department.", title="Calculus I"),
    _course("CSE", "2194.01", "Special topics.", title="Topics"),
    _course("CSE", "2194.02", "Special topics.", title="Topics"),
    _course("CSE", "3901", "Prereq: 2194.xx, and 2231.", title="Web Apps"),
]


@pytest.fixture
def catalog_data():
    """Raw catalog records, as stored on disk"""
    return [dict(record) for record in CATALOG]


@pytest.fixture
def catalog(catalog_data):
    """Catalog as Course objects"""
    return [Course.from_dict(record) for record in catalog_data]


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    """Catalog written to a JSON file"""
    path = tmp_path / "courses.json"
    path.write_text(json.dumps(catalog_data), encoding="utf-8")
    return path


@pytest.fixture
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)

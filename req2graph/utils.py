"""
utils.py - Helper functions for the req2graph package

Contains:
    - pretty_print: expression tree -> '(CSE 2231 and STAT 3460)'
    - format_hover_text: tooltip text of a graph node
    - load_courses: reads a course list from JSON or JSON Lines
    - subject_ids_of / filter_courses: subject selection over a catalog
"""
import json

from .models import Course, Literal, Not, Operator, ParseError


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def pretty_print(expression):
    """Renders an expression for display. Parse errors print as
    'unknown'; a missing clause prints as 'none'.
    Example: Operator('or', (STAT 3460, STAT 3470)) -> '(STAT 3460 or STAT 3470)'"""
    if expression is None:
        return "none"

    if isinstance(expression, Literal):
        return f"{expression.subject_id.upper()} {expression.call_number.upper()}"

    if isinstance(expression, ParseError):
        return "unknown"

    if isinstance(expression, Operator):
        joined = f" {expression.operator} ".join(pretty_print(v) for v in expression.values)
        return f"({joined})"

    if isinstance(expression, Not):
        return f"(not {pretty_print(expression.value)})"

    raise TypeError(f"Unknown expression node: {expression!r}")


def format_hover_text(course, parsed):
    """Tooltip for a node: id, title, description and both clauses.
    Uses <br> because the graph renderer shows it as HTML."""
    return (
        f"{course.id}<br>{course.title}<br><br>{course.description}<br><br>"
        f"Prereqs: {pretty_print(parsed.prereq)}<br>"
        f"Concur: {pretty_print(parsed.concur)}"
    )


# ---------------------------------------------------------------------------
# Loading the catalog
# ---------------------------------------------------------------------------

def load_courses(file_path):
    """Loads Course records from a JSON file.

    Accepted layouts:
        [ {course}, ... ]
        { "courses": [ {course}, ... ] }
        one {course} per line (JSON Lines)

    Raises FileNotFoundError, json.JSONDecodeError or ValueError; the
    caller decides whether that is fatal."""
    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read()

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        # Fall back to JSON Lines
        data = [json.loads(line) for line in content.splitlines() if line.strip()]

    if isinstance(data, dict):
        # Wrapped list, or a single-record JSON Lines file
        data = data['courses'] if 'courses' in data else [data]
    if not isinstance(data, list):
        raise ValueError(f"'{file_path}' does not contain a list of courses")

    return [Course.from_dict(item) for item in data]


# ---------------------------------------------------------------------------
# Subject selection
# ---------------------------------------------------------------------------

def subject_ids_of(courses):
    """Distinct subject codes in catalog order."""
    return list(dict.fromkeys(c.subject_id for c in courses))


def filter_courses(courses, subject_ids):
    """Keeps only the courses whose subject is in subject_ids.
    Matching is case-insensitive ('cse' selects CSE). A bare string is
    one subject code, not a sequence of letters."""
    if isinstance(subject_ids, str):
        subject_ids = [subject_ids]
    wanted = {s.upper() for s in subject_ids}
    return [c for c in courses if c.subject_id.upper() in wanted]

"""
Unit tests for helper functions: formatting, loading and subject selection.
"""

import json

import pytest

from req2graph.models import Course, Literal, Not, Operator, ParseError, ParsedClauses
from req2graph.utils import (
    filter_courses,
    format_hover_text,
    load_courses,
    pretty_print,
    subject_ids_of,
)


class TestPrettyPrint:
    """Tests for expression rendering"""

    def test_literal_is_upper_cased(self):
        assert pretty_print(Literal("cse", "2194.xx")) == "CSE 2194.XX"

    def test_operator(self):
        expr = Operator("or", (Literal("STAT", "3460"), Literal("STAT", "3470")))
        assert pretty_print(expr) == "(STAT 3460 or STAT 3470)"

    def test_error_and_missing(self):
        assert pretty_print(ParseError("Expected expression")) == "unknown"
        assert pretty_print(None) == "none"

    def test_not(self):
        assert pretty_print(Not(Literal("CSE", "2221"))) == "(not CSE 2221)"

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            pretty_print(42)


class TestHoverText:
    def test_layout(self):
        course = Course("CSE", "", "2231", "Software II", "Prereq: 2221.")
        parsed = ParsedClauses(prereq=Literal("CSE", "2221"))
        assert format_hover_text(course, parsed) == (
            "CSE 2231<br>Software II<br><br>Prereq: 2221.<br><br>"
            "Prereqs: CSE 2221<br>Concur: none"
        )


class TestCourseRecord:
    """Tests for the on-disk course contract"""

    def test_from_dict(self, catalog_data):
        course = Course.from_dict(catalog_data[0])
        assert course.id == "CSE 2221"
        assert course.subject_long == "Computer Science and Engineering"
        assert course.title == "Software I"

    def test_round_trip(self, catalog_data):
        assert Course.from_dict(catalog_data[3]).to_dict() == catalog_data[3]

    def test_optional_fields_default_to_empty(self):
        course = Course.from_dict({"subjectId": "CSE", "callNumber": 2221})
        assert course.call_number == "2221"
        assert course.description == ""

    @pytest.mark.parametrize("record", ["CSE 2221", None, 42, ["CSE", "2221"]])
    def test_record_must_be_object(self, record):
        with pytest.raises(ValueError):
            Course.from_dict(record)

    def test_required_fields(self):
        with pytest.raises(ValueError):
            Course.from_dict({"subjectId": "CSE"})
        with pytest.raises(ValueError):
            Course.from_dict({"callNumber": "2221", "description": "Prereq: 2221."})


class TestLoadCourses:
    """Tests for reading a catalog file"""

    def test_json_list(self, catalog_file, catalog):
        assert load_courses(catalog_file) == catalog

    def test_wrapped_list(self, tmp_path, catalog_data):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"courses": catalog_data}), encoding="utf-8")
        assert len(load_courses(path)) == len(catalog_data)

    def test_json_lines(self, tmp_path, catalog_data):
        path = tmp_path / "courses.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in catalog_data) + "\n", encoding="utf-8")
        assert [c.id for c in load_courses(path)][:2] == ["CSE 2221", "CSE 2231"]

    def test_single_record_json_lines(self, tmp_path, catalog_data):
        path = tmp_path / "one.jsonl"
        path.write_text(json.dumps(catalog_data[0]) + "\n", encoding="utf-8")
        assert [c.id for c in load_courses(path)] == ["CSE 2221"]

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('"courses"', encoding="utf-8")
        with pytest.raises(ValueError):
            load_courses(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            load_courses(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_courses(tmp_path / "nope.json")


class TestSubjectSelection:
    def test_subject_ids_in_catalog_order(self, catalog):
        assert subject_ids_of(catalog) == ["CSE", "STAT", "MATH"]

    def test_filter_courses(self, catalog):
        kept = filter_courses(catalog, ["stat", "Math"])
        assert [c.id for c in kept] == ["STAT 3460", "STAT 3470", "MATH 1151"]

    def test_filter_single_subject_string(self, catalog):
        """A bare string is one subject, not a set of letters"""
        kept = filter_courses(catalog, "stat")
        assert [c.id for c in kept] == ["STAT 3460", "STAT 3470"]

    def test_filter_nothing(self, catalog):
        assert filter_courses(catalog, []) == []

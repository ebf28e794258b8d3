"""
compiler.py - AST -> IR compiler

Turns the parsed descriptions of a catalog into the dependency graph.

Compilation steps:
    1. Filter the catalog to the included subjects
    2. Parse every included description (optionally on a thread pool)
    3. Build one Node per included course
    4. Resolve every Literal to catalogued courses and emit Links
    5. Attach to every Node the links it takes part in
"""
from concurrent.futures import ThreadPoolExecutor
import logging
from typing import Dict, List

from .callnumber import parse_call_number, same_course
from .ir import Graph, Link, Node
from .models import Course, Literal, Not, Operator, ParseError, ParsedClauses
from .parser import parse_description
from .utils import filter_courses, format_hover_text, pretty_print, subject_ids_of

logger = logging.getLogger(__name__)


class GraphCompiler:
    """Compiles a list of Course records into a Graph IR."""

    def __init__(self, courses: List[Course], included_subject_ids, workers: int = 1):
        self.courses = list(courses)
        self.workers = max(1, int(workers))

        # The lexer knows every subject of the catalog; references to
        # excluded subjects parse but resolve to nothing.
        self.all_subject_ids = subject_ids_of(self.courses)
        self.included = self._drop_duplicates(filter_courses(self.courses, included_subject_ids))

        # subject -> [(course, key)] of the included courses
        self._lookup: Dict[str, list] = {}

        self.graph = Graph()

    def compile(self) -> Graph:
        """Main entry point: compiles the catalog into the graph."""
        self._build_lookups()
        parsed = self._parse_all()

        for course, clauses in zip(self.included, parsed):
            self.graph.parsed[course.id] = clauses
            self.graph.nodes.append(self._build_node(course, clauses))

        for course, clauses in zip(self.included, parsed):
            self.graph.links.extend(self._build_links(course, clauses))

        self._attach_links()

        logger.info(
            f"Compiled {len(self.included)}/{len(self.courses)} courses: "
            f"{len(self.graph.nodes)} nodes, {len(self.graph.links)} links"
        )
        return self.graph

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _drop_duplicates(courses: List[Course]) -> List[Course]:
        """Node ids must be unique: keeps the first course with a given id."""
        seen = set()
        unique = []
        for course in courses:
            if course.id in seen:
                logger.warning(f"Duplicate course {course.id} ignored")
                continue
            seen.add(course.id)
            unique.append(course)
        return unique

    def _build_lookups(self):
        """Indexes the included courses by subject, with their call
        numbers parsed once up front."""
        for course in self.included:
            key = parse_call_number(course.call_number)
            self._lookup.setdefault(course.subject_id.upper(), []).append((course, key))

    def _parse_one(self, course: Course) -> ParsedClauses:
        return parse_description(course.description, course.subject_id, self.all_subject_ids)

    def _parse_all(self) -> List[ParsedClauses]:
        """Parses every included description, in catalog order."""
        if self.workers == 1:
            return [self._parse_one(c) for c in self.included]

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            return list(executor.map(self._parse_one, self.included))

    def _build_node(self, course: Course, parsed: ParsedClauses) -> Node:
        return Node(
            id=course.id,
            label=course.id,
            group=course.subject_id,
            hover_text=format_hover_text(course, parsed),
        )

    def _resolve(self, literal: Literal) -> List[Course]:
        """Every included course the reference may denote. A reference
        without a section matches all sections."""
        key = parse_call_number(literal.call_number)
        if key is None:
            return []
        candidates = self._lookup.get(literal.subject_id.upper(), [])
        return [course for course, course_key in candidates if same_course(key, course_key)]

    def _extract(self, expression, course: Course, concurrent: bool, group: str) -> List[Link]:
        """Walks one expression tree and emits its links."""
        if isinstance(expression, Literal):
            return [
                Link(source=target.id, target=course.id, concurrent=concurrent, group=group)
                for target in self._resolve(expression)
            ]

        if isinstance(expression, Operator):
            # Links are grouped by their innermost enclosing operator
            label = pretty_print(expression)
            links = []
            for value in expression.values:
                links.extend(self._extract(value, course, concurrent, label))
            return links

        if isinstance(expression, (ParseError, Not)):
            return []

        raise TypeError(f"Unknown expression node: {expression!r}")

    def _build_links(self, course: Course, parsed: ParsedClauses) -> List[Link]:
        links = []
        if parsed.prereq is not None:
            links.extend(self._extract(parsed.prereq, course, False, ""))
        if parsed.concur is not None:
            links.extend(self._extract(parsed.concur, course, True, ""))
        return links

    def _attach_links(self):
        """Second pass: every node gets the links it is an endpoint of."""
        by_id: Dict[str, List[Link]] = {node.id: [] for node in self.graph.nodes}
        for link in self.graph.links:
            by_id[link.source].append(link)
            if link.target != link.source:
                by_id[link.target].append(link)
        for node in self.graph.nodes:
            node.links = by_id[node.id]


def construct_graph(courses, included_subject_ids, workers=1) -> Graph:
    """Builds the dependency graph of the included subjects."""
    return GraphCompiler(courses, included_subject_ids, workers=workers).compile()

"""
models.py - AST (Abstract Syntax Tree) models

Defines the boolean expression tree produced by the Parser and the
Course record that carries the raw catalog data.

Expression is a closed union: Literal, Operator, Not and ParseError.
Every consumer (pretty printer, compiler, validator) handles all four
and raises TypeError on anything else.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Course (input record, shared by the parser and the compiler)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Course:
    """One catalog entry as delivered by the fetcher.

    The description is free text, e.g.
    'Prereq: 2231, 2321, and Stat 3460 or 3470. Not open to ...'"""
    subject_id: str         # "CSE"
    subject_long: str       # "Computer Science and Engineering"
    call_number: str        # "3521", "5520H", "161.02"
    title: str
    description: str

    # Keys of the on-disk data contract
    FIELDS = {
        'subject_id': 'subjectId',
        'subject_long': 'subjectLong',
        'call_number': 'callNumber',
        'title': 'title',
        'description': 'description',
    }

    @property
    def id(self):
        """Node id used in the graph, e.g. 'CSE 3521'."""
        return f"{self.subject_id} {self.call_number}"

    @classmethod
    def from_dict(cls, data):
        """Builds a Course from a camelCase dict.

        subjectId and callNumber are required. The rest default to ''
        (descriptions are often missing for special-topics courses)."""
        if not isinstance(data, dict):
            raise ValueError(f"Course record is not an object: {data!r}")
        for key in ('subjectId', 'callNumber'):
            if not data.get(key):
                raise ValueError(f"Course record missing '{key}': {data!r}")
        return cls(**{
            attr: str(data.get(key) or '')
            for attr, key in cls.FIELDS.items()
        })

    def to_dict(self):
        return {key: getattr(self, attr) for attr, key in self.FIELDS.items()}


# ---------------------------------------------------------------------------
# Expression nodes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Literal:
    """A single course reference, e.g. STAT 3460."""
    subject_id: str     # always upper case
    call_number: str    # raw lexeme, e.g. "3460", "2194.xxh"


@dataclass(frozen=True)
class Operator:
    """'and' / 'or' over two or more sub-expressions.
    Single-element lists are never wrapped."""
    operator: str
    values: Tuple['Expression', ...]


@dataclass(frozen=True)
class Not:
    """Negation. Reserved: the grammar does not produce it."""
    value: 'Expression'


@dataclass(frozen=True)
class ParseError:
    """Unparsable fragment. Carries a readable reconstruction of the
    skipped text so it can be reported without failing the run."""
    message: str


Expression = Union[Literal, Operator, Not, ParseError]


# ---------------------------------------------------------------------------
# ParsedClauses (result of parsing one description)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ParsedClauses:
    """The prereq and concur expressions of one description.
    None means the description has no such section."""
    prereq: Optional[Expression] = None
    concur: Optional[Expression] = None

    @property
    def is_empty(self):
        return self.prereq is None and self.concur is None

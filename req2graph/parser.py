"""
parser.py - Syntactic analysis of prerequisite clauses

Takes the Lexer's token list and builds one boolean expression per
'Prereq:' / 'Concur:' section of a description.

Grammar (tightest binding first):
    atom       := [skip] SUBJECT CALL_NUMBER [parens]
                | [skip] CALL_NUMBER [parens]
    or_list    := atom ('or' atom)*
    comma_list := or_list (',' ['or' | 'and'] or_list)*
    semi_list  := comma_list (';' ['or' | 'and'] comma_list)*
    clause     := semi_list
    start      := (skip* ('prereq' ['or' 'concur'] | 'concur') ':' clause)*

The cursor is an immutable ParserState. Every rule takes a state and
returns (expression, new_state). A rule that cannot match returns a
ParseError node instead of raising, so one bad clause never stops the
rest of the catalog.
"""
from dataclasses import dataclass
import logging
from typing import Tuple

from .lexer import (
    AND,
    CALL_NUMBER,
    COLON,
    COMMA,
    CONCUR,
    DOT,
    EOF,
    LPAREN,
    OR,
    PREREQ,
    RPAREN,
    SEMICOLON,
    SUBJECT,
    Token,
    tokenize,
)
from .models import Literal, Operator, ParseError, ParsedClauses
from .utils import pretty_print
from .validator import collect_errors

logger = logging.getLogger(__name__)

# Tokens at which skip_errors stops and parsing resumes
SYNC_TOKENS = (SUBJECT, CALL_NUMBER, COMMA, PREREQ, CONCUR, EOF, DOT)

# Tokens that start (or end) a section at the top level
SECTION_TOKENS = (PREREQ, CONCUR, EOF)


@dataclass(frozen=True)
class ParserState:
    """Token sequence plus cursor position. Never mutated: every
    consuming method returns a new state."""
    tokens: Tuple[Token, ...]
    pos: int = 0

    def peek(self):
        """Token at the cursor. Past the end this is a synthetic EOF."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(EOF, '', self.tokens[-1].end if self.tokens else 0)

    def advance(self):
        if self.pos >= len(self.tokens):
            return self
        return ParserState(self.tokens, self.pos + 1)

    def allow(self, *types):
        """True if the next token has one of the given types."""
        return self.peek().type in types

    def accept(self, type):
        """Consumes the next token if it has the given type.
        Returns (token or None, state)."""
        token = self.peek()
        if token.type == type and type != EOF:
            return token, self.advance()
        return None, self

    def expect(self, type, label=None):
        """Like accept, but on mismatch resynchronizes and returns a
        ParseError in place of the token."""
        token, state = self.accept(type)
        if token is None:
            return skip_errors(state, label or type.lower())
        return token, state


# ---------------------------------------------------------------------------
# Error recovery
# ---------------------------------------------------------------------------

def skip_errors(state, expected):
    """Consumes tokens up to the next synchronizing token.

    Returns (ParseError, state). The message reconstructs the skipped
    text, putting a space wherever the source had a gap."""
    skipped = []
    last_end = None
    while not state.allow(*SYNC_TOKENS):
        token = state.peek()
        if last_end is not None and token.pos > last_end:
            skipped.append(' ')
        skipped.append(token.value)
        last_end = token.end
        state = state.advance()

    error = ParseError(f'Expected {expected}, got "{"".join(skipped)}"')
    return error, state


def skip_parens(state):
    """Drops a parenthesised group after a call number, e.g. the old
    quarter number in '2231 (221)'. Nested expressions are not parsed."""
    token, state = state.accept(LPAREN)
    if token is None:
        return state
    while not state.allow(RPAREN, EOF):
        state = state.advance()
    _, state = state.accept(RPAREN)
    return state


# ---------------------------------------------------------------------------
# Grammar rules
# ---------------------------------------------------------------------------

def parse_atom(state, default_subject):
    """A single course reference. A bare call number inherits the
    default subject."""
    leading, state = skip_errors(state, 'expression')

    subject, state = state.accept(SUBJECT)
    if subject:
        call_number, state = state.expect(CALL_NUMBER, 'callNumber')
        if isinstance(call_number, ParseError):
            return call_number, state
        state = skip_parens(state)
        return Literal(subject.value.upper(), call_number.value), state

    call_number, state = state.accept(CALL_NUMBER)
    if call_number:
        state = skip_parens(state)
        return Literal(default_subject, call_number.value), state

    # Already at a synchronizing token: report what the leading skip dropped
    return leading, state


def parse_or_list(state, default_subject):
    """atom ('or' atom)*"""
    first, state = parse_atom(state, default_subject)
    values = [first]
    if isinstance(first, Literal):
        default_subject = first.subject_id

    while True:
        token, state = state.accept(OR)
        if token is None:
            break
        value, state = parse_atom(state, default_subject)
        values.append(value)

    if len(values) == 1:
        return values[0], state
    return Operator('or', tuple(values)), state


def _propagate_subject(default_subject, pinned, value):
    """The first Literal of a list fixes the default subject for the
    elements after it. Returns (default_subject, pinned)."""
    if not pinned and isinstance(value, Literal):
        return value.subject_id, True
    return default_subject, pinned


def _parse_separated(state, default_subject, separator, element, label):
    """Shared body of comma_list and semi_list.

    Elements are joined by the separator, each optionally followed by
    'or' / 'and'. The last connector seen labels the whole list. A list
    of two or more elements without any connector is ambiguous and
    becomes a ParseError."""
    first, state = element(state, default_subject)
    values = [first]
    default_subject, pinned = _propagate_subject(default_subject, False, first)
    operator = None

    while True:
        token, state = state.accept(separator)
        if token is None:
            break
        connector, state = state.accept(OR)
        if connector:
            operator = 'or'
        else:
            connector, state = state.accept(AND)
            if connector:
                operator = 'and'
        value, state = element(state, default_subject)
        values.append(value)
        default_subject, pinned = _propagate_subject(default_subject, pinned, value)

    if len(values) == 1:
        return values[0], state

    if operator is None:
        listed = ", ".join(pretty_print(v) for v in values)
        return ParseError(f"Expected operator in {label} separated list {listed}"), state

    return Operator(operator, tuple(values)), state


def parse_comma_list(state, default_subject):
    """or_list (',' ['or'|'and'] or_list)*"""
    return _parse_separated(state, default_subject, COMMA, parse_or_list, 'comma')


def parse_semicolon_list(state, default_subject):
    """comma_list (';' ['or'|'and'] comma_list)*"""
    return _parse_separated(state, default_subject, SEMICOLON, parse_comma_list, 'semicolon')


def parse_clause(state, default_subject):
    """The whole expression of one section."""
    return parse_semicolon_list(state, default_subject)


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------

def _skip_to_section(state):
    """Drops prose until the next 'prereq', 'concur' or the end."""
    while not state.allow(*SECTION_TOKENS):
        state = state.advance()
    return state


def parse(tokens, top_level_subject_id):
    """Parses a token list into ParsedClauses.

    top_level_subject_id is the subject of the course being described;
    it is the default for bare call numbers like '2231'."""
    state = ParserState(tuple(tokens))
    default_subject = top_level_subject_id.upper()
    prereq = None
    concur = None

    state = _skip_to_section(state)
    while state.allow(PREREQ, CONCUR):
        # 'Prereq:' / 'Prereq or concur:' / 'Concur:'
        token, state = state.accept(PREREQ)
        if token:
            concurrent = False
            token, state = state.accept(OR)
            if token:
                _, state = state.expect(CONCUR)
                concurrent = True
        else:
            _, state = state.accept(CONCUR)
            concurrent = True

        _, state = state.expect(COLON)
        expression, state = parse_clause(state, default_subject)
        for message in collect_errors(expression):
            logger.debug(f"{top_level_subject_id}: {message}")

        if concurrent:
            concur = expression
        else:
            prereq = expression

        state = _skip_to_section(state)

    return ParsedClauses(prereq=prereq, concur=concur)


def parse_description(text, top_level_subject_id, subject_ids):
    """Tokenizes and parses one course description.

    subject_ids is every subject code of the catalog, so references to
    other departments ('Stat 3460') are recognised."""
    return parse(tokenize(text, subject_ids), top_level_subject_id)

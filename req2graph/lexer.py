"""
lexer.py - Lexical analysis of course descriptions

Converts a free-text catalog description into a flat list of tokens.
Tokens are the input of the Parser.

Categories are tried in a fixed order at every position:
keywords, then known subject codes, then symbols, then call numbers.
Anything else becomes a one-character ERROR token, so scanning always
moves forward.
"""
import re

# Token types
AND = 'AND'
OR = 'OR'
NOT = 'NOT'
PREREQ = 'PREREQ'
CONCUR = 'CONCUR'
ENROLLMENT = 'ENROLLMENT'
COMMA = 'COMMA'
DOT = 'DOT'
COLON = 'COLON'
SEMICOLON = 'SEMICOLON'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
SUBJECT = 'SUBJECT'
CALL_NUMBER = 'CALL_NUMBER'
ERROR = 'ERROR'
EOF = 'EOF'


class Token:
    """One token with its type, exact lexeme and character offset."""
    def __init__(self, type, value, pos):
        self.type = type
        self.value = value
        self.pos = pos

    @property
    def end(self):
        return self.pos + len(self.value)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value, self.pos) == (other.type, other.value, other.pos)

    def __repr__(self):
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


class Lexer:
    """Lexer for prerequisite prose.

    Input is lower-cased before scanning. Subject codes are matched
    against the catalog's own list, so 'stat' is a SUBJECT only when
    STAT is a real subject."""

    # Keywords win over subject codes with the same spelling
    KEYWORDS = {
        'and': AND,
        'or': OR,
        'not': NOT,
        'prereq': PREREQ,
        'concur': CONCUR,
        'enrollment': ENROLLMENT,
    }

    SYMBOLS = {
        ',': COMMA,
        '.': DOT,
        ':': COLON,
        ';': SEMICOLON,
        '(': LPAREN,
        ')': RPAREN,
    }

    WORD_RE = re.compile(r'[a-z]+')
    WHITESPACE_RE = re.compile(r'\s+')
    # 3-4 ASCII digits, optional .NN or .XX section, optional honors suffix
    CALL_NUMBER_RE = re.compile(r'[0-9]{3,4}(\.([0-9]+|xx))?h?', re.IGNORECASE)

    def __init__(self, text, subject_ids=()):
        """Tokenizes the text."""
        self.text = text.lower()
        self.subject_ids = {s.lower() for s in subject_ids}
        self.tokens = []

        pos = 0
        while True:
            ws = self.WHITESPACE_RE.match(self.text, pos)
            if ws:
                pos = ws.end()
            if pos >= len(self.text):
                break
            token = self._scan(pos)
            self.tokens.append(token)
            pos = token.end

    def _scan(self, pos):
        """Recognizes exactly one token starting at pos."""
        text = self.text

        word = self.WORD_RE.match(text, pos)
        if word:
            value = word.group()
            if value in self.KEYWORDS:
                return Token(self.KEYWORDS[value], value, pos)
            if value in self.subject_ids:
                return Token(SUBJECT, value, pos)

        if text[pos] in self.SYMBOLS:
            return Token(self.SYMBOLS[text[pos]], text[pos], pos)

        call_number = self.CALL_NUMBER_RE.match(text, pos)
        if call_number:
            return Token(CALL_NUMBER, call_number.group(), pos)

        # Recovery: skip a single unknown character
        return Token(ERROR, text[pos], pos)


def tokenize(text, subject_ids=()):
    """Returns the token list for text. See Lexer."""
    return Lexer(text, subject_ids).tokens

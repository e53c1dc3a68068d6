"""Lexical analysis for a single ecalc statement. Tokens are pulled one at a time: nothing is buffered beyond the
token currently being looked at.

Formally, the tokens of ecalc can be defined as

```
<identifier> ::= [A-Za-z]+            ; "print" and "nil" are reserved words
<number>     ::= [0-9.]+              ; a '.' makes it a Float, otherwise an Integer
<operator>   ::= "->" | "**" | "=="   ; two-character operators are matched before their one-character prefix
               | "+" | "-" | "*" | "/" | "(" | ")" | "="
```

Whitespace separates tokens and is otherwise ignored. The end of the statement is itself a token (END).
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ecalc.lang.error import EvaluationError, LexError
from ecalc.pure.values import I64_MAX, Float, Integer, Value


class TokenKind(Enum):
    """Kinds of tokens. The value of each kind is how it is named in error messages."""
    INTEGER = "integer"
    FLOAT = "float"
    NIL = "'nil'"
    IDENTIFIER = "identifier"
    PRINT = "'print'"
    PLUS = "'+'"
    MINUS = "'-'"
    STAR = "'*'"
    SLASH = "'/'"
    POWER = "'**'"
    LPAREN = "'('"
    RPAREN = "')'"
    ASSIGN = "'='"
    IS_EQ = "'=='"
    REF = "'->'"
    END = "end of statement"

    def __str__(self):
        return self.value


KEYWORDS = {"print": TokenKind.PRINT, "nil": TokenKind.NIL}

OPERATORS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "=": TokenKind.ASSIGN,
}

DOUBLE_OPERATORS = {"->": TokenKind.REF, "**": TokenKind.POWER, "==": TokenKind.IS_EQ}

LETTERS = frozenset(string.ascii_letters)
NUMERIC = frozenset(string.digits + ".")
WHITESPACE = frozenset(string.whitespace)

I64_DIGITS = len(str(I64_MAX))  # longer digit runs can't be an Integer


@dataclass(frozen=True)
class Token:
    """A single token. literal is set for numbers, identifier for identifiers and keywords. [start, end) is the span of
    the token in the statement, used for error messages.
    """
    kind: TokenKind
    literal: Optional[Value] = None
    identifier: Optional[str] = None
    start: int = 0
    end: int = 0

    @property
    def text(self):
        """Source-like rendering of this token."""
        if self.identifier is not None:
            return self.identifier
        if self.literal is not None:
            return str(self.literal)
        return str(self.kind)


def _read_run(source, cursor, chars):
    """Returns end of the maximal run of chars in source starting at cursor."""
    end = cursor
    while end < len(source) and source[end] in chars:
        end += 1
    return end


def _number(text, source, start):
    """Converts numeric text to Integer or Float."""
    if text.count(".") > 1 or text == ".":
        raise EvaluationError("invalid numeric literal '{}'", text).locate(source, start, start + len(text))
    if "." not in text and len(text.lstrip("0")) > I64_DIGITS:
        msg = "integer overflow: '{}' does not fit in 64 bits"
        raise EvaluationError(msg, text).locate(source, start, start + len(text))
    try:
        if "." in text:
            return Float(float(text))
        return Integer(int(text))
    except EvaluationError as error:
        raise error.locate(source, start, start + len(text))


def next_token(source, cursor=0):
    """Reads the token starting at or after cursor. Returns the token and the cursor just past it."""
    cursor = _read_run(source, cursor, WHITESPACE)
    if cursor >= len(source):
        return Token(TokenKind.END, start=cursor, end=cursor), cursor

    char = source[cursor]

    if char in LETTERS:
        end = _read_run(source, cursor, LETTERS)
        word = source[cursor:end]
        return Token(KEYWORDS.get(word, TokenKind.IDENTIFIER), identifier=word, start=cursor, end=end), end

    if char in NUMERIC:
        end = _read_run(source, cursor, NUMERIC)
        literal = _number(source[cursor:end], source, cursor)
        kind = TokenKind.FLOAT if isinstance(literal, Float) else TokenKind.INTEGER
        return Token(kind, literal=literal, start=cursor, end=end), end

    pair = source[cursor:cursor + 2]  # at the end of source this is a single character
    if pair in DOUBLE_OPERATORS:
        return Token(DOUBLE_OPERATORS[pair], start=cursor, end=cursor + 2), cursor + 2

    if char in OPERATORS:
        return Token(OPERATORS[char], start=cursor, end=cursor + 1), cursor + 1

    raise LexError("unexpected character '{}' at position {}", (char, cursor + 1)).locate(source, cursor)


class Lexer:
    """Pull-based lexer over one statement. current is the token being looked at; advance replaces it with the next
    one.
    """

    def __init__(self, source=""):
        self.source = ""
        self.cursor = 0
        self.current = None
        self.reset(source)

    def reset(self, source):
        """Starts lexing source from the beginning. current is left empty until advance is called."""
        self.source = source
        self.cursor = 0
        self.current = None

    def advance(self):
        """Reads the next token into current and returns it."""
        self.current, self.cursor = next_token(self.source, self.cursor)
        return self.current

    def __iter__(self):
        """Yields every remaining token of the statement, END included."""
        while True:
            token = self.advance()
            yield token
            if token.kind is TokenKind.END:
                return

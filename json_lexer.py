# json_lexer.py
# Pull-based JSON tokenizer for json-beautify
#
# =============================================================================
#  LEXER DESIGN: ONE REGEX, ONE TOKEN PER PULL
# =============================================================================
#
# Every token class is a named group of a single compiled regex. The parser
# pulls tokens one at a time with next(); the lexer never looks ahead and
# never backtracks, so one token of lookahead is all the consumer can see.
#
# Whitespace and newlines are real tokens (WS / NL). The parser decides
# where they may appear; the lexer only counts lines and columns so errors
# can point at the offending character.
#
# Strings are deliberately narrow: the only escapes are \" and \\, and the
# token value is the raw text between the quotes. Nothing is unescaped, so
# the formatter can write the value back verbatim.
# =============================================================================

import re
from typing import Iterator, NamedTuple, Optional

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
_WS      = r"[ \t]+"
_NL      = r"\n"
_NUMBER  = r"[+-]?(?:\d*\.)?\d+"
_STRING  = r'"(?:\\["\\]|[^\n"\\])*"'

_TOKEN_RE = re.compile(
    rf"(?P<WS>{_WS})|"
    rf"(?P<NL>{_NL})|"
    rf"(?P<NUMBER>{_NUMBER})|"
    rf"(?P<STRING>{_STRING})|"
    r"(?P<LBRACE>\{)|"
    r"(?P<RBRACE>\})|"
    r"(?P<LBRACKET>\[)|"
    r"(?P<RBRACKET>\])|"
    r"(?P<COMMA>,)|"
    r"(?P<COLON>:)|"
    r"(?P<NULL>null)|"
    r"(?P<BOOLEAN>true|false)"
)

# Token kinds that carry no grammar meaning
INSIGNIFICANT = frozenset({"WS", "NL"})


# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class JSONSyntaxError(SyntaxError):
    """
    Grammar violation with the offending token and its source position.

    ``line`` and ``col`` are 1-based, ``pos`` is the 0-based offset into the
    source. ``token`` is None when the error was raised at end of input or
    before any token could be matched.
    """
    def __init__(self, message: str, token: Optional["Token"] = None,
                 line: Optional[int] = None, col: Optional[int] = None,
                 pos: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.line = line
        self.col = col
        self.pos = pos


class JSONLexError(JSONSyntaxError):
    """Input matched none of the token patterns."""


# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(NamedTuple):
    """
    Immutable token record.

    ``value`` is the decoded value (quotes stripped for strings), ``text`` the
    raw match. Positions are kept for error reporting only.
    """
    kind: str
    value: str
    text: str
    offset: int
    line: int
    col: int


# ---------------------------------------------------------------------------
# LEXER
# ---------------------------------------------------------------------------
class Lexer:
    """
    Tokenizer over a single source string.

    Each call to next() matches exactly one token at the cursor and advances
    past it. Iterating a Lexer yields the remaining tokens.
    """
    def __init__(self, source: str):
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def next(self) -> Optional[Token]:
        """Return the next token, or None once the source is exhausted."""
        if self._pos >= len(self._source):
            return None

        m = _TOKEN_RE.match(self._source, self._pos)
        if m is None:
            raise JSONLexError(
                self.format_error(None, "invalid syntax"),
                None, self._line, self._col, self._pos,
            )

        kind = m.lastgroup
        text = m.group()
        value = text[1:-1] if kind == "STRING" else text
        token = Token(kind, value, text, self._pos, self._line, self._col)

        self._pos = m.end()
        if kind == "NL":
            self._line += 1
            self._col = 1
        else:
            self._col += len(text)
        return token

    def format_error(self, token: Optional[Token], message: str) -> str:
        """
        Render ``message`` with the position of ``token`` and a caret line.

        Without a token the current cursor position is used, which is the
        unmatched character for lexing failures and the end of the input for
        premature end-of-input failures.
        """
        if token is None:
            offset, line, col = self._pos, self._line, self._col
        else:
            offset, line, col = token.offset, token.line, token.col

        start = self._source.rfind("\n", 0, offset) + 1
        end = self._source.find("\n", offset)
        if end == -1:
            end = len(self._source)
        source_line = self._source[start:end]

        return (
            f"{message} at line {line} col {col} (offset {offset}):\n\n"
            f"  {source_line}\n"
            f"  {' ' * (col - 1)}^"
        )


def lex(source: str) -> Iterator[Token]:
    """Yield every token of ``source``, whitespace and newlines included."""
    yield from Lexer(source)


__all__ = [
    "INSIGNIFICANT",
    "JSONLexError",
    "JSONSyntaxError",
    "Lexer",
    "Token",
    "lex",
]

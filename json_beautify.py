# json_beautify.py
# JSON parser, formatter and beautifier
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER A PULL LEXER
# =============================================================================
#
# The parser pulls tokens from json_lexer.Lexer and maps each grammar rule
# to one function: _parse_value dispatches on the token kind, _parse_array
# and _parse_object handle the containers. The lexer is passed explicitly
# to every routine; there is no shared cursor.
#
# Whitespace and newline tokens are legal between any two tokens and are
# skipped by _next_token before the grammar sees them.
#
# Running out of input inside a container returns what was built so far
# unless strict=True, in which case it is an "unexpected end of input"
# error. A missing separator or closer is always an error.
#
# Depth guard defaults to 256 nested containers, which keeps the recursion
# comfortably under the interpreter's default stack limit.
#
# =============================================================================
#  FORMATTER
# =============================================================================
#
# Compact mode emits no whitespace at all. Pretty mode puts a space after
# ':' and after array commas, and a newline after object commas. Nested
# levels are not indented. Strings are written back verbatim between
# quotes; the lexer never unescapes them, so parse/format round trips.
# =============================================================================

import argparse
import io
import math
import sys
from decimal import Decimal
from typing import Dict, List, Optional, Union

from json_lexer import INSIGNIFICANT, JSONSyntaxError, Lexer, Token, lex

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256   # Nested containers allowed before parsing gives up

Value = Union[None, bool, float, str, List["Value"], Dict[str, "Value"]]


# ---------------------------------------------------------------------------
# PARSER UTILITY
# ---------------------------------------------------------------------------
def _next_token(lexer: Lexer) -> Optional[Token]:
    """Pull the next token that is not whitespace or a newline."""
    token = lexer.next()
    while token is not None and token.kind in INSIGNIFICANT:
        token = lexer.next()
    return token


def _error(lexer: Lexer, token: Optional[Token], message: str) -> JSONSyntaxError:
    """Build a positioned error for ``token`` (or the cursor when None)."""
    if token is None:
        return JSONSyntaxError(lexer.format_error(None, message),
                               None, lexer.line, lexer.col, lexer.offset)
    return JSONSyntaxError(lexer.format_error(token, message),
                           token, token.line, token.col, token.offset)


def _unexpected(lexer: Lexer, token: Optional[Token], expectation: str) -> JSONSyntaxError:
    if token is None:
        return _error(lexer, None, f"unexpected end of input - {expectation}")
    return _error(lexer, token, f"{expectation}, got token {token.kind} '{token.text}'")


def _truncated(container, lexer: Lexer, strict: bool):
    """Input ran out inside a container: return it as is, or fail when strict."""
    if strict:
        raise _error(lexer, None, "unexpected end of input")
    return container


# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def _parse_value(token: Token, lexer: Lexer, depth: int, max_depth: int, strict: bool) -> Value:
    """
    Dispatch on the kind of ``token``, which starts the value.

    Containers recurse with depth + 1; the guard fires before the opening
    bracket's contents are read.
    """
    kind = token.kind

    if kind in INSIGNIFICANT:
        token = _next_token(lexer)
        if token is None:
            return None
        return _parse_value(token, lexer, depth, max_depth, strict)
    if kind == "BOOLEAN":
        return token.value == "true"
    if kind == "NULL":
        return None
    if kind == "NUMBER":
        return float(token.value)
    if kind == "STRING":
        return token.value
    if kind in ("LBRACKET", "LBRACE"):
        if depth >= max_depth:
            raise _error(lexer, token, "depth limit exceeded")
        if kind == "LBRACKET":
            return _parse_array(lexer, depth + 1, max_depth, strict)
        return _parse_object(lexer, depth + 1, max_depth, strict)

    raise _error(lexer, token, f"no parser found for token {kind} '{token.text}'")


# ---------------------------------------------------------------------------
# ARRAY PARSER
# ---------------------------------------------------------------------------
def _parse_array(lexer: Lexer, depth: int, max_depth: int, strict: bool) -> List[Value]:
    """
    Parse the elements of an array whose '[' has been consumed.

    A comma must be followed by a value, so '[1,]' fails when ']' is handed
    to _parse_value.
    """
    items: List[Value] = []
    token = _next_token(lexer)
    if token is None:
        return _truncated(items, lexer, strict)
    if token.kind == "RBRACKET":
        return items

    while True:
        items.append(_parse_value(token, lexer, depth, max_depth, strict))
        token = _next_token(lexer)
        if token is not None and token.kind == "RBRACKET":
            return items
        if token is None or token.kind != "COMMA":
            raise _unexpected(lexer, token, "expecting comma")
        token = _next_token(lexer)
        if token is None:
            return _truncated(items, lexer, strict)


# ---------------------------------------------------------------------------
# OBJECT PARSER
# ---------------------------------------------------------------------------
def _parse_object(lexer: Lexer, depth: int, max_depth: int, strict: bool) -> Dict[str, Value]:
    """
    Parse the members of an object whose '{' has been consumed.

    Duplicate keys are accepted; the last value wins.
    """
    obj: Dict[str, Value] = {}
    token = _next_token(lexer)
    if token is None:
        return _truncated(obj, lexer, strict)
    if token.kind == "RBRACE":
        return obj

    while True:
        if token.kind != "STRING":
            raise _unexpected(lexer, token, "expected string")
        key = token.value

        colon = _next_token(lexer)
        if colon is None or colon.kind != "COLON":
            raise _unexpected(lexer, colon, "expected colon")

        token = _next_token(lexer)
        if token is None:
            return _truncated(obj, lexer, strict)
        obj[key] = _parse_value(token, lexer, depth, max_depth, strict)

        token = _next_token(lexer)
        if token is not None and token.kind == "RBRACE":
            return obj
        if token is None or token.kind != "COMMA":
            raise _unexpected(lexer, token, "expected comma")
        token = _next_token(lexer)
        if token is None:
            return _truncated(obj, lexer, strict)


# ---------------------------------------------------------------------------
# FORMATTER
# ---------------------------------------------------------------------------
def _format_number(value: Union[int, float]) -> str:
    """
    Shortest decimal text for ``value`` that the lexer can read back.

    Integral floats drop the fractional part and exponent notation is
    expanded, since the number grammar has no exponent.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = f"{Decimal(text):f}"
    return text


def _format_key(key) -> str:
    return f'"{key}"' if isinstance(key, str) else ""


def _format_value(value, pretty: bool) -> str:
    # bool is an int subclass and must be checked first
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list):
        separator = ", " if pretty else ","
        return "[" + separator.join(_format_value(item, pretty) for item in value) + "]"
    if isinstance(value, dict):
        separator = ",\n" if pretty else ","
        colon = ": " if pretty else ":"
        members = (
            f"{_format_key(key)}{colon}{_format_value(item, pretty)}"
            for key, item in value.items()
        )
        return "{" + separator.join(members) + "}"
    return ""


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(source: str, *, strict: bool = False, max_depth: int = DEPTH_LIMIT_DEFAULT) -> Value:
    """
    Parse JSON text into Python values.

    Numbers always come back as floats and object keys keep their first
    insertion position. Empty or whitespace-only input parses to None.
    Anything but whitespace after the root value is an error.
    """
    if not isinstance(source, str):
        raise TypeError(f"parse() expects str, got {type(source).__name__}")

    lexer = Lexer(source)
    token = lexer.next()
    if token is None:
        return None

    result = _parse_value(token, lexer, 0, max_depth, strict)
    extra = _next_token(lexer)
    if extra is not None:
        raise _error(lexer, extra, f"extra data after root value, got token {extra.kind} '{extra.text}'")
    return result


def format(value: Value, pretty: bool = False) -> str:
    """
    Serialize ``value`` to JSON text.

    Strings are emitted without escaping. Values of unsupported types
    render as an empty string instead of raising.
    """
    return _format_value(value, pretty)


def beautify(source: str) -> str:
    """Parse ``source`` and format it back in pretty mode."""
    return format(parse(source), pretty=True)


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Command-line front end.

    Prints the beautified (or compact) document on stdout and returns 0, or
    prints the error on stderr and returns 1.
    """
    ap = argparse.ArgumentParser(prog="json-beautify", description="JSON beautifier")
    ap.add_argument("file", help="JSON file to format, or - for stdin")
    ap.add_argument("--compact", action="store_true", help="emit compact output")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--strict", action="store_true", help="reject truncated input")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    args = ap.parse_args(argv)

    if args.file == "-":
        # newline="" keeps \r in the text so the lexer can reject it
        data = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", newline="").read()
    else:
        try:
            with open(args.file, "r", encoding="utf-8", newline="") as fh:
                data = fh.read()
        except OSError as exc:
            ap.error(f"cannot read {args.file}: {exc.strerror}")

    try:
        if args.debug:
            for tok in lex(data):
                print(tok)
            return 0
        value = parse(data, strict=args.strict, max_depth=args.max_depth)
    except SyntaxError as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1

    print(format(value, pretty=not args.compact))
    return 0


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()

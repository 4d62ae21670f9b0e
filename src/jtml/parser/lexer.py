"""
jtml Lexer (Tokenizer)

Converts raw jtml source into a queue of tokens.
Handles: string literals, line comments, identifiers, brackets, parens, '='.
Whitespace is skipped and never reaches the parser.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple


class TokenType(Enum):
    """Types of tokens in jtml source."""
    STRING_LITERAL = auto()  # "quoted text"
    COMMENT = auto()         # // comment to end of line
    IDENTIFIER = auto()      # p, http-equiv, h1
    LEFT_BRACKET = auto()    # {
    RIGHT_BRACKET = auto()   # }
    LEFT_PAREN = auto()      # (
    RIGHT_PAREN = auto()     # )
    EQUAL = auto()           # =


_DISPLAY = {
    TokenType.STRING_LITERAL: "Text({})",
    TokenType.COMMENT: "Comment({})",
    TokenType.IDENTIFIER: "Id({})",
    TokenType.LEFT_BRACKET: "LeftBracket '{{'",
    TokenType.RIGHT_BRACKET: "RightBracket '}}'",
    TokenType.LEFT_PAREN: "LeftParen '('",
    TokenType.RIGHT_PAREN: "RightParen ')'",
    TokenType.EQUAL: "Equal '='",
}


@dataclass(frozen=True)
class Token:
    """A single token from the lexer. Structural tokens carry an empty value."""
    type: TokenType
    value: str = ""

    def __repr__(self):
        if self.value:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"

    def __str__(self):
        return _DISPLAY[self.type].format(self.value)


class JtmlError(Exception):
    """Base class for everything that can make a jtml compile fail."""


class LexerError(JtmlError):
    """Error during lexical analysis."""


class InvalidToken(LexerError):
    """Unterminated string literal or a character no rule accepts."""
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid token: {text!r}")

    def __eq__(self, other):
        return isinstance(other, InvalidToken) and other.text == self.text

    def __hash__(self):
        return hash(self.text)


class TokenQueue:
    """
    Cursor over an immutable token list.

    The parser consumes it front to back; peeking never moves the cursor.
    A queue belongs to exactly one parse call.
    """

    def __init__(self, tokens=()):
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        self._pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Look at the token `offset` places ahead without consuming it."""
        pos = self._pos + offset
        if pos >= len(self._tokens):
            return None
        return self._tokens[pos]

    def pop(self) -> Optional[Token]:
        """Consume and return the front token, or None if the queue is empty."""
        token = self.peek()
        if token is not None:
            self._pos += 1
        return token

    def advance(self, count: int = 1) -> None:
        """Consume `count` tokens."""
        self._pos = min(self._pos + count, len(self._tokens))

    def is_empty(self) -> bool:
        return self._pos >= len(self._tokens)

    def remaining(self) -> Tuple[Token, ...]:
        """Snapshot of the unconsumed tokens."""
        return self._tokens[self._pos:]

    def __len__(self):
        return len(self._tokens) - self._pos

    def __iter__(self) -> Iterator[Token]:
        return iter(self.remaining())

    def __repr__(self):
        return f"TokenQueue({list(self.remaining())!r})"


class Lexer:
    """
    Tokenizer for jtml source.

    Usage:
        lexer = Lexer(source_text)
        tokens = list(lexer.tokenize())
    """

    IDENT_CHARS = frozenset("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-")
    # Characters allowed after a backslash inside a string literal
    STRING_ESCAPES = frozenset('"ntu\\')
    SINGLE_CHAR_TOKENS = {
        '{': TokenType.LEFT_BRACKET,
        '}': TokenType.RIGHT_BRACKET,
        '(': TokenType.LEFT_PAREN,
        ')': TokenType.RIGHT_PAREN,
        '=': TokenType.EQUAL,
    }

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.length = len(source)

    def _current(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Peek ahead by offset characters."""
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.source[self.pos].isspace():
            self.pos += 1

    def _read_string(self) -> str:
        """Read a double-quoted literal and return its raw body, escapes untouched."""
        start = self.pos
        # Skip opening quote
        self.pos += 1
        while True:
            ch = self._current()
            if ch is None:
                raise InvalidToken(self.source[start:])
            if ch == '"':
                self.pos += 1
                return self.source[start + 1:self.pos - 1]
            if ch == '\\':
                if self._peek() not in self.STRING_ESCAPES:
                    raise InvalidToken(self.source[start:])
                self.pos += 2
            else:
                self.pos += 1

    def _read_comment(self) -> str:
        """Read a comment from // to end of line."""
        end = self.source.find('\n', self.pos)
        if end == -1:
            end = self.length
        text = self.source[self.pos + 2:end]
        self.pos = end
        if text.endswith('\r'):
            text = text[:-1]
        if text.startswith(' '):
            text = text[1:]
        return text

    def _read_identifier(self) -> str:
        start = self.pos
        while self.pos < self.length and self.source[self.pos] in self.IDENT_CHARS:
            self.pos += 1
        return self.source[start:self.pos]

    def tokenize(self) -> Iterator[Token]:
        """Generate tokens from the source. Raises InvalidToken on the first bad input."""
        while True:
            self._skip_whitespace()

            ch = self._current()
            if ch is None:
                return

            if ch == '"':
                yield Token(TokenType.STRING_LITERAL, self._read_string())
                continue

            if ch == '/' and self._peek() == '/':
                yield Token(TokenType.COMMENT, self._read_comment())
                continue

            if ch in self.IDENT_CHARS:
                yield Token(TokenType.IDENTIFIER, self._read_identifier())
                continue

            token_type = self.SINGLE_CHAR_TOKENS.get(ch)
            if token_type is not None:
                self.pos += 1
                yield Token(token_type)
                continue

            raise InvalidToken(ch)

    def tokenize_all(self) -> List[Token]:
        """Convenience method to get all tokens as a list."""
        return list(self.tokenize())


def lex(source: str) -> TokenQueue:
    """Tokenize `source` into a fresh queue. All-or-nothing: raises InvalidToken."""
    return TokenQueue(Lexer(source).tokenize_all())


def read_source(filepath) -> str:
    """Read a source file. Handles encoding fallback."""
    # Try UTF-8 with BOM first, then UTF-8, then latin-1 (which always succeeds)
    for encoding in ['utf-8-sig', 'utf-8', 'latin-1']:
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue


def tokenize_file(filepath) -> TokenQueue:
    """Tokenize a file and return its token queue."""
    return lex(read_source(filepath))

"""
jtml Parser

Recursive-descent parser turning a TokenQueue into a Document.

Error discipline:
- the attribute list probes ahead and only commits on a full key="value" match
- a node sequence stops at the first failing node and hands back both the
  nodes so far and the failure
- the document only accepts that stop if every token was consumed
"""

from typing import Iterable, Optional, Tuple

from jtml.parser.lexer import JtmlError, Token, TokenQueue, TokenType, lex, read_source
from jtml.parser.nodes import (
    SELF_TERMINATING_TAGS,
    Attribute,
    Comment,
    Document,
    Element,
    Node,
    Text,
)


# Token kinds that can start a node
NODE_START = (TokenType.STRING_LITERAL, TokenType.COMMENT, TokenType.IDENTIFIER)


def _kinds(expected: Tuple[TokenType, ...]) -> str:
    return " or ".join(kind.name for kind in expected)


class ParseError(JtmlError):
    """Error during parsing."""


class UnexpectedToken(ParseError):
    """A token was present but of the wrong kind."""
    def __init__(self, expected, actual: Token, remaining: Optional[Tuple[Token, ...]] = None):
        if isinstance(expected, TokenType):
            expected = (expected,)
        self.expected: Tuple[TokenType, ...] = tuple(expected)
        self.actual = actual
        # Diagnostics only, never compared
        self.remaining = remaining
        super().__init__(f"Unexpected token: expected {_kinds(self.expected)}, got {actual}")

    def __eq__(self, other):
        return (
            isinstance(other, UnexpectedToken)
            and other.expected == self.expected
            and other.actual == self.actual
        )

    def __hash__(self):
        return hash((self.expected, self.actual))


class TokenIsNotEnough(ParseError):
    """The queue ran out while a token was still required."""
    def __init__(self, *expected: TokenType):
        self.expected: Tuple[TokenType, ...] = expected
        super().__init__(f"Token is not enough: expected {_kinds(expected)}")

    def __eq__(self, other):
        return isinstance(other, TokenIsNotEnough) and other.expected == self.expected

    def __hash__(self):
        return hash(self.expected)


class Parser:
    """
    Parser for jtml token queues.

    Usage:
        parser = Parser(lex(source))
        document = parser.parse_document()
    """

    def __init__(self, tokens: TokenQueue, self_terminating_tags: Iterable[str] = None):
        self.tokens = tokens
        if self_terminating_tags is None:
            self_terminating_tags = SELF_TERMINATING_TAGS
        self.self_terminating_tags = frozenset(self_terminating_tags)

    def expect(self, kind: TokenType) -> None:
        """Consume one token of `kind`; its value is discarded."""
        token = self.tokens.pop()
        if token is None:
            raise TokenIsNotEnough(kind)
        if token.type != kind:
            raise UnexpectedToken(kind, token, self.tokens.remaining())

    def _probe_attribute(self) -> Optional[Attribute]:
        """Match IDENTIFIER '=' STRING_LITERAL at the front without consuming."""
        key = self.tokens.peek(0)
        equal = self.tokens.peek(1)
        value = self.tokens.peek(2)
        if key is None or key.type != TokenType.IDENTIFIER:
            return None
        if equal is None or equal.type != TokenType.EQUAL:
            return None
        if value is None or value.type != TokenType.STRING_LITERAL:
            return None
        return Attribute(key.value, value.value)

    def parse_attributes(self) -> Tuple[Attribute, ...]:
        """Zero or more key="value" attributes. Never fails."""
        attributes = []
        while True:
            attribute = self._probe_attribute()
            if attribute is None:
                return tuple(attributes)
            self.tokens.advance(3)
            attributes.append(attribute)

    def parse_node(self) -> Node:
        """Parse a single text literal, comment, or element."""
        token = self.tokens.peek()

        if token is None:
            raise TokenIsNotEnough(*NODE_START)

        if token.type == TokenType.STRING_LITERAL:
            self.tokens.pop()
            return Text(token.value)

        if token.type == TokenType.COMMENT:
            self.tokens.pop()
            return Comment(token.value)

        if token.type != TokenType.IDENTIFIER:
            raise UnexpectedToken(NODE_START, token, self.tokens.remaining())

        # Tag name is committed from here on: failures propagate as-is
        self.tokens.pop()
        tag_name = token.value

        self.expect(TokenType.LEFT_PAREN)
        attributes = self.parse_attributes()
        self.expect(TokenType.RIGHT_PAREN)

        if tag_name in self.self_terminating_tags:
            return Element(tag_name, attributes)

        self.expect(TokenType.LEFT_BRACKET)
        children, _ = self.parse_nodes()
        self.expect(TokenType.RIGHT_BRACKET)

        return Element(tag_name, attributes, children)

    def parse_nodes(self) -> Tuple[Tuple[Node, ...], ParseError]:
        """
        Parse nodes until one fails.

        Returns the nodes parsed so far together with the error that stopped
        the loop. Tokens consumed by the failed attempt stay consumed.
        """
        nodes = []
        while True:
            try:
                nodes.append(self.parse_node())
            except ParseError as e:
                return tuple(nodes), e

    def parse_document(self) -> Document:
        """Parse the whole queue. Raises the stopping error unless everything was consumed."""
        nodes, error = self.parse_nodes()
        # Benign stop: the queue ran dry exactly where a new node could start
        if self.tokens.is_empty() and error == TokenIsNotEnough(*NODE_START):
            return Document(nodes)
        raise error


def parse_document(tokens: TokenQueue, self_terminating_tags: Iterable[str] = None) -> Document:
    """Parse a token queue into a Document."""
    return Parser(tokens, self_terminating_tags).parse_document()


def parse_source(source: str, self_terminating_tags: Iterable[str] = None) -> Document:
    """Parse source code string into AST."""
    return parse_document(lex(source), self_terminating_tags)


def parse_file(filepath, self_terminating_tags: Iterable[str] = None) -> Document:
    """Parse a file into AST. Handles encoding fallback."""
    return parse_source(read_source(filepath), self_terminating_tags)

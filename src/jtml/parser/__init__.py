"""
jtml.parser - jtml Lexer and Parser

Lexer and parser for jtml source.
Converts .jtml files into an Abstract Syntax Tree (AST).
"""

from jtml.parser.lexer import (
    Lexer,
    Token,
    TokenType,
    TokenQueue,
    JtmlError,
    LexerError,
    InvalidToken,
    lex,
    read_source,
    tokenize_file,
)
from jtml.parser.parser import (
    Parser,
    ParseError,
    UnexpectedToken,
    TokenIsNotEnough,
    NODE_START,
    parse_document,
    parse_file,
    parse_source,
)
from jtml.parser.nodes import (
    # AST Node types
    SELF_TERMINATING_TAGS,
    NodeType,
    Attribute,
    Document,
    Element,
    Text,
    Comment,
)

__all__ = [
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "TokenQueue",
    "JtmlError",
    "LexerError",
    "InvalidToken",
    "lex",
    "read_source",
    "tokenize_file",
    # Parser
    "Parser",
    "ParseError",
    "UnexpectedToken",
    "TokenIsNotEnough",
    "NODE_START",
    "parse_document",
    "parse_file",
    "parse_source",
    # AST Nodes
    "SELF_TERMINATING_TAGS",
    "NodeType",
    "Attribute",
    "Document",
    "Element",
    "Text",
    "Comment",
]

"""
jtml - HTML as nested function calls

A Python toolkit for compiling jtml source (`p(class="btn"){"text"}`)
into HTML and into canonically formatted jtml.
"""

__version__ = "0.1.0"
__author__ = "jtml contributors"

from jtml.parser import (
    lex,
    parse_document,
    parse_file,
    parse_source,
    Document,
    Element,
    Text,
    Comment,
    Attribute,
    JtmlError,
    LexerError,
    InvalidToken,
    ParseError,
    UnexpectedToken,
    TokenIsNotEnough,
)
from jtml.tools import IndentConfig, to_html, to_formatted_source, convert_string, format_string

"""
jtml.tools - Serializers

- format: canonical jtml formatter
- html: HTML renderer
"""

# Formatter
from .format import (
    JtmlFormatter,
    FormatOptions,
    IndentConfig,
    IndentStyle,
    to_formatted_source,
    format_string,
    format_file,
    check_formatted,
)

# HTML
from .html import HtmlRenderer, HtmlOptions, to_html, convert_string, convert_file

__all__ = [
    # Format
    "JtmlFormatter",
    "FormatOptions",
    "IndentConfig",
    "IndentStyle",
    "to_formatted_source",
    "format_string",
    "format_file",
    "check_formatted",
    # HTML
    "HtmlRenderer",
    "HtmlOptions",
    "to_html",
    "convert_string",
    "convert_file",
]

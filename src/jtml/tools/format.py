"""
jtml Code Formatter

Re-renders jtml source in canonical form:
- one node per line
- `tag(attrs){` opens a body, `}` closes it on its own line
- self-terminating tags render as `tag(attrs)` with no body
- indentation depends only on nesting depth (N spaces or a tab per level)

This is a canonical rewrite, not a layout-preserving round trip.

Usage:
    formatter = JtmlFormatter(FormatOptions(indent=IndentConfig.tabs()))
    text = formatter.format_string(source)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from ..parser import parse_source, read_source
from ..parser.nodes import SELF_TERMINATING_TAGS, Comment, Document, Element, Node, Text

logger = logging.getLogger(__name__)


class IndentStyle(Enum):
    """Indentation unit."""
    SPACES = "spaces"
    TABS = "tabs"


@dataclass(frozen=True)
class IndentConfig:
    """One indentation level: `width` spaces, or a single tab."""
    style: IndentStyle = IndentStyle.SPACES
    width: int = 4

    @classmethod
    def spaces(cls, width: int = 4) -> 'IndentConfig':
        if width < 0:
            raise ValueError(f"Indent width must be >= 0, got {width}")
        return cls(IndentStyle.SPACES, width)

    @classmethod
    def tabs(cls) -> 'IndentConfig':
        return cls(IndentStyle.TABS, 1)

    @classmethod
    def parse(cls, text) -> 'IndentConfig':
        """Parse `4`, `spaces:2`, `tab` or `tabs`."""
        if text == "\t":
            return cls.tabs()
        value = str(text).strip().lower()
        if value in ("tab", "tabs", "\\t"):
            return cls.tabs()
        if value.startswith("spaces:"):
            value = value[len("spaces:"):]
        try:
            return cls.spaces(int(value))
        except ValueError:
            raise ValueError(f"Invalid indent {text!r}: expected a number, 'spaces:N' or 'tab'") from None

    @property
    def unit(self) -> str:
        if self.style == IndentStyle.TABS:
            return "\t"
        return " " * self.width

    def __str__(self):
        if self.style == IndentStyle.TABS:
            return "tab"
        return str(self.width)


@dataclass
class FormatOptions:
    """Configuration for the formatter."""
    indent: IndentConfig = field(default_factory=IndentConfig)
    ignore_comments: bool = False     # Drop comment nodes entirely
    self_terminating_tags: FrozenSet[str] = SELF_TERMINATING_TAGS

    def __post_init__(self):
        if self.self_terminating_tags is None:
            self.self_terminating_tags = SELF_TERMINATING_TAGS


class JtmlFormatter:
    """
    Formats jtml documents to canonical style.

    The formatter works by:
    1. Parsing the source to AST
    2. Walking the AST, one line per node
    3. Joining top-level nodes with newlines (no trailing newline)
    """

    def __init__(self, options: FormatOptions = None):
        self.options = options or FormatOptions()

    def format_file(self, file_path: Path) -> str:
        """Format a file and return the formatted content."""
        return self.format_string(read_source(file_path))

    def format_string(self, content: str) -> str:
        """Format a string of jtml content."""
        ast = parse_source(content, self.options.self_terminating_tags)
        return self.format_ast(ast)

    def format_ast(self, document: Document) -> str:
        """Format an AST to string."""
        lines = [self._format_node(node, 0) for node in self._visible(document.nodes)]
        return "\n".join(lines)

    def _visible(self, nodes) -> List[Node]:
        if self.options.ignore_comments:
            return [n for n in nodes if not isinstance(n, Comment)]
        return list(nodes)

    def _indent(self, level: int) -> str:
        """Get indentation string for a level."""
        return self.options.indent.unit * level

    def _format_node(self, node: Node, indent: int) -> str:
        if isinstance(node, Element):
            return self._format_element(node, indent)
        if isinstance(node, Text):
            return f'{self._indent(indent)}"{node.content}"'
        if isinstance(node, Comment):
            return f"{self._indent(indent)}// {node.content}"
        raise TypeError(f"Cannot format {type(node).__name__}")

    def _format_element(self, element: Element, indent: int) -> str:
        ind = self._indent(indent)
        attributes = " ".join(f'{a.key}="{a.value}"' for a in element.attributes)
        head = f"{ind}{element.tag_name}({attributes})"

        if element.is_self_terminating(self.options.self_terminating_tags):
            return head

        lines = [head + "{"]
        for child in self._visible(element.children):
            lines.append(self._format_node(child, indent + 1))
        lines.append(f"{ind}}}")
        return "\n".join(lines)


def to_formatted_source(document: Document, ignore_comments: bool = False,
                        indent: IndentConfig = None,
                        self_terminating_tags: Optional[FrozenSet[str]] = None) -> str:
    """Render a parsed document as canonical jtml source."""
    options = FormatOptions(
        indent=indent or IndentConfig.spaces(4),
        ignore_comments=ignore_comments,
        self_terminating_tags=self_terminating_tags,
    )
    return JtmlFormatter(options).format_ast(document)


def format_string(content: str, options: FormatOptions = None) -> str:
    """Lex, parse and reformat a jtml string."""
    return JtmlFormatter(options).format_string(content)


def format_file(file_path: Path, options: FormatOptions = None) -> str:
    """Convenience function to format a file."""
    formatter = JtmlFormatter(options)
    return formatter.format_file(file_path)


def check_formatted(file_path: Path, options: FormatOptions = None) -> bool:
    """Check if a file is already formatted. Returns True if formatted."""
    original = read_source(file_path)
    formatted = JtmlFormatter(options).format_string(original)
    if formatted != original:
        logger.debug(f"{file_path} differs from its canonical form")
        return False
    return True

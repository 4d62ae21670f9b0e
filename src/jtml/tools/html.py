"""
HTML Renderer

Compiles a jtml document into a single HTML string.

- Element:  <tag k="v">children</tag>, or <tag k="v"/> for self-terminating tags
- Text:     raw content, not escaped
- Comment:  <!--content-->, or nothing when comments are ignored

Nodes are concatenated without separators; no whitespace is inserted.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional

from ..parser import parse_source, read_source
from ..parser.nodes import SELF_TERMINATING_TAGS, Comment, Document, Element, Node, Text

logger = logging.getLogger(__name__)


@dataclass
class HtmlOptions:
    """Configuration for the HTML renderer."""
    ignore_comments: bool = False
    self_terminating_tags: FrozenSet[str] = SELF_TERMINATING_TAGS

    def __post_init__(self):
        if self.self_terminating_tags is None:
            self.self_terminating_tags = SELF_TERMINATING_TAGS


class HtmlRenderer:
    """Renders jtml ASTs as HTML."""

    def __init__(self, options: HtmlOptions = None):
        self.options = options or HtmlOptions()

    def render(self, document: Document) -> str:
        return "".join(self._render_node(node) for node in document.nodes)

    def render_string(self, content: str) -> str:
        ast = parse_source(content, self.options.self_terminating_tags)
        return self.render(ast)

    def render_file(self, file_path: Path) -> str:
        return self.render_string(read_source(file_path))

    def _render_node(self, node: Node) -> str:
        if isinstance(node, Element):
            return self._render_element(node)
        if isinstance(node, Text):
            return node.content
        if isinstance(node, Comment):
            if self.options.ignore_comments:
                return ""
            return f"<!--{node.content}-->"
        raise TypeError(f"Cannot render {type(node).__name__}")

    def _render_element(self, element: Element) -> str:
        attributes = "".join(f' {a.key}="{a.value}"' for a in element.attributes)
        if element.is_self_terminating(self.options.self_terminating_tags):
            return f"<{element.tag_name}{attributes}/>"
        children = "".join(self._render_node(child) for child in element.children)
        return f"<{element.tag_name}{attributes}>{children}</{element.tag_name}>"


def to_html(document: Document, ignore_comments: bool = False,
            self_terminating_tags: Optional[FrozenSet[str]] = None) -> str:
    """Render a parsed document as HTML."""
    return HtmlRenderer(HtmlOptions(ignore_comments, self_terminating_tags)).render(document)


def convert_string(content: str, ignore_comments: bool = False,
                   self_terminating_tags: Optional[FrozenSet[str]] = None) -> str:
    """Lex, parse and render a jtml string as HTML."""
    return HtmlRenderer(HtmlOptions(ignore_comments, self_terminating_tags)).render_string(content)


def convert_file(file_path: Path, options: HtmlOptions = None) -> str:
    """Convenience function to compile a file to HTML."""
    logger.debug(f"Compiling {file_path} to HTML")
    return HtmlRenderer(options).render_file(file_path)

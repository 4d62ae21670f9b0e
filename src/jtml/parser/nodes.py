"""
jtml AST

Immutable value tree produced by the parser and read by the serializers.
A Document holds top-level sibling nodes; each node is an Element, a Text
literal or a Comment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Union


# Tags that never carry children: no {...} body in jtml, no closing tag in HTML
SELF_TERMINATING_TAGS = frozenset({
    "br", "hr", "img", "input", "meta", "area", "base", "col",
    "embed", "keygen", "link", "param", "source",
})


class NodeType(Enum):
    """Types of AST nodes."""
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass(frozen=True)
class Attribute:
    """A key="value" pair. Order and duplicates are preserved by Element."""
    key: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'value': self.value}


@dataclass(frozen=True)
class Text:
    """A string literal. Content is stored without the surrounding quotes."""
    content: str
    node_type: ClassVar[NodeType] = NodeType.TEXT

    def __repr__(self):
        return f"Text({self.content!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': self.node_type.value, 'content': self.content}


@dataclass(frozen=True)
class Comment:
    """A line comment, stored without the leading '//'."""
    content: str
    node_type: ClassVar[NodeType] = NodeType.COMMENT

    def __repr__(self):
        return f"Comment({self.content!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {'_type': self.node_type.value, 'content': self.content}


@dataclass(frozen=True)
class Element:
    """A tag(attrs){children} element."""
    tag_name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple['Node', ...] = ()
    node_type: ClassVar[NodeType] = NodeType.ELEMENT

    def __repr__(self):
        return f"Element({self.tag_name}, {len(self.attributes)} attributes, {len(self.children)} children)"

    def is_self_terminating(self, tags=SELF_TERMINATING_TAGS) -> bool:
        return self.tag_name in tags

    def get_attribute(self, key: str, default=None):
        """First value declared for `key`."""
        for attribute in self.attributes:
            if attribute.key == key:
                return attribute.value
        return default

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': self.node_type.value,
            'tag_name': self.tag_name,
            'attributes': [a.to_dict() for a in self.attributes],
            'children': [c.to_dict() for c in self.children],
        }


Node = Union[Element, Text, Comment]


@dataclass(frozen=True)
class Document:
    """Root of the AST: ordered top-level siblings, no mandatory root element."""
    nodes: Tuple[Node, ...] = ()
    node_type: ClassVar[NodeType] = NodeType.DOCUMENT

    def __repr__(self):
        return f"Document({len(self.nodes)} nodes)"

    def get_elements(self, tag_name: str = None) -> Tuple[Element, ...]:
        """Top-level elements, optionally filtered by tag name."""
        elements = tuple(n for n in self.nodes if isinstance(n, Element))
        if tag_name:
            elements = tuple(e for e in elements if e.tag_name == tag_name)
        return elements

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_type': self.node_type.value,
            'nodes': [n.to_dict() for n in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """Rebuild a Document from its to_dict() form."""
        if data.get('_type') != NodeType.DOCUMENT.value:
            raise ValueError(f"Expected a document, got {data.get('_type')!r}")
        return cls(nodes=tuple(node_from_dict(n) for n in data['nodes']))


def node_from_dict(data: Dict[str, Any]) -> Node:
    """Rebuild a single node from its to_dict() form."""
    node_type = data.get('_type')
    if node_type == NodeType.TEXT.value:
        return Text(data['content'])
    if node_type == NodeType.COMMENT.value:
        return Comment(data['content'])
    if node_type == NodeType.ELEMENT.value:
        return Element(
            tag_name=data['tag_name'],
            attributes=tuple(Attribute(a['key'], a['value']) for a in data['attributes']),
            children=tuple(node_from_dict(c) for c in data['children']),
        )
    raise ValueError(f"Unknown node type {node_type!r}")

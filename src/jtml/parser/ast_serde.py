"""
AST Serialization - JSON conversion for jtml documents.

This module only depends on json and the node types, so it can be used
to dump or cache a parsed document without touching the serializers.

Usage:
    from jtml.parser.ast_serde import serialize_ast, deserialize_ast, count_ast_nodes
"""

import json
from typing import Any, Dict, Union

from jtml.parser.nodes import Document


def serialize_ast(ast: Document) -> bytes:
    """
    Serialize AST to JSON bytes.

    Args:
        ast: Parsed document

    Returns:
        UTF-8 encoded JSON bytes
    """
    data = ast.to_dict()
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False).encode('utf-8')


def deserialize_ast(data: Union[bytes, str]) -> Dict[str, Any]:
    """
    Deserialize AST from JSON bytes or string.

    Returns the dict form; use Document.from_dict() to rebuild the tree.
    """
    if isinstance(data, bytes):
        return json.loads(data.decode('utf-8'))
    return json.loads(data)


def count_ast_nodes(ast_dict: Dict[str, Any]) -> int:
    """Count the document node plus every node nested below it."""
    count = 1
    for key in ('nodes', 'children'):
        for item in ast_dict.get(key, ()):
            if isinstance(item, dict):
                count += count_ast_nodes(item)
    return count

"""Reduce a markup tree to the nodes that contribute literal words."""

from typing import List, Sequence

from ...core.models import MarkupNode, NodeType

WORD_TYPES = frozenset(
    {NodeType.TEXT, NodeType.EMOJI_CODE, NodeType.UNICODE_EMOJI}
)
REFERENCE_TYPES = frozenset(
    {NodeType.URL, NodeType.MENTION, NodeType.HASHTAG, NodeType.LINK}
)
CONTAINER_TYPES = frozenset(
    {
        NodeType.BOLD,
        NodeType.SMALL,
        NodeType.ITALIC,
        NodeType.STRIKE,
        NodeType.PLAIN,
        NodeType.FN,
        NodeType.QUOTE,
        NodeType.CENTER,
    }
)
# Leaves without words: code, math, search
SILENT_TYPES = frozenset(NodeType) - WORD_TYPES - REFERENCE_TYPES - CONTAINER_TYPES


def sanitize(nodes: Sequence[MarkupNode]) -> List[MarkupNode]:
    """Flatten ``nodes`` into the ordered word-bearing leaves."""
    return [kept for node in nodes for kept in _sanitize_node(node)]


def _sanitize_node(node: MarkupNode) -> List[MarkupNode]:
    if node.type in WORD_TYPES:
        return [node]

    # Ruby annotations are not supported; base text and reading both go
    if node.type is NodeType.FN and node.props.get("name") == "ruby":
        return []

    if node.type in REFERENCE_TYPES or node.type in SILENT_TYPES:
        return []

    return sanitize(node.children)

"""Turn sanitized markup nodes into a flat token sequence."""

from typing import List, Optional, Sequence

from ....core.models import EMOJI_POS, MarkupNode, NodeType, Token
from .provider import MorphTokenizer


def node_tokens(node: MarkupNode, tokenizer: MorphTokenizer) -> Optional[List[Token]]:
    """Tokens for one word-bearing node, or None for anything else."""
    if node.type is NodeType.TEXT:
        return tokenizer.tokenize(node.props["text"])
    if node.type is NodeType.UNICODE_EMOJI:
        return [Token.of(node.props["emoji"], EMOJI_POS)]
    if node.type is NodeType.EMOJI_CODE:
        return [Token.of(f":{node.props['name']}:", EMOJI_POS)]
    return None


def tokenize(nodes: Sequence[MarkupNode], tokenizer: MorphTokenizer) -> List[Token]:
    """Tokenize sanitized nodes in order; one tokenizer call per text node."""
    tokens: List[Token] = []
    for node in nodes:
        produced = node_tokens(node, tokenizer)
        if produced is not None:
            tokens.extend(produced)

    # Leading empty surface is a tokenizer artifact
    if tokens and tokens[0].surface == "":
        tokens = tokens[1:]
    return tokens

"""Sliding token windows used both as lookup keys and as chain payloads."""

from typing import List, Optional, Sequence

from ...core.models import Chunk, Token

CHUNK_SIZE = 2
LINE_END_SURFACES = ("\n", "。", "　")


def split_lines(tokens: Sequence[Token]) -> List[List[Token]]:
    """Split after every line-ending token; the ending stays on its line."""
    lines: List[List[Token]] = [[]]
    for token in tokens:
        lines[-1].append(token)
        if token.surface in LINE_END_SURFACES:
            lines.append([])
    return lines


def create_token_chunk(
    tokens: Optional[Sequence[Token]], chunk_size: int = CHUNK_SIZE
) -> List[Chunk]:
    """
    Window ``tokens`` into overlapping chunks of ``chunk_size``.

    Windows restart at each line. A line shorter than the window becomes one
    short chunk, unless it starts with a bare newline.
    """
    if not tokens:
        return []
    if len(tokens) < chunk_size:
        return [tuple(tokens)]

    chunks: List[Chunk] = []
    for line in split_lines(tokens):
        if not line:
            continue
        if len(line) < chunk_size:
            if line[0].surface != "\n":
                chunks.append(tuple(line))
            continue
        # Full windows only: no shorter tail windows such as a lone "。"
        for i in range(len(line) - chunk_size + 1):
            chunks.append(tuple(line[i : i + chunk_size]))
    return chunks

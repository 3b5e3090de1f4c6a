"""
Generation steps for the textmaker pipeline.

- sanitize: keep the word-bearing markup leaves
- tokenize: morphological tokens framed by BOS/EOS boundaries
- chunk: overlapping token windows per line
- chain: weighted random walk over the chunk corpus
- render: chain back to display text
"""

from .chain import create_result_chain, match_length, select_chunk, start_candidates
from .chunk import CHUNK_SIZE, create_token_chunk, split_lines
from .render import chunk_to_string
from .sanitize import sanitize
from .tokenize import tokenize

__all__ = [
    "CHUNK_SIZE",
    "chunk_to_string",
    "create_result_chain",
    "create_token_chunk",
    "match_length",
    "sanitize",
    "select_chunk",
    "split_lines",
    "start_candidates",
    "tokenize",
]

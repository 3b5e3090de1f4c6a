"""Reassemble a generation chain into display text."""

import re
from typing import Optional, Sequence

from ...core.models import GenerationStep, Token

EMOJI_CODE_RE = re.compile(r":[0-9A-Za-z_\-]+:")
ALNUM_HEAD_RE = re.compile(r"^[0-9A-Za-z]")
LATIN_RUN_RE = re.compile(r"^[0-9A-Za-z.!]{2,}")
LATIN_HEAD_RE = re.compile(r"^[0-9A-Za-z.!]+")

# Zero-width mark kept between an emoji code and a following Latin word
EMOJI_WORD_JOINER = "\U0001D173"


def render_token(token: Token, prev: Optional[Token]) -> str:
    """Render one token given the token before it in the same chunk."""
    if token.is_boundary:
        if prev is not None and prev.surface == "EOS" and token.surface == "BOS":
            return "\n"
        return ""

    if prev is not None:
        if EMOJI_CODE_RE.search(prev.surface) and ALNUM_HEAD_RE.match(token.surface):
            return f"{EMOJI_WORD_JOINER}{token.surface}"
        if LATIN_RUN_RE.match(prev.surface) and LATIN_HEAD_RE.match(token.surface):
            return f" {token.surface}"
    return token.surface


def chunk_to_string(chain: Sequence[GenerationStep]) -> str:
    """Concatenate the chain, skipping each step's already-rendered key tokens."""
    parts = []
    for step in chain:
        for i, token in enumerate(step.chunk):
            if i < step.match_length:
                continue
            prev = step.chunk[i - 1] if i > 0 else None
            parts.append(render_token(token, prev))
    return "".join(parts)

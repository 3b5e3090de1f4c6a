"""
Weighted random walk that threads corpus chunks into a generation chain.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence

from ...core.errors import EmptyCorpusError, NoStartCandidateError
from ...core.models import (
    BOUNDARY_POS,
    PARTICLE_POS,
    Chunk,
    GenerationStep,
    Token,
)

MAX_MATCH_LENGTH = 1
MAX_STEPS = 50
MIN_MATCH_LENGTH = 1
TERMINAL_SURFACES = ("。", "EOS")
FALLBACK_POS = "なに"

# Shape of the arctangent curve behind the key width draw
_CURVE_STEPS = 5
_CURVE_STEEPNESS = 13


def match_length(
    max_width: int = MAX_MATCH_LENGTH, rng: Optional[random.Random] = None
) -> int:
    """Draw a key width in ``[1, max_width]``, weighted toward the ends.

    ``max_width == 1`` always yields 1.
    """
    u = (rng or random).random()
    curve = _CURVE_STEPS * 2 * math.atan(_CURVE_STEEPNESS * u) / math.pi
    t = math.floor(curve + 0.5)
    return math.floor((max_width - MIN_MATCH_LENGTH) * t / _CURVE_STEPS) + MIN_MATCH_LENGTH


def fallback_chunk() -> Chunk:
    return (Token.of("\n", FALLBACK_POS),)


def select_chunk(
    chunks: Sequence[Chunk], key: Sequence[Token], rng: Optional[random.Random] = None
) -> Chunk:
    """Pick a chunk that starts with ``key`` and extends past it.

    Returns a single line-break token when nothing continues the key.
    """
    matched = [
        chunk
        for chunk in chunks
        if len(chunk) > len(key)
        and all(chunk[i].surface == k.surface for i, k in enumerate(key))
    ]
    if not matched:
        return fallback_chunk()
    return (rng or random).choice(matched)


def is_start_candidate(chunk: Chunk) -> bool:
    return (
        len(chunk) > 1
        and chunk[0].surface == "BOS"
        and chunk[0].pos == BOUNDARY_POS
        and chunk[1].pos != PARTICLE_POS
    )


def start_candidates(chunks: Sequence[Chunk]) -> List[Chunk]:
    return [chunk for chunk in chunks if is_start_candidate(chunk)]


def create_result_chain(
    chunks: Sequence[Chunk],
    max_match_length: int = MAX_MATCH_LENGTH,
    max_steps: int = MAX_STEPS,
    rng: Optional[random.Random] = None,
) -> List[GenerationStep]:
    """
    Walk the corpus from a sentence-opening chunk until a terminal token.

    Args:
        chunks: Pooled corpus
        max_match_length: Upper bound of the key width draw
        max_steps: Step budget after the opening chunk
        rng: Random source, module ``random`` when omitted

    Returns:
        Steps in order; the first has match length 0

    Raises:
        EmptyCorpusError: ``chunks`` is empty
        NoStartCandidateError: no chunk opens at a BOS boundary
    """
    source = rng or random
    if not chunks:
        raise EmptyCorpusError()
    candidates = start_candidates(chunks)
    if not candidates:
        raise NoStartCandidateError(len(chunks))

    chain = [GenerationStep(0, source.choice(candidates))]
    steps = 0
    while True:
        width = match_length(max_match_length, rng)
        key = chain[-1].chunk[-width:]
        chain.append(GenerationStep(width, select_chunk(chunks, key, rng)))
        steps += 1
        if steps >= max_steps or chain[-1].chunk[-1].surface in TERMINAL_SURFACES:
            return chain

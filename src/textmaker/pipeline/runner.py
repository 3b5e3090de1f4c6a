import random
import re
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from ..core.errors import (
    EmptyCorpusError,
    NoStartCandidateError,
    RetryExhaustedError,
    TokenizerError,
)
from ..core.logging import log
from ..core.models import Chunk
from ..markup.parser import parse
from .steps.chain import create_result_chain, start_candidates
from .steps.chunk import create_token_chunk
from .steps.render import chunk_to_string
from .steps.sanitize import sanitize
from .steps.tokenize import MorphTokenizer, get_tokenizer, tokenize

if TYPE_CHECKING:
    from ..core.config import Settings

BRACKET_PAIRS = (
    ("「", "」"),
    ("【", "】"),
    ("[", "]"),
    ("(", ")"),
    ("『", "』"),
    ("{", "}"),
    ("（", "）"),
)
NOISE_RE = re.compile(r"[0-9A-Za-z\n ]+")


def assert_pair_brackets(text: str) -> bool:
    """True when every bracket pair opens as often as it closes."""
    return all(text.count(left) == text.count(right) for left, right in BRACKET_PAIRS)


def is_noise(text: str) -> bool:
    """Inputs made only of ASCII letters, digits, spaces and newlines."""
    return NOISE_RE.fullmatch(text) is not None


def create_chunks_from_input(
    text: str, tokenizer: MorphTokenizer, chunk_size: int
) -> List[Chunk]:
    """Parse, sanitize, tokenize and window one message body."""
    try:
        tokens = tokenize(sanitize(parse(text)), tokenizer)
    except TokenizerError as e:
        log.error("tokenize.failed", provider=tokenizer.provider_name, error=str(e))
        raise
    return create_token_chunk(tokens, chunk_size)


def rejection_reason(
    result: str,
    inputs: Sequence[str],
    minimum: int,
    tokenizer: MorphTokenizer,
    settings: "Settings",
) -> Optional[str]:
    """Why ``result`` is not acceptable, or None when it is."""
    if result == "":
        return "empty"
    if not assert_pair_brackets(result):
        return "brackets"
    if len(result) < settings.MIN_RESULT_LENGTH:
        return "too_short"
    if len(create_chunks_from_input(result, tokenizer, settings.CHUNK_SIZE)) < minimum:
        return "too_few_chunks"
    if result in inputs:
        return "duplicate"
    return None


def create_text_from_inputs(
    inputs: Sequence[str],
    settings: Optional["Settings"] = None,
    tokenizer: Optional[MorphTokenizer] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate one validated text from message bodies.

    Args:
        inputs: Raw marked-up message bodies
        settings: Generation settings (defaults loaded from the environment)
        tokenizer: Morphological tokenizer, built from settings when omitted
        rng: Random source, module ``random`` when omitted

    Returns:
        Text that is non-empty, bracket-balanced, long enough and not a copy
        of any input

    Raises:
        EmptyCorpusError: no eligible input produced a chunk
        NoStartCandidateError: no chunk can open a sentence
        RetryExhaustedError: MAX_ATTEMPTS draws were all rejected
        TokenizerError: the tokenizer failed on an input
    """
    if settings is None:
        from ..core.config import Settings

        settings = Settings()
    tokenizer = tokenizer or get_tokenizer(settings.TOKENIZER, settings.MECAB_DIC_DIR)
    source = rng or random

    # Inputs never change between attempts, so their chunks are built once
    eligible = [text for text in inputs if not is_noise(text)]
    corpus: List[Chunk] = [
        chunk
        for text in eligible
        for chunk in create_chunks_from_input(text, tokenizer, settings.CHUNK_SIZE)
    ]
    if not corpus:
        raise EmptyCorpusError(
            f"No chunks could be built from {len(inputs)} inputs ({len(eligible)} eligible)"
        )
    if not start_candidates(corpus):
        raise NoStartCandidateError(len(corpus))

    minimum = source.randint(1, settings.MIN_CHUNKS_MAX)
    log.info(
        "generate.start",
        inputs=len(inputs),
        eligible=len(eligible),
        chunks=len(corpus),
        minimum=minimum,
    )

    reasons: Dict[str, int] = {}
    reason: Optional[str] = None
    for attempt in range(1, settings.MAX_ATTEMPTS + 1):
        chain = create_result_chain(
            corpus,
            max_match_length=settings.MAX_MATCH_LENGTH,
            max_steps=settings.MAX_STEPS,
            rng=rng,
        )
        result = chunk_to_string(chain)
        reason = rejection_reason(result, inputs, minimum, tokenizer, settings)
        if reason is None:
            log.info("generate.complete", attempts=attempt, length=len(result))
            return result
        reasons[reason] = reasons.get(reason, 0) + 1
        log.debug("generate.retry", attempt=attempt, reason=reason)

    log.warning("generate.exhausted", attempts=settings.MAX_ATTEMPTS, reasons=reasons)
    raise RetryExhaustedError(settings.MAX_ATTEMPTS, reason)

"""Failures a generation request can report instead of returning text."""

from typing import Optional


class TextMakerError(Exception):
    """Base class for generation failures."""


class EmptyCorpusError(TextMakerError):
    """No eligible input produced a single chunk."""

    def __init__(self, message: str = "No chunks could be built from the inputs"):
        super().__init__(message)


class NoStartCandidateError(TextMakerError):
    """The corpus has chunks but none can open a sentence."""

    def __init__(self, chunk_count: int):
        self.chunk_count = chunk_count
        super().__init__(
            f"None of {chunk_count} chunks starts at a sentence boundary"
        )


class RetryExhaustedError(TextMakerError):
    """Every generation attempt was rejected by validation."""

    def __init__(self, attempts: int, reason: Optional[str] = None):
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            f"No acceptable text after {attempts} attempts (last rejection: {reason})"
        )


class TokenizerError(TextMakerError):
    """The morphological tokenizer failed on a text run or is unavailable."""

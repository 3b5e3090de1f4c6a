"""Global test configuration for textmaker tests."""

import random

import pytest
import structlog

from textmaker.core.config import Settings
from textmaker.pipeline.steps.tokenize import DummyTokenizer

# Splits 猫が鳴いた。 into 猫 / が / 鳴い / た / 。 like MeCab does
LEXICON = {
    "猫": "名詞",
    "犬": "名詞",
    "庭": "名詞",
    "公園": "名詞",
    "鳴い": "動詞",
    "走っ": "動詞",
}


@pytest.fixture
def tokenizer():
    """Deterministic tokenizer that needs no MeCab dictionary."""
    return DummyTokenizer(lexicon=LEXICON)


@pytest.fixture
def rng():
    return random.Random(20240601)


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, TOKENIZER="dummy")


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()

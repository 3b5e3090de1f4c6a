"""
Tokenization step: sanitized markup nodes to morphological tokens.

Providers wrap the external morphological analyser (MeCab) or a deterministic
dictionary-free stand-in selected by configuration.
"""

from .adapter import node_tokens, tokenize
from .provider import (
    DummyTokenizer,
    MecabTokenizer,
    MorphTokenizer,
    get_tokenizer,
)

__all__ = [
    "DummyTokenizer",
    "MecabTokenizer",
    "MorphTokenizer",
    "get_tokenizer",
    "node_tokens",
    "tokenize",
]

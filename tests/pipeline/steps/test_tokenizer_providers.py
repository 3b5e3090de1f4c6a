"""Tests for morphological tokenizer providers."""

import pytest

from textmaker.core.errors import TokenizerError
from textmaker.core.models import BOUNDARY_POS
from textmaker.pipeline.steps.tokenize import (
    DummyTokenizer,
    MecabTokenizer,
    get_tokenizer,
)


def surfaces(tokens):
    return [t.surface for t in tokens]


class TestDummyTokenizer:
    """Test the dictionary-free tokenizer."""

    def test_sentence_with_lexicon(self, tokenizer):
        """Test lexicon words and particles in a sentence."""
        tokens = tokenizer.tokenize("猫が鳴いた。")
        assert surfaces(tokens) == ["BOS", "猫", "が", "鳴い", "た", "。", "EOS"]
        assert tokens[0].pos == BOUNDARY_POS
        assert tokens[-1].pos == BOUNDARY_POS
        assert tokens[2].pos == "助詞"

    def test_each_line_is_framed(self):
        """Test BOS and EOS around every line."""
        tokens = DummyTokenizer().tokenize("猫\n犬")
        assert surfaces(tokens) == ["BOS", "猫", "EOS", "BOS", "犬", "EOS"]

    def test_script_runs(self):
        """Test segmentation by script runs."""
        tokens = DummyTokenizer().tokenize("コーヒーとcake 2個")
        assert surfaces(tokens)[1:-1] == ["コーヒー", "と", "cake", "2", "個"]

    def test_full_width_space_is_a_token(self):
        """Test that full-width spaces survive as tokens."""
        tokens = DummyTokenizer().tokenize("猫　犬")
        assert surfaces(tokens)[1:-1] == ["猫", "　", "犬"]

    def test_deterministic(self, tokenizer):
        """Test that tokenizing is deterministic."""
        assert tokenizer.tokenize("犬が公園で走った。") == tokenizer.tokenize("犬が公園で走った。")

    def test_provider_name(self):
        """Test the provider name."""
        assert DummyTokenizer().provider_name == "dummy"


class TestGetTokenizer:
    """Test the tokenizer factory."""

    def test_known_providers(self):
        """Test that known names build their provider."""
        assert isinstance(get_tokenizer("dummy"), DummyTokenizer)
        mecab = get_tokenizer("mecab", dicdir="/opt/dic")
        assert isinstance(mecab, MecabTokenizer)
        assert mecab.dicdir == "/opt/dic"

    def test_unknown_provider(self):
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown tokenizer provider"):
            get_tokenizer("juman")


class TestMecabTokenizer:
    """Test the MeCab tokenizer when it is installed."""

    def test_missing_dictionary_raises_tokenizer_error(self, tmp_path):
        """Test that a bad dictionary path raises TokenizerError."""
        pytest.importorskip("MeCab")
        morph = MecabTokenizer(dicdir=str(tmp_path / "missing"))
        with pytest.raises(TokenizerError):
            morph.tokenize("猫")

    @pytest.mark.mecab
    def test_sentence_is_framed_by_boundaries(self):
        """Test that MeCab output is framed by BOS and EOS."""
        pytest.importorskip("MeCab")
        morph = MecabTokenizer()
        try:
            tokens = morph.tokenize("猫が鳴いた。")
        except TokenizerError as e:
            pytest.skip(f"MeCab dictionary unavailable: {e}")

        assert tokens[0].surface == "BOS" and tokens[0].pos == BOUNDARY_POS
        assert tokens[-1].surface == "EOS" and tokens[-1].pos == BOUNDARY_POS
        assert "".join(surfaces(tokens[1:-1])) == "猫が鳴いた。"
        assert any(t.pos == "助詞" for t in tokens)

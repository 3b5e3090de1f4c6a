"""Tests for rendering a chain back to text."""

from textmaker.core.models import EMOJI_POS, GenerationStep, Token, bos, eos
from textmaker.pipeline.steps.render import EMOJI_WORD_JOINER, chunk_to_string, render_token


def word(surface, pos="名詞"):
    return Token.of(surface, pos)


class TestChunkToString:
    """Test rendering a whole chain."""

    def test_empty_chain(self):
        """Test that an empty chain renders empty."""
        assert chunk_to_string([]) == ""

    def test_plain_words_concatenate(self):
        """Test that Japanese words join without spaces."""
        chain = [
            GenerationStep(0, (word("今日"), word("は"))),
            GenerationStep(1, (word("は"), word("晴れ"))),
            GenerationStep(1, (word("晴れ"), word("。"))),
        ]
        assert chunk_to_string(chain) == "今日は晴れ。"

    def test_matched_prefix_suppressed(self):
        """Test that key tokens are not rendered twice."""
        chain = [
            GenerationStep(0, (bos(), word("猫"))),
            GenerationStep(2, (bos(), word("猫"), word("が"))),
        ]
        assert chunk_to_string(chain) == "猫が"

    def test_boundaries(self):
        """Test that EOS then BOS becomes a line break."""
        chain = [GenerationStep(0, (word("猫"), eos(), bos(), word("犬")))]
        assert chunk_to_string(chain) == "猫\n犬"
        assert chunk_to_string([GenerationStep(0, (bos(), word("犬")))]) == "犬"
        assert chunk_to_string([GenerationStep(0, (word("犬"), eos()))]) == "犬"

    def test_fallback_line_break_renders_unless_matched(self):
        """Test when the fallback line break is rendered."""
        fallback = (Token.of("\n", "なに"),)
        assert chunk_to_string([GenerationStep(0, fallback)]) == "\n"
        assert chunk_to_string([GenerationStep(1, fallback)]) == ""

    def test_emoji_code_then_latin(self):
        """Test the joiner between an emoji code and a Latin word."""
        chain = [GenerationStep(0, (Token.of(":blobcat:", EMOJI_POS), word("yes")))]
        assert chunk_to_string(chain) == f":blobcat:{EMOJI_WORD_JOINER}yes"

    def test_latin_words_get_spaces(self):
        """Test spaces between Latin words."""
        chain = [GenerationStep(0, (word("hello"), word("world"), word("!")))]
        assert chunk_to_string(chain) == "hello world !"

    def test_single_letter_gets_no_space(self):
        """Test that a single letter does not trigger a space."""
        chain = [GenerationStep(0, (word("a"), word("b")))]
        assert chunk_to_string(chain) == "ab"

    def test_japanese_before_latin_gets_no_space(self):
        """Test that Japanese before Latin gets no space."""
        chain = [GenerationStep(0, (word("猫"), word("cat")))]
        assert chunk_to_string(chain) == "猫cat"

    def test_ascii_symbols_are_not_latin(self):
        """Test that underscores and brackets do not start a spaced Latin run."""
        chain = [GenerationStep(0, (word("__"), word("ok"), word("[]"), word("go")))]
        assert chunk_to_string(chain) == "__ok[]go"


class TestRenderToken:
    """Test rendering single tokens."""

    def test_first_token_renders_literally(self):
        """Test that a token with no predecessor renders as is."""
        assert render_token(word("yes"), None) == "yes"

    def test_lone_boundary_is_empty(self):
        """Test that a lone boundary renders empty."""
        assert render_token(eos(), None) == ""
        assert render_token(bos(), word("猫")) == ""

"""Tests for token windowing."""

from textmaker.core.models import Token
from textmaker.pipeline.steps.chunk import create_token_chunk, split_lines


def toks(*surfaces):
    return [Token.of(s, "名詞") for s in surfaces]


def surfaces(chunks):
    return [[t.surface for t in chunk] for chunk in chunks]


class TestCreateTokenChunk:
    """Test windowing tokens into chunks."""

    def test_empty_and_none(self):
        """Test that no tokens give no chunks."""
        assert create_token_chunk([]) == []
        assert create_token_chunk(None) == []

    def test_shorter_than_window_is_single_chunk(self):
        """Test that a short sequence is one chunk."""
        tokens = toks("a", "b")
        chunks = create_token_chunk(tokens, chunk_size=3)
        assert chunks == [tuple(tokens)]

    def test_sliding_windows_without_line_ends(self):
        """Test full windows over a single line."""
        tokens = toks("a", "b", "c", "d", "e")
        for size in (1, 2, 3, 5):
            chunks = create_token_chunk(tokens, chunk_size=size)
            assert len(chunks) == len(tokens) - size + 1
            assert all(len(c) == size for c in chunks)
            assert [list(c) for c in chunks] == [
                tokens[i : i + size] for i in range(len(tokens) - size + 1)
            ]

    def test_windows_restart_after_line_end(self):
        """Test that windows do not cross a sentence end."""
        tokens = toks("BOS", "猫", "が", "鳴い", "た", "。", "EOS")
        chunks = create_token_chunk(tokens, chunk_size=2)
        assert surfaces(chunks) == [
            ["BOS", "猫"],
            ["猫", "が"],
            ["が", "鳴い"],
            ["鳴い", "た"],
            ["た", "。"],
            ["EOS"],
        ]

    def test_no_short_tail_windows(self):
        """Test that a long line yields only full-size windows."""
        chunks = create_token_chunk(toks("猫", "が", "鳴い", "た", "。"), chunk_size=3)
        assert surfaces(chunks) == [
            ["猫", "が", "鳴い"],
            ["が", "鳴い", "た"],
            ["鳴い", "た", "。"],
        ]

    def test_full_width_space_ends_line(self):
        """Test that a full-width space ends a line."""
        chunks = create_token_chunk(toks("a", "　", "b", "c"), chunk_size=2)
        assert surfaces(chunks) == [["a", "　"], ["b", "c"]]

    def test_short_line_starting_with_newline_skipped(self):
        """Test that a short newline-led line gives no chunk."""
        tokens = toks("a", "b", "\n", "c", "d", "e")
        chunks = create_token_chunk(tokens, chunk_size=2)
        assert surfaces(chunks) == [["a", "b"], ["b", "\n"], ["c", "d"], ["d", "e"]]
        lone_break = create_token_chunk(toks("a", "b", "c", "\n", "\n"), chunk_size=3)
        assert ["\n"] not in surfaces(lone_break)

    def test_chunks_keep_token_order(self):
        """Test that chunks keep the token order."""
        tokens = toks("x", "y", "z")
        for chunk in create_token_chunk(tokens, chunk_size=2):
            assert tokens.index(chunk[0]) + 1 == tokens.index(chunk[1])


class TestSplitLines:
    """Test splitting tokens into lines."""

    def test_line_end_stays_on_its_line(self):
        """Test that the line-ending token closes its own line."""
        lines = split_lines(toks("a", "。", "b"))
        assert [[t.surface for t in line] for line in lines] == [["a", "。"], ["b"]]

    def test_trailing_line_end_leaves_empty_line(self):
        """Test the empty line after a trailing line end."""
        lines = split_lines(toks("a", "\n"))
        assert lines[-1] == []

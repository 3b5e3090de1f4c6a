from __future__ import annotations

import re
from abc import ABC, abstractmethod

from ....core.errors import TokenizerError
from ....core.models import Token, TokenFeature, bos, eos

# IPAdic-style names for the CSV feature fields after the part of speech
MECAB_FEATURE_FIELDS = (
    "pos_detail1",
    "pos_detail2",
    "pos_detail3",
    "conjugated_type",
    "conjugated_form",
    "basic_form",
    "reading",
    "pronunciation",
)

MECAB_BOS_EOS = 2
MECAB_EOS = 3


class MorphTokenizer(ABC):
    """Abstract base class for morphological tokenizers."""

    @abstractmethod
    def tokenize(self, text: str) -> list[Token]:
        """Split text into tokens framed by BOS/EOS per line."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""


class MecabTokenizer(MorphTokenizer):
    """MeCab tokenizer (requires mecab-python3 and a dictionary)."""

    def __init__(self, dicdir: str | None = None):
        self.dicdir = dicdir
        self._tagger = None

    @property
    def tagger(self):
        """Lazy load the tagger."""
        if self._tagger is None:
            try:
                import MeCab  # type: ignore[import-not-found]
            except ImportError:
                raise TokenizerError("mecab-python3 package required: pip install mecab-python3") from None

            args = f"-d {self.dicdir}" if self.dicdir else ""
            try:
                self._tagger = MeCab.Tagger(args)
            except RuntimeError as e:
                raise TokenizerError(f"Failed to initialise MeCab (args={args!r}): {e}") from e
        return self._tagger

    def tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        for line in text.split("\n"):
            tokens.extend(self._tokenize_line(line))
        return tokens

    def _tokenize_line(self, line: str) -> list[Token]:
        try:
            node = self.tagger.parseToNode(line)
        except RuntimeError as e:
            raise TokenizerError(f"MeCab failed on {line!r}: {e}") from e

        tokens: list[Token] = []
        while node is not None:
            if node.stat == MECAB_BOS_EOS:
                tokens.append(bos())
            elif node.stat == MECAB_EOS:
                tokens.append(eos())
            else:
                tokens.append(self._to_token(node))
            node = node.next
        return tokens

    @staticmethod
    def _to_token(node) -> Token:
        fields = node.feature.split(",")
        extras = dict(zip(MECAB_FEATURE_FIELDS, fields[1:]))
        return Token(
            surface=node.surface,
            feature=TokenFeature(pos=fields[0], **extras),
            id=node.id,
        )

    @property
    def provider_name(self) -> str:
        return "mecab"


class DummyTokenizer(MorphTokenizer):
    """Deterministic dictionary-free tokenizer for testing (no MeCab required).

    Words from ``lexicon`` win by longest match; everything else is cut into
    runs of the same script. Half-width spaces are dropped as MeCab does.
    """

    DEFAULT_LEXICON: dict[str, str] = {
        **{p: "助詞" for p in ("が", "を", "に", "は", "の", "で", "と", "も", "へ", "や", "か", "ね", "よ", "から", "まで", "より")},
        **{a: "助動詞" for a in ("た", "だ", "です", "ます", "ない")},
    }

    SCRIPT_POS = {
        "kanji": "名詞",
        "hiragana": "動詞",
        "katakana": "名詞",
        "latin": "名詞",
        "digit": "名詞",
    }

    _SCRIPTS = (
        ("hiragana", re.compile(r"[ぁ-ゖ]")),
        ("katakana", re.compile(r"[ァ-ヺ]")),
        ("kanji", re.compile(r"[一-鿿々〆]")),
        ("latin", re.compile(r"[A-Za-z]")),
        ("digit", re.compile(r"[0-9０-９]")),
    )

    def __init__(self, lexicon: dict[str, str] | None = None):
        self.lexicon = {**self.DEFAULT_LEXICON, **(lexicon or {})}
        self._longest = max((len(w) for w in self.lexicon), default=0)

    def tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        for line in text.split("\n"):
            tokens.append(bos())
            tokens.extend(self._segment(line))
            tokens.append(eos())
        return tokens

    def _segment(self, line: str) -> list[Token]:
        tokens: list[Token] = []
        run, run_script = "", None

        def flush() -> None:
            nonlocal run, run_script
            if run:
                tokens.append(Token.of(run, self.SCRIPT_POS[run_script]))
            run, run_script = "", None

        i = 0
        while i < len(line):
            ch = line[i]
            if ch == " ":
                flush()
                i += 1
                continue

            word = self._lookup(line, i)
            if word:
                flush()
                tokens.append(Token.of(word, self.lexicon[word]))
                i += len(word)
                continue

            script = self._script(ch)
            if ch == "ー" and run:
                run += ch
            elif script is None:
                flush()
                tokens.append(Token.of(ch, "記号"))
            elif script == run_script:
                run += ch
            else:
                flush()
                run, run_script = ch, script
            i += 1

        flush()
        return tokens

    def _lookup(self, line: str, i: int) -> str | None:
        for size in range(min(self._longest, len(line) - i), 0, -1):
            candidate = line[i : i + size]
            if candidate in self.lexicon:
                return candidate
        return None

    def _script(self, ch: str) -> str | None:
        for name, pattern in self._SCRIPTS:
            if pattern.match(ch):
                return name
        return None

    @property
    def provider_name(self) -> str:
        return "dummy"


def get_tokenizer(
    provider_name: str = "mecab", dicdir: str | None = None
) -> MorphTokenizer:
    """
    Get tokenizer based on configuration.

    Args:
        provider_name: Provider name ("mecab", "dummy")
        dicdir: MeCab dictionary directory, ignored by other providers

    Returns:
        MorphTokenizer instance
    """
    if provider_name == "mecab":
        return MecabTokenizer(dicdir=dicdir)
    elif provider_name == "dummy":
        return DummyTokenizer()
    else:
        raise ValueError(f"Unknown tokenizer provider: {provider_name}")

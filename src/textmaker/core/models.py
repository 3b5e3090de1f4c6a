from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

BOUNDARY_POS = "BOS/EOS"
EMOJI_POS = "絵文字"
PARTICLE_POS = "助詞"


class NodeType(str, Enum):
    """Closed set of markup node kinds."""

    # word-bearing leaves
    TEXT = "text"
    UNICODE_EMOJI = "unicodeEmoji"
    EMOJI_CODE = "emojiCode"

    # references
    MENTION = "mention"
    HASHTAG = "hashtag"
    URL = "url"
    LINK = "link"

    # inline formatting
    BOLD = "bold"
    SMALL = "small"
    ITALIC = "italic"
    STRIKE = "strike"
    INLINE_CODE = "inlineCode"
    MATH_INLINE = "mathInline"
    PLAIN = "plain"
    FN = "fn"

    # blocks
    QUOTE = "quote"
    CENTER = "center"
    CODE_BLOCK = "blockCode"
    MATH_BLOCK = "mathBlock"
    SEARCH = "search"


class MarkupNode(BaseModel):
    """A node of the parsed markup tree."""

    model_config = ConfigDict(frozen=True)

    type: NodeType
    props: dict[str, Any] = Field(default_factory=dict)
    children: tuple[MarkupNode, ...] = ()


class TokenFeature(BaseModel):
    """Morphological features; only ``pos`` is required, extras are kept as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")

    pos: str


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    surface: str
    feature: TokenFeature
    id: int | None = None

    @classmethod
    def of(cls, surface: str, pos: str, **extra: Any) -> Token:
        return cls(surface=surface, feature=TokenFeature(pos=pos, **extra))

    @property
    def pos(self) -> str:
        return self.feature.pos

    @property
    def is_boundary(self) -> bool:
        return self.feature.pos == BOUNDARY_POS


def bos() -> Token:
    return Token.of("BOS", BOUNDARY_POS)


def eos() -> Token:
    return Token.of("EOS", BOUNDARY_POS)


# A window of consecutive tokens from one input
Chunk = tuple[Token, ...]


class GenerationStep(NamedTuple):
    """One link of a chain: how many leading tokens were matched, and the chunk."""

    match_length: int
    chunk: Chunk

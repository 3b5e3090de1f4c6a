"""
Parser for the Misskey-flavoured markup found in message bodies.

Produces a tree of ``MarkupNode`` with the closed ``NodeType`` set. The parser
is total: anything that is not recognised syntax is kept as ``text``.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from ..core.models import MarkupNode, NodeType

Match = Optional[Tuple[MarkupNode, int]]

EMOJI_CODE_RE = re.compile(r":([a-zA-Z0-9_+\-]+):")
_EMOJI_BASE = "\U0001F300-\U0001FAFF"
_EMOJI_TAIL = "\uFE0F\U0001F3FB-\U0001F3FF"
UNICODE_EMOJI_RE = re.compile(
    "(?:"
    "[\U0001F1E6-\U0001F1FF]{2}"  # flags
    "|[0-9#*]\uFE0F?\u20E3"  # keycaps
    f"|(?:[{_EMOJI_BASE}]|[\u2600-\u27BF]\uFE0F)[{_EMOJI_TAIL}]*"
    f"(?:\u200D(?:[{_EMOJI_BASE}]|[\u2600-\u27BF]\uFE0F?)[{_EMOJI_TAIL}]*)*"
    ")"
)
URL_RE = re.compile(r"https?://[\w/:%#$&?()~.=+\-@,;!'*\[\]]+", re.ASCII)
BRACKET_URL_RE = re.compile(r"<(https?://[^\s>]+)>")
LINK_RE = re.compile(r"(\??)\[([^\[\]\n]+)\]\((https?://[^\s()]+)\)")
MENTION_RE = re.compile(r"@([a-zA-Z0-9_]+)(?:@([a-zA-Z0-9_.\-]*[a-zA-Z0-9]))?")
HASHTAG_RE = re.compile(r"#([^\s.,!?'\"#:/\[\]【】()「」（）<>]+)")
FN_HEAD_RE = re.compile(r"\$\[([a-zA-Z0-9_]+)(?:\.([^\s\]]+))? ")
ITALIC_ASTERISK_RE = re.compile(r"\*([a-zA-Z0-9\s]+)\*")
BOLD_UNDERSCORE_RE = re.compile(r"__([a-zA-Z0-9\s]+)__")
SEARCH_RE = re.compile(
    r"^(.+?)[ \u3000](検索|search|\[検索\]|\[search\])$", re.IGNORECASE
)

_HTML_TAGS = {
    "b": NodeType.BOLD,
    "small": NodeType.SMALL,
    "i": NodeType.ITALIC,
    "s": NodeType.STRIKE,
}


def parse(text: str) -> List[MarkupNode]:
    """Parse a message body into a list of top-level nodes."""
    lines = text.replace("\r\n", "\n").split("\n")
    nodes: List[MarkupNode] = []
    pending: List[str] = []

    def flush() -> None:
        if pending:
            nodes.extend(parse_inline("\n".join(pending)))
            pending.clear()

    i = 0
    while i < len(lines):
        line = lines[i]

        if line.startswith("```"):
            end = _find_line(lines, i + 1, lambda s: s.rstrip() == "```")
            if end is not None:
                flush()
                lang = line[3:].strip() or None
                code = "\n".join(lines[i + 1 : end])
                nodes.append(_node(NodeType.CODE_BLOCK, code=code, lang=lang))
                i = end + 1
                continue

        if line.startswith("\\["):
            end = _find_line(lines, i, lambda s: s.rstrip().endswith("\\]"))
            if end is not None:
                flush()
                body = "\n".join(lines[i : end + 1]).strip()
                nodes.append(_node(NodeType.MATH_BLOCK, formula=body[2:-2].strip()))
                i = end + 1
                continue

        if line.startswith("<center>"):
            end = _find_line(lines, i, lambda s: s.rstrip().endswith("</center>"))
            if end is not None:
                flush()
                body = "\n".join(lines[i : end + 1]).strip()
                inner = body[len("<center>") : -len("</center>")].strip("\n")
                nodes.append(
                    MarkupNode(type=NodeType.CENTER, children=tuple(parse_inline(inner)))
                )
                i = end + 1
                continue

        if line.startswith(">"):
            flush()
            quoted = []
            while i < len(lines) and lines[i].startswith(">"):
                quoted.append(re.sub(r"^> ?", "", lines[i]))
                i += 1
            nodes.append(
                MarkupNode(type=NodeType.QUOTE, children=tuple(parse("\n".join(quoted))))
            )
            continue

        search = SEARCH_RE.match(line)
        if search:
            flush()
            nodes.append(
                _node(NodeType.SEARCH, query=search.group(1), content=line)
            )
            i += 1
            continue

        pending.append(line)
        i += 1

    flush()
    return nodes


def parse_inline(text: str) -> List[MarkupNode]:
    """Parse inline syntax, merging everything unrecognised into text nodes."""
    nodes: List[MarkupNode] = []
    buf: List[str] = []
    i = 0
    while i < len(text):
        matched = _match_inline(text, i)
        if matched is None:
            buf.append(text[i])
            i += 1
            continue
        node, end = matched
        if buf:
            nodes.append(_node(NodeType.TEXT, text="".join(buf)))
            buf = []
        nodes.append(node)
        i = end
    if buf:
        nodes.append(_node(NodeType.TEXT, text="".join(buf)))
    return nodes


def _match_inline(text: str, i: int) -> Match:
    for matcher in _MATCHERS:
        found = matcher(text, i)
        if found is not None:
            return found
    return None


def _match_inline_code(text: str, i: int) -> Match:
    if text[i] != "`":
        return None
    end = text.find("`", i + 1)
    if end <= i + 1 or "\n" in text[i:end]:
        return None
    return _node(NodeType.INLINE_CODE, code=text[i + 1 : end]), end + 1


def _match_math_inline(text: str, i: int) -> Match:
    if not text.startswith("\\(", i):
        return None
    end = text.find("\\)", i + 2)
    if end < 0 or "\n" in text[i:end]:
        return None
    return _node(NodeType.MATH_INLINE, formula=text[i + 2 : end]), end + 2


def _match_plain(text: str, i: int) -> Match:
    if not text.startswith("<plain>", i):
        return None
    start = i + len("<plain>")
    end = text.find("</plain>", start)
    if end < 0:
        return None
    child = _node(NodeType.TEXT, text=text[start:end])
    return MarkupNode(type=NodeType.PLAIN, children=(child,)), end + len("</plain>")


def _match_fn(text: str, i: int) -> Match:
    head = FN_HEAD_RE.match(text, i)
    if not head:
        return None
    depth = 1
    j = head.end()
    while j < len(text):
        if text[j] == "[":
            depth += 1
        elif text[j] == "]":
            depth -= 1
            if depth == 0:
                break
        j += 1
    else:
        return None

    args: dict = {}
    if head.group(2):
        for arg in head.group(2).split(","):
            key, sep, value = arg.partition("=")
            args[key] = value if sep else True
    node = MarkupNode(
        type=NodeType.FN,
        props={"name": head.group(1), "args": args},
        children=tuple(parse_inline(text[head.end() : j])),
    )
    return node, j + 1


def _match_html_tag(text: str, i: int) -> Match:
    for tag, node_type in _HTML_TAGS.items():
        open_tag, close_tag = f"<{tag}>", f"</{tag}>"
        if not text.startswith(open_tag, i):
            continue
        start = i + len(open_tag)
        end = text.find(close_tag, start)
        if end <= start:
            return None
        children = tuple(parse_inline(text[start:end]))
        return MarkupNode(type=node_type, children=children), end + len(close_tag)
    return None


def _match_delimited(
    delimiter: str, node_type: NodeType, allow_newline: bool
) -> Callable[[str, int], Match]:
    def matcher(text: str, i: int) -> Match:
        if not text.startswith(delimiter, i):
            return None
        start = i + len(delimiter)
        end = text.find(delimiter, start)
        if end <= start or (not allow_newline and "\n" in text[start:end]):
            return None
        children = tuple(parse_inline(text[start:end]))
        return MarkupNode(type=node_type, children=children), end + len(delimiter)

    return matcher


def _match_ascii_emphasis(text: str, i: int) -> Match:
    if _prev_is_alnum(text, i):
        return None
    for pattern, node_type in (
        (BOLD_UNDERSCORE_RE, NodeType.BOLD),
        (ITALIC_ASTERISK_RE, NodeType.ITALIC),
    ):
        m = pattern.match(text, i)
        if m:
            child = _node(NodeType.TEXT, text=m.group(1))
            return MarkupNode(type=node_type, children=(child,)), m.end()
    return None


def _match_link(text: str, i: int) -> Match:
    m = LINK_RE.match(text, i)
    if not m:
        return None
    node = MarkupNode(
        type=NodeType.LINK,
        props={"url": m.group(3), "silent": m.group(1) == "?"},
        children=tuple(parse_inline(m.group(2))),
    )
    return node, m.end()


def _match_url(text: str, i: int) -> Match:
    m = BRACKET_URL_RE.match(text, i)
    if m:
        return _node(NodeType.URL, url=m.group(1), brackets=True), m.end()
    m = URL_RE.match(text, i)
    if not m:
        return None
    url = m.group(0)
    # Trailing punctuation and unbalanced closing parens belong to the prose
    while url and (url[-1] in ".,;!?'" or (url[-1] == ")" and url.count("(") < url.count(")"))):
        url = url[:-1]
    if url.endswith("://"):
        return None
    return _node(NodeType.URL, url=url), i + len(url)


def _match_mention(text: str, i: int) -> Match:
    if text[i] != "@" or _prev_is_alnum(text, i):
        return None
    m = MENTION_RE.match(text, i)
    if not m:
        return None
    username, host = m.group(1), m.group(2)
    acct = f"@{username}@{host}" if host else f"@{username}"
    return _node(NodeType.MENTION, username=username, host=host, acct=acct), m.end()


def _match_hashtag(text: str, i: int) -> Match:
    if text[i] != "#" or _prev_is_alnum(text, i):
        return None
    m = HASHTAG_RE.match(text, i)
    if not m or m.group(1).isdigit():
        return None
    return _node(NodeType.HASHTAG, hashtag=m.group(1)), m.end()


def _match_emoji_code(text: str, i: int) -> Match:
    if text[i] != ":" or _prev_is_alnum(text, i):
        return None
    m = EMOJI_CODE_RE.match(text, i)
    if not m:
        return None
    return _node(NodeType.EMOJI_CODE, name=m.group(1)), m.end()


def _match_unicode_emoji(text: str, i: int) -> Match:
    m = UNICODE_EMOJI_RE.match(text, i)
    if not m:
        return None
    return _node(NodeType.UNICODE_EMOJI, emoji=m.group(0)), m.end()


_MATCHERS: List[Callable[[str, int], Match]] = [
    _match_inline_code,
    _match_math_inline,
    _match_plain,
    _match_fn,
    _match_html_tag,
    _match_delimited("**", NodeType.BOLD, allow_newline=True),
    _match_delimited("~~", NodeType.STRIKE, allow_newline=False),
    _match_ascii_emphasis,
    _match_link,
    _match_url,
    _match_mention,
    _match_hashtag,
    _match_emoji_code,
    _match_unicode_emoji,
]


def _node(node_type: NodeType, **props) -> MarkupNode:
    return MarkupNode(type=node_type, props=props)


def _prev_is_alnum(text: str, i: int) -> bool:
    return i > 0 and text[i - 1].isascii() and text[i - 1].isalnum()


def _find_line(lines: List[str], start: int, predicate: Callable[[str], bool]) -> Optional[int]:
    for j in range(start, len(lines)):
        if predicate(lines[j]):
            return j
    return None

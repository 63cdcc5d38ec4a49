"""Text-decoration markup for blog posts.

Supported syntax::

    ```code```                 preformatted block
    **bold**  __underline__  ==highlight==  ~~strike~~
    [text](https://url)        link
    <color:#RRGGBB>text</color>
    <size:20px>text</size>
    <image>https://url</image>

Decorations do not nest; the first token that matches at a position wins.
Everything that is not a token is plain text and is always HTML-escaped.
"""

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SegmentKind(str, Enum):
    TEXT = "text"
    CODE = "code"
    BOLD = "bold"
    UNDERLINE = "underline"
    HIGHLIGHT = "highlight"
    STRIKE = "strike"
    LINK = "link"
    COLOR = "color"
    SIZE = "size"
    IMAGE = "image"
    NEWLINE = "newline"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str = ""
    # URL for links and images, CSS value for color and size
    value: Optional[str] = None


_TOKEN_RE = re.compile(
    r"```(?P<code>[\s\S]*?)```"
    r"|\*\*(?P<bold>[\s\S]+?)\*\*"
    r"|__(?P<underline>[\s\S]+?)__"
    r"|==(?P<highlight>[\s\S]+?)=="
    r"|\[(?P<link_text>[^\]\n]*)\]\((?P<link_url>[^)\s]*)\)"
    r"|<color:(?P<color>#[0-9A-Fa-f]{6})>(?P<color_text>[\s\S]*?)</color>"
    r"|<size:(?P<size>[^>\n]*)>(?P<size_text>[\s\S]*?)</size>"
    r"|~~(?P<strike>[\s\S]+?)~~"
    r"|<image>(?P<image>[\s\S]*?)</image>"
    r"|(?P<newline>\n)"
)

_SIZE_RE = re.compile(r"^\d{1,3}(?:\.\d+)?(?:px|em|rem|%)$")
_SAFE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def _segment_from_match(match: re.Match) -> Segment:
    groups = match.groupdict()
    if groups["code"] is not None:
        return Segment(SegmentKind.CODE, groups["code"])
    if groups["bold"] is not None:
        return Segment(SegmentKind.BOLD, groups["bold"])
    if groups["underline"] is not None:
        return Segment(SegmentKind.UNDERLINE, groups["underline"])
    if groups["highlight"] is not None:
        return Segment(SegmentKind.HIGHLIGHT, groups["highlight"])
    if groups["link_url"] is not None:
        url = groups["link_url"].strip()
        if not _SAFE_URL_RE.match(url):
            return Segment(SegmentKind.TEXT, match.group(0))
        return Segment(SegmentKind.LINK, groups["link_text"] or url, url)
    if groups["color"] is not None:
        return Segment(SegmentKind.COLOR, groups["color_text"], groups["color"])
    if groups["size"] is not None:
        size = groups["size"].strip()
        if not _SIZE_RE.match(size):
            return Segment(SegmentKind.TEXT, match.group(0))
        return Segment(SegmentKind.SIZE, groups["size_text"], size)
    if groups["strike"] is not None:
        return Segment(SegmentKind.STRIKE, groups["strike"])
    if groups["image"] is not None:
        url = groups["image"].strip()
        if not _SAFE_URL_RE.match(url):
            return Segment(SegmentKind.TEXT, match.group(0))
        return Segment(SegmentKind.IMAGE, value=url)
    return Segment(SegmentKind.NEWLINE)


def parse_markup(text: str) -> list[Segment]:
    """Split ``text`` into decorated segments.

    Adjacent plain text is merged into one TEXT segment.
    """
    segments: list[Segment] = []

    def add_text(value: str) -> None:
        if not value:
            return
        if segments and segments[-1].kind == SegmentKind.TEXT:
            segments[-1] = Segment(SegmentKind.TEXT, segments[-1].text + value)
        else:
            segments.append(Segment(SegmentKind.TEXT, value))

    cursor = 0
    for match in _TOKEN_RE.finditer(text):
        add_text(text[cursor : match.start()])
        segment = _segment_from_match(match)
        if segment.kind == SegmentKind.TEXT:
            add_text(segment.text)
        else:
            segments.append(segment)
        cursor = match.end()
    add_text(text[cursor:])

    return segments


_WRAPPERS = {
    SegmentKind.BOLD: ("<strong>", "</strong>"),
    SegmentKind.UNDERLINE: ("<u>", "</u>"),
    SegmentKind.HIGHLIGHT: ("<mark>", "</mark>"),
    SegmentKind.STRIKE: ("<del>", "</del>"),
}


def _render_segment(segment: Segment) -> str:
    escaped = html.escape(segment.text)
    if segment.kind == SegmentKind.TEXT:
        return escaped
    if segment.kind == SegmentKind.NEWLINE:
        return "<br>"
    if segment.kind == SegmentKind.CODE:
        return f"<pre><code>{escaped}</code></pre>"
    if segment.kind in _WRAPPERS:
        opening, closing = _WRAPPERS[segment.kind]
        return f"{opening}{escaped}{closing}"

    value = html.escape(segment.value or "")
    if segment.kind == SegmentKind.LINK:
        return (
            f'<a href="{value}" target="_blank" rel="noopener noreferrer">'
            f"{escaped}</a>"
        )
    if segment.kind == SegmentKind.COLOR:
        return f'<span style="color: {value}">{escaped}</span>'
    if segment.kind == SegmentKind.SIZE:
        return f'<span style="font-size: {value}">{escaped}</span>'
    return f'<img src="{value}" alt="Embedded image">'


def render_html(text: str) -> str:
    """Render markup to an HTML fragment."""
    return "".join(_render_segment(segment) for segment in parse_markup(text))


def strip_markup(text: str) -> str:
    """Plain text of ``text`` with all decoration removed."""
    parts = []
    for segment in parse_markup(text):
        if segment.kind == SegmentKind.NEWLINE:
            parts.append("\n")
        elif segment.kind != SegmentKind.IMAGE:
            parts.append(segment.text)
    return "".join(parts)

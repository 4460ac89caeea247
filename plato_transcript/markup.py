"""
platoHtml extraction.

Parses an HTML fragment into a small element tree and pulls one
UtteranceRecord out of every <p class="dialogue"> that carries a
<span class="speaker">. Paragraphs without a speaker are not part of the
conversation and are skipped.

The tree builder is a thin html.parser.HTMLParser subclass. Anything that can
turn markup into a Document (see MarkupParser) can be passed instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Iterator, Protocol, Union

from plato_transcript.defaults import MARKUP
from plato_transcript.records import UtteranceRecord

logger = logging.getLogger(__name__)

# Elements that never have children.
VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)

# Start tags that implicitly close an open <p>. A fragment without a doctype
# parses in quirks mode, where <table> does not.
CLOSES_PARAGRAPH = frozenset(
    {
        "address", "article", "aside", "blockquote", "center", "dd", "details",
        "dialog", "dir", "div", "dl", "dt", "fieldset", "figcaption", "figure",
        "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup",
        "hr", "li", "listing", "main", "menu", "nav", "ol", "p", "plaintext",
        "pre", "search", "section", "summary", "ul", "xmp",
    }
)

# Separator after the speaker label: first ":" plus following whitespace.
_LABEL_SEPARATOR = re.compile(r":\s*")


Node = Union["Element", str]


@dataclass
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    def matches(self, tag: str, cls: str | None = None) -> bool:
        if self.tag != tag:
            return False
        return cls is None or cls in self.classes

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendants, entities already decoded."""
        parts: list[str] = []
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, str):
                parts.append(node)
            else:
                stack.extend(reversed(node.children))
        return "".join(parts)

    def iter_descendants(self) -> Iterator[Element]:
        """Descendant elements in document order (pre-order)."""
        stack: list[Node] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            if isinstance(node, Element):
                yield node
                stack.extend(reversed(node.children))

    def select(self, tag: str, cls: str | None = None) -> list[Element]:
        return [el for el in self.iter_descendants() if el.matches(tag, cls)]

    def select_one(self, tag: str, cls: str | None = None) -> Element | None:
        for el in self.iter_descendants():
            if el.matches(tag, cls):
                return el
        return None


class Document(Element):
    def __init__(self) -> None:
        super().__init__(tag="#document")


class MarkupParser(Protocol):
    def parse(self, markup: str) -> Document: ...


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Document()
        self._open: list[Element] = [self.document]

    def _close_through(self, tag: str) -> bool:
        for depth in range(len(self._open) - 1, 0, -1):
            if self._open[depth].tag == tag:
                del self._open[depth:]
                return True
        return False

    def handle_starttag(self, tag, attrs):
        if tag in CLOSES_PARAGRAPH:
            self._close_through(MARKUP.paragraph_tag)
        element = Element(tag=tag, attrs={k: v or "" for k, v in attrs})
        self._open[-1].children.append(element)
        if tag not in VOID_ELEMENTS:
            self._open.append(element)

    def handle_startendtag(self, tag, attrs):
        # "<span/>" is not self-closing in HTML; only void elements are.
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        # stray end tags are ignored
        self._close_through(tag)

    def handle_data(self, data):
        self._open[-1].children.append(data)


class HTMLTreeParser:
    """Default MarkupParser. Holds no state between calls."""

    def parse(self, markup: str) -> Document:
        builder = _TreeBuilder()
        # newlines are normalized before tokenizing, as in a browser's input stream
        builder.feed(markup.replace("\r\n", "\n").replace("\r", "\n"))
        builder.close()
        return builder.document


def iter_markup_records(
    html: str,
    parser: MarkupParser | None = None,
) -> Iterator[UtteranceRecord]:
    """
    Yield (speaker, utterance) for every dialogue paragraph, in document order.

    The utterance is the paragraph text with the first occurrence of the raw
    speaker text removed, then the first ":" and any whitespace after it
    removed, then trimmed.
    """
    document = (parser or HTMLTreeParser()).parse(html)

    for index, paragraph in enumerate(
        document.select(MARKUP.paragraph_tag, MARKUP.paragraph_class)
    ):
        speaker_el = paragraph.select_one(MARKUP.speaker_tag, MARKUP.speaker_class)
        if speaker_el is None:
            logger.debug("skipping dialogue paragraph %d: no speaker label", index)
            continue

        raw_speaker = speaker_el.text_content
        remainder = paragraph.text_content.replace(raw_speaker, "", 1)
        utterance = _LABEL_SEPARATOR.sub("", remainder, count=1).strip()
        yield UtteranceRecord(speaker=raw_speaker.strip(), utterance=utterance)

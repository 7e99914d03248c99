from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser


WHITESPACE_RE = re.compile(r"\s+")


class _HTMLStripper(HTMLParser):
    IGNORE_TAGS = {"script", "style", "noscript"}

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._parts: list[str] = []
        self._ignore_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in self.IGNORE_TAGS:
            self._ignore_depth += 1
            return
        self._parts.append(" ")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._parts.append(" ")

    def handle_endtag(self, tag: str) -> None:
        if tag in self.IGNORE_TAGS:
            if self._ignore_depth:
                self._ignore_depth -= 1
            return
        self._parts.append(" ")

    def handle_data(self, data: str) -> None:
        if self._ignore_depth == 0:
            self._parts.append(data)

    def get_text(self) -> str:
        return "".join(self._parts)


@dataclass(frozen=True, slots=True)
class NormalizedText:
    plain_text: str
    lower_text: str
    word_count: int


def strip_tags(markup: str) -> str:
    """Replace every tag with a single space and decode entities.

    Script, style and noscript bodies are dropped with their tags so that
    embedded code does not count as posting text.
    """
    stripper = _HTMLStripper()
    stripper.feed(markup)
    stripper.close()
    return stripper.get_text()


def count_words(text: str) -> int:
    return len(text.split())


def normalize_text(raw: str | None) -> NormalizedText:
    """Convert raw HTML (or pasted text) into searchable plain text."""
    plain = WHITESPACE_RE.sub(" ", strip_tags(raw or "")).strip()
    return NormalizedText(
        plain_text=plain,
        lower_text=plain.lower(),
        word_count=count_words(plain),
    )

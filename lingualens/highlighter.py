"""Idiom highlighting for translated text.

The model reports idioms as plain strings that are supposed to occur in its own
translation. Nothing guarantees that, so every idiom is matched literally and
case-insensitively, and idioms that never occur simply produce no highlight.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterable, Sequence, Union

IDIOM_TOOLTIP = "Identified Idiom"
ALTERNATIVES_HEADING = "Possible Alternative Phrases for Idioms:"


@dataclass(frozen=True)
class PlainText:

    text: str


@dataclass(frozen=True)
class HighlightedIdiom:

    text: str
    source_idiom: str


Segment = Union[PlainText, HighlightedIdiom]


def _compile(idioms: Sequence[str]) -> tuple[re.Pattern | None, list[str]]:
    # One capture group per idiom so the match can be traced back to its idiom.
    usable = [idiom for idiom in idioms if idiom]
    if not usable:
        return None, usable
    pattern = "|".join(f"({re.escape(idiom)})" for idiom in usable)
    return re.compile(pattern, re.IGNORECASE), usable


def highlight(text: str, idioms: Iterable[str]) -> list[Segment]:
    """Split *text* into plain and highlighted-idiom segments.

    Matches are found left to right and never overlap. When several idioms could
    match at the same position, the one listed first wins.

    Returns an empty list for empty *text*; otherwise the segments' text joined in
    order is exactly *text*.
    """
    if not text:
        return []

    regex, usable = _compile(list(idioms))
    if regex is None:
        return [PlainText(text)]

    segments: list[Segment] = []
    last_index = 0
    for match in regex.finditer(text):
        if match.start() > last_index:
            segments.append(PlainText(text[last_index:match.start()]))
        segments.append(HighlightedIdiom(match.group(0), usable[match.lastindex - 1]))
        last_index = match.end()

    if last_index < len(text):
        segments.append(PlainText(text[last_index:]))
    return segments


def render_html(segments: Sequence[Segment], alternative_translations: Sequence[str] = ()) -> str:
    """Render segments as an HTML fragment, with the alternatives list when present."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, HighlightedIdiom):
            parts.append(
                '<span class="idiom" title="{title}" data-idiom="{idiom}">{text}</span>'.format(
                    title=IDIOM_TOOLTIP,
                    idiom=html.escape(segment.source_idiom),
                    text=html.escape(segment.text),
                )
            )
        else:
            parts.append(html.escape(segment.text))

    fragment = f'<p class="translation">{"".join(parts)}</p>'
    if alternative_translations:
        items = "".join(f"<li>{html.escape(alt)}</li>" for alt in alternative_translations)
        fragment += (
            f'<div class="alternatives"><h4>{ALTERNATIVES_HEADING}</h4><ul>{items}</ul></div>'
        )
    return fragment

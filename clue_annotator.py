"""
Clue Annotator
==============

Marks up the surface text of a ClueEntry with tooltip-bearing spans for
its definition, indicator and fodder phrases.

Passes run in fixed order: definitions, then indicators, then fodder.
Each wrapped range is claimed; later searches skip any match that
overlaps a claimed range, so earlier categories win and nothing is ever
wrapped twice. Only the first unclaimed occurrence of a phrase is
wrapped. A phrase that can't be found is recorded in `unmatched` and
otherwise ignored (inflected surface words are common).
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field

from clue_constants import (
    CATEGORY_CLASSES,
    CLUE_TYPE_TOOLTIPS,
    DEFINITION_TOOLTIP,
    DOUBLE_DEFINITION_TOOLTIP,
    FODDER_TOOLTIP,
    INDICATOR_TOOLTIP,
)
from clue_normalizer import ClueEntry


@dataclass(frozen=True)
class AnnotatedSpan:
    start: int
    end: int
    category: str  # definition | indicator | fodder
    tooltip: str
    text: str


@dataclass(frozen=True)
class AnnotatedText:
    """Clue text plus the non-overlapping spans to highlight in it."""

    text: str
    type_key: str
    spans: tuple[AnnotatedSpan, ...] = ()
    unmatched: tuple[tuple[str, str], ...] = field(default=())

    def to_html(self) -> str:
        """Render as HTML: plain text escaped, spans as <span class data-tooltip>."""
        out = []
        pos = 0
        for span in self.spans:
            out.append(html.escape(self.text[pos:span.start], quote=False))
            out.append('<span class="%s" data-tooltip="%s">%s</span>' % (
                CATEGORY_CLASSES[span.category],
                html.escape(span.tooltip, quote=True),
                html.escape(span.text, quote=False),
            ))
            pos = span.end
        out.append(html.escape(self.text[pos:], quote=False))
        return "".join(out)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "clueType": self.type_key,
            "html": self.to_html(),
            "spans": [
                {
                    "start": s.start,
                    "end": s.end,
                    "category": s.category,
                    "tooltip": s.tooltip,
                    "text": s.text,
                }
                for s in self.spans
            ],
            "unmatched": [{"category": c, "phrase": p} for c, p in self.unmatched],
        }


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def _phrase_pattern(phrase, word_boundary):
    escaped = re.escape(phrase)
    if word_boundary:
        escaped = r"\b" + escaped + r"\b"
    return re.compile(escaped, re.IGNORECASE)


def _overlaps(start, end, claimed):
    return any(start < c_end and c_start < end for c_start, c_end in claimed)


def _find_unclaimed(text, phrase, claimed, word_boundary):
    """Return (start, end) of the first match not overlapping a claimed range."""
    if not phrase.strip():
        return None
    pattern = _phrase_pattern(phrase, word_boundary)
    pos = 0
    while pos <= len(text):
        m = pattern.search(text, pos)
        if not m:
            return None
        if m.end() > m.start() and not _overlaps(m.start(), m.end(), claimed):
            return m.start(), m.end()
        pos = m.start() + 1
    return None


class _SpanCollector:
    def __init__(self, text):
        self.text = text
        self.claimed = []
        self.spans = []
        self.unmatched = []

    def wrap(self, phrase, category, tooltip, word_boundary=True):
        found = _find_unclaimed(self.text, phrase, self.claimed, word_boundary)
        if found is None:
            self.unmatched.append((category, phrase))
            return
        start, end = found
        self.claimed.append((start, end))
        self.spans.append(AnnotatedSpan(
            start=start,
            end=end,
            category=category,
            tooltip=tooltip,
            text=self.text[start:end],
        ))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def indicator_tooltip(type_key):
    return CLUE_TYPE_TOOLTIPS.get(type_key, INDICATOR_TOOLTIP)


def annotate(entry: ClueEntry) -> AnnotatedText:
    """Locate and tag definition, indicator and fodder phrases. Never raises."""
    collector = _SpanCollector(entry.clue_text)
    type_key = entry.type_key

    # 1. Definitions. Multi-word alternatives use a plain substring match.
    if entry.multi_definition:
        for n, phrase in enumerate(entry.definition_spans, start=1):
            collector.wrap(phrase, "definition", DOUBLE_DEFINITION_TOOLTIP.format(n=n),
                           word_boundary=False)
    else:
        for phrase in entry.definition_spans[:1]:
            collector.wrap(phrase, "definition", DEFINITION_TOOLTIP)

    # 2. Indicators, tooltip by clue type
    for phrase in entry.indicator_words:
        collector.wrap(phrase, "indicator", indicator_tooltip(type_key))

    # 3. Fodder, tooltip from the positionally matching part
    for i, phrase in enumerate(entry.fodder_words):
        hint = entry.parts[i].hint if i < len(entry.parts) else ""
        collector.wrap(phrase, "fodder", hint or FODDER_TOOLTIP)

    return AnnotatedText(
        text=entry.clue_text,
        type_key=type_key,
        spans=tuple(sorted(collector.spans, key=lambda s: s.start)),
        unmatched=tuple(collector.unmatched),
    )

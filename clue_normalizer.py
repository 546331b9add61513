"""
Clue Normalizer
===============

Converts raw clue records (heterogeneous, optionally nested JSON schema)
into the uniform ClueEntry model used by the annotator and the game.

Raw records look like:

    {
        "answer": "CAT NAP",
        "clue": "Feline rest (3,3)",
        "type": "cryptic",
        "parse": {
            "type": "charade",
            "parts": [
                {"id": "p1", "type": "literal", "source": {"text": "CAT"}},
                {"id": "p2", "type": "literal", "source": {"text": "NAP"},
                 "indicator": {"text": "after"}}
            ]
        },
        "indicatorsUsed": [{"text": "after"}],
        "definition": {"text": "rest"},
        "tooltips": {
            "clueType": "This is CHARADES clue: ...",
            "components": [{"for": "p1", "text": "Feline = CAT"}]
        }
    }

Every field is optional. normalize() never raises: missing or malformed
fields degrade to empty defaults so one bad record can't block the rest.
"""

from __future__ import annotations

from dataclasses import dataclass

from clue_constants import (
    DEFAULT_CLUE_STYLE,
    DEFINITION_SPLIT_RE,
    LETTER_SELECTION_PART,
    LITERAL_PART,
    UNKNOWN_CLUE_KIND,
)


@dataclass(frozen=True)
class CluePart:
    """One parse-tree part: the clue text it covers and its tooltip hint."""

    text: str = ""
    hint: str = ""


@dataclass(frozen=True)
class ClueEntry:
    """A normalised clue. Produced once per raw record, never mutated."""

    answer: str = ""
    clue_text: str = ""
    clue_kind: str = UNKNOWN_CLUE_KIND
    definition_spans: tuple[str, ...] = ()
    indicator_words: tuple[str, ...] = ()
    fodder_words: tuple[str, ...] = ()
    parts: tuple[CluePart, ...] = ()
    style: str = DEFAULT_CLUE_STYLE

    @property
    def type_key(self) -> str:
        """Primary clue-type token, e.g. 'double' for 'double definition'."""
        tokens = self.clue_kind.lower().split()
        return tokens[0] if tokens else ""

    @property
    def multi_definition(self) -> bool:
        return self.clue_kind.startswith("double") and len(self.definition_spans) >= 2

    @property
    def answer_groups(self) -> list[int]:
        """Letter count of each space-separated answer word."""
        return [len(word) for word in self.answer.split(" ") if word]

    def to_dict(self) -> dict:
        return {
            "answer": self.answer,
            "clue": self.clue_text,
            "type": self.style,
            "clueType": self.clue_kind,
            "definitions": list(self.definition_spans),
            "multiDefinition": self.multi_definition,
            "indicatorWords": list(self.indicator_words),
            "fodderWords": list(self.fodder_words),
            "parts": [{"text": p.text, "hint": p.hint} for p in self.parts],
        }


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _obj(value) -> dict:
    """Return value if it is a mapping, else an empty dict."""
    return value if isinstance(value, dict) else {}


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _str(value) -> str:
    return value if isinstance(value, str) else ""


def _text_of(value) -> str:
    """Text of a field that may be a bare string or an object with 'text'."""
    if isinstance(value, str):
        return value
    return _str(_obj(value).get("text"))


# ---------------------------------------------------------------------------
# Resolution steps
# ---------------------------------------------------------------------------

def _resolve_clue_kind(raw: dict) -> str:
    """parse.type, else the 3rd word of the tooltip title, else 'unknown'."""
    parse_type = _str(_obj(raw.get("parse")).get("type"))
    if parse_type:
        return parse_type.lower()

    title = _str(_obj(raw.get("tooltips")).get("clueType"))
    if title:
        # "This is CHARADES clue: ..." → "charade"; 3rd word taken as-is
        words = title.split(" ")
        if len(words) > 2 and words[2]:
            kind = words[2].lower()
            if kind.endswith("s"):
                kind = kind[:-1]
            return kind or UNKNOWN_CLUE_KIND

    return UNKNOWN_CLUE_KIND


def _resolve_definitions(raw: dict, clue_kind: str) -> tuple[str, ...]:
    definition = raw.get("definition")

    # A list of definition objects is already split
    if isinstance(definition, list):
        texts = [t.strip() for t in (_text_of(d) for d in definition) if t.strip()]
        if clue_kind.startswith("double") and len(texts) >= 2:
            return tuple(texts)
        return tuple(texts[:1])

    text = _text_of(definition)
    if not text:
        return ()

    if clue_kind.startswith("double"):
        pieces = [p.strip() for p in DEFINITION_SPLIT_RE.split(text)]
        pieces = [p for p in pieces if p]
        if len(pieces) >= 2:
            return tuple(pieces)

    return (text,)


def _resolve_indicators(raw: dict, parse_parts: list) -> tuple[str, ...]:
    """Indicator phrases from parse parts then indicatorsUsed, first-seen order."""
    found = []
    for part in parse_parts:
        text = _text_of(_obj(part).get("indicator"))
        if text:
            found.append(text)
    for used in _list(raw.get("indicatorsUsed")):
        text = _text_of(used)
        if text:
            found.append(text)
    return tuple(dict.fromkeys(found))


def _part_text(part: dict) -> str:
    source_text = _str(_obj(part.get("source")).get("text"))
    if part.get("type") == LITERAL_PART and source_text:
        return source_text
    if part.get("type") == LETTER_SELECTION_PART and _str(part.get("base")):
        return part["base"]
    return source_text


def _component_hints(raw: dict) -> dict:
    """Map part id → hint text; first component for an id wins."""
    hints = {}
    for comp in _list(_obj(raw.get("tooltips")).get("components")):
        comp = _obj(comp)
        part_id = comp.get("for")
        if not isinstance(part_id, (str, int)) or part_id in hints:
            continue
        hints[part_id] = _str(comp.get("text"))
    return hints


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize(raw) -> ClueEntry:
    """Convert one raw clue record into a ClueEntry. Never raises."""
    raw = _obj(raw)
    parse_parts = _list(_obj(raw.get("parse")).get("parts"))

    clue_kind = _resolve_clue_kind(raw)
    hints = _component_hints(raw)

    fodder = []
    parts = []
    for part in parse_parts:
        part = _obj(part)
        text = _part_text(part)
        if text:
            fodder.append(text)
        part_id = part.get("id")
        hint = hints.get(part_id, "") if isinstance(part_id, (str, int)) else ""
        parts.append(CluePart(text=text, hint=hint))

    return ClueEntry(
        answer=_str(raw.get("answer")),
        clue_text=_text_of(raw.get("clue")),
        clue_kind=clue_kind,
        definition_spans=_resolve_definitions(raw, clue_kind),
        indicator_words=_resolve_indicators(raw, parse_parts),
        fodder_words=tuple(fodder),
        parts=tuple(parts),
        style=_str(raw.get("type")) or DEFAULT_CLUE_STYLE,
    )


def normalize_all(raws) -> list[ClueEntry]:
    """Normalize a whole clue set in input order."""
    return [normalize(raw) for raw in _list(raws)]

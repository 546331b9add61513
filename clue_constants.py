"""
Clue Constants — Shared Definitions
===================================

Single source of truth for the static tables used across clue_normalizer.py,
clue_annotator.py, answer_session.py, game_handler.py and validate_clues.py.
"""

import re

# Tooltip text by primary clue type (first token of the normalised clue kind)
CLUE_TYPE_TOOLTIPS = {
    "anagram": "Anagram — shuffle the letters in the fodder.",
    "hidden": "Hidden — look inside the fodder.",
    "container": "Container — insert one part into another.",
    "reversal": "Reversal — read backwards.",
    "deletion": "Deletion — remove letters.",
    "homophone": "Homophone — sounds like.",
    "acrostic": "Acrostic — take first letters.",
    "spoonerism": "Spoonerism — swap starting sounds.",
    "charade": "Charade — build the answer in parts.",
    "double": "Double definition — two meanings, one word.",
    "lit": "&lit — whole clue is definition and wordplay.",
}

UNKNOWN_CLUE_KIND = "unknown"
DEFAULT_CLUE_STYLE = "cryptic"

DEFINITION_TOOLTIP = "Definition"
DOUBLE_DEFINITION_TOOLTIP = "Double definition — meaning {n}"
INDICATOR_TOOLTIP = "Indicator"
FODDER_TOOLTIP = "Fodder — used to build the answer."

# Double definitions are split on semicolon, comma or the word "and"
DEFINITION_SPLIT_RE = re.compile(r";|,| and ", re.IGNORECASE)

# Trailing enumeration on a clue, e.g. "(7)", "(5,4)", "(5-4)", "(3,3,4)"
ENUMERATION_RE = re.compile(r"\s*\(([\d,\-\s]+)\)\s*$")

# Part types with a dedicated text source
LITERAL_PART = "literal"
LETTER_SELECTION_PART = "letter-selection"

# CSS class per annotation category, consumed by the renderer
CATEGORY_CLASSES = {
    "definition": "def",
    "indicator": "indicator",
    "fodder": "fodder",
}

# Submit/Next button label per session state
SUBMIT_LABEL = "Submit"
ADVANCE_LABEL = "Next"

# Named actions accepted by GameContext.dispatch()
ACTIONS = frozenset({
    "type", "backspace", "set_cursor", "submit",
    "reveal_definition", "reveal_letter", "reveal_structure", "give_up",
    "skip", "select",
})


def parse_enumeration(enum_str):
    """Parse an enumeration like '7', '5,3' or '5-6' into word lengths.

    Commas separate words, hyphens join within a word: "5-6" → [11],
    "5,3" → [5, 3], "7" → [7].
    """
    groups = []
    for part in re.split(r"[,\s]+", enum_str or ""):
        if part:
            total = sum(int(n) for n in part.split("-") if n.isdigit())
            if total > 0:
                groups.append(total)
    return groups


def split_enumeration(clue_text):
    """Split a clue into (surface, enumeration). Enumeration is '' when absent."""
    m = ENUMERATION_RE.search(clue_text or "")
    if not m:
        return clue_text or "", ""
    return clue_text[:m.start()], m.group(1).strip()

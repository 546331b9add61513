"""
Answer Session - Letter Entry State Machine
===========================================

Owns the per-clue answer state: letter buffer, active cursor, solved flag
and the one-shot reveal flags. Two states: unsolved (initial) and solved
(terminal until the controller replaces the session with a fresh one).

Every operation is synchronous and total. Invalid input is a silent no-op.
Operations return a Signal for the renderer:

    SUCCESS  - correct submit, flash green
    ERROR    - wrong submit, flash red
    ADVANCE  - submit/give-up on a solved clue; the controller moves on
    FINISH   - set by the controller when ADVANCE hits the last clue
    NONE     - nothing to show
"""

from __future__ import annotations

import re
from enum import Enum

from clue_constants import ADVANCE_LABEL, SUBMIT_LABEL

_LETTER_RE = re.compile(r"[A-Za-z]")


def _valid_slot(ch, expected):
    """A box holds nothing, a typed letter, or the revealed answer character."""
    return ch == "" or ch == expected or (isinstance(ch, str) and bool(_LETTER_RE.fullmatch(ch)))


class Signal(Enum):
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"
    ADVANCE = "advance"
    FINISH = "finish"


class AnswerSession:
    def __init__(self, answer=""):
        self.answer = (answer or "").upper()
        self.target = self.answer.replace(" ", "")
        self.letters = [""] * len(self.target)
        self.cursor = 0
        self.solved = False
        self.revealed_definition = False
        self.revealed_structure = False
        self.revealed_letters = 0
        self.gave_up = False

    # --- Derived state ---

    @property
    def control_label(self):
        return ADVANCE_LABEL if self.solved else SUBMIT_LABEL

    @property
    def entered(self):
        return "".join(self.letters)

    def has_blank(self):
        return any(not ch for ch in self.letters)

    def _mark_solved_if_complete(self):
        if self.entered == self.target:
            self.solved = True

    # --- Letter entry ---

    def type_letter(self, ch):
        if self.solved or not isinstance(ch, str) or not _LETTER_RE.fullmatch(ch):
            return Signal.NONE
        if not self.letters:
            return Signal.NONE
        self.letters[self.cursor] = ch.upper()
        if self.cursor < len(self.letters) - 1:
            self.cursor += 1
        return Signal.NONE

    def backspace(self):
        if self.solved or not self.letters:
            return Signal.NONE
        self.letters[self.cursor] = ""
        if self.cursor > 0:
            self.cursor -= 1
        return Signal.NONE

    def set_cursor(self, index):
        if self.solved or isinstance(index, bool) or not isinstance(index, int):
            return Signal.NONE
        if 0 <= index < len(self.letters):
            self.cursor = index
        return Signal.NONE

    # --- Submit / advance ---

    def submit(self):
        if self.solved:
            return Signal.ADVANCE
        if self.entered == self.target:
            self.solved = True
            return Signal.SUCCESS
        return Signal.ERROR

    # --- Hints ---

    def reveal_definition(self):
        self.revealed_definition = True
        return Signal.NONE

    def reveal_structure(self):
        self.revealed_structure = True
        return Signal.NONE

    def reveal_one_letter(self):
        """Fill the lowest-index blank. Completing the answer solves it, without a flash."""
        if self.solved:
            return Signal.NONE
        for i, ch in enumerate(self.letters):
            if not ch:
                self.letters[i] = self.target[i]
                self.revealed_letters += 1
                self._mark_solved_if_complete()
                break
        return Signal.NONE

    def give_up(self):
        if self.solved:
            return Signal.ADVANCE
        self.letters = list(self.target)
        self.solved = True
        self.gave_up = True
        return Signal.NONE

    # --- Serialisation (client-held state) ---

    def to_dict(self):
        return {
            "answer": self.answer,
            "letters": list(self.letters),
            "cursor": self.cursor,
            "solved": self.solved,
            "revealed_definition": self.revealed_definition,
            "revealed_structure": self.revealed_structure,
            "revealed_letters": self.revealed_letters,
            "gave_up": self.gave_up,
        }

    @classmethod
    def from_dict(cls, data, answer):
        """Rebuild a session for `answer`. Raises ValueError if data doesn't fit it."""
        if not isinstance(data, dict):
            raise ValueError("Invalid session data")
        session = cls(answer)
        if data.get("answer") != session.answer:
            raise ValueError("Session does not belong to the current clue")
        letters = data.get("letters")
        if (not isinstance(letters, list) or len(letters) != len(session.target)
                or not all(_valid_slot(ch, expected) for ch, expected in zip(letters, session.target))):
            raise ValueError("Invalid session letters")
        cursor = data.get("cursor", 0)
        if isinstance(cursor, bool) or not isinstance(cursor, int) or not (0 <= cursor < max(len(letters), 1)):
            raise ValueError(f"Invalid session cursor: {cursor!r}")
        session.letters = [ch.upper() for ch in letters]
        session.cursor = cursor
        session.solved = bool(data.get("solved"))
        session.revealed_definition = bool(data.get("revealed_definition"))
        session.revealed_structure = bool(data.get("revealed_structure"))
        session.revealed_letters = int(data.get("revealed_letters", 0))
        session.gave_up = bool(data.get("gave_up"))
        return session

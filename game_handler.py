"""
Game Handler - Clue Sequencer
=============================

Owns the game: the ordered clue list, the index of the current clue and
the live AnswerSession. Selecting a clue builds a fresh session and the
annotated clue text; actions from the UI are dispatched to the session,
and its ADVANCE signal is turned into navigation here.

The server is stateless between requests: the game state travels to the
client as HMAC-signed JSON and comes back with the next action.
"""

import hashlib
import hmac
import json
import os
import secrets

from answer_session import AnswerSession, Signal
from clue_annotator import annotate
from clue_constants import ACTIONS
from clue_normalizer import ClueEntry

# Session signing secret — from env var or generated at startup (dev only)
_SESSION_SECRET = os.environ.get("SESSION_SECRET", "").encode("utf-8")
if not _SESSION_SECRET:
    _SESSION_SECRET = secrets.token_bytes(32)
    print("[WARNING] No SESSION_SECRET env var — using random key (sessions won't survive restarts)")


class GameContext:
    """Clue list, current index and the session for the current clue."""

    def __init__(self, clues):
        self.clues = list(clues)
        self.index = 0
        self.finished = False
        self.session = None
        self.annotation = None

    @property
    def entry(self):
        if not self.clues:
            return ClueEntry()
        return self.clues[self.index]

    def is_last(self):
        return self.index >= len(self.clues) - 1

    # --- Navigation ---

    def select(self, index):
        """Start clue `index` with a fresh session; bad indices fall back to 0."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.clues):
            index = 0
        self.index = index
        self.finished = False
        self.session = AnswerSession(self.entry.answer)
        self.annotation = annotate(self.entry)
        return Signal.NONE

    def advance(self):
        """Move to the next clue, or finish the game after the last one."""
        if self.is_last():
            self.finished = True
            return Signal.FINISH
        self.select(self.index + 1)
        return Signal.ADVANCE

    def skip(self):
        """Change clue without solving. Nothing to skip to on the last clue."""
        if self.is_last():
            return Signal.NONE
        self.select(self.index + 1)
        return Signal.ADVANCE

    # --- Actions ---

    def dispatch(self, action, data=None):
        """Apply a named UI action. Returns the Signal for the renderer."""
        if action not in ACTIONS:
            raise ValueError(f"Unknown action: {action}")
        data = data or {}

        if action == "select":
            return self.select(data.get("index"))
        if self.finished:
            return Signal.NONE

        session = self.session
        if action == "type":
            signal = session.type_letter(data.get("value"))
        elif action == "backspace":
            signal = session.backspace()
        elif action == "set_cursor":
            signal = session.set_cursor(data.get("index"))
        elif action == "submit":
            signal = session.submit()
        elif action == "reveal_definition":
            signal = session.reveal_definition()
        elif action == "reveal_letter":
            signal = session.reveal_one_letter()
        elif action == "reveal_structure":
            signal = session.reveal_structure()
        elif action == "give_up":
            signal = session.give_up()
        else:  # skip
            return self.skip()

        if signal is Signal.ADVANCE:
            return self.advance()
        return signal


def start_game(clues, index=0):
    """Create a game positioned on clue `index`."""
    ctx = GameContext(clues)
    ctx.select(index)
    return ctx


# ---------------------------------------------------------------------------
# Signed client state
# ---------------------------------------------------------------------------

def _sign_state(state):
    """Sign a state dict with HMAC. Returns {"data": ..., "sig": "..."}."""
    payload = json.dumps(state, sort_keys=True, separators=(',', ':'))
    sig = hmac.new(_SESSION_SECRET, payload.encode('utf-8'), hashlib.sha256).hexdigest()
    return {"data": state, "sig": sig}


def _verify_state(signed):
    """Verify and extract state from a signed dict. Raises ValueError on tamper."""
    if not isinstance(signed, dict) or "data" not in signed or "sig" not in signed:
        raise ValueError("Invalid session format — missing signature")
    if not isinstance(signed["sig"], str):
        raise ValueError("Invalid session format — bad signature")
    payload = json.dumps(signed["data"], sort_keys=True, separators=(',', ':'))
    expected_sig = hmac.new(_SESSION_SECRET, payload.encode('utf-8'), hashlib.sha256).hexdigest()
    if not hmac.compare_digest(signed["sig"], expected_sig):
        raise ValueError("Session signature invalid — possible tampering")
    return signed["data"]


def dump_state(ctx):
    return _sign_state({
        "clue_index": ctx.index,
        "finished": ctx.finished,
        "answer_session": ctx.session.to_dict(),
    })


def restore_game(clues, signed):
    """Rebuild a GameContext from client-sent signed state."""
    data = _verify_state(signed)
    if not isinstance(data, dict):
        raise ValueError("Invalid session data")

    index = data.get("clue_index")
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < max(len(clues), 1):
        raise ValueError(f"Session clue index out of range: {index!r}")

    ctx = GameContext(clues)
    ctx.select(index)
    # Raises if the clue set changed under the client
    ctx.session = AnswerSession.from_dict(data.get("answer_session"), ctx.entry.answer)
    ctx.finished = bool(data.get("finished"))
    return ctx


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------

def get_render(ctx, signal=Signal.NONE):
    """Build the complete render object for the current state."""
    session = ctx.session
    entry = ctx.entry
    annotation = ctx.annotation

    return {
        "clueIndex": ctx.index,
        "clueCount": len(ctx.clues),
        "clue": entry.clue_text,
        "clueHtml": annotation.to_html(),
        "clueType": annotation.type_key,
        "style": entry.style,
        "spans": annotation.to_dict()["spans"],
        "answerGroups": entry.answer_groups,
        "letters": list(session.letters),
        "cursor": session.cursor,
        "solved": session.solved,
        "gaveUp": session.gave_up,
        "controlLabel": session.control_label,
        "signal": signal.value,
        "helpOn": session.revealed_definition,
        "annotOn": session.revealed_structure,
        "actions": {
            "revealDefinition": not session.revealed_definition,
            "revealLetter": not session.solved and session.has_blank(),
            "revealStructure": not session.revealed_structure,
            "giveUp": not ctx.finished,
            "skip": not ctx.is_last(),
        },
        "complete": ctx.finished,
        "session": dump_state(ctx),
    }

#!/usr/bin/env python3
"""
Clue File Validator
===================

Checks a raw clue file before it reaches the game. Normalisation never
fails, so a broken record silently turns into an empty clue; this script
makes those problems visible.

Checks fall into two categories:
  1. Errors   — no answer, no clue text (the clue can't be played)
  2. Warnings — definition/indicator/fodder phrases that can't be located
                in the clue text, unknown clue kind, enumeration that
                doesn't match the answer's word lengths

Usage:
    python3 validate_clues.py                 # validate CLUES_PATH
    python3 validate_clues.py my_clues.yaml   # validate a specific file
"""

import sys

from clue_annotator import annotate
from clue_constants import UNKNOWN_CLUE_KIND, parse_enumeration, split_enumeration
from clue_loader import default_clues_path, read_raw_clues
from clue_normalizer import normalize


def validate_clue(raw):
    """
    Validate a single raw clue record.

    Returns:
        (errors, warnings) — two lists of strings.
    """
    errors = []
    warnings = []

    if not isinstance(raw, dict):
        errors.append(f"Record is not an object: {type(raw).__name__}")
        return errors, warnings

    entry = normalize(raw)

    # --- 1. Playable ---
    if not entry.answer.replace(" ", ""):
        errors.append("Missing answer")
    if not entry.clue_text.strip():
        errors.append("Missing clue text")
    if errors:
        return errors, warnings

    # --- 2. Clue kind resolved ---
    if entry.clue_kind == UNKNOWN_CLUE_KIND:
        warnings.append("Clue kind unknown (no parse.type or tooltips.clueType)")

    # --- 3. Enumeration matches answer ---
    _, enumeration = split_enumeration(entry.clue_text)
    if enumeration:
        expected = parse_enumeration(enumeration)
        if sum(expected) != len(entry.answer.replace(" ", "").replace("-", "")):
            warnings.append(f"Enumeration ({enumeration}) doesn't match answer '{entry.answer}'")

    # --- 4. Every phrase located in the clue text ---
    for category, phrase in annotate(entry).unmatched:
        warnings.append(f"{category.capitalize()} '{phrase}' not found in clue text")

    return errors, warnings


def validate_all(path=None):
    """Validate every record in a clue file. Returns (total, passed, failed)."""
    path = path or default_clues_path()
    records = read_raw_clues(path)

    total = len(records)
    passed = 0
    failed = 0

    for i, raw in enumerate(records):
        errors, warnings_list = validate_clue(raw)
        label = raw.get('answer', '?') if isinstance(raw, dict) else '?'

        if errors:
            failed += 1
            print(f"\n✗ #{i} ({label})")
            for err in errors:
                print(f"  ERROR: {err}")
            for warn in warnings_list:
                print(f"  WARNING: {warn}")
        elif warnings_list:
            passed += 1
            print(f"\n⚠ #{i} ({label})")
            for warn in warnings_list:
                print(f"  WARNING: {warn}")
        else:
            passed += 1
            print(f"✓ #{i} ({label})")

    print(f"\n{'='*40}")
    print(f"Total: {total}  Passed: {passed}  Failed: {failed}")

    return total, passed, failed


if __name__ == "__main__":
    clue_file = sys.argv[1] if len(sys.argv) > 1 else None
    total, passed, failed = validate_all(clue_file)
    sys.exit(1 if failed > 0 else 0)

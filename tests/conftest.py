"""Shared fixtures for the clue game test suite."""

import json

import pytest

from clue_normalizer import normalize_all


@pytest.fixture
def cat_nap_raw():
    """The charade clue from the game's sample set."""
    return {
        "answer": "CAT NAP",
        "clue": "Feline rest (3,3)",
        "parse": {
            "type": "charade",
            "parts": [
                {"id": "p1", "type": "literal", "source": {"text": "CAT"}},
                {"id": "p2", "type": "literal", "source": {"text": "NAP"}},
            ],
        },
        "definition": {"text": "rest"},
    }


@pytest.fixture
def anagram_raw():
    return {
        "answer": "LISTEN",
        "clue": "Silent shuffle to hear (6)",
        "parse": {
            "type": "anagram",
            "parts": [
                {
                    "id": "p1",
                    "type": "anagram",
                    "source": {"text": "Silent"},
                    "indicator": {"text": "shuffle"},
                },
            ],
        },
        "indicatorsUsed": [{"text": "shuffle"}],
        "definition": {"text": "hear"},
        "tooltips": {"components": [{"for": "p1", "text": "SILENT rearranged"}]},
    }


@pytest.fixture
def raw_clues(cat_nap_raw, anagram_raw):
    return [
        cat_nap_raw,
        anagram_raw,
        {"answer": "DOG", "clue": "Hound (3)", "definition": {"text": "Hound"}},
    ]


@pytest.fixture
def clues(raw_clues):
    return normalize_all(raw_clues)


@pytest.fixture
def clue_file(tmp_path, raw_clues):
    path = tmp_path / "clues.json"
    path.write_text(json.dumps(raw_clues), encoding="utf-8")
    return path


@pytest.fixture
def client(clue_file):
    from clue_server import create_app

    app = create_app(str(clue_file))
    app.config["TESTING"] = True
    return app.test_client()

#!/usr/bin/env python3
"""
Clue Loader
===========

Reads the raw clue set from disk and normalises it into ClueEntry objects.

Accepted files:
    clues.json / clues.yaml   - a list of raw clue records, or
                                an object {"clues": [...]}

The file path comes from CLUES_PATH (environment or .env), defaulting to
clues.json beside this module. The store reloads itself when the file's
mtime changes, so clue edits show up without a server restart.
"""

import json
import os

import yaml
from dotenv import load_dotenv

from clue_normalizer import normalize_all

_script_dir = os.path.dirname(os.path.abspath(__file__))

_env_path = os.path.join(_script_dir, '.env')
if os.path.isfile(_env_path):
    load_dotenv(_env_path)
    print(f"Loaded .env from {_env_path}")


def default_clues_path():
    """CLUES_PATH from the environment, else clues.json beside the code."""
    return os.environ.get("CLUES_PATH") or os.path.join(_script_dir, 'clues.json')


def read_raw_clues(filepath):
    """
    Load raw clue records from a JSON or YAML file.

    Returns the list of raw records (not yet normalised).
    Raises ValueError for an unsupported extension or structure.
    """
    filename = os.path.basename(filepath).lower()

    with open(filepath, 'r', encoding='utf-8') as f:
        if filename.endswith('.json'):
            data = json.load(f)
        elif filename.endswith(('.yaml', '.yml')):
            data = yaml.safe_load(f)  # raises YAMLError with details
        else:
            raise ValueError(f"Unsupported clues file format: {filename}. Expected .json, .yaml or .yml")

    if isinstance(data, dict) and 'clues' in data:
        data = data['clues']

    if not isinstance(data, list):
        raise ValueError("Unexpected clue file structure: expected a list or an object with a 'clues' list")

    return data


class ClueStore:
    """The process-wide clue list, built once per file version and read-only."""

    def __init__(self, path=None):
        self.path = path or default_clues_path()
        self.clues = []
        self.mtime = 0

    def load(self, force=False):
        """Load and normalise the clue file. Skips if unchanged unless forced."""
        current_mtime = os.path.getmtime(self.path)
        if not force and current_mtime == self.mtime:
            return self.clues

        raw = read_raw_clues(self.path)
        self.clues = normalize_all(raw)
        self.mtime = current_mtime
        print(f"[Clues] Loaded {len(self.clues)} clues from {self.path} (mtime: {current_mtime})")
        return self.clues

    def maybe_reload(self):
        """Reload the clue file if it has changed on disk."""
        current_mtime = os.path.getmtime(self.path)
        if current_mtime != self.mtime:
            print(f"[Auto-reload] {os.path.basename(self.path)} changed, reloading...")
            self.load(force=True)
        return self.clues

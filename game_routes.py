"""
Game Routes - Flask Blueprint
=============================

JSON routes for the clue game. The client holds the signed game state
and sends it back with every action.

Routes:
    /game/clues     - List the loaded clues (index, clue text, type)
    /game/start     - Start a game, optionally at a given clue index
    /game/action    - Apply an action (type, backspace, set_cursor, submit,
                      reveal_definition, reveal_letter, reveal_structure,
                      give_up, skip, select)
"""

import traceback

from flask import Blueprint, current_app, jsonify, request

import game_handler

game_bp = Blueprint('game', __name__)


def _clues():
    """Current clue list, reloaded if the clue file changed on disk."""
    return current_app.config['CLUE_STORE'].maybe_reload()


@game_bp.route('/clues', methods=['GET'])
def game_clues():
    """List all clues without answers."""
    clues = _clues()
    return jsonify({
        'clues': [
            {'index': i, 'clue': entry.clue_text, 'clueType': entry.clue_kind, 'style': entry.style}
            for i, entry in enumerate(clues)
        ],
    })


@game_bp.route('/start', methods=['POST'])
def game_start():
    """Start a game, at clue 0 unless an index is given."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        ctx = game_handler.start_game(_clues(), data.get('index', 0))
        return jsonify(game_handler.get_render(ctx))
    except Exception as e:
        traceback.print_exc()
        return jsonify({'error': str(e)}), 500


@game_bp.route('/action', methods=['POST'])
def game_action():
    """Apply one UI action to the client's game state."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({'error': 'No data provided'}), 400

    action = data.get('action')
    if not action:
        return jsonify({'error': 'Missing action'}), 400

    try:
        ctx = game_handler.restore_game(_clues(), data.get('session'))
        signal = ctx.dispatch(action, data)
        return jsonify(game_handler.get_render(ctx, signal))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        traceback.print_exc()
        return jsonify({'error': str(e)}), 500

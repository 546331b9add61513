#!/usr/bin/env python3
"""
Clue Game Server
================

Serves the cryptic clue game over JSON. The browser front end renders the
annotated clue and letter boxes and forwards keystrokes and button clicks
to /game/action.

Usage:
    python clue_server.py

Environment (or .env):
    CLUES_PATH      clue file (.json/.yaml), default clues.json
    SESSION_SECRET  HMAC key for client-held game state
    PORT            default 8080
"""

import os

from flask import Flask, jsonify

from clue_loader import ClueStore
from game_routes import game_bp


def create_app(clues_path=None):
    """Build the Flask app with its clue store loaded."""
    app = Flask(__name__)

    clue_store = ClueStore(clues_path)
    clue_store.load(force=True)
    app.config['CLUE_STORE'] = clue_store

    # Register game Blueprint (all /game/* routes)
    app.register_blueprint(game_bp, url_prefix='/game')

    @app.route('/status')
    def status():
        """Return server status and the loaded clue file."""
        return jsonify({
            'clues_path': clue_store.path,
            'clue_count': len(clue_store.clues),
            'connected': True,
        })

    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 8080))
    app = create_app()
    print("Starting Clue Game Server...")
    print(f"Open http://localhost:{port} in your browser")
    app.run(debug=True, port=port, host='0.0.0.0',
            extra_files=[app.config['CLUE_STORE'].path])

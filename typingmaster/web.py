#!/usr/bin/env python3
"""
Typing Master – Flask passage service
-------------------------------------
Responsibilities:
- POST /api/fetch-text scrapes a news page for a practice passage
- GET /api/passage hands out a built-in passage
- GET /health reports service status

Notes:
- Stateless: every request builds its own requests.Session unless the app
  was created with one (tests inject a fake).
"""

import logging
import os
from datetime import datetime

from flask import Flask, jsonify, request

from . import __version__
from .language_utils import SUPPORTED_LANGUAGES, get_language_code, normalize_language
from .passage_fetcher import fetch_passage
from .passages import get_passage_source, random_passage

logger = logging.getLogger(__name__)


def create_app(http_session=None, rng=None):
    app = Flask(__name__)
    app.config["HTTP_SESSION"] = http_session
    app.config["RNG"] = rng

    # Track when this process started
    started_at = datetime.now().isoformat()

    # ---------------------------- Health ---------------------------

    @app.get("/health")
    def health():
        return jsonify({
            'service': 'typingmaster-passages',
            'version': __version__,
            'pid': os.getpid(),
            'started_at': started_at,
            'languages': list(SUPPORTED_LANGUAGES),
            'status': 'healthy'
        })

    # ---------------------------- Passages -------------------------

    @app.route('/api/fetch-text', methods=['POST'])
    def api_fetch_text():
        """API: Extract a passage from a news page"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'JSON body required', 'text': None}), 400

        try:
            language = normalize_language(data.get('language'))
        except ValueError as e:
            return jsonify({'error': str(e), 'text': None}), 400

        url = data.get('url') or get_passage_source(language)
        if not isinstance(url, str):
            return jsonify({'error': 'url must be a string', 'text': None}), 400

        result = fetch_passage(url, language,
                               session=app.config["HTTP_SESSION"],
                               rng=app.config["RNG"])
        if not result['success']:
            logger.warning("fetch-text failed for %s: %s", url, result['error'])
            return jsonify({'error': result['error'], 'text': None}), 500

        return jsonify({'text': result['text']})

    @app.get("/api/passage")
    def api_passage():
        """API: Random built-in passage for a language"""
        try:
            language = normalize_language(request.args.get('language', 'english'))
        except ValueError as e:
            return jsonify({'error': str(e), 'text': None}), 400

        return jsonify({
            'text': random_passage(language, rng=app.config["RNG"]),
            'language': language,
            'code': get_language_code(language),
        })

    return app

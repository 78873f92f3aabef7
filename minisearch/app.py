#!/usr/bin/env python3
"""
Flask web frontend over a SearchSession.

    GET /search?q=<term>[&limit=N]  -> JSON results (with snippets)
    GET /health                     -> liveness + whether the index is loaded

Paths come from the environment:
    MINISEARCH_TITLES, MINISEARCH_TEXT_DIR, MINISEARCH_INDEX
"""

import os
import sys
import time

from flask import Flask, jsonify, request

from minisearch.lexicon import IndexFormatError
from minisearch.paths import INDEX_PATH
from minisearch.searcher import SearchSession


def initialize_session():
    """Open the search session from environment paths; None if that fails."""
    titles = os.environ.get("MINISEARCH_TITLES")
    text_dir = os.environ.get("MINISEARCH_TEXT_DIR")
    index_path = os.environ.get("MINISEARCH_INDEX", INDEX_PATH)
    if not titles or not text_dir:
        print("[Searcher] MINISEARCH_TITLES / MINISEARCH_TEXT_DIR not set", file=sys.stderr)
        return None
    try:
        print("[Searcher] Initializing search session...", file=sys.stderr)
        return SearchSession.open(titles, text_dir, index_path)
    except (OSError, IndexFormatError) as e:
        print(f"[Searcher] Error initializing search session: {e}", file=sys.stderr)
        return None


def create_app(session=None):
    app = Flask(__name__)
    app.config["SEARCH_SESSION"] = session

    @app.route("/search")
    def search():
        s = app.config["SEARCH_SESSION"]
        if s is None:
            return jsonify({"error": "Search engine not initialized"}), 500

        term = request.args.get("q", "").strip()
        if not term:
            return jsonify({"error": "Empty query"}), 400
        limit = request.args.get("limit", type=int)
        if limit is not None and limit < 1:
            return jsonify({"error": "limit must be >= 1"}), 400

        start_time = time.perf_counter()
        resp = s.search(term, limit=limit)
        search_time = (time.perf_counter() - start_time) * 1000  # ms

        return jsonify({
            "query": term,
            "total": resp.total,
            "results": [r._asdict() for r in resp.results],
            "message": resp.message,
            "searchTime": search_time,
        })

    @app.route("/health")
    def health():
        return jsonify({
            "status": "healthy",
            "searcher_initialized": app.config["SEARCH_SESSION"] is not None,
        })

    return app


if __name__ == "__main__":
    app = create_app(initialize_session())
    app.run(debug=False, host="0.0.0.0", port=5001)

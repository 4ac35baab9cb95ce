"""
Trie Lookup Service — A REST API for prefix and fuzzy autocomplete.

Exposes the fuzzy_trie data structure as a JSON API with endpoints for
inserting words, enumerating keys, prefix-based autocompletion, subsequence
(fuzzy) matching, and deletion. Built with Flask.

The trie itself is not safe for concurrent use, so every request holds a
single lock for the duration of its trie access.
"""

from __future__ import annotations

import os
import threading
import time
import logging
from itertools import islice

from flask import Flask, jsonify, request

from fuzzy_trie import Trie, add_from_file, create_trie

# ---------------------------------------------------------------------------
# Flask application
# ---------------------------------------------------------------------------

app = Flask(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("trie-service")

MAX_KEY_LENGTH = 256
DEFAULT_LIMIT = 25

# Global trie instance — persists for the lifetime of the process
trie: Trie = create_trie()
trie_lock = threading.Lock()
_start_time = time.time()

_SEED_WORDS = [
    "algorithm", "api", "application", "array", "authentication",
    "binary", "branch", "buffer", "build", "byte",
    "cache", "callback", "class", "client", "compiler",
    "container", "cpu", "database", "debug", "deploy",
    "endpoint", "exception", "flask", "function",
    "gateway", "git", "graph", "hash", "heap",
    "index", "interface", "json", "lambda",
    "memory", "middleware", "node", "object", "parser", "pipeline",
    "prefix-tree", "process", "queue", "recursion", "request",
    "response", "router", "runtime", "schema", "server", "socket",
    "stack", "stream", "thread", "token", "tree", "trie", "tuple",
    "variable", "version", "webhook", "worker",
]

WORDS_FILE = os.environ.get("TRIE_WORDS_FILE")


def _seed() -> str:
    """Fill the global trie; return a description of where the words came from."""
    if WORDS_FILE:
        count = add_from_file(trie, WORDS_FILE)
        logger.info("Seeded trie with %d words from %s", count, WORDS_FILE)
        return WORDS_FILE
    for word in _SEED_WORDS:
        trie.add(word)
    logger.info("Seeded trie with %d built-in words", len(_SEED_WORDS))
    return "built-in"


_seed_source = _seed()


def _limit_arg() -> int:
    limit = request.args.get("limit", str(DEFAULT_LIMIT), type=str)
    try:
        return max(int(limit), 0)
    except ValueError:
        return DEFAULT_LIMIT


def _missing(name: str):
    return jsonify({"error": f"Missing query parameter '{name}'"}), 400


def _bad_body(message: str):
    return jsonify({"error": message}), 400


# ── Health & Info ─────────────────────────────────────────────────────────

@app.route("/")
def index():
    """List the routes served here."""
    routes = {}
    for rule in app.url_map.iter_rules():
        if rule.endpoint == "static":
            continue
        methods = ",".join(sorted(rule.methods - {"HEAD", "OPTIONS"}))
        routes[f"{methods} {rule.rule}"] = app.view_functions[rule.endpoint].__doc__
    return jsonify({"service": "fuzzy-trie", "routes": routes})


@app.route("/health")
def health():
    """Liveness check with the current key count."""
    with trie_lock:
        size = len(trie)
    return jsonify({"status": "ok", "trie_size": size})


@app.route("/stats")
def stats():
    """Key and node counts, uptime and seed source."""
    with trie_lock:
        total_keys = len(trie)
        total_nodes = trie.node_count()
    return jsonify({
        "total_keys": total_keys,
        "total_nodes": total_nodes,
        "uptime_seconds": round(time.time() - _start_time, 2),
        "seed_source": _seed_source,
    })


# ── Core API ──────────────────────────────────────────────────────────────

@app.route("/keys")
def keys():
    """Every stored key, lexicographically ordered."""
    limit = _limit_arg()
    with trie_lock:
        matches = list(islice(trie, limit))
    return jsonify({"count": len(matches), "keys": matches})


@app.route("/search")
def search():
    """Exact key lookup."""
    q = request.args.get("q", "")
    if not q:
        return _missing("q")
    with trie_lock:
        found = q in trie
    return jsonify({"key": q, "found": found})


@app.route("/prefix")
def prefix():
    """Keys starting with q, lexicographically ordered."""
    q = request.args.get("q")
    if q is None:
        return _missing("q")
    limit = _limit_arg()

    with trie_lock:
        matches = list(islice(trie.iter_prefix(q), limit))

    return jsonify({
        "prefix": q,
        "count": len(matches),
        "matches": matches,
    })


@app.route("/fuzzy")
def fuzzy():
    """Keys containing q as a subsequence."""
    q = request.args.get("q")
    if q is None:
        return _missing("q")
    limit = _limit_arg()

    with trie_lock:
        matches = list(islice(trie.iter_fuzzy(q), limit))

    return jsonify({
        "pattern": q,
        "count": len(matches),
        "matches": matches,
    })


@app.route("/insert", methods=["POST"])
def insert():
    """Insert the body's "key"; reports how many nodes were created."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _bad_body("Request body must be a JSON object")
    key = body.get("key", "")

    if not isinstance(key, str) or not key:
        return _bad_body("Missing 'key' in request body")
    if len(key) > MAX_KEY_LENGTH:
        return _bad_body(f"Key too long (max {MAX_KEY_LENGTH} chars)")

    with trie_lock:
        created = trie.add(key)
        size = len(trie)
    logger.info("Inserted key=%s created=%d", key, created)
    return jsonify({"inserted": key, "created": created, "trie_size": size}), 201


@app.route("/delete", methods=["DELETE"])
def delete():
    """Delete key q; 404 when it was not stored."""
    q = request.args.get("q", "")
    if not q:
        return _missing("q")

    with trie_lock:
        deleted = q in trie
        trie.remove(q)
        size = len(trie)
    if deleted:
        logger.info("Deleted key=%s", q)
    status = 200 if deleted else 404
    return jsonify({"key": q, "deleted": deleted, "trie_size": size}), status


def main() -> None:
    port = int(os.environ.get("PORT", 8080))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    logger.info("Serving %d keys on port %d", len(trie), port)
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()

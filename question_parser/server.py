"""
HTTP Microservice
=================
Flask-based HTTP API for the question parser.

The import screen posts pasted text and receives a structured draft to
review before saving:
    - Single-question paste
    - Batch transcript import
    - Pre-persistence validation of (hand-corrected) drafts

Endpoints:
    POST   /api/parse         → Parse one pasted question
    POST   /api/batch         → Parse a transcript of several questions
    POST   /api/validate      → Check a draft against the storage rules
    GET    /api/format        → Paste format guide
    GET    /api/health        → Health check
    GET    /api/info          → Parser version info
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from . import __version__
from .engine import ParserConfig, ParserEngine
from .exceptions import EmptyInputError
from .guide import format_guide
from .models import ParsedQuestion
from .validator import ValidationEngine

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def create_app(config: dict = None) -> Flask:
    """Create and configure the Flask app."""
    if config:
        app.config.update(config)

    app.config.setdefault("MAX_CONTENT_LENGTH", 2 * 1024 * 1024)  # 2MB
    app.config.setdefault("PARSER_WORKERS", 1)
    app.config.setdefault("BLOCK_BLANK_LINES", 2)
    app.config.setdefault("MIN_ALTERNATIVES", 2)
    app.config.setdefault("LOG_LEVEL", "INFO")

    return app


def _engine() -> ParserEngine:
    return ParserEngine(ParserConfig(
        block_blank_lines=app.config.get("BLOCK_BLANK_LINES", 2),
        workers=app.config.get("PARSER_WORKERS", 1),
        min_alternatives=app.config.get("MIN_ALTERNATIVES", 2),
        log_level=app.config.get("LOG_LEVEL", "INFO"),
    ))


def _request_text():
    """Pasted text from a JSON body or a plain-text body."""
    if request.is_json:
        data = request.get_json(silent=True) or {}
        text = data.get("text")
        return text if isinstance(text, str) else None
    if request.mimetype == "text/plain":
        return request.get_data(as_text=True)
    return None


# ─── Health Check ─────────────────────────────────────────────────────────────


@app.route("/api/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": "question-parser",
        "version": __version__,
    })


@app.route("/api/info", methods=["GET"])
def info():
    """Parser version and capability info."""
    return jsonify({
        "version": __version__,
        "capabilities": [
            "true_false_detection",
            "multiple_choice_extraction",
            "answer_key_inference",
            "batch_import",
            "validation",
        ],
        "question_kinds": ["true_false", "multiple_choice"],
    })


@app.route("/api/format", methods=["GET"])
def paste_format():
    """User-facing paste format guide."""
    return jsonify({"guide": format_guide()})


# ─── Parse Endpoints ──────────────────────────────────────────────────────────


@app.route("/api/parse", methods=["POST"])
def parse_text():
    """
    Parse one pasted question.

    Accepts either:
        - A JSON body {"text": "..."}
        - A text/plain body

    Returns the draft; 422 when the text is empty.
    """
    text = _request_text()
    if text is None:
        return jsonify({
            "error": "Provide a JSON body with text or a text/plain body"
        }), 400

    try:
        question = _engine().parse(text)
    except EmptyInputError as e:
        return jsonify({"error": str(e)}), 422

    return jsonify(question.model_dump(mode="json")), 200


@app.route("/api/batch", methods=["POST"])
def parse_batch():
    """Parse a transcript of several questions separated by blank lines."""
    text = _request_text()
    if text is None:
        return jsonify({
            "error": "Provide a JSON body with text or a text/plain body"
        }), 400

    report = _engine().parse_batch(text)
    if not report.items:
        return jsonify({"error": "No questions found in input"}), 422

    return jsonify(report.model_dump(mode="json")), 200


@app.route("/api/validate", methods=["POST"])
def validate_question():
    """Check a (possibly hand-corrected) draft against the storage rules."""
    data = request.get_json(silent=True) or {}
    payload = data.get("question")
    if not isinstance(payload, dict):
        return jsonify({"error": "Provide a JSON body with question"}), 400

    try:
        question = ParsedQuestion.model_validate(payload)
    except ValidationError as e:
        return jsonify({
            "error": "Invalid question",
            "details": e.errors(include_url=False, include_context=False),
        }), 400

    issues = ValidationEngine(
        min_alternatives=app.config.get("MIN_ALTERNATIVES", 2)
    ).validate_question(question)

    return jsonify({
        "storable": not issues,
        "issues": [issue.model_dump() for issue in issues],
    }), 200


# ─── Run Server ──────────────────────────────────────────────────────────────


def run_server(
    host: str = "0.0.0.0",
    port: int = 5000,
    debug: bool = False,
):
    """Start the microservice server."""
    create_app()
    logger.info(f"Starting server on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_server(debug=True)

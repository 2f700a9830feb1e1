"""
Flask REST API for the navigation assistant.

Thin HTTP layer: validates input, calls the NavAssistantApp facade, shapes
the JSON response and records every request in the RequestLog.
"""
import logging
from datetime import datetime, timezone
from time import time
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .app import NavAssistantApp
from .chat import APOLOGY_MESSAGE
from .config import NavAssistantConfig
from .resolution import ResolutionType
from .security import InputValidator, ValidationError
from .utils import RequestLog

logger = logging.getLogger(__name__)

SERVICE_NAME = "Kuprik Qurilish AI Assistant"
SHORT_APOLOGY = "Kechirasiz, xatolik yuz berdi."

MAX_STATS_DAYS = 3650
MAX_HISTORY_LIMIT = 1000


def _int_arg(name: str, default: int, maximum: int) -> int:
    """Positive integer query argument, clamped to ``maximum``."""
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default
    return min(value, maximum) if value > 0 else default


def create_app(
    assistant: NavAssistantApp,
    request_log: RequestLog,
    config: Optional[NavAssistantConfig] = None,
) -> Flask:
    """
    Build the Flask application.

    :param assistant: Initialized NavAssistantApp
    :param request_log: Where requests are recorded
    :param config: Limits and validation settings (defaults if None)
    :return: Flask app
    """
    config = config or NavAssistantConfig()

    app = Flask(__name__)
    app.json.ensure_ascii = False

    CORS(
        app,
        origins=config.cors_origins,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        supports_credentials=True,
    )

    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[config.rate_limit],
        storage_uri="memory://",
        headers_enabled=True,
    )

    def rate_limit_status() -> Optional[dict]:
        current = limiter.current_limit
        if current is None:
            return None
        return {"remaining": current.remaining, "resetAt": current.reset_at}

    def record(query, model, response_type, tokens, processing_ms, error=None):
        request_log.record(
            query=query,
            model=model,
            response_type=response_type,
            tokens=tokens,
            ip=request.remote_addr,
            user_agent=request.headers.get("User-Agent", "unknown"),
            processing_ms=processing_ms,
            error=error,
        )

    def raw_query():
        data = request.get_json(silent=True) or {}
        return data.get("query")

    def server_error(e: Exception, start_time: float, message: str):
        processing_ms = int((time() - start_time) * 1000)
        logger.error(f"{request.path} error: {e}", exc_info=True)
        query = raw_query()
        record(
            query if isinstance(query, str) else "unknown",
            "error",
            "ERROR",
            0,
            processing_ms,
            error=str(e),
        )
        return jsonify({"error": "Internal server error", "message": message}), 500

    @app.route("/api/assistant/chat", methods=["POST"])
    def chat():
        """Resolve the query and reply (FAQ answer, navigation link or chat)."""
        start_time = time()
        try:
            query = InputValidator.sanitize_query(raw_query(), max_length=config.max_query_length)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            logger.info(f'New query from {request.remote_addr}: "{query}"')
            response = assistant.chat(query)
            resolution, reply = response.resolution, response.reply
            processing_ms = int((time() - start_time) * 1000)

            model = reply.model or resolution.model or "unknown"
            tokens = reply.tokens or resolution.tokens or 0
            record(query, model, resolution.type.value, tokens, processing_ms, error=reply.error)

            body = {
                "message": reply.message,
                "meta": {
                    "model": model,
                    "tokens": tokens,
                    "processingTime": f"{processing_ms}ms",
                },
                "rateLimit": rate_limit_status(),
            }

            if resolution.type is ResolutionType.FAQ_MATCH:
                body["type"] = "FAQ"
                body["faq"] = {
                    "id": resolution.faq.id,
                    "question": resolution.faq.question,
                    "category": resolution.faq.category,
                }
            elif resolution.type is ResolutionType.NAVIGATION_MATCH:
                body["type"] = "NAVIGATION"
                body["navigation"] = {"url": resolution.url, "intent": resolution.intent}
            else:
                body["type"] = "CHAT"

            return jsonify(body)

        except Exception as e:
            return server_error(e, start_time, APOLOGY_MESSAGE)

    @app.route("/api/assistant/navigate", methods=["POST"])
    def navigate():
        """Resolution only: a navigation target or NOT_FOUND."""
        start_time = time()
        try:
            query = InputValidator.sanitize_query(raw_query(), max_length=config.max_query_length)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            logger.info(f'Navigation query from {request.remote_addr}: "{query}"')
            result = assistant.navigate(query)
            processing_ms = int((time() - start_time) * 1000)

            navigating = result.type is ResolutionType.NAVIGATION_MATCH
            record(
                query,
                result.model,
                "NAVIGATION" if navigating else "NOT_FOUND",
                result.tokens,
                processing_ms,
            )

            if not navigating:
                return jsonify({
                    "type": "NOT_FOUND",
                    "meta": {"processingTime": f"{processing_ms}ms"},
                    "rateLimit": rate_limit_status(),
                })

            return jsonify({
                "type": "NAVIGATE",
                "url": result.url,
                "intent": result.intent,
                "meta": {
                    "model": result.model,
                    "tokens": result.tokens,
                    "processingTime": f"{processing_ms}ms",
                },
                "rateLimit": rate_limit_status(),
            })

        except Exception as e:
            return server_error(e, start_time, SHORT_APOLOGY)

    @app.route("/api/assistant/talk", methods=["POST"])
    def talk():
        """General conversation without FAQ or navigation handling."""
        start_time = time()
        try:
            query = InputValidator.sanitize_query(raw_query(), max_length=config.max_query_length)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            logger.info(f'Talk query from {request.remote_addr}: "{query}"')
            reply = assistant.talk(query)
            processing_ms = int((time() - start_time) * 1000)
            record(query, reply.model or "unknown", "CHAT", reply.tokens, processing_ms, error=reply.error)

            return jsonify({
                "message": reply.message,
                "type": "CHAT",
                "meta": {
                    "model": reply.model or "unknown",
                    "tokens": reply.tokens,
                    "processingTime": f"{processing_ms}ms",
                },
                "rateLimit": rate_limit_status(),
            })

        except Exception as e:
            return server_error(e, start_time, SHORT_APOLOGY)

    @app.route("/api/assistant/stats")
    def stats():
        days = _int_arg("days", 7, MAX_STATS_DAYS)
        return jsonify({"period": f"Last {days} days", **request_log.stats(days)})

    @app.route("/api/assistant/health")
    @limiter.exempt
    def assistant_health():
        return jsonify({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
        })

    @app.route("/health")
    @limiter.exempt
    def health():
        return jsonify({"ok": True})

    @app.route("/chatHistory")
    def chat_history():
        """Request history (JSON) with optional date/model/type filters."""
        history = request_log.history(
            limit=_int_arg("limit", 50, MAX_HISTORY_LIMIT),
            date=request.args.get("date"),
            model=request.args.get("model"),
            response_type=request.args.get("type"),
        )
        return jsonify({
            "total": history["total"],
            "showing": len(history["requests"]),
            "stats": request_log.stats(7),
            "requests": history["requests"],
        })

    @app.route("/chatHistory/daily/<date>")
    def chat_history_daily(date: str):
        daily = request_log.daily(date)
        if daily is None:
            return jsonify({"error": f"No logs found for {date}"}), 404
        return jsonify(daily)

    @app.route("/chatHistory/stats")
    def chat_history_stats():
        return jsonify(request_log.stats(_int_arg("days", 7, MAX_STATS_DAYS)))

    return app

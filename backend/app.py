from datetime import datetime

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from loguru import logger

import analytics
import feedback_service
import gpt_service
from config import Config
from entry_store import EntryStore
from errors import GenerationError
from logging_config import setup_logger
from models import db

bp = Blueprint("journal", __name__)


def _store() -> EntryStore:
    return current_app.extensions["entry_store"]


def _now() -> datetime:
    return current_app.extensions["clock"]()


def _respond(result, success_status=200):
    """Turn an Ok/Err into the uniform {data, error} body."""
    status = success_status if result.is_ok else result.error.status_code
    return jsonify(result.to_dict()), status


# ---------- Routes ----------

@bp.route("/health")
def health():
    """Simple health check + DB connectivity test."""
    db_ok = True
    try:
        with db.engine.connect() as conn:
            conn.execute(db.text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        db_ok = False
    return jsonify({
        "ok": True,
        "db_ok": db_ok,
        "model": gpt_service.OPENROUTER_MODEL,
        "time": _now().isoformat(),
    }), 200


@bp.route("/entries", methods=["GET"])
def list_entries():
    """List entries of one type (latest first), optionally filtered by mood or text."""
    result = _store().list_by_type(
        request.args.get("type"),
        mood=request.args.get("mood") or None,
        search=(request.args.get("q") or "").strip() or None,
    )
    return _respond(result)


@bp.route("/entries", methods=["POST"])
def create_entry():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    return _respond(_store().create(data), success_status=201)


@bp.route("/entries/<int:entry_id>", methods=["PATCH"])
def update_entry(entry_id: int):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    return _respond(_store().update(entry_id, data))


@bp.route("/entries/<int:entry_id>", methods=["DELETE"])
def delete_entry(entry_id: int):
    return _respond(_store().delete_by_id(entry_id))


@bp.route("/entries", methods=["DELETE"])
def delete_all_entries():
    return _respond(_store().delete_all_by_type(request.args.get("type")))


@bp.route("/overview", methods=["GET"])
def overview():
    """Aggregated stats for the dashboard overview page."""
    store = _store()
    thoughts = store.list_by_type("thoughts")
    activities = store.list_by_type("activity")
    for result in (thoughts, activities):
        if not result.is_ok:
            return _respond(result)

    payload = analytics.overview(
        thoughts.data,
        activities.data,
        now=_now(),
        week_starts_on=current_app.config["WEEK_STARTS_ON"],
    )
    return jsonify(payload), 200


def _feedback_response(generate, label):
    try:
        feedback = generate(
            _store(),
            invoke=current_app.extensions["llm_invoke"],
            now=_now(),
        )
    except GenerationError as e:
        logger.opt(exception=e).error("Error getting {}", label)
        return jsonify({"error": f"Failed to get {label}", "details": e.details}), 500
    except Exception as e:
        logger.opt(exception=e).error("Error getting {}", label)
        return jsonify({"error": f"Failed to get {label}", "details": str(e) or repr(e)}), 500
    return jsonify(feedback), 200


@bp.route("/api/ai/get-ai-activity-feedback", methods=["GET"])
def activity_feedback():
    return _feedback_response(feedback_service.get_activity_feedback, "activity feedback")


@bp.route("/api/ai/get-thoughts-ai-feedback", methods=["GET"])
def thoughts_feedback():
    return _feedback_response(feedback_service.get_thoughts_feedback, "thoughts feedback")


@bp.route("/api/ai/get-daily-achievements", methods=["GET"])
def daily_achievements():
    return _feedback_response(feedback_service.get_daily_achievements, "daily achievements")


@bp.route("/init-db")
def init_db():
    """Optional: safe-guarded table creation endpoint (disable in prod)."""
    if not current_app.config["ALLOW_INIT_DB"]:
        return jsonify({"error": "init disabled"}), 403
    db.create_all()
    return jsonify({"ok": True, "message": "Tables created"}), 200


def create_app(overrides=None, clock=datetime.now, llm_invoke=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    setup_logger(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    # Init DB
    db.init_app(app)
    with app.app_context():
        db.create_all()

    app.extensions["clock"] = clock
    app.extensions["entry_store"] = EntryStore(db.session, clock=clock)
    app.extensions["llm_invoke"] = llm_invoke or gpt_service.invoke

    # --- CORS (allow your deployed frontend origin if provided) ---
    frontend_origin = app.config.get("FRONTEND_ORIGIN")
    if frontend_origin:
        CORS(app, resources={r"/*": {"origins": [frontend_origin]}})
    else:
        # Dev fallback: allow all (ok for local dev; tighten for prod)
        CORS(app)

    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    application = create_app()
    application.run(
        host="0.0.0.0",
        port=application.config["PORT"],
        debug=application.config["DEBUG"],
    )

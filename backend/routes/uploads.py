import logging
import os
import tempfile

from flask import Blueprint, current_app, jsonify, request

from backend.services.db import insert_csv_to_duckdb, parse_roles
from backend.services.system import cleanup_old_sessions, log_mem

logger = logging.getLogger(__name__)

bp = Blueprint("uploads", __name__)


@bp.route("/process", methods=["POST"])
def process_csv():
    """Ingest a CSV upload with its column roles and create a DuckDB session.

    Args:
        None. Reads the uploaded file from the multipart form field named
        ``file`` and a JSON ``{column: role}`` object from the field ``roles``.

    Returns:
        flask.Response: JSON with ``session_id``, ``rows``, ``min_key`` and
        ``max_key`` on success. 4xx/5xx with ``error`` message on failure or
        when the server is busy.
    """
    upload_dir = current_app.config["UPLOAD_DIR"]
    cleanup_old_sessions(upload_dir)
    # Limit concurrent sessions
    session_files = [f for f in os.listdir(upload_dir) if f.endswith(".duckdb")]
    if len(session_files) >= current_app.config["MAX_SESSIONS"]:
        return jsonify(
            {
                "error": "Server is busy. Too many sessions are open right now. Please try again in a few minutes."
            }
        ), 503

    log_mem("Start /process")
    if "file" not in request.files:
        return jsonify({"error": "No file uploaded"}), 400

    uploaded_file = request.files["file"]
    if uploaded_file.filename == "":
        return jsonify({"error": "No file selected"}), 400

    try:
        roles = parse_roles(request.form.get("roles"))
    except (TypeError, ValueError) as e:
        return jsonify({"error": f"Invalid roles: {e}"}), 400

    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            csv_path = os.path.join(tmpdir, "uploaded.csv")
            uploaded_file.save(csv_path)
            session_id, rows, min_key, max_key = insert_csv_to_duckdb(
                csv_path, roles, upload_dir=upload_dir
            )
            log_mem("After insert_csv_to_duckdb")
            return jsonify(
                {
                    "session_id": session_id,
                    "rows": rows,
                    "min_key": min_key,
                    "max_key": max_key,
                }
            ), 200
    except Exception as e:
        logger.exception("Processing failed")
        return jsonify({"error": f"Processing failed: {str(e)}"}), 500

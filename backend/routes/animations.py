import base64
import logging
import os
import tempfile
import time

from flask import Blueprint, current_app, jsonify, request

from backend.services.db import load_session
from backend.services.encoding import encode_animation
from backend.services.system import log_mem
from backend.services.visuals import create_bar_animation_wrapper
from barrace.core.constants import interp_steps as default_interp_steps
from barrace.data.roles import MissingRoleError

logger = logging.getLogger(__name__)

bp = Blueprint("animations", __name__)


@bp.route("/generate_animation", methods=["POST"])
def generate_animation():
    """Render a bar chart race for an uploaded session.

    Expects a JSON body with:
    - session_id (str): Upload/session identifier.
    - settings (dict, optional): Visual options (``barsToShow``, ``intervalTiming``, ...).
    - width, height (int, optional): Viewport in pixels. Defaults to 960x540.
    - dpi (int, optional): Figure DPI.
    - fps (int, optional): Encoding frame rate.
    - interp_steps (int, optional): Frames per transition.
    - format (str, optional): "gif" (default) or "mp4".
    - max_ticks (int, optional): Cap on timer fires to export.

    Returns:
        flask.Response: JSON containing the base64-encoded video under key
        "video" and a suggested filename under key "filename". Returns 400 if
        the session is missing or lacks required fields, 503 if the encoder is
        unavailable, or 500 with an error message on failure.
    """
    try:
        t0 = time.time()
        log_mem("Start /generate_animation")
        data = request.get_json(silent=True) or {}
        session_id = data.get("session_id")
        settings = data.get("settings") or {}
        width = int(data.get("width", 960))
        height = int(data.get("height", 540))
        dpi = int(data.get("dpi", current_app.config["DEFAULT_DPI"]))
        fps = int(data.get("fps", current_app.config["DEFAULT_FPS"]))
        steps = int(data.get("interp_steps", default_interp_steps))
        fmt = str(data.get("format", "gif")).lower()
        max_ticks = min(
            int(data.get("max_ticks", current_app.config["MAX_EXPORT_TICKS"])),
            current_app.config["MAX_EXPORT_TICKS"],
        )
        if fmt not in ("gif", "mp4"):
            return jsonify({"error": f"Unsupported format: {fmt}"}), 400

        loaded = load_session(session_id, current_app.config["UPLOAD_DIR"]) if session_id else None
        if loaded is None:
            return jsonify(
                {"error": "Session expired. Please upload your data again to generate visuals."}
            ), 400
        df, roles = loaded
        logger.info("Loaded session %s in %.2fs", session_id, time.time() - t0)

        try:
            anim = create_bar_animation_wrapper(
                df, roles, settings, width, height, dpi, steps, max_ticks
            )
        except MissingRoleError as e:
            return jsonify({"error": str(e), "missing_roles": list(e.missing)}), 400
        log_mem("After create_bar_animation")

        with tempfile.NamedTemporaryFile(delete=False, suffix=f".{fmt}") as temp_file:
            temp_path = temp_file.name
        try:
            encode_animation(anim, temp_path, fps, fmt)
            with open(temp_path, "rb") as f:
                video_bytes = f.read()
        finally:
            os.remove(temp_path)
        logger.info("Total animation time: %.2f seconds", time.time() - t0)

        video_base64 = base64.b64encode(video_bytes).decode("utf-8")
        filename = f"bar_race_{session_id}.{fmt}"
        return jsonify({"video": video_base64, "filename": filename}), 200

    except RuntimeError as e:
        logger.exception("Encoder unavailable")
        return jsonify({"error": f"Animation generation failed due to encoder: {str(e)}"}), 503
    except Exception as e:
        logger.exception("Animation generation failed")
        return jsonify({"error": f"Animation generation failed: {str(e)}"}), 500

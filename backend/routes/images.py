import base64
import logging
from io import BytesIO

import matplotlib.pyplot as plt
from flask import Blueprint, current_app, jsonify, request

from backend.services.db import load_session
from backend.services.system import cleanup_old_sessions, log_mem
from backend.services.visuals import plot_snapshot_wrapper
from barrace.core.constants import facecolor
from barrace.data.roles import MissingRoleError

logger = logging.getLogger(__name__)

bp = Blueprint("images", __name__)


@bp.route("/generate_image", methods=["POST"])
def generate_image():
    """Render a single ranked snapshot as a PNG.

    Args:
        None. Reads JSON body with keys: ``session_id``, ``settings``,
        ``time_key`` (optional, defaults to the last key), ``width``,
        ``height``.

    Returns:
        flask.Response: JSON with Base64-encoded ``image`` and ``filename``.
        4xx/5xx with ``error`` message if the session is missing or processing fails.
    """
    cleanup_old_sessions(current_app.config["UPLOAD_DIR"])
    try:
        log_mem("Start /generate_image")
        data = request.get_json(silent=True) or {}
        session_id = data.get("session_id")
        settings = data.get("settings") or {}
        time_key = data.get("time_key")
        width = int(data.get("width", 960))
        height = int(data.get("height", 540))
        dpi = int(data.get("dpi", current_app.config["DEFAULT_DPI"]))

        loaded = load_session(session_id, current_app.config["UPLOAD_DIR"]) if session_id else None
        if loaded is None:
            return jsonify(
                {"error": "Session expired. Please upload your data again to generate visuals."}
            ), 400
        df, roles = loaded

        try:
            fig = plot_snapshot_wrapper(
                df,
                roles,
                settings,
                float(time_key) if time_key is not None else None,
                width,
                height,
                dpi,
            )
        except MissingRoleError as e:
            return jsonify({"error": str(e), "missing_roles": list(e.missing)}), 400
        log_mem("After plot_snapshot")

        buf = BytesIO()
        fig.savefig(buf, format="png", facecolor=facecolor, edgecolor="none")
        plt.close(fig)
        image_base64 = base64.b64encode(buf.getvalue()).decode("utf-8")
        suffix = "last" if time_key is None else str(time_key)
        return jsonify({"image": image_base64, "filename": f"bar_race_{suffix}.png"}), 200

    except Exception as e:
        logger.exception("Image generation failed")
        return jsonify({"error": f"Image generation failed: {str(e)}"}), 500

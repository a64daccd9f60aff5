import logging
import os

import matplotlib

matplotlib.use("Agg")

from flask import Flask, jsonify
from flask_cors import CORS

from backend.core import config
from backend.routes.animations import bp as animations_bp
from backend.routes.images import bp as images_bp
from backend.routes.uploads import bp as uploads_bp


def _configure_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL, logging.INFO)
    gunicorn_error = logging.getLogger("gunicorn.error")
    root = logging.getLogger()
    if gunicorn_error.handlers:
        root.handlers = gunicorn_error.handlers
        root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def create_app(overrides: dict | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        UPLOAD_DIR=config.UPLOAD_DIR,
        MAX_SESSIONS=config.MAX_SESSIONS,
        DEFAULT_FPS=config.DEFAULT_FPS,
        DEFAULT_DPI=config.DEFAULT_DPI,
        MAX_EXPORT_TICKS=config.MAX_EXPORT_TICKS,
    )
    if overrides:
        app.config.update(overrides)
    os.makedirs(app.config["UPLOAD_DIR"], exist_ok=True)
    CORS(app)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok", "env": config.ENV}), 200

    # register routes
    app.register_blueprint(uploads_bp)
    app.register_blueprint(images_bp)
    app.register_blueprint(animations_bp)
    return app


_configure_logging()

app = create_app()

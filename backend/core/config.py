"""Centralized configuration for the backend.

Loads environment variables, sets defaults, and exposes constants
used across services and routes.
"""

import os

from dotenv import load_dotenv

load_dotenv("env/.env")

ENV = os.getenv("ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Session storage
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/tmp/barrace_sessions")
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "5"))
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", "2700"))

# Rendering defaults
DEFAULT_FPS = int(os.getenv("DEFAULT_FPS", "24"))
DEFAULT_DPI = int(os.getenv("DEFAULT_DPI", "60"))
MAX_EXPORT_TICKS = int(os.getenv("MAX_EXPORT_TICKS", "2000"))

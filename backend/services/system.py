import logging
import os
import time

import psutil

from backend.core.config import SESSION_MAX_AGE_SECONDS, UPLOAD_DIR

logger = logging.getLogger(__name__)


def log_mem(msg: str) -> None:
    """Log RSS memory usage in MB with a short message.

    Args:
        msg: Context string to prefix the memory log.
    """
    process = psutil.Process(os.getpid())
    mem_mb = process.memory_info().rss / 1024**2
    logger.info("%s - Memory usage: %.2f MB", msg, mem_mb)


def cleanup_old_sessions(
    upload_dir: str | None = None, max_age_seconds: int = SESSION_MAX_AGE_SECONDS
) -> int:
    """Delete stale session files from the upload directory.

    Args:
        upload_dir: Directory containing per-session artifacts.
        max_age_seconds: Max age threshold; older files are removed.

    Returns:
        Number of files removed.
    """
    upload_dir = upload_dir or UPLOAD_DIR
    os.makedirs(upload_dir, exist_ok=True)
    now = time.time()
    removed = 0
    for fname in os.listdir(upload_dir):
        fpath = os.path.join(upload_dir, fname)
        if os.path.isfile(fpath) and (now - os.path.getmtime(fpath)) > max_age_seconds:
            try:
                os.remove(fpath)
                removed += 1
            except OSError as e:
                logger.warning("Could not remove stale session file %s: %s", fpath, e)
    return removed

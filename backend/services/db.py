import json
import logging
import os
import uuid
from typing import Mapping

import duckdb
import pandas as pd

from backend.core.config import UPLOAD_DIR
from barrace.data.normalize_inputs import normalize_role

logger = logging.getLogger(__name__)

ROW_ID = "_row_id"


def session_path(session_id: str, upload_dir: str | None = None) -> str:
    return os.path.join(upload_dir or UPLOAD_DIR, f"race_session_{session_id}.duckdb")


def parse_roles(raw: str | Mapping[str, str] | None) -> dict[str, list[str]]:
    """Parse a ``{column: role}`` mapping (JSON text or dict).

    A column may carry one role or a list of roles.

    Raises:
        ValueError: On malformed JSON or an unknown role tag.
    """
    if raw is None or raw == "":
        return {}
    data = json.loads(raw) if isinstance(raw, str) else dict(raw)
    if not isinstance(data, dict):
        raise ValueError("roles must be a JSON object of column -> role")
    roles: dict[str, list[str]] = {}
    for column, tags in data.items():
        tags = [tags] if isinstance(tags, str) else list(tags)
        for tag in tags:
            if normalize_role(tag) is None:
                raise ValueError(f"unknown role {tag!r} for column {column!r}")
        roles[str(column)] = tags
    return roles


def insert_csv_to_duckdb(
    csv_path: str,
    roles: Mapping[str, list[str]],
    session_id: str | None = None,
    upload_dir: str | None = None,
) -> tuple[str, int, float | None, float | None]:
    """Ingest a CSV and its role tags into a per-session DuckDB database.

    Rows keep their file order through a ``_row_id`` column. Role tags for
    columns that are not in the file are dropped with a warning.

    Args:
        csv_path: Path to the uploaded CSV.
        roles: Column name to role tags.
        session_id: Optional session id. If None, generates a UUID.
        upload_dir: Override for the session directory.

    Returns:
        The session_id used, the row count, and the min/max period value
        (None when no column carries the period role or no value parses).
    """
    if session_id is None:
        session_id = str(uuid.uuid4())
    df = pd.read_csv(csv_path)
    df.insert(0, ROW_ID, range(len(df)))

    known = {column: tags for column, tags in roles.items() if column in df.columns}
    for column in set(roles) - set(known):
        logger.warning("Role tags for unknown column %r ignored", column)
    role_rows = pd.DataFrame(
        [(column, tag) for column, tags in known.items() for tag in tags],
        columns=["column_name", "role"],
    )

    os.makedirs(upload_dir or UPLOAD_DIR, exist_ok=True)
    con = duckdb.connect(session_path(session_id, upload_dir))
    try:
        con.execute("DROP TABLE IF EXISTS race_data")
        con.execute("DROP TABLE IF EXISTS column_roles")
        con.execute("CREATE TABLE race_data AS SELECT * FROM df")
        con.execute("CREATE TABLE column_roles (column_name VARCHAR, role VARCHAR)")
        if not role_rows.empty:
            con.execute("INSERT INTO column_roles SELECT * FROM role_rows")
    finally:
        con.close()

    min_key = max_key = None
    period_columns = [
        column
        for column, tags in known.items()
        if any(normalize_role(tag) == "period_value" for tag in tags)
    ]
    if period_columns:
        keys = pd.to_numeric(df[period_columns[-1]], errors="coerce").dropna()
        if not keys.empty:
            min_key, max_key = float(keys.min()), float(keys.max())
    logger.info("Session %s: %d rows, keys %s..%s", session_id, len(df), min_key, max_key)
    return session_id, len(df), min_key, max_key


def load_session(
    session_id: str, upload_dir: str | None = None
) -> tuple[pd.DataFrame, dict[str, list[str]]] | None:
    """Return the session's rows (file order) and role tags.

    Returns:
        (DataFrame, roles), or None if the session DB is missing.
    """
    db_path = session_path(session_id, upload_dir)
    if not os.path.exists(db_path):
        return None
    con = duckdb.connect(db_path, read_only=True)
    try:
        df = con.execute(f"SELECT * FROM race_data ORDER BY {ROW_ID}").df()
        role_rows = con.execute("SELECT column_name, role FROM column_roles").fetchall()
    finally:
        con.close()
    roles: dict[str, list[str]] = {}
    for column, role in role_rows:
        roles.setdefault(column, []).append(role)
    return df.drop(columns=[ROW_ID]), roles

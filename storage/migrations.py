"""Ad-hoc database migrations for the dashboard."""

from __future__ import annotations

from sqlalchemy import text


def _column_exists(conn, table: str, column: str) -> bool:
    result = conn.execute(text(f"PRAGMA table_info('{table}')"))
    return any(row[1] == column for row in result)


def ensure_task_columns(conn) -> None:
    columns = {
        "description": "TEXT",
        "assignee_id": "TEXT",
        "assignee_name": "TEXT",
        "priority": "TEXT NOT NULL DEFAULT 'Medium'",
        "progress": "INTEGER NOT NULL DEFAULT 0",
    }
    for name, ddl_type in columns.items():
        if not _column_exists(conn, "task", name):
            conn.execute(text(f"ALTER TABLE task ADD COLUMN {name} {ddl_type}"))

    # Older rows carried full timestamps; the timeline works on calendar dates.
    for column in ("start_date", "end_date"):
        conn.execute(
            text(
                f"""
                UPDATE task
                SET {column} = substr({column}, 1, 10)
                WHERE {column} IS NOT NULL AND length({column}) > 10
                """
            )
        )


def ensure_dependency_indexes(conn) -> None:
    conn.execute(
        text(
            """
            CREATE INDEX IF NOT EXISTS ix_task_dependency_dependency
            ON task_dependency (dependency_id)
            """
        )
    )


def run_all(engine) -> None:
    with engine.begin() as conn:
        ensure_task_columns(conn)
        ensure_dependency_indexes(conn)


__all__ = ["run_all"]

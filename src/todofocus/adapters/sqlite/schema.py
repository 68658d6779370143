"""Database schema definitions for the local SQLite store.

Table layout mirrors the remote PostgREST store (tasks, tags, task_tags,
timer_sessions) so both backends return the same rows.
"""

from __future__ import annotations

# Schema version tracking (stored in PRAGMA user_version)
SCHEMA_VERSION = 1

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    title TEXT NOT NULL,
    completed BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL
)
"""

CREATE_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS tags (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    name TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    UNIQUE(owner_id, name)
)
"""

# Association rows; deleting either endpoint removes the row
CREATE_TASK_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS task_tags (
    task_id TEXT NOT NULL,
    tag_id TEXT NOT NULL,
    PRIMARY KEY (task_id, tag_id),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
)
"""

# Sessions are immutable history and outlive their task
CREATE_TIMER_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS timer_sessions (
    id TEXT PRIMARY KEY,
    task_id TEXT,
    start_time DATETIME NOT NULL,
    end_time DATETIME NOT NULL,
    duration_seconds INTEGER NOT NULL
)
"""

CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_owner_created ON tasks(owner_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_tags_owner_name ON tags(owner_id, name)",
    "CREATE INDEX IF NOT EXISTS idx_task_tags_tag ON task_tags(tag_id)",
    "CREATE INDEX IF NOT EXISTS idx_timer_sessions_task ON timer_sessions(task_id)",
]

ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_TAGS_TABLE,
    CREATE_TASK_TAGS_TABLE,
    CREATE_TIMER_SESSIONS_TABLE,
]

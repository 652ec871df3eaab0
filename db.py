import json
import sqlite3
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def _db_path() -> Path:
    from config import settings
    p = Path(settings.db_path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def get_conn() -> sqlite3.Connection:
    conn = sqlite3.connect(str(_db_path()))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def init_db() -> None:
    with get_conn() as conn:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS sessions (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id     INTEGER NOT NULL,
                created_at  TEXT    NOT NULL,
                source      TEXT    NOT NULL DEFAULT 'text',
                content     TEXT    NOT NULL,
                tone        TEXT,
                topics      TEXT,
                signals     TEXT
            );

            CREATE TABLE IF NOT EXISTS hooks (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id     INTEGER NOT NULL REFERENCES sessions(id),
                position       INTEGER NOT NULL,
                hook_key       TEXT    NOT NULL,
                kind           TEXT    NOT NULL,
                text           TEXT    NOT NULL,
                category       TEXT,
                score          REAL,
                template_id    TEXT,
                power_hook_id  TEXT
            );

            CREATE TABLE IF NOT EXISTS threads (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id   INTEGER NOT NULL REFERENCES sessions(id),
                hook_id      INTEGER REFERENCES hooks(id),
                created_at   TEXT    NOT NULL,
                thread_type  TEXT    NOT NULL,
                tweets       TEXT    NOT NULL,
                art_prompts  TEXT
            );

            CREATE TABLE IF NOT EXISTS custom_prompts (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id        INTEGER NOT NULL,
                name           TEXT    NOT NULL,
                description    TEXT    NOT NULL DEFAULT '',
                system_prompt  TEXT    NOT NULL,
                created_at     TEXT    NOT NULL,
                updated_at     TEXT    NOT NULL
            );
        """)


# ── sessions + hooks ──────────────────────────────────────────────────────────

def _insert_session(conn: sqlite3.Connection, user_id: int, content: str, source: str, signals) -> int:
    payload = asdict(signals)
    payload["tone"] = signals.tone.value
    payload["main_topics"] = list(signals.main_topics)
    cur = conn.execute(
        """INSERT INTO sessions (user_id, created_at, source, content, tone, topics, signals)
           VALUES (?,?,?,?,?,?,?)""",
        (
            user_id, _now(), source, content,
            signals.tone.value,
            ",".join(signals.main_topics),
            json.dumps(payload),
        ),
    )
    return cur.lastrowid


def _insert_hooks(conn: sqlite3.Connection, session_id: int, hooks: list) -> list[int]:
    ids: list[int] = []
    for position, hook in enumerate(hooks, start=1):
        cur = conn.execute(
            """INSERT INTO hooks
               (session_id, position, hook_key, kind, text, category, score,
                template_id, power_hook_id)
               VALUES (?,?,?,?,?,?,?,?,?)""",
            (
                session_id, position, hook.id, hook.kind, hook.text,
                hook.category or None, hook.score,
                hook.template_id or None, hook.power_hook_id or None,
            ),
        )
        ids.append(cur.lastrowid)
    return ids


def save_session(user_id: int, content: str, source: str, signals) -> int:
    """Store the source content with its analyzed signals (a ContentSignals)."""
    with get_conn() as conn:
        return _insert_session(conn, user_id, content, source, signals)


def save_hooks(session_id: int, hooks: list) -> list[int]:
    """Store generated hooks (agent.modules.hooks.Hook) in display order."""
    with get_conn() as conn:
        return _insert_hooks(conn, session_id, hooks)


def save_session_with_hooks(user_id: int, content: str, source: str, signals, hooks: list) -> int:
    """Store a session and its hooks in one transaction; nothing is kept if either insert fails."""
    with get_conn() as conn:
        session_id = _insert_session(conn, user_id, content, source, signals)
        _insert_hooks(conn, session_id, hooks)
    return session_id


def get_latest_session(user_id: int) -> Optional[dict]:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT * FROM sessions WHERE user_id=? ORDER BY id DESC LIMIT 1",
            (user_id,),
        ).fetchone()
    return dict(row) if row else None


def get_session_hooks(session_id: int) -> list[dict]:
    with get_conn() as conn:
        rows = conn.execute(
            "SELECT * FROM hooks WHERE session_id=? ORDER BY position",
            (session_id,),
        ).fetchall()
    return [dict(r) for r in rows]


# ── threads ───────────────────────────────────────────────────────────────────

def save_thread(
    session_id: int,
    hook_id: Optional[int],
    thread_type: str,
    tweets: list[str],
    art_prompts: Optional[list[str]] = None,
) -> int:
    with get_conn() as conn:
        cur = conn.execute(
            """INSERT INTO threads (session_id, hook_id, created_at, thread_type, tweets, art_prompts)
               VALUES (?,?,?,?,?,?)""",
            (
                session_id, hook_id, _now(), thread_type,
                json.dumps(tweets, ensure_ascii=False),
                json.dumps(art_prompts or [], ensure_ascii=False),
            ),
        )
        return cur.lastrowid


def _thread_row(row: sqlite3.Row) -> dict:
    thread = dict(row)
    thread["tweets"] = json.loads(thread["tweets"])
    thread["art_prompts"] = json.loads(thread["art_prompts"] or "[]")
    return thread


# ── history ───────────────────────────────────────────────────────────────────

def get_history(user_id: int, limit: int = 10) -> list[dict]:
    with get_conn() as conn:
        rows = conn.execute(
            """SELECT s.id, s.created_at, s.source, s.tone, s.topics,
                      substr(s.content, 1, 120) AS preview,
                      (SELECT COUNT(*) FROM hooks h WHERE h.session_id = s.id) AS hook_count,
                      (SELECT COUNT(*) FROM threads t WHERE t.session_id = s.id) AS thread_count
               FROM sessions s WHERE s.user_id=? ORDER BY s.id DESC LIMIT ?""",
            (user_id, limit),
        ).fetchall()
    return [dict(r) for r in rows]


def get_session_count(user_id: int) -> int:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT COUNT(*) FROM sessions WHERE user_id=?",
            (user_id,),
        ).fetchone()
    return row[0] if row else 0


def get_session_with_outputs(session_id: int, user_id: int) -> Optional[dict]:
    with get_conn() as conn:
        session = conn.execute(
            "SELECT * FROM sessions WHERE id=? AND user_id=?",
            (session_id, user_id),
        ).fetchone()
        if not session:
            return None
        hooks = conn.execute(
            "SELECT * FROM hooks WHERE session_id=? ORDER BY position",
            (session_id,),
        ).fetchall()
        threads = conn.execute(
            "SELECT * FROM threads WHERE session_id=? ORDER BY id",
            (session_id,),
        ).fetchall()
    return {
        "session": dict(session),
        "hooks": [dict(h) for h in hooks],
        "threads": [_thread_row(t) for t in threads],
    }


# ── custom prompts ────────────────────────────────────────────────────────────

def create_custom_prompt(user_id: int, name: str, description: str, system_prompt: str) -> int:
    now = _now()
    with get_conn() as conn:
        cur = conn.execute(
            """INSERT INTO custom_prompts
               (user_id, name, description, system_prompt, created_at, updated_at)
               VALUES (?,?,?,?,?,?)""",
            (user_id, name, description, system_prompt, now, now),
        )
        return cur.lastrowid


def list_custom_prompts(user_id: int) -> list[dict]:
    with get_conn() as conn:
        rows = conn.execute(
            "SELECT * FROM custom_prompts WHERE user_id=? ORDER BY created_at DESC, id DESC",
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]


def get_custom_prompt(prompt_id: int, user_id: int) -> Optional[dict]:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT * FROM custom_prompts WHERE id=? AND user_id=?",
            (prompt_id, user_id),
        ).fetchone()
    return dict(row) if row else None


_PROMPT_FIELDS = ("name", "description", "system_prompt")


def update_custom_prompt(prompt_id: int, user_id: int, **updates) -> Optional[dict]:
    fields = {k: v for k, v in updates.items() if k in _PROMPT_FIELDS and v is not None}
    if fields:
        assignments = ", ".join(f"{k}=?" for k in fields)
        with get_conn() as conn:
            conn.execute(
                f"UPDATE custom_prompts SET {assignments}, updated_at=? WHERE id=? AND user_id=?",
                (*fields.values(), _now(), prompt_id, user_id),
            )
    return get_custom_prompt(prompt_id, user_id)


def delete_custom_prompt(prompt_id: int, user_id: int) -> bool:
    with get_conn() as conn:
        cur = conn.execute(
            "DELETE FROM custom_prompts WHERE id=? AND user_id=?",
            (prompt_id, user_id),
        )
        return cur.rowcount > 0

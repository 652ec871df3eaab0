import sqlite3

import pytest

from agent.modules.analyze import analyze_content
from agent.modules.hooks import Hook

USER = 1001
OTHER = 2002
CONTENT = "I spent 2 years building my startup and failed three times before succeeding."


def _hooks():
    return [
        Hook(id="power-a", text="First hook", kind="power-hook", score=150.5,
             category="Harsh Truth", power_hook_id="a", template_id="t1"),
        Hook(id="custom-v1", text="Second hook", kind="custom"),
    ]


def test_session_and_hooks_round_trip(tmp_db):
    session_id = tmp_db.save_session(USER, CONTENT, "text", analyze_content(CONTENT))
    ids = tmp_db.save_hooks(session_id, _hooks())
    assert len(ids) == 2

    latest = tmp_db.get_latest_session(USER)
    assert latest["id"] == session_id
    assert latest["tone"] == "personal"
    assert latest["topics"] == "business,mistakes"

    rows = tmp_db.get_session_hooks(session_id)
    assert [r["position"] for r in rows] == [1, 2]
    assert rows[0]["hook_key"] == "power-a"
    assert rows[0]["score"] == 150.5
    assert rows[1]["category"] is None


def test_latest_session_is_per_user(tmp_db):
    signals = analyze_content(CONTENT)
    first = tmp_db.save_session(USER, CONTENT, "text", signals)
    tmp_db.save_session(OTHER, CONTENT, "file", signals)
    assert tmp_db.get_latest_session(USER)["id"] == first
    assert tmp_db.get_latest_session(3003) is None


def test_threads_and_history(tmp_db):
    session_id = tmp_db.save_session(USER, CONTENT, "file", analyze_content(CONTENT))
    (hook_id, _) = tmp_db.save_hooks(session_id, _hooks())
    tmp_db.save_thread(session_id, hook_id, "summary", ["1/2 a", "2/2 b"], ["/imagine prompt: x"])

    (record,) = tmp_db.get_history(USER)
    assert record["hook_count"] == 2
    assert record["thread_count"] == 1
    assert record["preview"].startswith("I spent 2 years")
    assert tmp_db.get_session_count(USER) == 1

    full = tmp_db.get_session_with_outputs(session_id, USER)
    assert full["session"]["source"] == "file"
    assert len(full["hooks"]) == 2
    (thread,) = full["threads"]
    assert thread["tweets"] == ["1/2 a", "2/2 b"]
    assert thread["art_prompts"] == ["/imagine prompt: x"]


def test_session_reads_are_scoped_to_owner(tmp_db):
    session_id = tmp_db.save_session(USER, CONTENT, "text", analyze_content(CONTENT))
    assert tmp_db.get_session_with_outputs(session_id, OTHER) is None
    assert tmp_db.get_history(OTHER) == []


def test_custom_prompt_crud(tmp_db):
    prompt_id = tmp_db.create_custom_prompt(USER, "Coach", "pep talk", "Write like a coach.")
    assert [p["id"] for p in tmp_db.list_custom_prompts(USER)] == [prompt_id]
    assert tmp_db.get_custom_prompt(prompt_id, OTHER) is None

    updated = tmp_db.update_custom_prompt(prompt_id, USER, name="Head coach", bogus="x")
    assert updated["name"] == "Head coach"
    assert updated["system_prompt"] == "Write like a coach."

    assert tmp_db.delete_custom_prompt(prompt_id, OTHER) is False
    assert tmp_db.delete_custom_prompt(prompt_id, USER) is True
    assert tmp_db.list_custom_prompts(USER) == []


def test_session_with_hooks_is_all_or_nothing(tmp_db):
    session_id = tmp_db.save_session_with_hooks(USER, CONTENT, "text", analyze_content(CONTENT), _hooks())
    assert [r["position"] for r in tmp_db.get_session_hooks(session_id)] == [1, 2]

    broken = _hooks() + [Hook(id="custom-v2", text=None, kind="custom")]
    with pytest.raises(sqlite3.IntegrityError):
        tmp_db.save_session_with_hooks(OTHER, CONTENT, "text", analyze_content(CONTENT), broken)
    assert tmp_db.get_latest_session(OTHER) is None

import json

import pytest

from agent.tone import load_tone_profile
from bot.auth import Auth


@pytest.fixture
def users_file(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({
        "authorized_users": [
            {"id": 42, "name": "Sam", "personal_context": "Runs a bakery.", "global_rules": "No hashtags."},
            {"id": 43},
        ]
    }))
    return path


def test_auth_reads_users(users_file):
    auth = Auth(str(users_file))
    assert auth.is_authorized(42)
    assert not auth.is_authorized(7)
    assert auth.personal_context(42) == "Runs a bakery."
    assert auth.global_rules(42) == "No hashtags."
    assert auth.personal_context(43) == ""
    assert auth.global_rules(7) == ""


def test_auth_denies_on_missing_or_broken_config(tmp_path):
    assert not Auth(str(tmp_path / "missing.json")).is_authorized(42)
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert not Auth(str(broken)).is_authorized(42)


def test_tone_profile(tmp_path):
    profile = tmp_path / "tonal.md"
    profile.write_text("\n# Voice\nShort sentences.\n", encoding="utf-8")
    assert load_tone_profile(str(profile)) == "# Voice\nShort sentences."
    assert load_tone_profile(str(tmp_path / "none.md")) == ""
    assert load_tone_profile("") == ""
    assert load_tone_profile(None) == ""


def test_tone_profile_unreadable_is_empty(tmp_path):
    profile = tmp_path / "binary.md"
    profile.write_bytes(b"\xff\xfe\xfa")
    assert load_tone_profile(str(profile)) == ""

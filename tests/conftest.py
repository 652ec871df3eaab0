import os

# config.Settings requires a bot token at import time.
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "test-token")

import pytest

from agent.llm.base import LLMClient, LLMResponse


class FakeLLM(LLMClient):
    """Scripted client: pops ``replies`` in order, then falls back to ``default``.

    A reply that is an Exception instance is raised instead of returned.
    """

    def __init__(self, replies=(), default=None):
        self.replies = list(replies)
        self.default = default
        self.calls: list[dict] = []

    async def complete(self, system, user, max_tokens=4096, temperature=0.7):
        self.calls.append({
            "system": system,
            "user": user,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.replies:
            reply = self.replies.pop(0)
        elif self.default is not None:
            reply = self.default
        else:
            raise RuntimeError("FakeLLM has no scripted reply left")
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, model="fake")


def no_jitter() -> float:
    return 0.0


@pytest.fixture
def tmp_db(tmp_path, monkeypatch):
    from config import settings
    import db

    monkeypatch.setattr(settings, "db_path", str(tmp_path / "hooks.db"))
    db.init_db()
    return db

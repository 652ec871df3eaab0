"""Access list and per-user writing context, read from users.json.

Example::

    {
      "authorized_users": [
        {
          "id": 123456789,
          "name": "Sam",
          "personal_context": "Founder of a 12-person SaaS company.",
          "global_rules": "No hashtags. Never use the word 'hustle'."
        }
      ]
    }
"""
import json
import logging
from pathlib import Path
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)


class Auth:
    def __init__(self, config_path: str | None = None):
        self._path = Path(config_path or settings.users_config)

    def _load(self) -> list[dict]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except json.JSONDecodeError:
            logger.error("Users config %s is not valid JSON; denying everyone.", self._path)
            return []
        return data.get("authorized_users", [])

    def is_authorized(self, user_id: int) -> bool:
        return self.get_user_info(user_id) is not None

    def get_user_info(self, user_id: int) -> Optional[dict]:
        for u in self._load():
            if u.get("id") == user_id:
                return u
        return None

    def personal_context(self, user_id: int) -> str:
        info = self.get_user_info(user_id) or {}
        return str(info.get("personal_context") or "")

    def global_rules(self, user_id: int) -> str:
        info = self.get_user_info(user_id) or {}
        return str(info.get("global_rules") or "")


auth = Auth()

"""Writing-style profile injected into hook and thread prompts."""
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def load_tone_profile(path: str | None) -> str:
    """Return the Markdown style profile, or "" when none is configured."""
    if not path:
        return ""
    p = Path(path).expanduser()
    if not p.exists():
        return ""
    try:
        return p.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        logger.exception("Could not read tone profile %s", p)
        return ""

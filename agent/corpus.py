"""Static candidate corpus: rhetorical thread templates and power hooks.

Both lists are product-tuned configuration shipped as JSON under agent/data/.
They are loaded once per process and never mutated.
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"
_TEMPLATES_FILE = _DATA_DIR / "templates.json"
_POWER_HOOKS_FILE = _DATA_DIR / "power_hooks.json"


class CandidateKind(str, Enum):
    TEMPLATE = "template"
    POWER_HOOK = "power-hook"


@dataclass(frozen=True)
class Candidate:
    id: str
    text: str
    category: str
    kind: CandidateKind
    title: str = ""
    summary: str = ""
    psych_type: str = ""
    variables: tuple[str, ...] = ()


def load_templates(path: str | None = None) -> tuple[Candidate, ...]:
    """Load thread templates. Without a path the packaged file is used (cached)."""
    if not path:
        return _packaged_templates()
    return _load(Path(path).expanduser(), _template_from_record)


def load_power_hooks(path: str | None = None) -> tuple[Candidate, ...]:
    """Load power hooks. Without a path the packaged file is used (cached)."""
    if not path:
        return _packaged_power_hooks()
    return _load(Path(path).expanduser(), _power_hook_from_record)


@lru_cache(maxsize=1)
def _packaged_templates() -> tuple[Candidate, ...]:
    return _load(_TEMPLATES_FILE, _template_from_record)


@lru_cache(maxsize=1)
def _packaged_power_hooks() -> tuple[Candidate, ...]:
    return _load(_POWER_HOOKS_FILE, _power_hook_from_record)


def _load(path: Path, build) -> tuple[Candidate, ...]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Candidate file %s not found; corpus is empty.", path)
        return ()

    try:
        records = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Candidate file {path} is not valid JSON: {e}") from e
    if not isinstance(records, list):
        raise ValueError(f"Candidate file {path} must contain a JSON list.")

    try:
        candidates = tuple(build(r) for r in records)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed candidate record in {path}: {e!r}") from e

    logger.info("Loaded %d candidates from %s", len(candidates), path.name)
    return candidates


def _template_from_record(record: dict) -> Candidate:
    return Candidate(
        id=str(record["id"]),
        text=record["template"],
        category=record["category"],
        kind=CandidateKind.TEMPLATE,
        title=record.get("title", ""),
        summary=record.get("summary", ""),
    )


def _power_hook_from_record(record: dict) -> Candidate:
    return Candidate(
        id=str(record["id"]),
        text=record["text"],
        category=record["category"],
        kind=CandidateKind.POWER_HOOK,
        psych_type=record.get("type", ""),
        variables=tuple(record.get("variables", ())),
    )

"""Turn pasted text or uploaded files into source content for hook generation."""
import csv
import io
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MIN_CONTENT_CHARS = 10
MAX_CONTENT_CHARS = 10_000

# Keys that usually hold the prose in exported transcripts, posts and notes.
_JSON_TEXT_KEYS = {"content", "text", "message", "body", "value", "transcript", "caption", "description"}


def validate_content(
    text: str,
    min_chars: int = MIN_CONTENT_CHARS,
    max_chars: int = MAX_CONTENT_CHARS,
) -> str:
    """Return the stripped content, or raise ValueError with a user-facing reason."""
    content = (text or "").strip()
    if len(content) < min_chars:
        raise ValueError(f"Content is required and must be at least {min_chars} characters.")
    if len(content) > max_chars:
        raise ValueError(f"Content must be less than {max_chars:,} characters.")
    return content


def parse_file(data: bytes, filename: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Parse file bytes into plain text. Raises ValueError on unsupported format."""
    suffix = Path(filename).suffix.lower()

    if suffix in (".txt", ".md"):
        text = _decode(data)
    elif suffix == ".json":
        text = _parse_json(data)
    elif suffix == ".csv":
        text = _parse_csv(data)
    else:
        raise ValueError(f"Unsupported file format: {suffix or '(none)'}. Supported: .txt / .md / .json / .csv")

    text = text.strip()
    if len(text) > max_chars:
        logger.info("Truncating %s from %d to %d chars", filename, len(text), max_chars)
        text = text[:max_chars].rstrip()
    return text


def _decode(data: bytes) -> str:
    for enc in ("utf-8-sig", "utf-8", "latin-1"):
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")


def _parse_json(data: bytes) -> str:
    try:
        obj = json.loads(_decode(data))
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON parse error: {e}") from e

    texts: list[str] = []
    _extract_text_fields(obj, texts)
    if not texts:
        return json.dumps(obj, ensure_ascii=False, indent=2)
    return "\n".join(texts)


def _extract_text_fields(obj, out: list[str]) -> None:
    if isinstance(obj, dict):
        for key, val in obj.items():
            if key.lower() in _JSON_TEXT_KEYS and isinstance(val, str) and val.strip():
                out.append(val.strip())
            else:
                _extract_text_fields(val, out)
    elif isinstance(obj, list):
        for item in obj:
            _extract_text_fields(item, out)


def _parse_csv(data: bytes) -> str:
    reader = csv.reader(io.StringIO(_decode(data)))
    rows: list[str] = []
    for row in reader:
        line = " | ".join(cell.strip() for cell in row if cell.strip())
        if line:
            rows.append(line)
    return "\n".join(rows)

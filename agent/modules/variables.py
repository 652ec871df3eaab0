"""
Bracket placeholder handling for templates and power hooks.

Placeholders are literal ``[Name]`` tokens. Filling is naive string
substitution of the first occurrence per name; there is no template engine.
"""
import re

from agent.modules.analyze import ContentSignals

_PLACEHOLDER = re.compile(r"\[([^\]]+)\]")
_NUMBER = re.compile(r"\b\d+\b")
_DURATION = re.compile(r"\b\d+\s+(?:days?|weeks?|months?|years?)\b", re.IGNORECASE)
_NAME = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")
_QUOTE = re.compile(r'"([^"]*)"|“([^”]*)”')

# Industry / subject vocabulary shared by both placeholder paths.
INDUSTRY_KEYWORDS = (
    "business", "marketing", "psychology", "productivity", "leadership",
    "entrepreneurship", "technology", "design", "writing", "health",
    "fitness", "finance", "investing", "career", "education", "creativity",
    "communication", "sales", "management", "strategy",
)
_INDUSTRY = re.compile(r"\b(" + "|".join(INDUSTRY_KEYWORDS) + r")\b", re.IGNORECASE)

# Score bonus per variable when its value came from the content.
VARIABLE_BONUS = {
    "topic": 15,
    "topic_b": 15,
    "industry": 20,
    "journey": 10,
    "number": 10,
    "time": 10,
    "person": 12,
}

_ALIASES = {
    "topic": "topic",
    "topic a": "topic",
    "complex topic": "topic",
    "topic b": "topic_b",
    "industry": "industry",
    "field": "industry",
    "specific field": "industry",
    "specialized field": "industry",
    "journey": "journey",
    "number": "number",
    "time": "time",
    "time period": "time",
    "timeframe": "time",
    "expert": "person",
    "successful person": "person",
    "name": "person",
}

_UNRESOLVED = "this"


def extract_placeholders(text: str) -> list[str]:
    """Distinct placeholder names in order of first appearance."""
    names: list[str] = []
    for name in _PLACEHOLDER.findall(text):
        if name not in names:
            names.append(name)
    return names


def fill_placeholders(text: str, data: dict[str, str]) -> str:
    for name, value in data.items():
        text = text.replace(f"[{name}]", value, 1)
    return text


def normalize_variable(name: str) -> str:
    return name.split("/")[0].strip().lower()


def resolve_variables(
    variables: tuple[str, ...] | list[str],
    signals: ContentSignals,
    raw_text: str,
) -> tuple[dict[str, str], int, list[str]]:
    """Resolve power-hook variables against the content.

    Returns (variable_data, bonus, reasons). Only values taken from the
    content earn a bonus; fallbacks fill the slot but score nothing.
    """
    data: dict[str, str] = {}
    bonus = 0
    reasons: list[str] = []

    for name in variables:
        if name in data:
            continue
        key = _ALIASES.get(normalize_variable(name))
        value, found = _resolve(key, signals, raw_text)
        data[name] = value
        if found:
            bonus += VARIABLE_BONUS[key]
            reasons.append(f"Filled {name}: {value}")

    return data, bonus, reasons


def _resolve(key: str | None, signals: ContentSignals, raw_text: str) -> tuple[str, bool]:
    topics = signals.main_topics

    if key == "topic":
        return (topics[0], True) if topics else (_UNRESOLVED, False)

    if key == "topic_b":
        return (topics[1], True) if len(topics) > 1 else (_UNRESOLVED, False)

    if key == "industry":
        match = _INDUSTRY.search(raw_text)
        return (match.group(1).lower(), True) if match else ("your field", False)

    if key == "journey":
        if signals.has_personal_story and topics:
            return topics[0], True
        return "this journey", False

    if key == "number":
        match = _NUMBER.search(raw_text)
        return (match.group(0), True) if match else ("3", False)

    if key == "time":
        match = _DURATION.search(raw_text)
        return (match.group(0), True) if match else ("a year", False)

    if key == "person":
        match = _NAME.search(raw_text)
        return (match.group(0), True) if match else ("the experts", False)

    return _UNRESOLVED, False


def extract_placeholder_data(content: str, template: str) -> dict[str, str]:
    """Best-effort values for a template's placeholders.

    Anything that cannot be found in the content stays as ``[placeholder]``
    so the model fills it in.
    """
    data: dict[str, str] = {}

    for placeholder in extract_placeholders(template):
        lower = placeholder.lower()
        value = None

        if "name" in lower or "author" in lower:
            match = _NAME.search(content)
            value = match.group(0) if match else None
        elif lower == "x" or "stat" in lower or "number" in lower:
            match = _NUMBER.search(content)
            value = match.group(0) if match else None
        elif "topic" in lower or "skill" in lower or "niche" in lower:
            match = _INDUSTRY.search(content)
            value = match.group(1).lower() if match else None
        elif "quote" in lower:
            match = _QUOTE.search(content)
            if match:
                value = match.group(1) if match.group(1) is not None else match.group(2)

        data[placeholder] = value or f"[{placeholder}]"

    return data

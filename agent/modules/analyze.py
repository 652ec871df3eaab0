"""
Pure-function content analysis.

Derives a fixed set of signals from raw content with regex heuristics.
No LLM involvement: the same text always yields the same signals.

The signals feed candidate scoring (score.py) and are echoed into the
custom-hook prompt so the model knows what kind of material it is working with.
"""
import re
from dataclasses import dataclass
from enum import Enum


class Tone(str, Enum):
    EDUCATIONAL = "educational"
    PERSONAL = "personal"
    INSPIRATIONAL = "inspirational"
    ANALYTICAL = "analytical"
    CONTROVERSIAL = "controversial"


@dataclass(frozen=True)
class ContentSignals:
    has_personal_story: bool = False
    has_statistics: bool = False
    has_quotes: bool = False
    has_named_people: bool = False
    has_frameworks: bool = False
    has_book_references: bool = False
    main_topics: tuple[str, ...] = ()
    tone: Tone = Tone.EDUCATIONAL


def _words(*words: str) -> re.Pattern:
    """Exact whole-word, case-insensitive alternation."""
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _keywords(*words: str) -> re.Pattern:
    """Like ``_words`` but also accepts simple inflections. Topic groups only."""
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"\b(?:{alternation})(?:s|es|ed|ing)?\b", re.IGNORECASE)


_PERSONAL = re.compile(r"\b(?:I|my|me|myself)\b", re.IGNORECASE)
_STATISTICS = re.compile(
    r"\b\d+(?:\.\d+)?\s*%"
    r"|\b\d+(?:\.\d+)?\s*(?:percent|million|billion|thousand|users|customers|dollars)\b",
    re.IGNORECASE,
)
_QUOTES = re.compile(r'"[^"]*"|“[^”]*”')
# Title-Case bigram; deliberately case-sensitive.
_NAMED_PEOPLE = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")
_FRAMEWORKS = _words("framework", "method", "system", "process", "step", "steps", "approach")
_BOOKS = _words("book", "author", "read", "chapter")

# Checked in this order; output order follows it, not position in the text.
_TOPIC_GROUPS: tuple[tuple[str, re.Pattern], ...] = (
    ("business", _keywords("business", "startup", "entrepreneur", "company")),
    ("learning", _keywords("learn", "education", "study", "skill", "knowledge")),
    ("success", _keywords("success", "achieve", "goal", "win", "accomplish")),
    ("personal", _keywords("life", "personal", "experience", "story")),
    ("mistakes", _keywords("mistake", "fail", "failure", "error", "wrong")),
    ("advice", _keywords("advice", "tip", "help", "guide", "how")),
)

_POSITIVE = _words(
    "success", "great", "amazing", "wonderful", "excellent",
    "best", "love", "fantastic", "awesome", "perfect",
)
_NEGATIVE = _words(
    "fail", "failure", "mistake", "wrong", "bad",
    "terrible", "awful", "hate", "worst", "problem",
)
_ANALYTICAL = _words("analysis", "data", "research", "study")
_CONTRARIAN = _words("wrong", "myth", "misconception", "controversial", "unpopular")


def analyze_content(text: str) -> ContentSignals:
    """Return the content signals for ``text``. Never raises."""
    text = text or ""

    has_personal_story = bool(_PERSONAL.search(text))
    topics = tuple(label for label, pattern in _TOPIC_GROUPS if pattern.search(text))

    return ContentSignals(
        has_personal_story=has_personal_story,
        has_statistics=bool(_STATISTICS.search(text)),
        has_quotes=bool(_QUOTES.search(text)),
        has_named_people=bool(_NAMED_PEOPLE.search(text)),
        has_frameworks=bool(_FRAMEWORKS.search(text)),
        has_book_references=bool(_BOOKS.search(text)),
        main_topics=topics,
        tone=_resolve_tone(text, has_personal_story),
    )


def _resolve_tone(text: str, has_personal_story: bool) -> Tone:
    """First match wins: personal → inspirational → analytical → controversial."""
    if has_personal_story:
        return Tone.PERSONAL
    # Total match counts, not distinct words.
    if len(_POSITIVE.findall(text)) > len(_NEGATIVE.findall(text)):
        return Tone.INSPIRATIONAL
    if _ANALYTICAL.search(text):
        return Tone.ANALYTICAL
    if _CONTRARIAN.search(text):
        return Tone.CONTROVERSIAL
    return Tone.EDUCATIONAL

"""
Pure-function candidate scoring.

One scorer serves both candidate kinds. Every rule group adds to the score
independently; within a phrase group only the first matching phrase counts,
so near-duplicate phrasing is never double-counted. No rule subtracts.

Power hooks additionally receive a category base score, a psychological-type
bonus and a bonus for each variable that could be filled from the content.

The only non-determinism is the jitter term, drawn from the injectable
``rand`` callable so callers (and tests) control it.
"""
import random
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable

from agent.corpus import Candidate, CandidateKind
from agent.modules.analyze import ContentSignals, Tone
from agent.modules.variables import fill_placeholders, resolve_variables

RandomSource = Callable[[], float]

# ── hook-strength phrase groups (weight, reason, phrases) ────────────────────
# Tuned product constants; keep the lists as they are.

STRONG_OPENERS = (
    "I spent over", "The most", "Here are", "Everyone thinks", "Most people",
    "I asked", "The secret", "How to", "Why", "What most people don't know",
    "The biggest mistake", "I used to think", "Unpopular opinion", "Controversial",
)
CURIOSITY_TRIGGERS = (
    "secret", "hidden", "nobody tells you", "what I learned", "behind the scenes",
    "the real reason", "what actually", "truth about", "what happens when",
)
AUTHORITY_PHRASES = (
    "legendary", "successful", "expert", "master", "godfather", "king", "best",
    "highest-paid", "most valuable", "world's most", "top", "greatest",
)
TRANSFORMATION_PHRASES = (
    "used to", "now I", "changed my", "went from", "transformation", "journey",
)
PROBLEM_SOLUTION_WORDS = (
    "mistake", "problem", "struggle", "failing", "wrong", "fix", "solve",
)

_PHRASE_GROUPS: tuple[tuple[tuple[str, ...], int, str], ...] = (
    (STRONG_OPENERS, 40, 'Strong hook pattern: "{phrase}"'),
    (CURIOSITY_TRIGGERS, 35, "Creates curiosity gap"),
    (AUTHORITY_PHRASES, 30, "Leverages authority/social proof"),
    (TRANSFORMATION_PHRASES, 20, "Personal transformation angle"),
    (PROBLEM_SOLUTION_WORDS, 15, "Problem/solution dynamic"),
)

_NUMBERED_LIST = re.compile(r"\[X\]|\[\d+\]")
_NUMBERED_LIST_WEIGHT = 25

# ── signal → category alignment ──────────────────────────────────────────────
# (signal attribute, categories, weight, reason)

TEMPLATE_ALIGNMENTS = (
    ("has_personal_story", ("Personal Story",), 15, "Matches personal story content"),
    ("has_statistics", ("Educational Breakdown", "Insight & Prediction"), 12, "Matches data-driven content"),
    ("has_named_people", ("Social Proof / Spotlight", "Curation"), 15, "Matches people-focused content"),
    ("has_book_references", ("Book-Based",), 20, "Perfect for book content"),
    ("has_frameworks", ("Educational Breakdown",), 15, "Matches framework content"),
)

POWER_HOOK_ALIGNMENTS = (
    ("has_personal_story", ("Personal Story", "Transformation"), 15, "Matches personal story content"),
    ("has_statistics", ("Data & Research",), 12, "Matches data-driven content"),
    ("has_named_people", ("Curiosity Gap",), 8, "Matches people-focused content"),
    ("has_frameworks", ("Framework",), 15, "Matches framework content"),
    ("has_quotes", ("Insight",), 10, "Matches quote-driven content"),
)

TOPIC_WEIGHT = 8

TEMPLATE_TONE_WEIGHT = 25
POWER_HOOK_TONE_WEIGHT = 30
CONTRARIAN_CATEGORIES = ("Controversial", "Harsh Truth", "Myth Busting")

# ── power-hook lookup tables ─────────────────────────────────────────────────

CATEGORY_BASE_SCORES = {
    "Controversial": 90,
    "Harsh Truth": 88,
    "Myth Busting": 85,
    "Mistakes & Warnings": 80,
    "Curiosity Gap": 78,
    "Personal Story": 75,
    "Data & Research": 72,
    "Transformation": 70,
    "Framework": 65,
    "Insight": 60,
}
DEFAULT_CATEGORY_BASE = 60

TYPE_BONUSES = {
    "confrontational": 30,
    "provocative": 25,
    "curiosity": 22,
    "authoritative": 20,
    "relatable": 18,
    "revealing": 15,
    "transformative": 15,
}
DEFAULT_TYPE_BONUS = 15

TEMPLATE_JITTER = 3.0
POWER_HOOK_JITTER = 5.0


@dataclass
class ScoredCandidate:
    candidate: Candidate
    score: float
    reason: str
    variable_data: dict[str, str] = field(default_factory=dict)
    filled_text: str = ""

    @property
    def category(self) -> str:
        return self.candidate.category


def score_candidate(
    candidate: Candidate,
    signals: ContentSignals,
    raw_text: str,
    rand: RandomSource = random.random,
) -> ScoredCandidate:
    is_power_hook = candidate.kind == CandidateKind.POWER_HOOK
    text = candidate.text.lower()
    score = 0.0
    reasons: list[str] = []

    variable_data: dict[str, str] = {}
    if is_power_hook:
        variable_data, bonus, fill_reasons = resolve_variables(
            candidate.variables, signals, raw_text
        )
        score += bonus
        reasons.extend(fill_reasons)

    for phrases, weight, reason in _PHRASE_GROUPS:
        phrase = _first_match(text, phrases)
        if phrase is not None:
            score += weight
            reasons.append(reason.format(phrase=phrase))

    if _NUMBERED_LIST.search(candidate.text):
        score += _NUMBERED_LIST_WEIGHT
        reasons.append("Numbered list format (high engagement)")

    alignments = POWER_HOOK_ALIGNMENTS if is_power_hook else TEMPLATE_ALIGNMENTS
    for attr, categories, weight, reason in alignments:
        if getattr(signals, attr) and candidate.category in categories:
            score += weight
            reasons.append(reason)

    summary = candidate.summary.lower()
    for topic in signals.main_topics:
        if topic in text or topic in summary:
            score += TOPIC_WEIGHT
            reasons.append(f"Topic relevance: {topic}")

    if signals.tone == Tone.CONTROVERSIAL:
        if is_power_hook and candidate.category in CONTRARIAN_CATEGORIES:
            score += POWER_HOOK_TONE_WEIGHT
            reasons.append("Matches controversial tone")
        elif not is_power_hook and "contrarian" in text:
            score += TEMPLATE_TONE_WEIGHT
            reasons.append("Matches controversial tone")

    if is_power_hook:
        base = CATEGORY_BASE_SCORES.get(candidate.category, DEFAULT_CATEGORY_BASE)
        score += base
        reasons.append(f"{candidate.category} base score ({base})")
        type_bonus = TYPE_BONUSES.get(candidate.psych_type, DEFAULT_TYPE_BONUS)
        score += type_bonus
        reasons.append(f"{candidate.psych_type or 'generic'} hook (+{type_bonus})")

    score += rand() * (POWER_HOOK_JITTER if is_power_hook else TEMPLATE_JITTER)

    return ScoredCandidate(
        candidate=candidate,
        score=score,
        reason=", ".join(reasons) or "General content match",
        variable_data=variable_data,
        filled_text=fill_placeholders(candidate.text, variable_data),
    )


def score_candidates(
    candidates: Iterable[Candidate],
    signals: ContentSignals,
    raw_text: str,
    rand: RandomSource = random.random,
) -> list[ScoredCandidate]:
    """Score every candidate; drop non-positive scores; best first (stable)."""
    scored = [score_candidate(c, signals, raw_text, rand) for c in candidates]
    ranked = [s for s in scored if s.score > 0]
    ranked.sort(key=lambda s: s.score, reverse=True)
    return ranked


def _first_match(text: str, phrases: tuple[str, ...]) -> str | None:
    for phrase in phrases:
        if phrase.lower() in text:
            return phrase
    return None

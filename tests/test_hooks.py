import pytest

from agent.corpus import Candidate, CandidateKind
from agent.modules.analyze import analyze_content
from agent.modules.hooks import (
    FALLBACK_TEMPERATURE,
    build_context,
    complete_within_length,
    generate_hooks,
    truncate_tweet,
)
from agent.modules.rank import Ranking
from agent.modules.score import ScoredCandidate

from tests.conftest import FakeLLM

CONTENT = "I spent 2 years building my startup and failed three times before succeeding."
GOOD = "g" * 150


def _match(id, kind, category, text="Here are [X] lessons", title=""):
    candidate = Candidate(id=id, text=text, category=category, kind=kind, title=title)
    return ScoredCandidate(candidate=candidate, score=100.0, reason="", filled_text=text)


def _ranking(templates=(), power_hooks=()):
    return Ranking(
        signals=analyze_content(CONTENT),
        templates=list(templates),
        power_hooks=list(power_hooks),
    )


async def test_in_range_reply_returned_first_time():
    llm = FakeLLM([GOOD])
    assert await complete_within_length(llm, "sys", "prompt") == GOOD
    assert len(llm.calls) == 1
    assert llm.calls[0]["max_tokens"] == 150


async def test_retry_appends_length_adjustment():
    llm = FakeLLM(["too short", "y" * 200])
    assert await complete_within_length(llm, "sys", "prompt") == "y" * 200
    assert "ADJUSTMENT NEEDED" not in llm.calls[0]["user"]
    assert "ADJUSTMENT NEEDED" in llm.calls[1]["user"]
    assert "was 9 characters" in llm.calls[1]["user"]


async def test_fallback_is_truncated_at_word_boundary():
    llm = FakeLLM(["a" * 300, "b" * 300, "word " * 80])
    text = await complete_within_length(llm, "sys", "prompt", attempts=2)
    assert len(text) <= 279
    assert text.endswith("…")
    assert not text[:-1].endswith(" ")
    assert len(llm.calls) == 3
    assert llm.calls[-1]["temperature"] == FALLBACK_TEMPERATURE
    assert llm.calls[-1]["max_tokens"] == 100


def test_truncate_leaves_short_text_alone():
    assert truncate_tweet("short enough") == "short enough"


def test_truncate_without_spaces_cuts_hard():
    text = truncate_tweet("x" * 400, max_chars=100)
    assert text == "x" * 99 + "…"


def test_build_context():
    assert build_context() == ""
    context = build_context("Founder of a SaaS", "No hashtags")
    assert "Personal Context: Founder of a SaaS" in context
    assert "MUST FOLLOW" in context and "No hashtags" in context


async def test_power_hooks_then_custom_variations():
    ranking = _ranking(
        templates=[_match("tpl", CandidateKind.TEMPLATE, "Curation", title="Curated list")],
        power_hooks=[
            _match("ph1", CandidateKind.POWER_HOOK, "Harsh Truth"),
            _match("ph2", CandidateKind.POWER_HOOK, "Insight"),
        ],
    )
    llm = FakeLLM(default=GOOD)
    hooks = await generate_hooks(CONTENT, ranking, llm, tone_profile="Dry, short sentences.")

    assert [h.id for h in hooks] == ["power-ph1", "power-ph2", "custom-v1", "custom-v2"]
    assert [h.kind for h in hooks] == ["power-hook", "power-hook", "custom", "custom"]
    assert hooks[0].template_id == "tpl"
    assert hooks[0].template_title == "Curated list"
    assert hooks[0].category == "Harsh Truth"
    assert hooks[0].score == 100.0
    assert hooks[3].variation == 2
    assert all("Dry, short sentences." in call["user"] for call in llm.calls)


async def test_template_hooks_only_without_power_hooks():
    ranking = _ranking(templates=[_match("tpl", CandidateKind.TEMPLATE, "Curation")])
    hooks = await generate_hooks(CONTENT, ranking, FakeLLM(default=GOOD), custom_count=0)
    assert [h.id for h in hooks] == ["template-tpl"]
    assert hooks[0].kind == "template"


async def test_failed_generation_is_skipped():
    ranking = _ranking(power_hooks=[_match("ph1", CandidateKind.POWER_HOOK, "Insight")])
    llm = FakeLLM([RuntimeError("provider down")], default=GOOD)
    hooks = await generate_hooks(CONTENT, ranking, llm)
    assert [h.id for h in hooks] == ["custom-v1", "custom-v2"]


async def test_nothing_generated_raises():
    ranking = _ranking(power_hooks=[_match("ph1", CandidateKind.POWER_HOOK, "Insight")])
    llm = FakeLLM(default=RuntimeError("provider down"))
    with pytest.raises(RuntimeError, match="Failed to generate any hooks"):
        await generate_hooks(CONTENT, ranking, llm)


async def test_max_hooks_caps_output():
    ranking = _ranking(power_hooks=[
        _match(f"ph{i}", CandidateKind.POWER_HOOK, "Insight") for i in range(5)
    ])
    hooks = await generate_hooks(CONTENT, ranking, FakeLLM(default=GOOD), max_hooks=3, custom_count=1)
    assert [h.id for h in hooks] == ["power-ph0", "power-ph1", "custom-v1"]


async def test_personal_context_and_rules_reach_prompts():
    ranking = _ranking()
    llm = FakeLLM(default=GOOD)
    await generate_hooks(
        CONTENT, ranking, llm,
        personal_context="Runs a bakery", global_rules="Never use emojis",
        custom_count=1,
    )
    (call,) = llm.calls
    assert "Runs a bakery" in call["user"]
    assert "Never use emojis" in call["user"]

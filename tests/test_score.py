from agent.corpus import Candidate, CandidateKind
from agent.modules.analyze import ContentSignals, Tone, analyze_content
from agent.modules.score import score_candidate, score_candidates

from tests.conftest import no_jitter


def _template(text, category="Curation", summary="", id="t"):
    return Candidate(id=id, text=text, category=category, kind=CandidateKind.TEMPLATE, summary=summary)


def _power_hook(text, category, psych_type, variables=(), id="p"):
    return Candidate(
        id=id, text=text, category=category, kind=CandidateKind.POWER_HOOK,
        psych_type=psych_type, variables=tuple(variables),
    )


def test_phrase_groups_and_numbered_list_add_up():
    scored = score_candidate(
        _template("Here are [X] secret lessons"), ContentSignals(), "", rand=no_jitter,
    )
    # strong opener 40 + curiosity 35 + numbered list 25
    assert scored.score == 100
    assert 'Strong hook pattern: "Here are"' in scored.reason
    assert "Creates curiosity gap" in scored.reason
    assert "Numbered list format (high engagement)" in scored.reason


def test_only_first_phrase_in_a_group_counts():
    scored = score_candidate(
        _template("The most important thing Most people miss"), ContentSignals(), "", rand=no_jitter,
    )
    assert scored.score == 40
    assert scored.reason.count("Strong hook pattern") == 1


def test_plain_candidate_scores_zero_and_is_dropped():
    candidate = _template("A plain line.")
    scored = score_candidate(candidate, ContentSignals(), "", rand=no_jitter)
    assert scored.score == 0
    assert scored.reason == "General content match"
    assert score_candidates([candidate], ContentSignals(), "", rand=no_jitter) == []


def test_template_signal_alignment():
    candidate = _template("A plain line.", category="Book-Based")
    without = score_candidate(candidate, ContentSignals(), "", rand=no_jitter)
    with_books = score_candidate(candidate, ContentSignals(has_book_references=True), "", rand=no_jitter)
    assert with_books.score - without.score == 20
    assert "Perfect for book content" in with_books.reason


def test_topic_relevance_uses_summary():
    candidate = _template("A plain line.", summary="Lessons from running a business")
    scored = score_candidate(candidate, ContentSignals(main_topics=("business",)), "", rand=no_jitter)
    assert scored.score == 8
    assert "Topic relevance: business" in scored.reason


def test_template_controversial_tone_needs_contrarian_text():
    signals = ContentSignals(tone=Tone.CONTROVERSIAL)
    assert score_candidate(_template("A contrarian plain line."), signals, "", rand=no_jitter).score == 25
    assert score_candidate(_template("A plain line."), signals, "", rand=no_jitter).score == 0


def test_power_hook_base_and_type_bonus():
    hook = _power_hook("Nobody talks about this", "Controversial", "confrontational")
    scored = score_candidate(hook, ContentSignals(), "", rand=no_jitter)
    assert scored.score == 90 + 30
    assert "Controversial base score (90)" in scored.reason
    assert "confrontational hook (+30)" in scored.reason


def test_power_hook_controversial_tone_bonus():
    hook = _power_hook("Nobody talks about this", "Harsh Truth", "provocative")
    calm = score_candidate(hook, ContentSignals(), "", rand=no_jitter)
    heated = score_candidate(hook, ContentSignals(tone=Tone.CONTROVERSIAL), "", rand=no_jitter)
    assert heated.score - calm.score == 30


def test_power_hook_unknown_category_and_type_use_defaults():
    hook = _power_hook("Nobody talks about this", "Miscellany", "")
    assert score_candidate(hook, ContentSignals(), "", rand=no_jitter).score == 60 + 15


def test_power_hook_variables_filled_from_content():
    content = "I spent 2 years learning how to grow a business"
    hook = _power_hook(
        "I've been studying [topic] for [time] and discovered",
        "Data & Research", "authoritative", variables=("topic", "time"),
    )
    scored = score_candidate(hook, analyze_content(content), content, rand=no_jitter)
    assert scored.variable_data == {"topic": "business", "time": "2 years"}
    assert scored.filled_text == "I've been studying business for 2 years and discovered"
    assert "Filled topic: business" in scored.reason
    assert "Filled time: 2 years" in scored.reason
    assert scored.score >= 72 + 20 + 15 + 10


def test_power_hook_fallback_values_earn_nothing():
    hook = _power_hook("Quit doing [number] things", "Harsh Truth", "confrontational", variables=("number",))
    content = "The sky stayed calm."
    scored = score_candidate(hook, analyze_content(content), content, rand=no_jitter)
    assert scored.variable_data == {"number": "3"}
    assert scored.filled_text == "Quit doing 3 things"
    assert "Filled" not in scored.reason
    assert scored.score == 88 + 30


def test_jitter_is_bounded_per_kind():
    template = _template("A plain line.")
    hook = _power_hook("Nobody talks about this", "Insight", "revealing")
    almost_one = lambda: 0.999  # noqa: E731
    assert 0 < score_candidate(template, ContentSignals(), "", rand=almost_one).score < 3
    base = 60 + 15
    assert base < score_candidate(hook, ContentSignals(), "", rand=almost_one).score < base + 5


def test_added_signals_never_lower_a_score():
    candidate = _template("Here are the lessons", category="Educational Breakdown")
    bare = score_candidate(candidate, ContentSignals(), "", rand=no_jitter)
    rich = score_candidate(
        candidate,
        ContentSignals(has_statistics=True, has_frameworks=True, main_topics=("learning",)),
        "",
        rand=no_jitter,
    )
    assert rich.score >= bare.score


def test_score_candidates_sorted_best_first_and_stable():
    a = _template("Why it works", id="a")
    b = _template("Why it fails", id="b")
    c = _template("Here are [X] secret rules", id="c")
    ranked = score_candidates([a, b, c], ContentSignals(), "", rand=no_jitter)
    assert [s.candidate.id for s in ranked] == ["c", "a", "b"]

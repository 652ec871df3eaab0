from agent.modules.analyze import ContentSignals, analyze_content
from agent.modules.variables import (
    extract_placeholder_data,
    extract_placeholders,
    fill_placeholders,
    normalize_variable,
    resolve_variables,
)


def test_extract_placeholders_distinct_in_order():
    assert extract_placeholders("[A] then [B] then [A]") == ["A", "B"]


def test_fill_replaces_first_occurrence_only():
    assert fill_placeholders("[X] of [X]", {"X": "3"}) == "3 of [X]"


def test_normalize_variable():
    assert normalize_variable("Industry/Field") == "industry"
    assert normalize_variable(" Topic ") == "topic"


def test_resolve_industry_and_person_from_content():
    content = "Naval Ravikant on a decade in Marketing"
    data, bonus, reasons = resolve_variables(
        ("industry/field", "successful person"), analyze_content(content), content,
    )
    assert data == {"industry/field": "marketing", "successful person": "Naval Ravikant"}
    assert bonus == 20 + 12
    assert reasons == [
        "Filled industry/field: marketing",
        "Filled successful person: Naval Ravikant",
    ]


def test_resolve_topic_b_needs_two_topics():
    signals = ContentSignals(main_topics=("business", "learning"))
    data, bonus, _ = resolve_variables(("topic A", "topic B"), signals, "")
    assert data == {"topic A": "business", "topic B": "learning"}
    assert bonus == 30

    data, bonus, _ = resolve_variables(("topic B",), ContentSignals(main_topics=("business",)), "")
    assert data == {"topic B": "this"}
    assert bonus == 0


def test_resolve_journey_requires_personal_story():
    topics = ("business",)
    data, bonus, _ = resolve_variables(("journey",), ContentSignals(main_topics=topics), "")
    assert data == {"journey": "this journey"} and bonus == 0

    signals = ContentSignals(has_personal_story=True, main_topics=topics)
    data, bonus, _ = resolve_variables(("journey",), signals, "")
    assert data == {"journey": "business"} and bonus == 10


def test_resolve_fallbacks_and_unknown_names():
    data, bonus, reasons = resolve_variables(
        ("number", "time", "expert", "industry", "mood"), ContentSignals(), "nothing here",
    )
    assert data == {
        "number": "3",
        "time": "a year",
        "expert": "the experts",
        "industry": "your field",
        "mood": "this",
    }
    assert bonus == 0
    assert reasons == []


def test_extract_placeholder_data_from_content():
    content = 'Naval Ravikant shared 7 lessons on investing: "play long-term games"'
    template = "[Name] shared [X] lessons about [Topic]. Favourite: [Quote]"
    assert extract_placeholder_data(content, template) == {
        "Name": "Naval Ravikant",
        "X": "7",
        "Topic": "investing",
        "Quote": "play long-term games",
    }


def test_extract_placeholder_data_keeps_unknowns_bracketed():
    data = extract_placeholder_data("plain words only", "[Example] and [Mystery] and [Stat]")
    assert data == {"Example": "[Example]", "Mystery": "[Mystery]", "Stat": "[Stat]"}

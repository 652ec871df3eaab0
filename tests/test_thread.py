import pytest

from agent.modules.thread import generate_art_prompts, generate_thread, split_tweets
from agent.prompts.thread import DEFAULT_ART_PROMPTS, THREAD_TYPES

from tests.conftest import FakeLLM

CONTENT = "Three lessons from shipping a product alone."
HOOK = "I shipped a product alone. Here is what nobody tells you."


def test_split_numbered_thread():
    text = "1/3 First point\n\n2/3 Second point\n\n3/3 Third point"
    assert split_tweets(text) == ["1/3 First point", "2/3 Second point", "3/3 Third point"]


def test_split_without_markers_uses_paragraphs():
    assert split_tweets("Para one.\n\nPara two.") == ["1/2 Para one.", "2/2 Para two."]


def test_split_single_paragraph():
    assert split_tweets("Just one tweet.") == ["1/1 Just one tweet."]


async def test_generate_thread_uses_type_instruction_and_hook():
    llm = FakeLLM(["1/2 " + HOOK + "\n2/2 The rest."])
    tweets = await generate_thread(CONTENT, HOOK, llm, thread_type="listicle")

    assert tweets == ["1/2 " + HOOK, "2/2 The rest."]
    (call,) = llm.calls
    assert THREAD_TYPES["listicle"] in call["system"]
    assert HOOK in call["user"] and CONTENT in call["user"]
    assert call["max_tokens"] == 2000


async def test_unknown_type_falls_back_to_summary():
    llm = FakeLLM(["1/1 Done."])
    await generate_thread(CONTENT, HOOK, llm, thread_type="haiku")
    assert THREAD_TYPES["summary"] in llm.calls[0]["system"]


async def test_custom_prompt_replaces_instruction():
    llm = FakeLLM(["1/1 Done."])
    await generate_thread(
        CONTENT, HOOK, llm, thread_type="listicle",
        custom_prompt="Write like a ship's log.", tone_profile="Plain words.",
    )
    system = llm.calls[0]["system"]
    assert "Write like a ship's log." in system
    assert THREAD_TYPES["listicle"] not in system
    assert "Plain words." in system


async def test_empty_response_raises():
    with pytest.raises(RuntimeError):
        await generate_thread(CONTENT, HOOK, FakeLLM(["   "]))


async def test_art_prompts_split_on_marker():
    llm = FakeLLM([
        "Here you go:\n1. /imagine prompt: a lone fox at dawn --v 6\n"
        "2. /imagine prompt: a river of light --ar 16:9"
    ])
    assert await generate_art_prompts(CONTENT, llm) == [
        "/imagine prompt: a lone fox at dawn --v 6",
        "/imagine prompt: a river of light --ar 16:9",
    ]
    assert llm.calls[0]["temperature"] == 0.8


async def test_art_prompts_default_without_marker():
    prompts = await generate_art_prompts(CONTENT, FakeLLM(["I can't draw."]))
    assert prompts == DEFAULT_ART_PROMPTS

import re

from agent.llm.base import LLMClient, LLMResponse
from agent.modules.hooks import build_context
from agent.prompts import thread as prompts

_TWEET_MARKER = re.compile(r"\d+/\d+\s+")
_NUMBERED = re.compile(r"^\d+/\d+")
_ART_MARKER = "/imagine prompt:"
_TRAILING_ENUM = re.compile(r"\n\s*(?:\d+[.)]|[-*•])\s*$")


async def generate_thread(
    content: str,
    hook_text: str,
    llm: LLMClient,
    thread_type: str = prompts.DEFAULT_THREAD_TYPE,
    custom_prompt: str | None = None,
    personal_context: str = "",
    global_rules: str = "",
    tone_profile: str = "",
) -> list[str]:
    """Write a full thread that opens with ``hook_text``."""
    instruction = (custom_prompt or "").strip() or prompts.THREAD_TYPES.get(
        thread_type, prompts.THREAD_TYPES[prompts.DEFAULT_THREAD_TYPE]
    )
    tone_block = f"\n\nWRITING STYLE PROFILE:\n{tone_profile.strip()}" if tone_profile.strip() else ""

    response: LLMResponse = await llm.complete(
        system=prompts.SYSTEM.format(instruction=instruction, tone_profile=tone_block),
        user=prompts.USER_TEMPLATE.format(
            hook=hook_text,
            content=content,
            context=build_context(personal_context, global_rules),
        ),
        max_tokens=2000,
        temperature=0.7,
    )
    text = response.content.strip()
    if not text:
        raise RuntimeError("Empty response received from the LLM")
    return split_tweets(text)


def split_tweets(text: str) -> list[str]:
    """Split a numbered thread into tweets, numbering any that lack a marker."""
    parts = [p.strip() for p in _TWEET_MARKER.split(text)]
    parts = [p for p in parts if p]
    if len(parts) <= 1:
        # No n/m markers; fall back to paragraph breaks.
        parts = [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]

    total = len(parts)
    return [
        p if _NUMBERED.match(p) else f"{i}/{total} {p}"
        for i, p in enumerate(parts, start=1)
    ]


async def generate_art_prompts(content: str, llm: LLMClient) -> list[str]:
    response: LLMResponse = await llm.complete(
        system=prompts.ART_SYSTEM,
        user=content,
        max_tokens=800,
        temperature=0.8,
    )
    raw = response.content
    if _ART_MARKER not in raw:
        return list(prompts.DEFAULT_ART_PROMPTS)

    # Drop list numbering ("2.") that precedes the next marker.
    chunks = [_TRAILING_ENUM.sub("", c.strip()) for c in raw.split(_ART_MARKER)[1:]]
    art = [f"{_ART_MARKER} {c}" for c in chunks if c]
    return art or list(prompts.DEFAULT_ART_PROMPTS)

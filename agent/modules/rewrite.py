import re

from agent.llm.base import LLMClient, LLMResponse
from agent.modules.hooks import build_context
from agent.prompts import rewrite as prompts

_WRAPPING_QUOTES = re.compile(r"^[\"'“”]|[\"'“”]$")


async def rewrite_tweet(
    selected_text: str,
    full_tweet: str,
    rewrite_type: str,
    llm: LLMClient,
    custom_prompt: str | None = None,
    thread_context: list[str] | None = None,
    personal_context: str = "",
    global_rules: str = "",
) -> str:
    """Rewrite the selected fragment of a tweet. Returns only the new fragment."""
    if not (selected_text or "").strip():
        raise ValueError("Selected text is required")
    if not (full_tweet or "").strip():
        raise ValueError("Full tweet context is required")

    if custom_prompt and custom_prompt.strip():
        instruction = custom_prompt.strip()
        temperature = prompts.CUSTOM_TEMPERATURE
    elif rewrite_type in prompts.REWRITE_TYPES:
        config = prompts.REWRITE_TYPES[rewrite_type]
        instruction = config["instruction"]
        temperature = config["temperature"]
    else:
        valid = ", ".join(prompts.REWRITE_TYPES)
        raise ValueError(f"Invalid rewrite type: {rewrite_type!r}. Choose one of: {valid}")

    others = [t for t in (thread_context or []) if t.strip() and t != full_tweet]
    thread_block = prompts.THREAD_CONTEXT.format(tweets="\n".join(others)) if others else ""

    response: LLMResponse = await llm.complete(
        system=prompts.SYSTEM.format(
            instruction=instruction,
            context=build_context(personal_context, global_rules),
        ),
        user=prompts.USER_TEMPLATE.format(
            full_tweet=full_tweet,
            selected_text=selected_text,
            instruction=instruction,
            thread_context=thread_block,
        ),
        max_tokens=200,
        temperature=temperature,
    )

    rewritten = _WRAPPING_QUOTES.sub("", response.content.strip()).strip()
    if not rewritten:
        raise RuntimeError("No rewrite generated")
    return rewritten


def apply_rewrite(full_tweet: str, selected_text: str, rewritten: str) -> str:
    """Splice the rewrite into the tweet in place of the first occurrence."""
    if selected_text not in full_tweet:
        return rewritten
    return full_tweet.replace(selected_text, rewritten, 1)

"""Hook generation: turn ranked candidates into opening tweets via the LLM."""
import json
import logging
from dataclasses import dataclass

from agent.llm.base import LLMClient, LLMResponse
from agent.modules.analyze import ContentSignals
from agent.modules.rank import Ranking
from agent.modules.score import ScoredCandidate
from agent.modules.variables import extract_placeholder_data
from agent.prompts import hooks as prompts

logger = logging.getLogger(__name__)

FALLBACK_TEMPERATURE = 0.3


@dataclass
class Hook:
    id: str
    text: str
    kind: str  # template | custom | power-hook
    variation: int = 1
    score: float | None = None
    category: str = ""
    template_id: str = ""
    template_title: str = ""
    power_hook_id: str = ""


def build_context(personal_context: str = "", global_rules: str = "") -> str:
    """Suffix appended to every generation prompt."""
    context = ""
    if personal_context.strip():
        context += prompts.PERSONAL_CONTEXT.format(personal_context=personal_context.strip())
    if global_rules.strip():
        context += prompts.GLOBAL_RULES.format(global_rules=global_rules.strip())
    return context


def _tone_block(tone_profile: str) -> str:
    return prompts.TONE_PROFILE.format(tone_profile=tone_profile.strip()) if tone_profile.strip() else ""


def _character_rules(min_chars: int, max_chars: int) -> str:
    return prompts.CHARACTER_RULES.format(
        min_chars=min_chars, max_chars=max_chars, limit=max_chars + 1,
    )


async def complete_within_length(
    llm: LLMClient,
    system: str,
    prompt: str,
    temperature: float = 0.7,
    min_chars: int = 140,
    max_chars: int = 279,
    attempts: int = 3,
) -> str:
    """Ask for a single tweet, retrying with a length correction when it misses.

    After ``attempts`` misses one low-temperature fallback is made; a fallback
    that is still too long is cut at a word boundary.
    """
    for attempt in range(1, attempts + 1):
        response: LLMResponse = await llm.complete(
            system=system, user=prompt, max_tokens=150, temperature=temperature,
        )
        text = response.content.strip()
        if min_chars <= len(text) <= max_chars:
            return text

        logger.debug("Hook attempt %d/%d was %d chars", attempt, attempts, len(text))
        if attempt < attempts:
            template = (
                prompts.ADJUSTMENT_TOO_LONG if len(text) > max_chars
                else prompts.ADJUSTMENT_TOO_SHORT
            )
            adjustment = template.format(length=len(text), max_chars=max_chars)
            prompt += f"\n\nADJUSTMENT NEEDED: {adjustment}"

    response = await llm.complete(
        system=system, user=prompt, max_tokens=100, temperature=FALLBACK_TEMPERATURE,
    )
    return truncate_tweet(response.content.strip(), max_chars)


def truncate_tweet(text: str, max_chars: int = 279) -> str:
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    space = cut.rfind(" ")
    if space > max_chars // 2:
        cut = cut[:space]
    return cut.rstrip(" ,;:-") + "…"


async def generate_power_hook(
    content: str,
    match: ScoredCandidate,
    llm: LLMClient,
    structure: ScoredCandidate | None = None,
    context: str = "",
    tone_profile: str = "",
    min_chars: int = 140,
    max_chars: int = 279,
    attempts: int = 3,
) -> str:
    hook = match.candidate
    structure_text = ""
    if structure is not None:
        template = structure.candidate
        structure_text = prompts.SUPPORTING_STRUCTURE.format(
            title=template.title,
            category=template.category,
            preview="\n".join(template.text.split("\n")[:3]),
        )

    prompt = prompts.POWER_HOOK_TEMPLATE.format(
        hook_text=hook.text,
        category=hook.category,
        psych_type=hook.psych_type or "general",
        filled_text=match.filled_text or hook.text,
        variable_data=json.dumps(match.variable_data, ensure_ascii=False) if match.variable_data else "(none)",
        structure=structure_text,
        content=content,
        context=context,
        character_rules=_character_rules(min_chars, max_chars),
        qualities=prompts.HOOK_QUALITIES,
        tone_profile=_tone_block(tone_profile),
    )
    return await complete_within_length(
        llm, prompts.SYSTEM, prompt, 0.7, min_chars, max_chars, attempts,
    )


async def generate_template_hook(
    content: str,
    match: ScoredCandidate,
    llm: LLMClient,
    context: str = "",
    tone_profile: str = "",
    min_chars: int = 140,
    max_chars: int = 279,
    attempts: int = 3,
) -> str:
    template = match.candidate
    placeholders = extract_placeholder_data(content, template.text)
    prompt = prompts.TEMPLATE_HOOK_TEMPLATE.format(
        title=template.title,
        category=template.category,
        preview="\n".join(template.text.split("\n")[:3]),
        placeholders=json.dumps(placeholders, ensure_ascii=False) if placeholders else "(none)",
        content=content,
        context=context,
        character_rules=_character_rules(min_chars, max_chars),
        qualities=prompts.HOOK_QUALITIES,
        tone_profile=_tone_block(tone_profile),
    )
    return await complete_within_length(
        llm, prompts.SYSTEM, prompt, 0.7, min_chars, max_chars, attempts,
    )


async def generate_custom_hook(
    content: str,
    signals: ContentSignals,
    llm: LLMClient,
    variation: int = 1,
    context: str = "",
    tone_profile: str = "",
    min_chars: int = 140,
    max_chars: int = 279,
    attempts: int = 3,
) -> str:
    prompt = prompts.CUSTOM_HOOK_TEMPLATE.format(
        content=content,
        context=context,
        tone=signals.tone.value,
        has_personal_story=signals.has_personal_story,
        has_statistics=signals.has_statistics,
        has_quotes=signals.has_quotes,
        topics=", ".join(signals.main_topics) or "(none detected)",
        character_rules=_character_rules(min_chars, max_chars),
        variation_instruction=prompts.CUSTOM_VARIATIONS.get(variation, prompts.CUSTOM_VARIATIONS[1]),
        qualities=prompts.HOOK_QUALITIES,
        tone_profile=_tone_block(tone_profile),
    )
    temperature = prompts.CUSTOM_TEMPERATURES.get(variation, 0.8)
    return await complete_within_length(
        llm, prompts.SYSTEM, prompt, temperature, min_chars, max_chars, attempts,
    )


async def generate_hooks(
    content: str,
    ranking: Ranking,
    llm: LLMClient,
    personal_context: str = "",
    global_rules: str = "",
    tone_profile: str = "",
    custom_count: int = 2,
    max_hooks: int = 10,
    min_chars: int = 140,
    max_chars: int = 279,
    attempts: int = 3,
) -> list[Hook]:
    """Generate hooks for ranked candidates.

    Power hooks come first (each paired with the supporting template at the
    same rank); template hooks are used only when there are no power hooks.
    Custom hooks fill the tail. A failed generation is logged and skipped.
    """
    context = build_context(personal_context, global_rules)
    limits = dict(min_chars=min_chars, max_chars=max_chars, attempts=attempts)
    candidate_slots = max(max_hooks - custom_count, 0)
    hooks: list[Hook] = []

    if ranking.power_hooks:
        for i, match in enumerate(ranking.power_hooks[:candidate_slots]):
            structure = ranking.templates[i % len(ranking.templates)] if ranking.templates else None
            try:
                text = await generate_power_hook(
                    content, match, llm, structure, context, tone_profile, **limits,
                )
            except Exception:
                logger.warning("Power hook %s failed; skipping.", match.candidate.id, exc_info=True)
                continue
            hooks.append(Hook(
                id=f"power-{match.candidate.id}",
                text=text,
                kind="power-hook",
                score=match.score,
                category=match.category,
                power_hook_id=match.candidate.id,
                template_id=structure.candidate.id if structure else "",
                template_title=structure.candidate.title if structure else "",
            ))
    else:
        for match in ranking.templates[:candidate_slots]:
            try:
                text = await generate_template_hook(
                    content, match, llm, context, tone_profile, **limits,
                )
            except Exception:
                logger.warning("Template hook %s failed; skipping.", match.candidate.id, exc_info=True)
                continue
            hooks.append(Hook(
                id=f"template-{match.candidate.id}",
                text=text,
                kind="template",
                score=match.score,
                category=match.category,
                template_id=match.candidate.id,
                template_title=match.candidate.title,
            ))

    for variation in range(1, custom_count + 1):
        try:
            text = await generate_custom_hook(
                content, ranking.signals, llm, variation, context, tone_profile, **limits,
            )
        except Exception:
            logger.warning("Custom hook v%d failed; skipping.", variation, exc_info=True)
            continue
        hooks.append(Hook(id=f"custom-v{variation}", text=text, kind="custom", variation=variation))

    hooks = [h for h in hooks if h.text][:max_hooks]
    if not hooks:
        raise RuntimeError("Failed to generate any hooks")
    logger.info("Generated %d hooks", len(hooks))
    return hooks

"""
Hook-generation prompts.

Three variants share the same character rules:
  - POWER_HOOK_TEMPLATE: adapt a scored power hook, borrowing structure from a
    supporting thread template.
  - TEMPLATE_HOOK_TEMPLATE: write an opener in the style of a thread template.
  - CUSTOM_HOOK_TEMPLATE: original hook, no template, two tonal variations.

Every variant ends by asking for the hook text only, so the response can be
length-checked directly.
"""

SYSTEM = """You are an expert X (Twitter) thread writer. You write opening tweets \
("hooks") that stop the scroll and make readers open the thread.
Return only the hook text: no quotes, no labels, no explanation."""

CHARACTER_RULES = """CRITICAL CHARACTER REQUIREMENTS:
- The hook must be between {min_chars}-{max_chars} characters (aim for 200-260 for optimal engagement)
- Count characters carefully including spaces and punctuation
- If the hook approaches {limit} characters, make it more concise
- Never exceed {max_chars} characters under any circumstances"""

HOOK_QUALITIES = """The hook should:
- Be exactly 1 tweet (never multiple tweets)
- Include relevant emojis sparingly (max 2-3) if they enhance engagement
- Create curiosity, urgency, or strong emotional response"""

POWER_HOOK_TEMPLATE = """Write a hook for the content below, built on this proven power hook.

Power hook: {hook_text}
Power hook category: {category}
Psychological type: {psych_type}
Suggested fill: {filled_text}
Variable data: {variable_data}
{structure}
Content to base the hook on:
{content}{context}

Keep the power hook's opening move and psychological trigger. Replace any \
remaining [placeholders] with specifics from the content.

{character_rules}

{qualities}
{tone_profile}
Generate only the hook text:"""

SUPPORTING_STRUCTURE = """
Supporting thread structure ({title}, {category}):
{preview}...
"""

TEMPLATE_HOOK_TEMPLATE = """Generate a compelling hook (opening tweet) based on this template and content.

Template: {title}
Template Category: {category}
Template Structure: {preview}...
Placeholder hints: {placeholders}

Content to base hook on:
{content}{context}

PLACEHOLDER INSTRUCTIONS:
- Replace [X] with relevant numbers from the content (e.g., if content mentions "154 students", use 154)
- Replace [Topic], [Skill], [Niche] with the main subject from the content
- Replace [TimePeriod] with relevant timeframes mentioned (e.g., "8 weeks", "6 months")
- If specific numbers/details aren't in content, use realistic, engaging alternatives
- Ignore publication dates and author bylines when extracting numbers

{character_rules}

{qualities}
- Follow the template's opening style and psychological triggers
- Match the template category's proven engagement patterns
{tone_profile}
Generate only the hook text, no explanations. Optimize for maximum virality within the character limit:"""

CUSTOM_HOOK_TEMPLATE = """Create a completely original, creative hook (opening tweet) for this content.

Content:
{content}{context}

Content Analysis:
- Tone: {tone}
- Has personal story: {has_personal_story}
- Has statistics: {has_statistics}
- Has quotes: {has_quotes}
- Main topics: {topics}

{character_rules}

Instructions:
{variation_instruction}

{qualities}
- Be completely original and creative (avoid template patterns)
- Stand out from typical template-based hooks
{tone_profile}
Generate only the hook text, no explanations. Optimize for maximum virality within the character limit:"""

CUSTOM_VARIATIONS = {
    1: "Create a bold, attention-grabbing hook with maximum viral potential.",
    2: "Create a more conversational, relatable hook that creates strong emotional connection.",
}

CUSTOM_TEMPERATURES = {1: 0.8, 2: 1.0}

ADJUSTMENT_TOO_LONG = (
    "The previous hook was {length} characters, which is too long. "
    "Make it more concise while keeping the impact."
)
ADJUSTMENT_TOO_SHORT = (
    "The previous hook was {length} characters, which is too short. "
    "Add more compelling details while staying under {max_chars} characters."
)

PERSONAL_CONTEXT = "\n\nPersonal Context: {personal_context}"
GLOBAL_RULES = "\n\nIMPORTANT GLOBAL RULES (MUST FOLLOW): {global_rules}"
TONE_PROFILE = """
WRITING STYLE PROFILE (match this voice):
{tone_profile}
"""

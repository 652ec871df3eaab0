"""
Tweet-rewrite prompts.

A rewrite targets only the fragment the user selected; the rest of the tweet
and the surrounding thread are passed as read-only context so the rewrite
flows with what is already there.
"""

REWRITE_TYPES = {
    "grammar": {
        "instruction": "Fix grammar and spelling errors while maintaining the original meaning and tone",
        "temperature": 0.3,
    },
    "improve": {
        "instruction": "Improve the writing quality, clarity, and flow while maintaining the original message",
        "temperature": 0.5,
    },
    "punchy": {
        "instruction": "Make the text more punchy, engaging, and impactful while keeping the core message",
        "temperature": 0.7,
    },
    "condense": {
        "instruction": "Condense the text to be more concise while preserving all key information",
        "temperature": 0.4,
    },
    "rephrase": {
        "instruction": "Rephrase the text with a fresh perspective while maintaining the same meaning",
        "temperature": 0.8,
    },
}

CUSTOM_TEMPERATURE = 0.7

SYSTEM = """You are an expert Twitter content editor. Your task is to {instruction}.

CRITICAL REQUIREMENTS:
- Only rewrite the selected portion of text
- Maintain consistency with the rest of the tweet
- Keep the rewritten text roughly the same length unless condensing
- Preserve the original tone and voice
- Ensure the rewritten portion flows naturally with surrounding text
- For Twitter: stay under 280 characters for the full tweet
- Use emojis sparingly and only if they were in the original or improve engagement{context}

Return ONLY the rewritten portion of text, nothing else."""

USER_TEMPLATE = """Full Tweet Context:
"{full_tweet}"

Selected Text to Rewrite:
"{selected_text}"

Task: {instruction}{thread_context}

Rewrite only the selected portion:"""

THREAD_CONTEXT = "\n\nThread Context (other tweets):\n{tweets}"

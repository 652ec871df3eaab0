"""Format hooks, threads and records as Telegram MarkdownV2 messages."""
import re

# Characters that must be escaped in MarkdownV2
_ESCAPE_CHARS = r"\_*[]()~`>#+-=|{}.!"

_MAX_MESSAGE_CHARS = 4000  # leave headroom below 4096

_KIND_ICONS = {
    "power-hook": "⚡",
    "template": "🧩",
    "custom": "✨",
}

_TONE_ICONS = {
    "personal": "🙋",
    "inspirational": "🌟",
    "analytical": "📈",
    "controversial": "🔥",
    "educational": "📚",
}


def escape(text: str) -> str:
    """Escape special characters for Telegram MarkdownV2."""
    return re.sub(r"([" + re.escape(_ESCAPE_CHARS) + r"])", r"\\\1", text)


def _score_bar(score: float, top: float, width: int = 8) -> str:
    """Bar relative to the best score in the list."""
    filled = round(width * score / top) if top > 0 else 0
    filled = max(0, min(width, filled))
    return "█" * filled + "░" * (width - filled)


def _flag(value: bool) -> str:
    return "✅" if value else "▫️"


def format_signals(signals) -> str:
    """One compact block describing an analyzed ContentSignals."""
    tone = signals.tone.value
    topics = ", ".join(signals.main_topics) or "none"
    return "\n".join([
        f"{_TONE_ICONS.get(tone, '📄')} Tone: `{escape(tone)}`  •  Topics: {escape(topics)}",
        (
            f"{_flag(signals.has_personal_story)} story  "
            f"{_flag(signals.has_statistics)} stats  "
            f"{_flag(signals.has_quotes)} quotes  "
            f"{_flag(signals.has_named_people)} people  "
            f"{_flag(signals.has_frameworks)} frameworks  "
            f"{_flag(signals.has_book_references)} books"
        ),
    ])


def format_hooks(signals, hooks: list, session_id: int) -> list[str]:
    """Numbered hook list; returns one or more messages."""
    lines = [
        f"🎣 *Hooks* \\(session \\#{session_id}\\)",
        "",
        format_signals(signals),
        "",
    ]
    top = max((h.score for h in hooks if h.score is not None), default=0)
    for i, hook in enumerate(hooks, start=1):
        icon = _KIND_ICONS.get(hook.kind, "•")
        label = hook.category or hook.kind
        score = f" {_score_bar(hook.score, top)} {hook.score:.0f}" if hook.score is not None else ""
        lines.append(f"*{i}\\.* {icon} _{escape(label)}_{escape(score)} `{len(hook.text)}c`")
        lines.append(escape(hook.text))
        lines.append("")

    lines.append(escape("Pick one or two: /thread 1 3 [type]  •  /types for thread styles"))
    return _split_message("\n".join(lines))


def format_thread(tweets: list[str], hook_text: str, thread_type: str, art_prompts: list[str] | None = None) -> list[str]:
    header = f"🧵 *Thread* \\({escape(thread_type)}\\)"
    if hook_text:
        header += f"\n_{escape(_preview(hook_text, 80))}_"
    body = "\n\n".join(escape(t) for t in tweets)
    text = f"{header}\n\n{body}"
    if art_prompts:
        art = "\n".join(f"`{escape(p)}`" for p in art_prompts)
        text += f"\n\n🎨 *Art prompts*\n{art}"
    return _split_message(text)


def format_thread_types(thread_types: dict[str, str]) -> str:
    lines = ["🧵 *Thread types*", ""]
    for name, instruction in thread_types.items():
        lines.append(f"`{escape(name)}` \\- {escape(instruction)}")
    return "\n".join(lines)


def format_history(records: list[dict]) -> str:
    if not records:
        return "No sessions yet\\. Send /hooks to start\\."

    lines = ["📋 *Recent Sessions*", ""]
    for r in records:
        sid = r["id"]
        created = escape((r.get("created_at") or "")[:10])
        tone = escape(r.get("tone") or "unknown")
        preview = escape(_preview(r.get("preview") or "", 60))
        lines.append(
            f"`#{sid}` {created} \\| `{tone}` \\| "
            f"{r.get('hook_count', 0)} hooks, {r.get('thread_count', 0)} threads"
        )
        if preview:
            lines.append(f"     _{preview}_")
        lines.append(f"     👉 /show {sid}")
        lines.append("")

    return "\n".join(lines)


def format_full_record(session: dict, hooks: list[dict], threads: list[dict]) -> list[str]:
    """Return list of messages for /show command."""
    messages = []

    topics = escape(session.get("topics") or "none")
    msg1 = "\n".join([
        f"📊 *Session \\#{session['id']}*",
        "",
        f"Date: `{escape((session.get('created_at') or '')[:19])}`",
        f"Source: `{escape(session.get('source') or 'text')}`",
        f"Tone: `{escape(session.get('tone') or 'unknown')}`  Topics: {topics}",
        "",
        f"_{escape(_preview(session.get('content') or '', 300))}_",
    ])
    messages.append(msg1)

    if hooks:
        lines = ["🎣 *Hooks*", ""]
        for h in hooks:
            icon = _KIND_ICONS.get(h.get("kind", ""), "•")
            lines.append(f"*{h['position']}\\.* {icon} {escape(h.get('text') or '')}")
            lines.append("")
        messages.extend(_split_message("\n".join(lines)))

    hook_texts = {h["id"]: h.get("text") or "" for h in hooks if "id" in h}
    for t in threads:
        hook_text = hook_texts.get(t.get("hook_id"), "")
        messages.extend(format_thread(t["tweets"], hook_text, t["thread_type"], t.get("art_prompts")))

    return messages


def format_prompts(prompts: list[dict], active_id: int | None = None) -> str:
    if not prompts:
        return escape("No custom prompts. Add one: /addprompt name | description | system prompt")

    lines = ["🛠 *Custom prompts*", ""]
    for p in prompts:
        marker = " ✅" if p["id"] == active_id else ""
        lines.append(f"`#{p['id']}` *{escape(p['name'])}*{marker}")
        if p.get("description"):
            lines.append(f"     _{escape(p['description'])}_")
    lines.append("")
    lines.append(escape("Use one for threads: /useprompt <id>  •  /useprompt off"))
    return "\n".join(lines)


def _preview(text: str, length: int) -> str:
    text = " ".join(text.split())
    return text if len(text) <= length else text[: length - 1] + "…"


def _split_message(text: str, max_len: int = _MAX_MESSAGE_CHARS) -> list[str]:
    """Split on line boundaries so escape sequences are never cut in half."""
    if len(text) <= max_len:
        return [text]
    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > max_len:
            cut = max_len
            if line[cut - 1] == "\\":
                cut -= 1
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:cut])
            line = line[cut:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > max_len:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks

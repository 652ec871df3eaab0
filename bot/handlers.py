"""All Telegram command and message handlers."""
import asyncio
import logging
import re
from collections import deque
from contextlib import asynccontextmanager
from time import monotonic
from telegram import Update
from telegram.constants import ChatAction, ParseMode
from telegram.ext import (
    ContextTypes,
    ConversationHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

import db
from config import settings
from bot.auth import auth
from bot import formatter
from bot.file_parser import parse_file, validate_content
from agent.corpus import load_power_hooks, load_templates
from agent.llm import get_llm_client
from agent.modules.hooks import generate_hooks
from agent.modules.rank import rank
from agent.modules.rewrite import apply_rewrite, rewrite_tweet
from agent.modules.thread import generate_art_prompts, generate_thread
from agent.prompts.rewrite import REWRITE_TYPES
from agent.prompts.thread import DEFAULT_THREAD_TYPE, THREAD_TYPES
from agent.tone import load_tone_profile

logger = logging.getLogger(__name__)

# ConversationHandler states
WAITING_CONTENT = 1

_RATE_LIMIT_WINDOW_SECONDS = settings.rate_limit_window_seconds
_RATE_LIMIT_HOOKS_PER_WINDOW = settings.rate_limit_hooks_per_window
_RATE_LIMIT_THREAD_PER_WINDOW = settings.rate_limit_thread_per_window
_RATE_LIMIT_REWRITE_PER_WINDOW = settings.rate_limit_rewrite_per_window

_MAX_FILE_BYTES = 20 * 1024 * 1024
_MAX_THREAD_PICKS = 2

_GENERIC_HOOKS_ERR = "❌ Hook generation failed. Please try again shortly."
_GENERIC_THREAD_ERR = "❌ Thread generation failed. Please try again shortly."
_GENERIC_REWRITE_ERR = "❌ Rewrite failed temporarily. Please try again later."
_GENERIC_FILE_ERR = "❌ File parsing failed. Please try again later."

_ACTIVE_PROMPT_KEY = "active_prompt_id"

_rate_limit_buckets: dict[tuple[int, str], deque[float]] = {}


@asynccontextmanager
async def _typing(context: ContextTypes.DEFAULT_TYPE, chat_id: int):
    """Sends TYPING chat action repeatedly until the block exits.

    Telegram expires the indicator after ~5 s, so we refresh every 4 s.
    """
    stop = asyncio.Event()

    async def _loop():
        while not stop.is_set():
            try:
                await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
            except Exception:
                logger.debug("send_chat_action failed", exc_info=True)
            try:
                await asyncio.wait_for(stop.wait(), timeout=4)
            except asyncio.TimeoutError:
                pass

    task = asyncio.create_task(_loop())
    try:
        yield
    finally:
        stop.set()
        await asyncio.gather(task, return_exceptions=True)

_UNAUTHORIZED_MSG = (
    "You don't have access to this bot.\n\n"
    "Your Telegram ID: `{user_id}`\n\n"
    "Send this ID to the admin to request access.\n"
    "Use /whoami at any time to see your ID."
)


# ── helpers ───────────────────────────────────────────────────────────────────

def _uid(update: Update) -> int:
    return update.effective_user.id


def _cid(update: Update) -> int:
    return update.effective_chat.id


def _is_auth(update: Update) -> bool:
    return auth.is_authorized(_uid(update))


def _check_rate_limit(user_id: int, action: str, limit: int) -> tuple[bool, int]:
    """Return (allowed, retry_after_seconds) for user-action pair."""
    now = monotonic()
    key = (user_id, action)
    bucket = _rate_limit_buckets.setdefault(key, deque())
    window_start = now - _RATE_LIMIT_WINDOW_SECONDS

    while bucket and bucket[0] <= window_start:
        bucket.popleft()

    if len(bucket) >= limit:
        retry_after = int(_RATE_LIMIT_WINDOW_SECONDS - (now - bucket[0])) + 1
        return False, max(retry_after, 1)

    bucket.append(now)
    return True, 0


async def _deny_rate_limit(update: Update, retry_after_seconds: int) -> None:
    await update.message.reply_text(
        f"⏳ Too many requests. Please retry in about {retry_after_seconds}s."
    )


async def _deny(update: Update) -> None:
    uid = _uid(update)
    await update.message.reply_text(
        _UNAUTHORIZED_MSG.format(user_id=uid),
        parse_mode=ParseMode.MARKDOWN,
    )


async def _reply_markdown(update: Update, messages: list[str]) -> None:
    for msg in messages:
        await update.message.reply_text(msg, parse_mode=ParseMode.MARKDOWN_V2)


def _active_prompt(context: ContextTypes.DEFAULT_TYPE, user_id: int) -> dict | None:
    """The custom prompt picked with /useprompt, if it still exists."""
    prompt_id = context.user_data.get(_ACTIVE_PROMPT_KEY)
    if prompt_id is None:
        return None
    prompt = db.get_custom_prompt(prompt_id, user_id)
    if prompt is None:
        context.user_data.pop(_ACTIVE_PROMPT_KEY, None)
    return prompt


def parse_thread_args(args: list[str]) -> tuple[list[int], str]:
    """Parse ``/thread <n> [<m>] [type]`` into (hook positions, thread type)."""
    positions: list[int] = []
    thread_type = DEFAULT_THREAD_TYPE
    for arg in args:
        if arg.isdigit():
            positions.append(int(arg))
        else:
            thread_type = arg.lower()

    if not positions:
        raise ValueError("Usage: /thread <n> [<m>] [type]  e.g. /thread 1 3 listicle")
    if len(positions) > _MAX_THREAD_PICKS:
        raise ValueError(f"Pick at most {_MAX_THREAD_PICKS} hooks per /thread.")
    if thread_type not in THREAD_TYPES:
        raise ValueError(f"Unknown thread type: {thread_type}. Send /types to see them.")
    return list(dict.fromkeys(positions)), thread_type


def locate_tweet(message_text: str, fragment: str) -> tuple[str, list[str]]:
    """Find the tweet holding ``fragment`` in a replied-to message.

    Thread messages hold several blank-line separated tweets; the others are
    returned as context.
    """
    blocks = [b.strip() for b in re.split(r"\n\s*\n", message_text) if b.strip()]
    for block in blocks:
        if fragment in block:
            others = [b for b in blocks if b is not block]
            return block, others
    return message_text.strip(), []


def parse_prompt_edit(raw: str) -> tuple[int, dict[str, str]]:
    """Parse ``<id> name | description | system prompt`` for /editprompt.

    Empty fields are left unchanged; at least one must be given.
    """
    head, _, rest = raw.strip().partition(" ")
    try:
        prompt_id = int(head)
    except ValueError:
        raise ValueError("Prompt ID must be a number.")
    parts = [p.strip() for p in rest.split("|", 2)]
    if len(parts) != 3:
        raise ValueError("Give all three fields, separated by |. Leave a field empty to keep it.")
    updates = {k: v for k, v in zip(("name", "description", "system_prompt"), parts) if v}
    if not updates:
        raise ValueError("Nothing to change.")
    return prompt_id, updates


async def _run_pipeline(
    content: str,
    source: str,
    user_id: int,
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
) -> bool:
    """Core pipeline: rank → generate hooks → save → send."""
    status_msg = await update.message.reply_text("🔍 Ranking hook formulas, please wait…")

    try:
        llm = get_llm_client()
        cid = _cid(update)

        ranking = rank(
            content,
            load_templates(settings.templates_path or None),
            load_power_hooks(settings.power_hooks_path or None),
            template_limit=settings.template_limit,
            power_hook_limit=settings.power_hook_limit,
        )

        await status_msg.edit_text("✍️ Writing hooks…")
        async with _typing(context, cid):
            hooks = await generate_hooks(
                content,
                ranking,
                llm,
                personal_context=auth.personal_context(user_id),
                global_rules=auth.global_rules(user_id),
                tone_profile=load_tone_profile(settings.tone_profile_path),
                custom_count=settings.custom_hook_count,
                max_hooks=settings.max_hooks,
                min_chars=settings.hook_min_chars,
                max_chars=settings.hook_max_chars,
                attempts=settings.hook_attempts,
            )

        session_id = db.save_session_with_hooks(user_id, content, source, ranking.signals, hooks)

        await status_msg.delete()
        await _reply_markdown(update, formatter.format_hooks(ranking.signals, hooks, session_id))
        return True

    except Exception:
        logger.exception("Hook pipeline error")
        await status_msg.edit_text(_GENERIC_HOOKS_ERR)
        return False


# ── /start ────────────────────────────────────────────────────────────────────

async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "👋 Welcome to *Hook Forge*\n\n"
        "Turn your notes, transcripts and drafts into scroll\\-stopping hooks and full threads\\.\n\n"
        "Send /help to see all available commands\\.",
        parse_mode=ParseMode.MARKDOWN_V2,
    )


# ── /help ─────────────────────────────────────────────────────────────────────

async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = (
        "📖 *Commands*\n\n"
        "*Writing*\n"
        "/hooks \\- Generate hooks \\(paste text or upload a file\\)\n"
        "/thread \\<n\\> \\[\\<m\\>\\] \\[type\\] \\- Turn one or two hooks into threads\n"
        "/types \\- List thread types\n"
        "/rewrite \\<type\\> \\[fragment\\] \\- Reply to a tweet to rewrite it "
        "\\(grammar, improve, punchy, condense, rephrase, custom\\)\n\n"
        "*Custom prompts*\n"
        "/prompts \\- List your prompts\n"
        "/addprompt name \\| description \\| system prompt \\- Save a prompt\n"
        "/editprompt \\<id\\> name \\| description \\| system prompt \\- Edit a prompt \\(empty fields are kept\\)\n"
        "/useprompt \\<id\\|off\\> \\- Use a prompt for threads\n"
        "/delprompt \\<id\\> \\- Delete a prompt\n\n"
        "*Records*\n"
        "/history \\- Last 10 sessions\n"
        "/show \\<id\\> \\- View hooks and threads of a session\n\n"
        "*Other*\n"
        "/status \\- Show bot status and configuration\n"
        "/whoami \\- Show your Telegram ID\n"
        "/cancel \\- Exit current mode"
    )
    await update.message.reply_text(text, parse_mode=ParseMode.MARKDOWN_V2)


# ── /status ───────────────────────────────────────────────────────────────────

async def cmd_status(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    provider = settings.llm_provider.lower()
    model_map = {
        "anthropic": settings.anthropic_model,
        "openai": settings.openai_model,
        "custom": settings.openai_model,
    }
    model = model_map.get(provider, "unknown")

    uid = _uid(update)
    authorized = auth.is_authorized(uid)
    auth_icon = "✅ Authorized" if authorized else "❌ Unauthorized"
    count = db.get_session_count(uid)
    tone_icon = "✅" if load_tone_profile(settings.tone_profile_path) else "▫️"
    active = _active_prompt(context, uid) if authorized else None
    prompt_label = formatter.escape(active["name"]) if active else "none"

    text = (
        "⚙️ *Bot Status*\n\n"
        f"🤖 LLM: `{formatter.escape(provider)}` / `{formatter.escape(model)}`\n"
        f"📊 Your sessions: `{count}`\n"
        f"🎨 Tone profile: {tone_icon}\n"
        f"🛠 Active prompt: {prompt_label}\n"
        f"👤 Access: {auth_icon}"
    )
    await update.message.reply_text(text, parse_mode=ParseMode.MARKDOWN_V2)


# ── /whoami ───────────────────────────────────────────────────────────────────

async def cmd_whoami(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    uid = _uid(update)
    authorized = auth.is_authorized(uid)
    status = "✅ Authorized" if authorized else "❌ Unauthorized"
    text = (
        f"Your Telegram ID: `{uid}`\n"
        f"Status: {status}\n\n"
        "Share this ID with the admin to request access."
    )
    await update.message.reply_text(text, parse_mode=ParseMode.MARKDOWN)


# ── /hooks (ConversationHandler) ─────────────────────────────────────────────

async def cmd_hooks(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if not _is_auth(update):
        await _deny(update)
        return ConversationHandler.END

    await update.message.reply_text(
        "Send the content you want hooks for:\n\n"
        "• Paste plain text\n"
        "• Upload a file (.txt / .md / .json / .csv, max 20 MB)\n\n"
        "Send /cancel to exit."
    )
    return WAITING_CONTENT


async def hooks_text_input(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if not _is_auth(update):
        await _deny(update)
        return ConversationHandler.END

    try:
        content = validate_content(
            update.message.text,
            settings.content_min_chars,
            settings.content_max_chars,
        )
    except ValueError as e:
        await update.message.reply_text(f"❌ {e}")
        return WAITING_CONTENT

    uid = _uid(update)
    allowed, retry_after = _check_rate_limit(uid, "hooks", _RATE_LIMIT_HOOKS_PER_WINDOW)
    if not allowed:
        await _deny_rate_limit(update, retry_after)
        return WAITING_CONTENT

    await _run_pipeline(content, "text", uid, update, context)
    return ConversationHandler.END


async def hooks_file_input(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if not _is_auth(update):
        await _deny(update)
        return ConversationHandler.END

    document = update.message.document
    if not document:
        await update.message.reply_text("No file detected. Please upload a file or paste text.")
        return WAITING_CONTENT

    filename = document.file_name or "upload.txt"
    file_size = document.file_size or 0

    if file_size > _MAX_FILE_BYTES:
        await update.message.reply_text("❌ File exceeds the 20 MB limit. Please compress it and try again.")
        return WAITING_CONTENT

    status_msg = await update.message.reply_text(f"📂 Parsing {filename}…")

    try:
        tg_file = await document.get_file()
        data = await tg_file.download_as_bytearray()
        content = parse_file(bytes(data), filename, settings.content_max_chars)
        content = validate_content(content, settings.content_min_chars, settings.content_max_chars)
    except ValueError as e:
        await status_msg.edit_text(f"❌ {e}")
        return WAITING_CONTENT
    except Exception:
        logger.exception("File download/parse error")
        await status_msg.edit_text(_GENERIC_FILE_ERR)
        return WAITING_CONTENT

    await status_msg.delete()

    uid = _uid(update)
    allowed, retry_after = _check_rate_limit(uid, "hooks", _RATE_LIMIT_HOOKS_PER_WINDOW)
    if not allowed:
        await _deny_rate_limit(update, retry_after)
        return WAITING_CONTENT

    await _run_pipeline(content, "file", uid, update, context)
    return ConversationHandler.END


async def hooks_invalid_input(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    await update.message.reply_text(
        "Please send text or upload a file, or send /cancel to exit."
    )
    return WAITING_CONTENT


async def cmd_cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    await update.message.reply_text("Cancelled.")
    return ConversationHandler.END


# ── /thread ───────────────────────────────────────────────────────────────────

async def cmd_thread(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    try:
        positions, thread_type = parse_thread_args(context.args or [])
    except ValueError as e:
        await update.message.reply_text(f"❌ {e}")
        return

    uid = _uid(update)
    session = db.get_latest_session(uid)
    if not session:
        await update.message.reply_text("⚠️ No hooks yet. Send /hooks first.")
        return

    by_position = {h["position"]: h for h in db.get_session_hooks(session["id"])}
    missing = [p for p in positions if p not in by_position]
    if missing:
        await update.message.reply_text(
            f"❌ Session #{session['id']} has hooks 1–{len(by_position)}; "
            f"no hook {', '.join(map(str, missing))}."
        )
        return

    allowed, retry_after = _check_rate_limit(uid, "thread", _RATE_LIMIT_THREAD_PER_WINDOW)
    if not allowed:
        await _deny_rate_limit(update, retry_after)
        return

    prompt = _active_prompt(context, uid)
    label = f"custom: {prompt['name']}" if prompt else thread_type
    status_msg = await update.message.reply_text(
        f"🧵 Writing {len(positions)} {label} thread(s)…"
    )

    try:
        llm = get_llm_client()
        tone_profile = load_tone_profile(settings.tone_profile_path)
        for position in positions:
            hook = by_position[position]
            async with _typing(context, _cid(update)):
                tweets = await generate_thread(
                    session["content"],
                    hook["text"],
                    llm,
                    thread_type=thread_type,
                    custom_prompt=prompt["system_prompt"] if prompt else None,
                    personal_context=auth.personal_context(uid),
                    global_rules=auth.global_rules(uid),
                    tone_profile=tone_profile,
                )
                try:
                    art_prompts = await generate_art_prompts(session["content"], llm)
                except Exception:
                    logger.warning("Art prompt generation failed; continuing without.", exc_info=True)
                    art_prompts = []

            db.save_thread(session["id"], hook["id"], label, tweets, art_prompts)
            await _reply_markdown(
                update, formatter.format_thread(tweets, hook["text"], label, art_prompts)
            )
    except Exception:
        logger.exception("Thread generation error")
        await status_msg.edit_text(_GENERIC_THREAD_ERR)
        return

    await status_msg.delete()


# ── /types ────────────────────────────────────────────────────────────────────

async def cmd_types(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        formatter.format_thread_types(THREAD_TYPES),
        parse_mode=ParseMode.MARKDOWN_V2,
    )


# ── /rewrite ──────────────────────────────────────────────────────────────────

async def cmd_rewrite(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    usage = (
        "Reply to a tweet with /rewrite <type> [fragment].\n"
        f"Types: {', '.join(REWRITE_TYPES)}, custom"
    )
    target = update.message.reply_to_message
    target_text = (target.text or target.caption or "") if target else ""
    parts = (update.message.text or "").split(maxsplit=2)
    if not target_text.strip() or len(parts) < 2:
        await update.message.reply_text(usage)
        return

    uid = _uid(update)
    rewrite_type = parts[1].lower()
    fragment = parts[2].strip() if len(parts) > 2 else ""
    full_tweet, others = locate_tweet(target_text, fragment or target_text)
    fragment = fragment or full_tweet

    custom_prompt = None
    if rewrite_type == "custom":
        prompt = _active_prompt(context, uid)
        if not prompt:
            await update.message.reply_text("No active custom prompt. Pick one with /useprompt <id>.")
            return
        custom_prompt = prompt["system_prompt"]

    allowed, retry_after = _check_rate_limit(uid, "rewrite", _RATE_LIMIT_REWRITE_PER_WINDOW)
    if not allowed:
        await _deny_rate_limit(update, retry_after)
        return

    try:
        llm = get_llm_client()
        async with _typing(context, _cid(update)):
            rewritten = await rewrite_tweet(
                fragment,
                full_tweet,
                rewrite_type,
                llm,
                custom_prompt=custom_prompt,
                thread_context=others,
                personal_context=auth.personal_context(uid),
                global_rules=auth.global_rules(uid),
            )
    except ValueError as e:
        await update.message.reply_text(f"❌ {e}\n\n{usage}")
        return
    except Exception:
        logger.exception("Rewrite error")
        await update.message.reply_text(_GENERIC_REWRITE_ERR)
        return

    await update.message.reply_text(apply_rewrite(full_tweet, fragment, rewritten))


# ── custom prompts ────────────────────────────────────────────────────────────

async def cmd_prompts(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    uid = _uid(update)
    active = _active_prompt(context, uid)
    msg = formatter.format_prompts(db.list_custom_prompts(uid), active["id"] if active else None)
    await update.message.reply_text(msg, parse_mode=ParseMode.MARKDOWN_V2)


async def cmd_addprompt(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    raw = (update.message.text or "").partition(" ")[2]
    parts = [p.strip() for p in raw.split("|", 2)]
    if len(parts) != 3 or not parts[0] or not parts[2]:
        await update.message.reply_text(
            "Usage: /addprompt name | description | system prompt\n"
            "Description may be empty: /addprompt Story || Write as a founder diary."
        )
        return

    name, description, system_prompt = parts
    prompt_id = db.create_custom_prompt(_uid(update), name, description, system_prompt)
    await update.message.reply_text(
        f"✅ Saved prompt #{prompt_id} \"{name}\". Use it with /useprompt {prompt_id}."
    )


async def cmd_editprompt(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    raw = (update.message.text or "").partition(" ")[2]
    try:
        prompt_id, updates = parse_prompt_edit(raw)
    except ValueError as e:
        await update.message.reply_text(
            f"❌ {e}\n"
            "Usage: /editprompt <id> name | description | system prompt\n"
            "Change only the system prompt: /editprompt 3 | | Write as a founder diary."
        )
        return

    uid = _uid(update)
    if not db.get_custom_prompt(prompt_id, uid):
        await update.message.reply_text(f"❌ Prompt #{prompt_id} not found (or no permission).")
        return

    prompt = db.update_custom_prompt(prompt_id, uid, **updates)
    await update.message.reply_text(f"✏️ Updated prompt #{prompt_id} \"{prompt['name']}\".")


async def cmd_delprompt(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    if not context.args:
        await update.message.reply_text("Usage: /delprompt <id>")
        return

    try:
        prompt_id = int(context.args[0])
    except ValueError:
        await update.message.reply_text("❌ ID must be a number.")
        return

    if not db.delete_custom_prompt(prompt_id, _uid(update)):
        await update.message.reply_text(f"❌ Prompt #{prompt_id} not found (or no permission).")
        return

    if context.user_data.get(_ACTIVE_PROMPT_KEY) == prompt_id:
        context.user_data.pop(_ACTIVE_PROMPT_KEY, None)
    await update.message.reply_text(f"🗑 Deleted prompt #{prompt_id}.")


async def cmd_useprompt(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    if not context.args:
        await update.message.reply_text("Usage: /useprompt <id|off>")
        return

    arg = context.args[0].lower()
    if arg == "off":
        context.user_data.pop(_ACTIVE_PROMPT_KEY, None)
        await update.message.reply_text("Custom prompt off. Threads use the built-in types again.")
        return

    try:
        prompt_id = int(arg)
    except ValueError:
        await update.message.reply_text("❌ ID must be a number or 'off'.")
        return

    prompt = db.get_custom_prompt(prompt_id, _uid(update))
    if not prompt:
        await update.message.reply_text(f"❌ Prompt #{prompt_id} not found (or no permission).")
        return

    context.user_data[_ACTIVE_PROMPT_KEY] = prompt_id
    await update.message.reply_text(
        f"✅ Using \"{prompt['name']}\" for /thread and /rewrite custom."
    )


# ── /history ──────────────────────────────────────────────────────────────────

async def cmd_history(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    uid = _uid(update)
    records = db.get_history(uid, limit=10)
    msg = formatter.format_history(records)
    await update.message.reply_text(msg, parse_mode=ParseMode.MARKDOWN_V2)


# ── /show <id> ────────────────────────────────────────────────────────────────

async def cmd_show(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not _is_auth(update):
        await _deny(update)
        return

    if not context.args:
        await update.message.reply_text("Usage: /show <id>")
        return

    try:
        session_id = int(context.args[0])
    except ValueError:
        await update.message.reply_text("❌ ID must be a number.")
        return

    uid = _uid(update)
    result = db.get_session_with_outputs(session_id, uid)
    if not result:
        await update.message.reply_text(f"❌ Session #{session_id} not found (or no permission).")
        return

    await _reply_markdown(
        update,
        formatter.format_full_record(result["session"], result["hooks"], result["threads"]),
    )


# ── plain text ────────────────────────────────────────────────────────────────

async def handle_plain_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Point stray messages at /hooks. Unauthorized users receive a whoami hint."""
    if not update.message or not update.message.text:
        return

    uid = _uid(update)
    if not auth.is_authorized(uid):
        await update.message.reply_text(
            f"You don't have access.\nYour Telegram ID: `{uid}`\n"
            "Share this ID with the admin to request access.\nUse /whoami to check.",
            parse_mode=ParseMode.MARKDOWN,
        )
        return

    await update.message.reply_text("Send /hooks first, then paste your content.")


# ── build ConversationHandler ─────────────────────────────────────────────────

def build_conversation() -> ConversationHandler:
    """/hooks waits for pasted text or an uploaded file, then runs the pipeline."""
    return ConversationHandler(
        entry_points=[CommandHandler("hooks", cmd_hooks)],
        states={
            WAITING_CONTENT: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, hooks_text_input),
                MessageHandler(filters.Document.ALL,            hooks_file_input),
                MessageHandler(~filters.COMMAND,                hooks_invalid_input),
            ],
        },
        fallbacks=[CommandHandler("cancel", cmd_cancel)],
    )

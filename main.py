"""Hook Forge - Telegram Bot entry point."""
import logging
import sys
from urllib.parse import urlparse

from telegram import BotCommand
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
)

import db
from config import settings
from bot.handlers import (
    cmd_start,
    cmd_help,
    cmd_status,
    cmd_whoami,
    cmd_thread,
    cmd_types,
    cmd_rewrite,
    cmd_prompts,
    cmd_addprompt,
    cmd_editprompt,
    cmd_delprompt,
    cmd_useprompt,
    cmd_history,
    cmd_show,
    handle_plain_message,
    build_conversation,
)

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    stream=sys.stdout,
)
# httpx logs every Telegram long-poll request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


async def _set_commands(app: Application) -> None:
    await app.bot.set_my_commands([
        BotCommand("hooks",     "Generate hooks (paste text or upload a file)"),
        BotCommand("thread",    "Turn hook <n> [<m>] into a thread [type]"),
        BotCommand("types",     "List thread types"),
        BotCommand("rewrite",   "Reply to a tweet: /rewrite <type> [fragment]"),
        BotCommand("prompts",   "List your custom prompts"),
        BotCommand("addprompt", "Save a prompt: name | description | system prompt"),
        BotCommand("editprompt", "Edit a prompt: <id> name | description | system prompt"),
        BotCommand("useprompt", "Use a custom prompt (<id> or off)"),
        BotCommand("delprompt", "Delete a custom prompt"),
        BotCommand("history",   "Last 10 sessions"),
        BotCommand("show",      "View a session by ID"),
        BotCommand("status",    "Show bot status"),
        BotCommand("help",      "Show all commands"),
        BotCommand("whoami",    "Show your Telegram ID"),
        BotCommand("cancel",    "Exit current mode"),
    ])


def main() -> None:
    # Initialize DB
    db.init_db()
    logger.info("Database initialized.")

    # Build the application
    app = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_init(_set_commands)
        .build()
    )

    # Register ConversationHandler first (higher priority)
    app.add_handler(build_conversation())

    # Register command handlers
    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("status", cmd_status))
    app.add_handler(CommandHandler("whoami", cmd_whoami))
    app.add_handler(CommandHandler("thread", cmd_thread))
    app.add_handler(CommandHandler("types", cmd_types))
    app.add_handler(CommandHandler("rewrite", cmd_rewrite))
    app.add_handler(CommandHandler("prompts", cmd_prompts))
    app.add_handler(CommandHandler("addprompt", cmd_addprompt))
    app.add_handler(CommandHandler("editprompt", cmd_editprompt))
    app.add_handler(CommandHandler("delprompt", cmd_delprompt))
    app.add_handler(CommandHandler("useprompt", cmd_useprompt))
    app.add_handler(CommandHandler("history", cmd_history))
    app.add_handler(CommandHandler("show", cmd_show))

    # Plain text outside /hooks
    app.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, handle_plain_message)
    )

    if settings.webhook_url:
        url_path = urlparse(settings.webhook_url).path or "/bot"
        logger.info("Webhook mode: %s (listening on port %d)", settings.webhook_url, settings.webhook_port)
        app.run_webhook(
            listen=settings.webhook_listen,
            port=settings.webhook_port,
            url_path=url_path,
            secret_token=settings.webhook_secret or None,
            webhook_url=settings.webhook_url,
            drop_pending_updates=True,
        )
    else:
        logger.info("Polling mode (set WEBHOOK_URL in .env to switch to webhook).")
        app.run_polling(drop_pending_updates=True)


if __name__ == "__main__":
    main()

"""Development runner with hot reload.

Watches the project's .py files and the packaged corpus JSON, and restarts
the bot when either changes.

Usage:
    python dev.py
"""
from watchfiles import run_process


def _run_bot():
    from main import main
    main()


def _watch_filter(change, path: str) -> bool:
    return path.endswith(".py") or path.endswith(".json")


if __name__ == "__main__":
    print("Dev mode: watching for .py/.json changes, bot will restart automatically.")
    run_process(
        ".",
        target=_run_bot,
        watch_filter=_watch_filter,
    )

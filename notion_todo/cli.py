"""Command-line entry points.

Usage:
    notion-todo "Buy milk"              # dated today
    notion-todo "Buy milk" 明日
    notion-todo "Buy milk" 12/31 --dry-run
    normalize-date 2024/1/5             # prints 2024-01-05

Configuration comes from the environment or ``.env`` (see
``notion_todo.core.settings``). Every failure (missing title or settings,
unparseable date, Notion error) prints one message and exits with status 1.
Unknown options are reported by argparse with status 2.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from notion_todo.core.logging import setup_logging
from notion_todo.core.settings import Settings, get_settings
from notion_todo.normalization.date_normalizer import DateNormalizer
from notion_todo.normalization.result import describe_error
from notion_todo.notion.client import NotionClient, NotionError
from notion_todo.notion.payloads import build_todo_payload

logger = logging.getLogger(__name__)

_MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "missing_title": "ERROR: タイトルを指定してください",
        "missing_token": "ERROR: NOTION_TOKENが設定されていません",
        "missing_database": "ERROR: NOTION_TASK_DATABASE_IDが設定されていません",
        "sending": "リクエスト送信中...",
        "created": "Todo を作成しました: {title}",
        "date": "日付: {date}",
        "failed": "エラーが発生しました:",
    },
    "en": {
        "missing_title": "ERROR: Please specify a title",
        "missing_token": "ERROR: NOTION_TOKEN is not set",
        "missing_database": "ERROR: NOTION_TASK_DATABASE_ID is not set",
        "sending": "Sending request...",
        "created": "Created todo: {title}",
        "date": "Date: {date}",
        "failed": "An error occurred:",
    },
}


def _messages(settings: Settings) -> dict[str, str]:
    return _MESSAGES.get(settings.date_language, _MESSAGES["ja"])


def _build_normalizer(settings: Settings, *, allow_offset: bool | None = None) -> DateNormalizer:
    """Return the configured normalizer; *allow_offset* overrides the setting.

    Raises ``OSError`` or ``ValueError`` when ``DATE_KEYWORDS_FILE`` cannot
    be loaded.
    """
    normalizer = DateNormalizer.from_settings(settings)
    if allow_offset is not None and allow_offset != normalizer.allow_offset:
        normalizer = DateNormalizer(
            keywords=normalizer.keywords,
            language=normalizer.language,
            allow_offset=allow_offset,
        )
    return normalizer


def _resolve_date(
    settings: Settings,
    raw: str | None,
    *,
    default_to_today: bool,
    allow_offset: bool | None = None,
) -> tuple[str | None, str | None]:
    """Return ``(date, None)`` on success or ``(None, message)`` on failure."""
    try:
        normalizer = _build_normalizer(settings, allow_offset=allow_offset)
    except (OSError, ValueError) as exc:
        return None, f"ERROR: {exc}"

    result = normalizer.process(raw, default_to_today)
    if not result.ok:
        return None, describe_error(result.error, settings.date_language)
    return result.value, None


def _build_todo_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-todo",
        description="Create a to-do page in a Notion database.",
    )
    parser.add_argument("title", nargs="?", default=None, help="Page title")
    parser.add_argument(
        "date",
        nargs="?",
        default=None,
        help="Date: YYYY-MM-DD, YYYY/M/D, M/D, today, tomorrow, 明日, ... (default: today)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the request body instead of sending it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``notion-todo``."""
    args = _build_todo_parser().parse_args(argv)

    setup_logging()
    settings = get_settings()
    messages = _messages(settings)

    if not args.title:
        print(messages["missing_title"])
        return 1

    if not args.dry_run:
        if not settings.notion_token:
            print(messages["missing_token"])
            return 1
        if not settings.notion_task_database_id:
            print(messages["missing_database"])
            return 1

    start_date, error = _resolve_date(
        settings, args.date, default_to_today=settings.date_default_to_today
    )
    if error is not None:
        print(error)
        return 1

    if args.dry_run:
        payload = build_todo_payload(
            settings.notion_task_database_id or "",
            args.title,
            start_date,
            title_property=settings.notion_title_property,
            date_property=settings.notion_date_property,
        )
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    print(messages["sending"])
    try:
        NotionClient().create_todo(args.title, start_date)
    except NotionError as exc:
        logger.debug("create_todo failed: %s", type(exc).__name__)
        print(messages["failed"])
        print(exc)
        return 1

    print(messages["created"].format(title=args.title))
    print(messages["date"].format(date=start_date))
    return 0


def _build_normalize_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="normalize-date",
        description="Print a date expression in YYYY-MM-DD form.",
    )
    parser.add_argument("date", nargs="?", default=None, help="Date expression")
    parser.add_argument(
        "--no-default",
        action="store_true",
        help="Fail instead of using today when no date is given",
    )
    parser.add_argument(
        "--allow-offset",
        action="store_true",
        default=None,
        help="Accept +N for N days from today",
    )
    return parser


def normalize_main(argv: list[str] | None = None) -> int:
    """Entry point for ``normalize-date``."""
    args = _build_normalize_parser().parse_args(argv)

    setup_logging()
    settings = get_settings()

    default_to_today = settings.date_default_to_today and not args.no_default
    normalized, error = _resolve_date(
        settings,
        args.date,
        default_to_today=default_to_today,
        allow_offset=args.allow_offset,
    )
    if error is not None:
        print(error)
        return 1

    print(normalized)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Date normalizer.

Converts a loosely written date string to canonical ``YYYY-MM-DD``.

Rules applied in order (first match wins)
-----------------------------------------
1. Already canonical ``YYYY-MM-DD`` — returned unchanged.
2. ``YYYY-M-D`` / ``YYYY/M/D`` — month and day left-padded to two digits.
3. ``M-D`` / ``M/D`` — current year prepended, month and day padded.
4. Exact keyword from the keyword table (``today``, ``明日``, …).
5. ``+N`` — today plus *N* days.  Only when ``allow_offset`` is set.

Padding is textual: ``2023-13-45`` is returned as-is.  Calendar validity
is the caller's concern.

Only ASCII digits are accepted, so every returned value matches
``[0-9]{4}-[0-9]{2}-[0-9]{2}``.

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from datetime import date, timedelta
from typing import TYPE_CHECKING

from notion_todo.normalization.keywords import (
    DEFAULT_KEYWORDS,
    KeywordTable,
    load_keyword_table,
)
from notion_todo.normalization.result import (
    DateResult,
    EmptyDate,
    InvalidFormat,
)

if TYPE_CHECKING:
    from notion_todo.core.settings import Settings

logger = logging.getLogger(__name__)

# A rule receives the raw text and the clock reading for this call.
DateRule = Callable[[str, date], str | None]

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_CANONICAL_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_FULL_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})", re.ASCII)
_MONTH_DAY_RE = re.compile(r"(\d{1,2})-(\d{1,2})", re.ASCII)
# timedelta caps days at 999_999_999; longer runs cannot be an offset
_OFFSET_RE = re.compile(r"\+(\d{1,9})", re.ASCII)

# ---------------------------------------------------------------------------
# Error messages
# ---------------------------------------------------------------------------

_FORMAT_STATEMENTS: dict[str, str] = {
    "ja": "エラー: 日付は YYYY-MM-DD、YYYY/MM/DD、MM-DD、MM/DD 形式、"
    "または 今日・明日 などのキーワードで入力してください",
    "en": "Error: enter the date as YYYY-MM-DD, YYYY/MM/DD, MM-DD or MM/DD, "
    "or as a keyword such as today or tomorrow",
}

_OFFSET_STATEMENTS: dict[str, str] = {
    "ja": "（+N で N 日後も指定できます）",
    "en": " (or +N for N days from today)",
}

_EXAMPLE_PREFIXES: dict[str, str] = {
    "ja": "例: ",
    "en": "Examples: ",
}

_EXAMPLES: dict[str, tuple[str, ...]] = {
    "ja": ("2023-12-31", "2023/12/31", "12-31", "12/31", "today", "tomorrow", "今日", "明日", "明後日"),
    "en": ("2023-12-31", "2023/12/31", "12-31", "12/31", "today", "tomorrow", "day after tomorrow"),
}

_DEFAULT_LANGUAGE = "ja"


def invalid_format_message(language: str = _DEFAULT_LANGUAGE, *, allow_offset: bool = False) -> str:
    """Return the two-line "accepted formats + examples" message."""
    if language not in _FORMAT_STATEMENTS:
        language = _DEFAULT_LANGUAGE

    statement = _FORMAT_STATEMENTS[language]
    examples = list(_EXAMPLES[language])
    if allow_offset:
        statement += _OFFSET_STATEMENTS[language]
        examples.append("+3")

    return f"{statement}\n{_EXAMPLE_PREFIXES[language]}{', '.join(examples)}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_date(value: date) -> str:
    """Return *value* as ``YYYY-MM-DD``."""
    return value.isoformat()


def _pad(part: str) -> str:
    return part if len(part) >= 2 else f"0{part}"


def _shift(today: date, days: int) -> str | None:
    try:
        return format_date(today + timedelta(days=days))
    except OverflowError:
        logger.debug("date_normalizer: offset of %d days leaves the supported range", days)
        return None


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------


def canonical_rule(text: str, today: date) -> str | None:
    if _CANONICAL_RE.fullmatch(text):
        return text
    return None


def full_date_rule(text: str, today: date) -> str | None:
    match = _FULL_DATE_RE.fullmatch(text.replace("/", "-"))
    if match is None:
        return None
    year, month, day = match.groups()
    return f"{year}-{_pad(month)}-{_pad(day)}"


def month_day_rule(text: str, today: date) -> str | None:
    match = _MONTH_DAY_RE.fullmatch(text.replace("/", "-"))
    if match is None:
        return None
    month, day = match.groups()
    return f"{today.year:04d}-{_pad(month)}-{_pad(day)}"


def offset_rule(text: str, today: date) -> str | None:
    match = _OFFSET_RE.fullmatch(text)
    if match is None:
        return None
    return _shift(today, int(match.group(1)))


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class DateNormalizer:
    """Configured date normalizer.

    Parameters
    ----------
    keywords:
        Keyword table for relative dates.  Defaults to ``DEFAULT_KEYWORDS``.
    language:
        Language of error messages, ``"ja"`` or ``"en"``.  Anything else
        falls back to ``"ja"``.
    allow_offset:
        Accept ``+N`` as "N days from today".
    extra_rules:
        Additional rules tried after the built-in ones, in order.

    Instances hold no mutable state and may be shared across threads.
    """

    def __init__(
        self,
        *,
        keywords: KeywordTable = DEFAULT_KEYWORDS,
        language: str = _DEFAULT_LANGUAGE,
        allow_offset: bool = False,
        extra_rules: Sequence[DateRule] = (),
    ) -> None:
        self.keywords = keywords
        self.language = language
        self.allow_offset = allow_offset

        rules: list[DateRule] = [
            canonical_rule,
            full_date_rule,
            month_day_rule,
            self._keyword_rule,
        ]
        if allow_offset:
            rules.append(offset_rule)
        rules.extend(extra_rules)
        self._rules: tuple[DateRule, ...] = tuple(rules)

    @classmethod
    def from_settings(cls, settings: Settings) -> DateNormalizer:
        """Build a normalizer from a ``Settings`` instance.

        Raises ``OSError`` or ``ValueError`` if ``DATE_KEYWORDS_FILE`` is set
        but cannot be loaded.
        """
        keywords = DEFAULT_KEYWORDS
        if settings.date_keywords_file:
            keywords = load_keyword_table(settings.date_keywords_file)
        return cls(
            keywords=keywords,
            language=settings.date_language,
            allow_offset=settings.date_allow_offset,
        )

    def _keyword_rule(self, text: str, today: date) -> str | None:
        offset = self.keywords.offset_for(text)
        if offset is None:
            return None
        return _shift(today, offset)

    # -- public API ---------------------------------------------------------

    def normalize(self, raw: str | None, *, today: date | None = None) -> str | None:
        """Return *raw* as ``YYYY-MM-DD``, or ``None`` if no rule matches.

        ``None`` input returns ``None``.  An empty string is a present
        input and matches the ``""`` keyword (today).  Never raises for
        malformed input.
        """
        if raw is None:
            return None
        if today is None:
            today = date.today()

        for rule in self._rules:
            normalized = rule(raw, today)
            if normalized is not None:
                return normalized

        logger.debug("date_normalizer: no rule matched input (length=%d)", len(raw))
        return None

    def process(
        self,
        raw: str | None,
        default_to_today: bool = True,
        *,
        today: date | None = None,
    ) -> DateResult:
        """Resolve *raw* to a ``DateResult``.

        Parameters
        ----------
        raw:
            Date text from the caller.  ``None``, empty and whitespace-only
            values count as "no input".
        default_to_today:
            With no input, succeed with today's date when ``True``, or fail
            with ``EmptyDate`` when ``False``.
        today:
            Clock reading for this call.  Defaults to ``date.today()``
            (local calendar), read once.

        Returns
        -------
        DateResult
            ``value`` set on success; ``error`` set to ``InvalidFormat`` or
            ``EmptyDate`` on failure.  Never raises for malformed input.
        """
        if today is None:
            today = date.today()

        if raw is None or not raw.strip():
            if default_to_today:
                return DateResult.success(format_date(today))
            return DateResult.failure(EmptyDate())

        normalized = self.normalize(raw, today=today)
        if normalized is not None:
            return DateResult.success(normalized)

        return DateResult.failure(
            InvalidFormat(invalid_format_message(self.language, allow_offset=self.allow_offset))
        )


# ---------------------------------------------------------------------------
# Module-level shortcuts
# ---------------------------------------------------------------------------

_DEFAULT_NORMALIZER = DateNormalizer()


def normalize_date(raw: str | None, *, today: date | None = None) -> str | None:
    """Normalize *raw* with the default keyword table; ``None`` if unparseable."""
    return _DEFAULT_NORMALIZER.normalize(raw, today=today)


def process_date(
    raw: str | None,
    default_to_today: bool = True,
    *,
    today: date | None = None,
    language: str = _DEFAULT_LANGUAGE,
) -> DateResult:
    """Process *raw* with the default keyword table.  See ``DateNormalizer.process``."""
    normalizer = _DEFAULT_NORMALIZER
    if language != normalizer.language:
        normalizer = DateNormalizer(language=language)
    return normalizer.process(raw, default_to_today, today=today)

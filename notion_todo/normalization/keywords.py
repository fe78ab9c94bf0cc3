"""Relative-date keyword table.

Maps exact keyword strings (English and Japanese) to a day offset from
today.  Lookups are exact and case-sensitive: ``"Today"`` is not
``"today"``.

Extra keywords can be supplied in a YAML file, either as a flat mapping::

    next week: 7
    来週: 7

or nested under a ``keywords`` key.  Loaded entries are merged over
``DEFAULT_KEYWORDS``.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import yaml

_TODAY_WORDS = ("today", "今日", "今", "")
_TOMORROW_WORDS = ("tomorrow", "明日", "あした", "あす")
_DAY_AFTER_TOMORROW_WORDS = ("day after tomorrow", "明後日", "あさって")


@dataclass(frozen=True)
class KeywordTable:
    """Immutable keyword → day offset mapping."""

    offsets: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))

    def offset_for(self, text: str) -> int | None:
        """Return the day offset for *text*, or ``None`` if it is not a keyword."""
        return self.offsets.get(text)

    def merged(self, other: KeywordTable | Mapping[str, int]) -> KeywordTable:
        """Return a new table with *other*'s entries layered over this one."""
        extra = other.offsets if isinstance(other, KeywordTable) else other
        return KeywordTable({**self.offsets, **extra})

    def __contains__(self, text: object) -> bool:
        return text in self.offsets

    def __len__(self) -> int:
        return len(self.offsets)


def _build_default() -> KeywordTable:
    offsets: dict[str, int] = {}
    for words, offset in (
        (_TODAY_WORDS, 0),
        (_TOMORROW_WORDS, 1),
        (_DAY_AFTER_TOMORROW_WORDS, 2),
    ):
        for word in words:
            offsets[word] = offset
    return KeywordTable(offsets)


DEFAULT_KEYWORDS: KeywordTable = _build_default()


def load_keyword_table(
    path: str | Path,
    *,
    base: KeywordTable = DEFAULT_KEYWORDS,
) -> KeywordTable:
    """Load extra keywords from a YAML file and merge them over *base*.

    Raises
    ------
    ValueError
        If the file is not valid YAML, the document is not a mapping, or an
        offset is not an integer.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc

    if isinstance(data, dict) and "keywords" in data:
        data = data["keywords"]

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a YAML mapping, got {type(data).__name__}")

    offsets: dict[str, int] = {}
    for keyword, offset in data.items():
        # bool is an int subclass; "tomorrow: yes" is a typo, not an offset
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise ValueError(
                f"{path}: offset for {keyword!r} must be an integer, got {offset!r}"
            )
        offsets[str(keyword)] = offset

    return base.merged(offsets)

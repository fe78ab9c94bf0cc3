"""Normalization package.

Turns loosely written date input into the canonical ``YYYY-MM-DD`` form
that is sent as the ``start`` value of a Notion date property.

Two entry points live in :mod:`notion_todo.normalization.date_normalizer`::

    def normalize_date(raw: str | None, *, today: date | None = None) -> str | None:
        ...

    def process_date(raw: str | None, default_to_today: bool = True) -> DateResult:
        ...

``normalize_date`` returns ``None`` when no rule matches.  ``process_date``
wraps that in a typed ``DateResult`` carrying either the date or a
``DateError``.  Neither raises for malformed input.
"""

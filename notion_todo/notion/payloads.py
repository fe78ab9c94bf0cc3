"""Request bodies for the Notion ``POST /v1/pages`` endpoint."""
from __future__ import annotations


def build_todo_payload(
    database_id: str,
    title: str,
    start_date: str,
    *,
    title_property: str = "Title",
    date_property: str = "Date",
) -> dict:
    """Return the JSON body that creates one to-do page.

    *start_date* is embedded verbatim as the ``start`` of the date
    property; callers pass a value already normalized to ``YYYY-MM-DD``.
    """
    return {
        "parent": {"database_id": database_id},
        "properties": {
            title_property: {
                "title": [
                    {
                        "text": {
                            "content": title,
                        }
                    }
                ]
            },
            date_property: {
                "date": {
                    "start": start_date,
                }
            },
        },
    }

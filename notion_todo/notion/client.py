"""Notion API client wrapper.

Wraps the Notion REST API (``POST /v1/pages``) with:

- **Config gate**: a missing token or database ID raises
  ``NotionConfigError`` before any request is sent.
- **Error mapping**: timeouts, connection failures and error responses
  are raised as the exceptions below, chained to the ``httpx`` cause.
- **Secret safety**: the token is only ever placed in the
  ``Authorization`` header, never in log messages.

The client uses ``httpx`` for synchronous HTTP calls; one invocation of
the CLI sends exactly one request.
"""
from __future__ import annotations

import logging

import httpx

from notion_todo.core.settings import get_settings
from notion_todo.notion.payloads import build_todo_payload

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Custom exceptions
# ---------------------------------------------------------------------------


class NotionError(Exception):
    """Base class for Notion client failures."""


class NotionConfigError(NotionError, ValueError):
    """Raised when the token or database ID is not configured."""


class NotionConnectionError(NotionError, ConnectionError):
    """Raised when the Notion API is unreachable."""


class NotionTimeoutError(NotionError, TimeoutError):
    """Raised when the request exceeds the configured timeout."""


class NotionAPIError(NotionError, RuntimeError):
    """Raised when Notion answers with an error response."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# ---------------------------------------------------------------------------
# NotionClient
# ---------------------------------------------------------------------------


class NotionClient:
    """Synchronous client for creating pages in a Notion database.

    Parameters
    ----------
    token:
        Integration token.  Defaults to ``settings.notion_token``.
    base_url:
        API base URL.  Defaults to ``settings.notion_api_url``.
    version:
        ``Notion-Version`` header value.  Defaults to
        ``settings.notion_version``.
    timeout_s:
        Request timeout in seconds.  Defaults to
        ``settings.notion_timeout_s``.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str | None = None,
        version: str | None = None,
        timeout_s: int | None = None,
    ) -> None:
        settings = get_settings()
        self.token = token or settings.notion_token
        self.base_url = (base_url or settings.notion_api_url).rstrip("/")
        self.version = version or settings.notion_version
        self.timeout_s = timeout_s if timeout_s is not None else settings.notion_timeout_s

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Notion-Version": self.version,
        }

    # -- public API ---------------------------------------------------------

    def create_page(self, payload: dict) -> dict:
        """POST *payload* to ``/pages`` and return the decoded response.

        Raises
        ------
        NotionConfigError
            If no token is configured.
        NotionTimeoutError
            If the request exceeds the configured timeout.
        NotionConnectionError
            If the API is unreachable.
        NotionAPIError
            If the API answers with a non-2xx status or an error object.
        """
        if not self.token:
            raise NotionConfigError("NOTION_TOKEN is not set")

        try:
            response = httpx.post(
                f"{self.base_url}/pages",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise NotionTimeoutError(
                f"Notion request timed out after {self.timeout_s}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise NotionConnectionError(
                f"Cannot connect to Notion at {self.base_url}"
            ) from exc

        if response.is_error:
            logger.warning("Notion API returned status %d", response.status_code)
            raise NotionAPIError(
                f"Notion API error {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise NotionAPIError(
                "Notion API returned a non-JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if isinstance(data, dict) and data.get("object") == "error":
            raise NotionAPIError(
                f"Notion API error: {data.get('message', response.text)}",
                status_code=data.get("status", response.status_code),
                body=response.text,
            )

        return data

    def create_todo(
        self,
        title: str,
        start_date: str,
        *,
        database_id: str | None = None,
    ) -> dict:
        """Create a to-do page titled *title* dated *start_date*.

        *database_id* defaults to ``settings.notion_task_database_id``.
        Property names come from ``NOTION_TITLE_PROPERTY`` and
        ``NOTION_DATE_PROPERTY``.  Raises the same errors as
        :meth:`create_page`, plus ``NotionConfigError`` when no database
        ID is configured.
        """
        settings = get_settings()
        database_id = database_id or settings.notion_task_database_id
        if not database_id:
            raise NotionConfigError("NOTION_TASK_DATABASE_ID is not set")

        payload = build_todo_payload(
            database_id,
            title,
            start_date,
            title_property=settings.notion_title_property,
            date_property=settings.notion_date_property,
        )
        logger.info("Creating Notion to-do dated %s", start_date)
        return self.create_page(payload)

"""Tests for the Notion integration package.

All network calls are mocked via ``unittest.mock.patch`` on ``httpx``.
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from notion_todo.notion.client import (
    NotionAPIError,
    NotionClient,
    NotionConfigError,
    NotionConnectionError,
    NotionError,
    NotionTimeoutError,
)
from notion_todo.notion.payloads import build_todo_payload


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def _configured(monkeypatch: pytest.MonkeyPatch):
    """Provide a token and database ID via environment."""
    monkeypatch.setenv("NOTION_TOKEN", "secret_testtoken123")
    monkeypatch.setenv("NOTION_TASK_DATABASE_ID", "db-123")
    from notion_todo.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_error = status_code >= 400
    response.text = text
    response.json.return_value = json_data if json_data is not None else {"object": "page", "id": "p1"}
    return response


# ===========================================================================
# Payload
# ===========================================================================


class TestBuildTodoPayload:
    def test_shape(self) -> None:
        payload = build_todo_payload("db-1", "Buy milk", "2024-03-15")
        assert payload == {
            "parent": {"database_id": "db-1"},
            "properties": {
                "Title": {"title": [{"text": {"content": "Buy milk"}}]},
                "Date": {"date": {"start": "2024-03-15"}},
            },
        }

    def test_custom_property_names(self) -> None:
        payload = build_todo_payload(
            "db-1", "牛乳を買う", "2024-03-15", title_property="名前", date_property="期日"
        )
        assert payload["properties"]["名前"]["title"][0]["text"]["content"] == "牛乳を買う"
        assert payload["properties"]["期日"]["date"]["start"] == "2024-03-15"

    def test_start_date_embedded_verbatim(self) -> None:
        payload = build_todo_payload("db-1", "x", "2023-13-45")
        assert payload["properties"]["Date"]["date"]["start"] == "2023-13-45"


# ===========================================================================
# NotionClient
# ===========================================================================


class TestNotionClientDefaults:
    @pytest.mark.usefixtures("_configured")
    def test_reads_settings(self) -> None:
        client = NotionClient()
        assert client.token == "secret_testtoken123"
        assert client.base_url == "https://api.notion.com/v1"
        assert client.version == "2022-06-28"
        assert client.timeout_s == 30

    def test_explicit_arguments_win(self) -> None:
        client = NotionClient("tok", base_url="http://localhost:9000/v1/", version="2025-01-01", timeout_s=5)
        assert client.token == "tok"
        assert client.base_url == "http://localhost:9000/v1"
        assert client.version == "2025-01-01"
        assert client.timeout_s == 5


class TestNotionClientCreateTodo:
    @pytest.mark.usefixtures("_configured")
    def test_posts_payload_with_headers(self) -> None:
        with patch("notion_todo.notion.client.httpx.post", return_value=_response()) as mock_post:
            data = NotionClient().create_todo("Buy milk", "2024-03-15")

        assert data == {"object": "page", "id": "p1"}
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.notion.com/v1/pages"
        assert kwargs["headers"] == {
            "Authorization": "Bearer secret_testtoken123",
            "Content-Type": "application/json",
            "Notion-Version": "2022-06-28",
        }
        assert kwargs["json"]["parent"] == {"database_id": "db-123"}
        assert kwargs["json"]["properties"]["Date"]["date"]["start"] == "2024-03-15"
        assert kwargs["timeout"] == 30

    @pytest.mark.usefixtures("_configured")
    def test_property_names_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTION_DATE_PROPERTY", "Due")
        from notion_todo.core.settings import get_settings

        get_settings.cache_clear()
        with patch("notion_todo.notion.client.httpx.post", return_value=_response()) as mock_post:
            NotionClient().create_todo("x", "2024-03-15")
        assert "Due" in mock_post.call_args.kwargs["json"]["properties"]

    @pytest.mark.usefixtures("_configured")
    def test_explicit_database_id(self) -> None:
        with patch("notion_todo.notion.client.httpx.post", return_value=_response()) as mock_post:
            NotionClient().create_todo("x", "2024-03-15", database_id="other-db")
        assert mock_post.call_args.kwargs["json"]["parent"] == {"database_id": "other-db"}

    def test_missing_token_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOTION_TASK_DATABASE_ID", "db-123")
        with patch("notion_todo.notion.client.httpx.post") as mock_post:
            with pytest.raises(NotionConfigError, match="NOTION_TOKEN"):
                NotionClient().create_todo("x", "2024-03-15")
        mock_post.assert_not_called()

    def test_missing_database_raises(self) -> None:
        with patch("notion_todo.notion.client.httpx.post") as mock_post:
            with pytest.raises(NotionConfigError, match="NOTION_TASK_DATABASE_ID"):
                NotionClient("tok").create_todo("x", "2024-03-15")
        mock_post.assert_not_called()


class TestNotionClientErrors:
    @pytest.mark.usefixtures("_configured")
    def test_timeout(self) -> None:
        with patch(
            "notion_todo.notion.client.httpx.post",
            side_effect=httpx.ReadTimeout("slow"),
        ):
            with pytest.raises(NotionTimeoutError, match="timed out after 30s"):
                NotionClient().create_todo("x", "2024-03-15")

    @pytest.mark.usefixtures("_configured")
    def test_connection_error(self) -> None:
        with patch(
            "notion_todo.notion.client.httpx.post",
            side_effect=httpx.ConnectError("refused"),
        ):
            with pytest.raises(NotionConnectionError, match="Cannot connect"):
                NotionClient().create_todo("x", "2024-03-15")

    @pytest.mark.usefixtures("_configured")
    def test_http_error_status(self) -> None:
        body = '{"object":"error","status":401,"code":"unauthorized","message":"API token is invalid."}'
        with patch(
            "notion_todo.notion.client.httpx.post",
            return_value=_response(401, text=body),
        ):
            with pytest.raises(NotionAPIError) as exc_info:
                NotionClient().create_todo("x", "2024-03-15")
        assert exc_info.value.status_code == 401
        assert exc_info.value.body == body

    @pytest.mark.usefixtures("_configured")
    def test_error_object_in_ok_response(self) -> None:
        error = {"object": "error", "status": 400, "message": "validation failed"}
        with patch(
            "notion_todo.notion.client.httpx.post",
            return_value=_response(200, json_data=error, text="{}"),
        ):
            with pytest.raises(NotionAPIError, match="validation failed") as exc_info:
                NotionClient().create_todo("x", "2024-03-15")
        assert exc_info.value.status_code == 400

    @pytest.mark.usefixtures("_configured")
    def test_non_json_response(self) -> None:
        response = _response(200, text="<html>")
        response.json.side_effect = ValueError("no json")
        with patch("notion_todo.notion.client.httpx.post", return_value=response):
            with pytest.raises(NotionAPIError, match="non-JSON"):
                NotionClient().create_todo("x", "2024-03-15")

    def test_errors_share_base_class(self) -> None:
        for cls in (NotionAPIError, NotionConfigError, NotionConnectionError, NotionTimeoutError):
            assert issubclass(cls, NotionError)
        assert issubclass(NotionTimeoutError, TimeoutError)
        assert issubclass(NotionConnectionError, ConnectionError)

from datetime import date

import pytest

_ENV_VARS = (
    "NOTION_TOKEN",
    "NOTION_TASK_DATABASE_ID",
    "NOTION_API_URL",
    "NOTION_VERSION",
    "NOTION_TIMEOUT_S",
    "NOTION_TITLE_PROPERTY",
    "NOTION_DATE_PROPERTY",
    "LOG_LEVEL",
    "DATE_LANGUAGE",
    "DATE_DEFAULT_TO_TODAY",
    "DATE_ALLOW_OFFSET",
    "DATE_KEYWORDS_FILE",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Isolate every test from the caller's environment and ``.env`` file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    from notion_todo.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def today() -> date:
    """A fixed clock reading for deterministic date tests."""
    return date(2024, 3, 15)

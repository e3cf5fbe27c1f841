import os

import pytest

from androidutils.env_settings import get_settings
from androidutils.tasks import shutdown_executor


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that need network access")


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    # Keep developer .env / ANDROIDUTILS_* values out of the tests.
    for key in list(os.environ):
        if key.startswith("ANDROIDUTILS_") and key != "ANDROIDUTILS_LIVE_TESTS":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("androidutils.env_settings.load_dotenv", lambda *a, **k: False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    shutdown_executor()


def _is_live_enabled() -> bool:
    return bool(os.getenv("ANDROIDUTILS_LIVE_TESTS"))


@pytest.fixture(scope="session")
def live_enabled():
    return _is_live_enabled

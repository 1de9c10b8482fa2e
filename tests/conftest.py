"""Shared pytest fixtures for result-envelope test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from result_envelope.core.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate each test from environment-driven settings."""
    for name in (
        "RESULT_ENVELOPE_INCLUDE_ROOT_SEGMENT",
        "RESULT_ENVELOPE_GLOBAL_ERROR_KEY",
        "RESULT_ENVELOPE_DEFAULT_ERROR_MESSAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app() -> FastAPI:
    """Provide a FastAPI app with the result error handlers installed."""
    from result_envelope.core.errors import register_error_handlers

    application = FastAPI()
    register_error_handlers(application)
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide an API test client for contract suites."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

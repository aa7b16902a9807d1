import pytest
from fastapi.testclient import TestClient

import gemini_chat
from app import create_app
from tests.upstream import TEST_BASE_URL, TEST_MODEL, TEST_TIMEOUT_SECONDS, UpstreamStub


@pytest.fixture
def upstream(monkeypatch):
    stub = UpstreamStub()
    monkeypatch.setenv("GEMINI_API_BASE_URL", TEST_BASE_URL)
    monkeypatch.setenv("GEMINI_MODEL", TEST_MODEL)
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", TEST_TIMEOUT_SECONDS)
    monkeypatch.setattr(gemini_chat, "_build_client", stub.build_client)
    return stub


@pytest.fixture
def client(upstream):
    with TestClient(create_app()) as test_client:
        yield test_client

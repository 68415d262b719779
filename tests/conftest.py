from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import ai_nodes
from api_main import app
from config import Settings, get_settings


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env and OPENAI_* env vars."""
    values = {
        "OPENAI_API_KEY": "sk-test",
        "OPENAI_KEY": None,
        "OPENAI": None,
        "ENV": "local",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeLLM:
    """Stands in for the bound ChatOpenAI runnable; records every call."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_llm(monkeypatch):
    def install(content=None, error=None) -> FakeLLM:
        fake = FakeLLM(content=content, error=error)
        monkeypatch.setattr(ai_nodes, "_json_llm", lambda settings, temperature=0.3: fake)
        monkeypatch.setattr(ai_nodes, "_text_llm", lambda settings, temperature=0.4: fake)
        return fake

    return install


@pytest.fixture
def use_settings():
    def install(**overrides) -> Settings:
        s = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: s
        return s

    install()
    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client(use_settings):
    return TestClient(app)

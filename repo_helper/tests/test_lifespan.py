import pytest
from fastapi import FastAPI

from repo_helper.config.config import settings
from repo_helper.main import lifespan


@pytest.fixture
def github_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "github_token", "test-token")
    monkeypatch.setattr(settings, "github_repo", "octocat/hello-world")
    return settings


class TestLifespan:
    async def test_builds_client_when_configured(self, github_settings):
        app = FastAPI()
        async with lifespan(app):
            client = app.state.github_client
            assert client is not None
            assert client.repo == "octocat/hello-world"
        assert client._http.is_closed

    async def test_no_client_without_token(self, monkeypatch: pytest.MonkeyPatch, github_settings):
        monkeypatch.setattr(settings, "github_token", "")
        app = FastAPI()
        async with lifespan(app):
            assert app.state.github_client is None

    async def test_invalid_repo_fails_startup(self, monkeypatch: pytest.MonkeyPatch, github_settings):
        monkeypatch.setattr(settings, "github_repo", "not-a-repo")
        app = FastAPI()
        with pytest.raises(ValueError):
            async with lifespan(app):
                pass

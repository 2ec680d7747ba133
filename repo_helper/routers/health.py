from fastapi import APIRouter, Request
from pydantic import BaseModel

from repo_helper.adapters.github_client import GitHubClient
from repo_helper.config.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str


class GitHubStatusResponse(BaseModel):
    configured: bool
    repo: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=settings.app_version)


@router.get("/health/github", response_model=GitHubStatusResponse)
async def github_status(request: Request) -> GitHubStatusResponse:
    client: GitHubClient | None = getattr(request.app.state, "github_client", None)
    if client is None:
        return GitHubStatusResponse(configured=False)
    return GitHubStatusResponse(configured=True, repo=client.repo)

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from repo_helper.adapters.github_client import GitHubClient, create_github_client
from repo_helper.config.config import settings
from repo_helper.routers import health, repo

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ]
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # GitHub client is optional: only built when both token and repo are configured
    github_client: GitHubClient | None = None
    if settings.github_token and settings.github_repo:
        github_client = create_github_client(
            repo=settings.github_repo,
            token=settings.github_token,
            base_url=settings.github_api_url,
            api_version=settings.github_api_version,
            timeout=settings.github_timeout_seconds,
        )
        logger.info("github_client_configured", repo=settings.github_repo, base_url=settings.github_api_url)
    else:
        logger.warning("github_client_not_configured")
    app.state.github_client = github_client

    yield

    if github_client is not None:
        await github_client.close()
    logger.info("shutdown")


app = FastAPI(
    title="repo-helper",
    description="Thin GitHub repository and issue helper",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(repo.router)

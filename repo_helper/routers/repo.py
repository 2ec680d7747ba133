"""REST API router exposing the configured repository's GitHub data."""

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, status

from repo_helper.adapters.github_client import GitHubClient, GitHubClientError
from repo_helper.schemas.issues import GitHubErrorDetail, IssueCreateRequest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/repo", tags=["repo"])


def get_github_client(request: Request) -> GitHubClient:
    """FastAPI dependency that reads from app.state.github_client.

    Raises 503 when no token or repository was configured at startup.
    """
    client: GitHubClient | None = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub client not configured (set GITHUB_TOKEN and GITHUB_REPO)",
        )
    return client


def _bad_gateway(exc: GitHubClientError) -> HTTPException:
    detail = GitHubErrorDetail(message=str(exc), status_code=exc.status_code, reason=exc.reason)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail.model_dump())


@router.get("")
async def get_repo(client: Annotated[GitHubClient, Depends(get_github_client)]) -> dict[str, Any]:
    try:
        return await client.get_repo()
    except GitHubClientError as exc:
        logger.warning("github_repo_fetch_failed", repo=client.repo, status_code=exc.status_code)
        raise _bad_gateway(exc) from exc


@router.get("/issues")
async def list_issues(client: Annotated[GitHubClient, Depends(get_github_client)]) -> list[dict[str, Any]]:
    try:
        return await client.list_issues()
    except GitHubClientError as exc:
        logger.warning("github_issue_list_failed", repo=client.repo, status_code=exc.status_code)
        raise _bad_gateway(exc) from exc


@router.post("/issues", status_code=status.HTTP_201_CREATED)
async def create_issue(
    body: IssueCreateRequest,
    client: Annotated[GitHubClient, Depends(get_github_client)],
) -> dict[str, Any]:
    try:
        issue = await client.create_issue(body.title, body.body)
    except GitHubClientError as exc:
        logger.warning("github_issue_create_failed", repo=client.repo, status_code=exc.status_code)
        raise _bad_gateway(exc) from exc
    logger.info("github_issue_created", repo=client.repo, number=issue.get("number"))
    return issue

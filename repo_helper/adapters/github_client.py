"""HTTP adapter for the GitHub REST API v3, scoped to a single repository."""

import re
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"

_REPO_PATTERN = re.compile(r"[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+")


class GitHubClientError(Exception):
    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class GitHubClient:
    def __init__(
        self,
        repo: str,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 10.0,
    ) -> None:
        self._repo = repo
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
            "Authorization": f"Bearer {token}",
        }
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
        )

    @property
    def repo(self) -> str:
        return self._repo

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._http.is_closed:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Repository
    # ------------------------------------------------------------------

    async def get_repo(self) -> dict[str, Any]:
        """Fetch the repository metadata.

        Returns:
            The JSON object GitHub returns for ``GET /repos/{owner}/{name}``.

        Raises:
            GitHubClientError: On any non-2xx response.
        """
        resp = await self._request("GET", f"/repos/{self._repo}")
        return self._parse_object(resp)

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    async def list_issues(self) -> list[dict[str, Any]]:
        """List the repository's issues as returned by the first page of the endpoint."""
        resp = await self._request("GET", f"/repos/{self._repo}/issues")
        return self._parse_list(resp)

    async def create_issue(self, title: str, body: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": title}
        if body is not None:
            payload["body"] = body
        resp = await self._request("POST", f"/repos/{self._repo}/issues", json=payload)
        return self._parse_object(resp)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("github_request", method=method, path=path)
        resp = await self._http.request(method, path, **kwargs)
        self._raise_for_status(resp)
        return resp

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if not resp.is_success:
            logger.warning(
                "github_request_failed",
                method=resp.request.method,
                path=resp.request.url.path,
                status_code=resp.status_code,
            )
            raise GitHubClientError(
                f"GitHub API error {resp.status_code}: {resp.reason_phrase}",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )

    def _json(self, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubClientError(
                f"GitHub returned non-JSON body (status {resp.status_code}): {exc}",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            ) from exc

    def _parse_object(self, resp: httpx.Response) -> dict[str, Any]:
        data = self._json(resp)
        if not isinstance(data, dict):
            raise GitHubClientError(
                f"GitHub returned unexpected shape, expected object, got {type(data).__name__} (status {resp.status_code})",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )
        return data

    def _parse_list(self, resp: httpx.Response) -> list[dict[str, Any]]:
        data = self._json(resp)
        if not isinstance(data, list):
            raise GitHubClientError(
                f"GitHub returned unexpected shape, expected array, got {type(data).__name__} (status {resp.status_code})",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )
        return data


def create_github_client(
    repo: str,
    token: str,
    base_url: str = DEFAULT_BASE_URL,
    api_version: str = DEFAULT_API_VERSION,
    timeout: float = 10.0,
) -> GitHubClient:
    """Build a GitHubClient for ``repo`` authenticated with ``token``.

    Args:
        repo: Repository in ``owner/name`` format, e.g. ``octocat/hello-world``.
        token: Personal access or installation token, sent as a bearer token.

    Raises:
        ValueError: If ``repo`` is not ``owner/name`` or ``token`` is empty.
    """
    # "." and ".." segments would be collapsed by URL normalisation
    if not _REPO_PATTERN.fullmatch(repo) or any(part in (".", "..") for part in repo.split("/")):
        raise ValueError(f"Invalid repository identifier {repo!r}, expected 'owner/name'")
    if not token:
        raise ValueError("GitHub token must not be empty")
    return GitHubClient(repo=repo, token=token, base_url=base_url, api_version=api_version, timeout=timeout)

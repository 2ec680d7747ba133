import pytest

from repo_helper.adapters.github_client import GitHubClient, create_github_client


@pytest.fixture
async def github_client():
    """A GitHubClient for octocat/hello-world authenticated with ``test-token``, closed after the test."""
    client: GitHubClient = create_github_client(repo="octocat/hello-world", token="test-token")
    yield client
    await client.close()

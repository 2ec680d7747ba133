"""Pydantic schemas for the repository REST API."""

from pydantic import BaseModel, Field


class IssueCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    body: str | None = None


class GitHubErrorDetail(BaseModel):
    message: str
    status_code: int | None = None
    reason: str | None = None

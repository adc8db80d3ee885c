# model/issue.py
from pydantic import BaseModel, Field


class RequirementIn(BaseModel):
    title: str = ""
    description: str = ""
    userStory: str | None = None
    acceptanceCriteria: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class JiraIssueIn(BaseModel):
    key: str
    summary: str = ""
    id: str | None = None
    status: str | None = None
    url: str | None = None


class MatchIssuesRequest(BaseModel):
    requirement: RequirementIn
    issues: list[JiraIssueIn] = Field(default_factory=list)


class ScoredJiraIssueOut(JiraIssueIn):
    matchScore: float


class MatchIssuesResponse(BaseModel):
    matchText: str
    issues: list[ScoredJiraIssueOut]

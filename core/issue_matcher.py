# core/issue_matcher.py
from typing import Iterable, List
from core.entities import JiraIssue, RequirementFields, ScoredJiraIssue
from core.similarity import score


def build_match_text(fields: RequirementFields) -> str:
    """
    Space-join the non-blank of: title, description, user story,
    acceptance criteria, issues/notes. Order is fixed.
    """
    segments = [
        fields.title,
        fields.description,
        fields.user_story or "",
        " ".join(fields.acceptance_criteria),
        " ".join(fields.issues),
    ]
    return " ".join(s for s in segments if isinstance(s, str) and s.strip())


def issue_text(issue: JiraIssue) -> str:
    return f"{issue.key} {issue.summary}"


def score_issues(issues: Iterable[JiraIssue], match_text: str) -> List[ScoredJiraIssue]:
    """
    Attach `match_score` to every issue and sort descending.
    `sorted` is stable, so ties keep their input order.
    """
    scored = [
        ScoredJiraIssue(
            key=i.key,
            summary=i.summary,
            id=i.id,
            status=i.status,
            url=i.url,
            match_score=score(match_text, issue_text(i)),
        )
        for i in issues
    ]
    return sorted(scored, key=lambda s: s.match_score, reverse=True)

# core/entities.py
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple


class RequirementType(str, Enum):
    functional = "functional"
    non_functional = "non_functional"
    security = "security"
    performance = "performance"
    ux = "ux"
    unknown = "unknown"


class CandidateStatus(str, Enum):
    draft = "draft"
    low_confidence = "low_confidence"


class LineKind(str, Enum):
    ignored_header = "ignored_header"
    new_requirement = "new_requirement"
    continuation = "continuation"


@dataclass(frozen=True)
class OcrLine:
    text: str
    confidence: float  # [0, 1]
    page: int = 1  # 1-based page index
    type: RequirementType = RequirementType.unknown
    rationale: Optional[str] = None


@dataclass(frozen=True)
class OcrBatch:
    """
    All OCR lines for one document, in reading order.
    """

    document_id: str
    lines: Tuple[OcrLine, ...] = ()


@dataclass(frozen=True)
class RequirementCandidate:
    id: str
    document_id: str
    text: str
    confidence: float
    status: CandidateStatus
    page: int = 1
    type: RequirementType = RequirementType.unknown
    rationale: Optional[str] = None


@dataclass(frozen=True)
class DedupeCandidate:
    id: str
    text: str


@dataclass(frozen=True)
class DuplicateGroup:
    representative_id: str
    member_ids: FrozenSet[str]

    @property
    def duplicate_ids(self) -> List[str]:
        """Members other than the representative, sorted."""
        return sorted(m for m in self.member_ids if m != self.representative_id)


@dataclass(frozen=True)
class JiraIssue:
    key: str
    summary: str
    id: Optional[str] = None
    status: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class ScoredJiraIssue(JiraIssue):
    match_score: float = 0.0


@dataclass(frozen=True)
class RequirementFields:
    title: str = ""
    description: str = ""
    user_story: Optional[str] = None
    acceptance_criteria: Tuple[str, ...] = field(default_factory=tuple)
    issues: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PageSummary:
    page: int
    candidate_count: int
    confidence_avg: Optional[float]
    text: Optional[str]

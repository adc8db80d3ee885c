# model/candidate.py
from pydantic import BaseModel, Field
from core.entities import CandidateStatus, RequirementType


class OcrLineIn(BaseModel):
    text: str
    confidence: float = Field(ge=0.0, le=1.0)
    page: int = Field(default=1, ge=1)
    type: RequirementType = RequirementType.unknown
    rationale: str | None = None


class NormalizeCandidatesRequest(BaseModel):
    lines: list[OcrLineIn] = Field(default_factory=list)
    confidenceThreshold: float | None = None


class Candidate(BaseModel):
    id: str
    documentId: str
    text: str
    confidence: float
    status: CandidateStatus
    page: int
    type: RequirementType
    rationale: str | None = None


class PageSummaryOut(BaseModel):
    page: int
    candidateCount: int
    confidenceAvg: float | None = None
    text: str | None = None


class NormalizeCandidatesResponse(BaseModel):
    documentId: str
    candidates: list[Candidate]
    pages: list[PageSummaryOut]


class DedupeCandidateIn(BaseModel):
    id: str = Field(min_length=1)
    text: str
    # Absent status means the caller already filtered to reviewable ones
    status: str | None = None


class GroupDuplicatesRequest(BaseModel):
    candidates: list[DedupeCandidateIn] = Field(default_factory=list)
    threshold: float | None = None
    minLength: int | None = Field(default=None, ge=0)


class DuplicateGroupOut(BaseModel):
    representativeId: str
    memberIds: list[str]
    duplicates: list[str]


class GroupDuplicatesResponse(BaseModel):
    documentId: str
    duplicates: list[DuplicateGroupOut]

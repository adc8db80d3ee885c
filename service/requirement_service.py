# service/requirement_service.py
import logging
from typing import Optional
from config.settings import settings
from core.candidate_classifier import normalize_candidates, summarize_pages
from core.duplicate_grouper import group_duplicates, review_eligible
from core.entities import (
    CandidateStatus,
    JiraIssue,
    OcrBatch,
    OcrLine,
    RequirementFields,
)
from core.issue_matcher import build_match_text, score_issues
from model.candidate import (
    Candidate,
    DuplicateGroupOut,
    GroupDuplicatesRequest,
    GroupDuplicatesResponse,
    NormalizeCandidatesRequest,
    NormalizeCandidatesResponse,
    PageSummaryOut,
)
from model.issue import MatchIssuesRequest, MatchIssuesResponse, ScoredJiraIssueOut
from util.enums import ErrorMessage
from util.errors import AppError
from util.timing import timed

logger = logging.getLogger(__name__)


def _threshold(value: Optional[float], default: float) -> float:
    if value is None:
        return default
    if not 0.0 <= value <= 1.0:
        raise AppError.of(ErrorMessage.INVALID_THRESHOLD)
    return value


class RequirementService:
    """
    Boundary around the pure pipeline: size guards, defaults from settings,
    API model <-> entity mapping. Logs counts only, never document text.
    """

    def __init__(
        self,
        max_line_chars: int = settings.MAX_LINE_CHARS,
        max_batch_lines: int = settings.MAX_BATCH_LINES,
        max_candidates: int = settings.MAX_CANDIDATES,
        max_issues: int = settings.MAX_ISSUES,
    ) -> None:
        self._max_line_chars = max_line_chars
        self._max_batch_lines = max_batch_lines
        self._max_candidates = max_candidates
        self._max_issues = max_issues

    def normalize(
        self, document_id: str, payload: NormalizeCandidatesRequest
    ) -> NormalizeCandidatesResponse:
        if len(payload.lines) > self._max_batch_lines:
            logger.warning(
                "classify.reject doc=%s lines=%d", document_id, len(payload.lines)
            )
            raise AppError.of(ErrorMessage.BATCH_TOO_LARGE)
        if any(len(line.text) > self._max_line_chars for line in payload.lines):
            logger.warning("classify.reject doc=%s reason=line_length", document_id)
            raise AppError.of(ErrorMessage.LINE_TOO_LONG)

        threshold = _threshold(
            payload.confidenceThreshold, settings.OCR_CONFIDENCE_THRESHOLD
        )
        batch = OcrBatch(
            document_id=document_id,
            lines=tuple(
                OcrLine(
                    text=line.text,
                    confidence=line.confidence,
                    page=line.page,
                    type=line.type,
                    rationale=line.rationale,
                )
                for line in payload.lines
            ),
        )
        with timed(logger, "classify", doc=document_id, lines=len(batch.lines)):
            candidates = normalize_candidates(batch, confidence_threshold=threshold)
            pages = summarize_pages(candidates)

        logger.info(
            "classify.ok doc=%s candidates=%d low_confidence=%d",
            document_id,
            len(candidates),
            sum(1 for c in candidates if c.status is CandidateStatus.low_confidence),
        )
        return NormalizeCandidatesResponse(
            documentId=document_id,
            candidates=[
                Candidate(
                    id=c.id,
                    documentId=c.document_id,
                    text=c.text,
                    confidence=c.confidence,
                    status=c.status,
                    page=c.page,
                    type=c.type,
                    rationale=c.rationale,
                )
                for c in candidates
            ],
            pages=[
                PageSummaryOut(
                    page=p.page,
                    candidateCount=p.candidate_count,
                    confidenceAvg=p.confidence_avg,
                    text=p.text,
                )
                for p in pages
            ],
        )

    def duplicates(
        self, document_id: str, payload: GroupDuplicatesRequest
    ) -> GroupDuplicatesResponse:
        if len(payload.candidates) > self._max_candidates:
            logger.warning(
                "dedupe.reject doc=%s candidates=%d",
                document_id,
                len(payload.candidates),
            )
            raise AppError.of(ErrorMessage.TOO_MANY_CANDIDATES)

        threshold = _threshold(payload.threshold, settings.DUPLICATE_THRESHOLD)
        min_length = (
            payload.minLength
            if payload.minLength is not None
            else settings.DUPLICATE_MIN_LENGTH
        )
        eligible = review_eligible(payload.candidates)
        with timed(logger, "dedupe", doc=document_id, n=len(eligible)):
            groups = group_duplicates(
                eligible, threshold=threshold, min_length=min_length
            )

        logger.info("dedupe.ok doc=%s groups=%d", document_id, len(groups))
        return GroupDuplicatesResponse(
            documentId=document_id,
            duplicates=[
                DuplicateGroupOut(
                    representativeId=g.representative_id,
                    memberIds=sorted(g.member_ids),
                    duplicates=g.duplicate_ids,
                )
                for g in groups
            ],
        )

    def match_issues(self, payload: MatchIssuesRequest) -> MatchIssuesResponse:
        if len(payload.issues) > self._max_issues:
            logger.warning("match.reject issues=%d", len(payload.issues))
            raise AppError.of(ErrorMessage.TOO_MANY_ISSUES)

        req = payload.requirement
        match_text = build_match_text(
            RequirementFields(
                title=req.title,
                description=req.description,
                user_story=req.userStory,
                acceptance_criteria=tuple(req.acceptanceCriteria),
                issues=tuple(req.issues),
            )
        )
        issues = [
            JiraIssue(
                key=i.key, summary=i.summary, id=i.id, status=i.status, url=i.url
            )
            for i in payload.issues
        ]
        with timed(logger, "match", issues=len(issues)):
            scored = score_issues(issues, match_text)

        top = scored[0].match_score if scored else 0.0
        logger.info("match.ok issues=%d top=%.2f", len(scored), top)
        return MatchIssuesResponse(
            matchText=match_text,
            issues=[
                ScoredJiraIssueOut(
                    key=s.key,
                    summary=s.summary,
                    id=s.id,
                    status=s.status,
                    url=s.url,
                    matchScore=s.match_score,
                )
                for s in scored
            ],
        )

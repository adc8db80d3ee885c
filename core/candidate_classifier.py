# core/candidate_classifier.py
import logging
import re
from dataclasses import replace
from functools import partial, reduce
from itertools import groupby
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Pattern, Tuple
from core.entities import (
    CandidateStatus,
    LineKind,
    OcrBatch,
    OcrLine,
    PageSummary,
    RequirementCandidate,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.5


def _rx(pattern: str) -> Pattern[str]:
    # ASCII word boundaries: "generará" still matches \bgenerar\b
    return re.compile(pattern, re.IGNORECASE | re.ASCII)


# Structural headings, anchored at the start of the line. Checked first.
# The Spanish prefixes are open-ended ("Notación ..." is a heading too).
IGNORED_HEADER_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    _rx(p)
    for p in (
        r"^caso\s+de\s+uso",
        r"^cu[-\s]*\d+",
        r"^pendientes?",
        r"^notas?",
        r"^registro\s+de\s+cambios",
        r"^historia\s+de\s+usuario",
        r"^hu[-\s]*\d+",
        r"^introducci[oó]n",
        r"^objetivos?",
        r"^alcance",
        r"^definiciones?",
        r"^t[eé]rminos?",
        r"^referencias?",
        r"^an[eé]x?os?",
        r"^ap[eé]ndice",
        r"^use\s+cases?\b",
        r"^uc[-\s]*\d+",
        r"^pending(\s+items?)?\b",
        r"^notes?\b",
        r"^change\s*log\b",
        r"^user\s+stor(y|ies)\b",
        r"^introduction\b",
        r"^scope\b",
        r"^appendix\b",
    )
)

# Domain signals; any match starts a new requirement.
REQUIREMENT_SIGNAL_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    _rx(p)
    for p in (
        r"\bcomo\s+[a-záéíóúüñ]+\b",
        r"\breq\b",
        r"\bdebe(n)?\b",
        r"\bdeber[ií]a(n)?\b",
        r"\bpermit(ir|a)\b",
        r"\bnotificar\b",
        r"\bintegrar\b",
        r"\bautenticar\b",
        r"\bregistrar\b",
        r"\bm[eé]tri(c|k)as\b",
        r"\bprioridad\b",
        r"\breserv(en|ar)\b",
        r"\bseguridad\b",
        r"\bdisponibilidad\b",
        r"\bconfidencialidad\b",
        r"\btrazabilidad\b",
        r"\brendimiento\b",
        r"\busabilidad\b",
        r"\bfuncionalidad\b",
        r"\bcumplir\b",
        r"\bgenerar\b",
        r"\banalizar\b",
        r"\bvisualizar\b",
        r"\bimplementar\b",
        r"\boptimizar\b",
        r"\bvalidar\b",
        r"\bverificar\b",
        r"\breportar\b",
        r"\bbuscar\b",
        r"\bfiltros?\b",
        r"\balertas?\b",
        r"\bnotas?\b",
        r"\btareas?\b",
        r"\bas\s+an?\s+[a-z]+\b",
        r"\b(must|shall|should)\b",
        r"\b(permit|allow)s?\b",
        r"\bnotif(y|ies)\b",
        r"\bintegrates?\b",
        r"\bauthenticates?\b",
        r"\bregisters?\b",
        r"\bmetrics\b",
        r"\bpriority\b",
        r"\breservations?\b",
    )
)

PATTERN_TABLE: Tuple[Tuple[Pattern[str], LineKind], ...] = tuple(
    [(p, LineKind.ignored_header) for p in IGNORED_HEADER_PATTERNS]
    + [(p, LineKind.new_requirement) for p in REQUIREMENT_SIGNAL_PATTERNS]
)


def classify_line(text: str) -> LineKind:
    """
    First matching row of PATTERN_TABLE wins; headers are listed before signals.
    Anything unmatched continues the previous candidate.
    """
    lowered = text.lower()
    for pattern, kind in PATTERN_TABLE:
        if pattern.search(lowered):
            return kind
    return LineKind.continuation


def dedup_key(text: str) -> str:
    return text.strip().lower()


class _ScanState(NamedTuple):
    output: Tuple[RequirementCandidate, ...] = ()
    current: Optional[int] = None
    seen: FrozenSet[str] = frozenset()


def _step(
    state: _ScanState, line: OcrLine, *, document_id: str, threshold: float
) -> _ScanState:
    text = (line.text or "").strip()
    if not text:
        return state

    kind = classify_line(text)
    if kind is LineKind.ignored_header:
        return state

    if kind is LineKind.new_requirement:
        key = dedup_key(text)
        if key in state.seen:
            return state
        status = (
            CandidateStatus.draft
            if line.confidence >= threshold
            else CandidateStatus.low_confidence
        )
        candidate = RequirementCandidate(
            id=f"{document_id}:{len(state.output) + 1}",
            document_id=document_id,
            text=text,
            confidence=line.confidence,
            status=status,
            page=line.page,
            type=line.type,
            rationale=line.rationale,
        )
        return _ScanState(
            output=state.output + (candidate,),
            current=len(state.output),
            seen=state.seen | {key},
        )

    if state.current is None:
        return state

    # status stays as assigned at creation even if confidence crosses the threshold
    last = state.output[state.current]
    merged = replace(
        last,
        text=f"{last.text}\n{text}",
        confidence=max(last.confidence, line.confidence),
    )
    output = (
        state.output[: state.current] + (merged,) + state.output[state.current + 1 :]
    )
    return state._replace(output=output)


def normalize_candidates(
    batch: OcrBatch, confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
) -> List[RequirementCandidate]:
    """
    Turn one OCR batch into ordered requirement candidates.

    Single pass in reading order:
    - header lines are dropped
    - signal lines open a new candidate unless their text was already seen
      in this batch
    - other lines are appended to the current candidate (or dropped if none)
    """
    step = partial(_step, document_id=batch.document_id, threshold=confidence_threshold)
    final = reduce(step, batch.lines, _ScanState())
    logger.debug(
        "classify.batch doc=%s lines=%d candidates=%d",
        batch.document_id,
        len(batch.lines),
        len(final.output),
    )
    return list(final.output)


def summarize_pages(candidates: Iterable[RequirementCandidate]) -> List[PageSummary]:
    """
    Per-page rollup: count, mean confidence, texts joined by a blank line.
    """
    ordered = sorted(candidates, key=lambda c: c.page)
    out: List[PageSummary] = []
    for page, group in groupby(ordered, key=lambda c: c.page):
        items = list(group)
        out.append(
            PageSummary(
                page=page,
                candidate_count=len(items),
                confidence_avg=sum(c.confidence for c in items) / len(items),
                text="\n\n".join(c.text for c in items) or None,
            )
        )
    return out

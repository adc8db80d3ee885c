# core/duplicate_grouper.py
import logging
import re
from itertools import combinations
from typing import Any, Dict, FrozenSet, Iterable, List, Union
from core.entities import (
    CandidateStatus,
    DedupeCandidate,
    DuplicateGroup,
)
from core.similarity import jaccard, tokenize

logger = logging.getLogger(__name__)

DUPLICATE_THRESHOLD = 0.82
DUPLICATE_MIN_LENGTH = 0

REVIEW_STATUSES: FrozenSet[CandidateStatus] = frozenset(
    {CandidateStatus.draft, CandidateStatus.low_confidence}
)

_REVIEW_VALUES = frozenset(s.value for s in REVIEW_STATUSES)

_QUOTES = re.compile(r"[`´'’\"“”]")
_PUNCT = re.compile(r"[\W_]+", re.UNICODE)


def normalize_text(text: str) -> str:
    """Lower-case, drop quotes, collapse punctuation and whitespace to single spaces."""
    return " ".join(_PUNCT.sub(" ", _QUOTES.sub("", (text or "").lower())).split())


def is_reviewable(status: Union[CandidateStatus, str, None]) -> bool:
    """Draft and low-confidence candidates; a missing status counts as reviewable."""
    if status is None:
        return True
    return getattr(status, "value", status) in _REVIEW_VALUES


def review_eligible(candidates: Iterable[Any]) -> List[DedupeCandidate]:
    """Project anything with `id`, `text` and `status` onto grouper input."""
    return [
        DedupeCandidate(id=c.id, text=c.text)
        for c in candidates
        if is_reviewable(c.status)
    ]


def _find(parent: Dict[str, str], x: str) -> str:
    while parent[x] != x:
        parent[x] = parent[parent[x]]
        x = parent[x]
    return x


def group_duplicates(
    candidates: Iterable[DedupeCandidate],
    threshold: float = DUPLICATE_THRESHOLD,
    min_length: int = DUPLICATE_MIN_LENGTH,
) -> List[DuplicateGroup]:
    """
    Single-link clustering of near-duplicate candidates.

    Two candidates are linked when their similarity is >= `threshold` (or their
    normalized texts are equal); groups are the connected components with more
    than one member, so A~B and B~C puts A, B, C together even if A !~ C.
    The representative of a group is its lowest id. Output is sorted by
    representative and does not depend on input order.
    """
    texts: Dict[str, str] = {}
    for c in candidates:
        # a repeated id keeps its smallest text so input order never matters
        texts[c.id] = min(texts.get(c.id, c.text), c.text)

    eligible: Dict[str, FrozenSet[str]] = {}
    normalized: Dict[str, str] = {}
    for cid in sorted(texts):
        norm = normalize_text(texts[cid])
        tokens = tokenize(texts[cid])
        if len(norm) < min_length or not tokens:
            continue
        eligible[cid] = tokens
        normalized[cid] = norm

    parent = {cid: cid for cid in eligible}
    for a, b in combinations(eligible, 2):
        if normalized[a] == normalized[b] or (
            jaccard(eligible[a], eligible[b]) >= threshold
        ):
            ra, rb = _find(parent, a), _find(parent, b)
            if ra != rb:
                # keep the lexicographically smaller id as root
                parent[max(ra, rb)] = min(ra, rb)

    members: Dict[str, List[str]] = {}
    for cid in eligible:
        members.setdefault(_find(parent, cid), []).append(cid)

    groups = [
        DuplicateGroup(representative_id=min(ids), member_ids=frozenset(ids))
        for ids in members.values()
        if len(ids) > 1
    ]
    groups.sort(key=lambda g: g.representative_id)
    logger.debug(
        "dedupe.groups candidates=%d eligible=%d groups=%d",
        len(texts),
        len(eligible),
        len(groups),
    )
    return groups

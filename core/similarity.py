# core/similarity.py
import re
from typing import FrozenSet, Optional

_SPLIT = re.compile(r"[\W_]+", re.UNICODE)


def tokenize(text: Optional[str]) -> FrozenSet[str]:
    """
    Lower-case `text`, split on runs of non-alphanumeric characters and keep
    the distinct tokens longer than one character.
    """
    if not text:
        return frozenset()
    return frozenset(t for t in _SPLIT.split(text.lower()) if len(t) > 1)


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    if not a or not b:
        return 0.0
    overlap = len(a & b)
    return overlap / (len(a) + len(b) - overlap)


def score(a: Optional[str], b: Optional[str]) -> float:
    """
    Symmetric token-set similarity in [0, 1].
    Returns 0 when either side has no tokens.
    """
    return jaccard(tokenize(a), tokenize(b))

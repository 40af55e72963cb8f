"""
Internal repetition score based on token shingles.

The score estimates how much of a document repeats itself: every 3-token
window (shingle) that has already been seen earlier in the same document
counts as a duplicate. It says nothing about similarity to other documents.
"""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from extraction.document_models import SimilarityResult
from extraction.tokenizer import tokenize

SHINGLE_SIZE = 3
MIN_TOKENS = 12  # below this the statistic is meaningless
SCORING_METHOD = "jaccard-3gram (internal)"
TOO_SHORT_DETAIL = "text too short"


def shingles(tokens: Sequence[str], n: int = SHINGLE_SIZE) -> List[str]:
    """Contiguous n-token windows joined by a single space, in order."""
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


def count_duplicates(grams: Sequence[str]) -> int:
    """
    Number of occurrences whose running count has reached 2 or more.

    A shingle seen k times contributes k - 1, not k.
    """
    freq: Dict[str, int] = {}
    dup = 0
    for g in grams:
        freq[g] = freq.get(g, 0) + 1
        if freq[g] >= 2:
            dup += 1
    return dup


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def score(
    tokens: Sequence[str],
    shingle_size: int = SHINGLE_SIZE,
    min_tokens: int = MIN_TOKENS,
) -> SimilarityResult:
    if len(tokens) < min_tokens:
        return SimilarityResult(score=0, method=SCORING_METHOD, detail=TOO_SHORT_DETAIL)

    grams = shingles(tokens, shingle_size)
    total = len(grams)
    dup = count_duplicates(grams)
    pct = _round_half_up(min(1.0, dup / (total or 1)) * 100)
    return SimilarityResult(
        score=pct,
        method=SCORING_METHOD,
        detail=f"{dup}/{total} shingles répétés",
        duplicated=dup,
        total=total,
    )


def score_similarity(
    text: str | None,
    shingle_size: int = SHINGLE_SIZE,
    min_tokens: int = MIN_TOKENS,
) -> SimilarityResult:
    return score(tokenize(text), shingle_size=shingle_size, min_tokens=min_tokens)

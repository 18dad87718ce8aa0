from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from concept_search.core.search_config import RESULT_LIMIT
from concept_search.services.match_classifier import MatchSignals
from concept_search.services.standardization import ResolvedConcept


@dataclass(frozen=True)
class RankedConcept:
    resolved: ResolvedConcept
    signals: MatchSignals


def rank_key(item: RankedConcept) -> Tuple[int, int, int, int, str, int]:
    """Ascending sort key; earlier positions dominate later ones.

    1. exact concept id match
    2. exact concept code match
    3. mapping tier (mapped standard, already standard, unmapped)
    4. distance between query length and concept name length
    5. concept name
    6. concept id
    """
    candidate = item.resolved.candidate
    return (
        0 if item.signals.exact_id_match else 1,
        0 if item.signals.exact_code_match else 1,
        int(item.resolved.mapping_tier),
        item.signals.name_length_delta,
        candidate.concept_name or "",
        candidate.concept_id,
    )


def rank(items: Sequence[RankedConcept], limit: int = RESULT_LIMIT) -> List[RankedConcept]:
    limit = max(0, min(limit, RESULT_LIMIT))
    return sorted(items, key=rank_key)[:limit]

from __future__ import annotations

import re
from dataclasses import dataclass

from concept_search.repositories.concept_index_repository import ConceptCandidate

_INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")


@dataclass(frozen=True)
class MatchSignals:
    exact_id_match: bool
    exact_code_match: bool
    name_length_delta: int


def parse_concept_id(query: str) -> int | None:
    """Return the query as an integer concept id, or None if it is not one."""
    if not _INTEGER_RE.match(query):
        return None
    return int(query)


def exact_id_match(query: str, candidate: ConceptCandidate) -> bool:
    concept_id = parse_concept_id(query)
    return concept_id is not None and concept_id == candidate.concept_id


def exact_code_match(query: str, candidate: ConceptCandidate) -> bool:
    # Case-sensitive and untrimmed.
    return query == candidate.concept_code


def name_length_delta(query: str, candidate: ConceptCandidate) -> int:
    return abs(len(query) - len(candidate.concept_name or ""))


def classify(query: str, candidate: ConceptCandidate) -> MatchSignals:
    return MatchSignals(
        exact_id_match=exact_id_match(query, candidate),
        exact_code_match=exact_code_match(query, candidate),
        name_length_delta=name_length_delta(query, candidate),
    )

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ConceptSearchRow(BaseModel):
    standard_name: str
    standard_concept_id: int
    standard_code: str
    standard_vocabulary: str
    standard_concept_class: str
    searched_name: str
    searched_concept_id: int
    searched_code: str
    searched_vocabulary: str
    searched_concept_class: str
    searched_term: str


class DomainPolicyEntry(BaseModel):
    domain: str
    vocabularies: List[str]
    concept_classes: List[str] = Field(default_factory=list)
    class_exempt_vocabularies: List[str] = Field(default_factory=list)


class IndexHealthResponse(BaseModel):
    ready: bool
    table_exists: bool
    populated: bool
    has_search_index: bool
    error: Optional[str] = None

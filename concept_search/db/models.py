from concept_search.db.base import Base

# Import all models here
from concept_search.models.concept import Concept
from concept_search.models.concept_relationship import ConceptRelationship
from concept_search.models.concept_search import ConceptSearchEntry

__all__ = ["Base", "Concept", "ConceptRelationship", "ConceptSearchEntry"]

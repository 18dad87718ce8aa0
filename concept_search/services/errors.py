from __future__ import annotations

from typing import Optional


class ConceptSearchError(Exception):
    pass


class ValidationError(ConceptSearchError, ValueError):
    """Malformed search input; raised before any retrieval."""


class RetrievalError(ConceptSearchError):
    """The concept index or relationship store is unavailable."""


class SearchTimeoutError(RetrievalError):
    def __init__(self, timeout: Optional[float]) -> None:
        if timeout is None:
            message = "concept search exceeded its deadline"
        else:
            message = f"concept search exceeded deadline of {timeout:g}s"
        super().__init__(message)
        self.timeout = timeout

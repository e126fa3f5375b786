"""Normalizes tool input before it reaches the search backends."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """A search request with terms normalized to an ordered list."""

    terms: List[str] = Field(..., description="search terms or regular expressions, searched one at a time")
    context_lines: Optional[int] = Field(
        default=None, ge=0, description="lines of context around each match"
    )

    @field_validator("terms", mode="before")
    @classmethod
    def _normalize_terms(cls, value: Union[str, List[str], tuple, None]) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError("terms must be a string or a list of strings")
        terms = []
        for term in value:
            if not isinstance(term, str):
                raise ValueError(f"search term must be a string, got {type(term).__name__}")
            if term.strip():
                terms.append(term)
        return terms

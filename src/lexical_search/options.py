"""
Search configuration models.

Options are validated on construction so that contract violations (negative
max_results, k1 or boosts, b outside 0..1) fail fast instead of producing nonsensical
scores. camelCase aliases let tool-call payloads validate directly:

    >>> SearchOptions.model_validate({"maxResults": 5, "caseSensitive": True})
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .scorer import DEFAULT_B, DEFAULT_K1

DEFAULT_MAX_RESULTS = 50


class SortBy(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    property: str = Field(..., min_length=1, description="Field path to sort results by")
    order: Literal["ASC", "DESC"] = Field(default="ASC")

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, value):
        return value.upper() if isinstance(value, str) else value


class SearchOptions(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    fields: Optional[List[str]] = Field(
        default=None,
        description="Field paths to search. None = every string field"
    )
    threshold: float = Field(default=0.0, description="Minimum score for a result")
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=0)
    case_sensitive: bool = False
    k1: float = Field(default=DEFAULT_K1, ge=0.0, description="BM25 term frequency saturation")
    b: float = Field(default=DEFAULT_B, ge=0.0, le=1.0, description="BM25 length normalization")
    boost: Optional[Dict[str, float]] = Field(
        default=None,
        description="Per-field weight overrides, e.g. {'title': 2.0}"
    )
    sort_by: Optional[SortBy] = None

    @field_validator("boost")
    @classmethod
    def check_boost(cls, value):
        if value:
            negative = [name for name, weight in value.items() if weight < 0]
            if negative:
                raise ValueError(f"Boost weights must be non-negative: {negative}")
        return value

    def corpus_key(self) -> tuple:
        """Options that change document text/tokens (not just ranking)."""
        boost = tuple(sorted(self.boost.items())) if self.boost else None
        fields = tuple(self.fields) if self.fields else None
        return (fields, self.case_sensitive, boost)

    def merged(self, overrides: "SearchOptions") -> "SearchOptions":
        """Return new options with the explicitly set values of `overrides` applied."""
        update = overrides.model_dump(exclude_unset=True)
        return SearchOptions.model_validate({**self.model_dump(), **update})


def coerce_options(options) -> SearchOptions:
    """Accept SearchOptions, a dict (snake_case or camelCase) or None."""
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.model_validate(options)

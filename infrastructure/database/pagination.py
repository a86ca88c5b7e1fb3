"""
Database Pagination Utilities
==============================
Helper functions for page-based pagination of list endpoints.

- Default limit: 50
- Maximum limit: 500
- Pages are 1-indexed
"""

from dataclasses import dataclass
from typing import Any

from app.constants import Pagination

DEFAULT_LIMIT = Pagination.DEFAULT_PAGE_SIZE
MAX_LIMIT = Pagination.MAX_PAGE_SIZE
MIN_LIMIT = 1
MIN_PAGE = 1


@dataclass
class PaginationParams:
    """Validated pagination parameters."""

    limit: int
    page: int

    @classmethod
    def from_request(
        cls,
        limit: int | None = None,
        page: int | None = None,
        *,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "PaginationParams":
        """
        Create validated pagination parameters from request inputs.

        Raises:
            ValueError: If limit or page are out of valid ranges
        """
        validated_limit = default_limit if limit is None else limit
        if validated_limit < MIN_LIMIT:
            raise ValueError(f"Limit must be at least {MIN_LIMIT}")
        if validated_limit > MAX_LIMIT:
            raise ValueError(f"Limit cannot exceed {MAX_LIMIT}")

        validated_page = MIN_PAGE if page is None else page
        if validated_page < MIN_PAGE:
            raise ValueError(f"Page must be at least {MIN_PAGE}")

        return cls(limit=validated_limit, page=validated_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResponse:
    """Standard paginated response structure."""

    items: list[Any]
    total: int
    limit: int
    page: int

    @property
    def page_count(self) -> int:
        return (self.total + self.limit - 1) // self.limit  # Ceiling division

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON responses."""
        return {
            "items": self.items,
            "pagination": {
                "total": self.total,
                "limit": self.limit,
                "page": self.page,
                "page_count": self.page_count,
                "has_next": self.has_next,
                "has_prev": self.page > MIN_PAGE,
            },
        }

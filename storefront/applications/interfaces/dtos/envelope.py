from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from storefront.domain.models.page import PageResult

T = TypeVar("T")


class QResult(BaseModel, Generic[T]):
    """Single-result envelope; ``error`` is set only on failure."""

    rows: T
    error: Optional[str] = None


class PaginatedResult(BaseModel, Generic[T]):
    result: List[T]
    total_pages: int
    page: int
    per_page: int

    @classmethod
    def from_page(cls, page: PageResult) -> "PaginatedResult[T]":
        return cls(result=page.rows, total_pages=page.total_pages, page=page.page, per_page=page.per_page)


class ValidationErrorPayload(BaseModel):
    message: str
    fields: List[str]

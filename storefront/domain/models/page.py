import math
from datetime import datetime
from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class PageRequest(BaseModel):
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1)

    @classmethod
    def of(cls, page: Optional[int] = None, per_page: Optional[int] = None) -> "PageRequest":
        """Build a request from raw inputs, defaulting absent or non-positive values."""
        return cls(
            page=page if page is not None and page > 0 else DEFAULT_PAGE,
            per_page=per_page if per_page is not None and per_page > 0 else DEFAULT_PER_PAGE,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class OrderSpec(BaseModel):
    by: Optional[str] = None
    order: Optional[SortDirection] = None


class SearchSpec(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    in_holiday: Optional[bool] = None


class DateRange(BaseModel):
    after: Optional[datetime] = None
    before: Optional[datetime] = None


class PageResult(BaseModel, Generic[T]):
    rows: List[T]
    total_pages: int
    page: int
    per_page: int

    @classmethod
    def compose(cls, rows: List[T], total: int, page_request: PageRequest) -> "PageResult[T]":
        total_pages = math.ceil(total / page_request.per_page) if total > 0 else 0
        return cls(
            rows=rows,
            total_pages=total_pages,
            page=page_request.page,
            per_page=page_request.per_page,
        )

    def map(self, func: Callable[[T], U]) -> "PageResult[U]":
        return PageResult(
            rows=[func(row) for row in self.rows],
            total_pages=self.total_pages,
            page=self.page,
            per_page=self.per_page,
        )

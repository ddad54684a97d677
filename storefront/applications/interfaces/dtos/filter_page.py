from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from storefront.domain.models.page import DateRange, OrderSpec, PageRequest, SearchSpec, SortDirection


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class FilterPage(BaseModel):
    page: Optional[int] = Field(default=None, ge=1, description="1-based page number, defaults to 1")
    per_page: Optional[int] = Field(default=None, ge=1, le=1000, description="Page size, defaults to 20")

    def page_request(self) -> PageRequest:
        return PageRequest.of(self.page, self.per_page)


class FilterOrder(BaseModel):
    by: Optional[str] = Field(default=None, max_length=64, description="Column to sort by")
    order: Optional[SortDirection] = Field(default=None, description="ASC or DESC")

    def order_spec(self) -> OrderSpec:
        return OrderSpec(by=self.by, order=self.order)


class FilterProducts(FilterPage, FilterOrder):
    name: Optional[str] = Field(default=None, max_length=256, description="Substring of the name")
    description: Optional[str] = Field(default=None, max_length=256, description="Substring of the description")
    category_id: Optional[int] = Field(default=None, ge=1)
    store_id: Optional[int] = Field(default=None, ge=1)

    def search_spec(self) -> SearchSpec:
        return SearchSpec(name=self.name, description=self.description)


class FilterCategories(FilterPage, FilterOrder):
    name: Optional[str] = Field(default=None, max_length=256, description="Substring of the name")

    def search_spec(self) -> SearchSpec:
        return SearchSpec(name=self.name)


class FilterStores(FilterPage, FilterOrder):
    name: Optional[str] = Field(default=None, max_length=256, description="Substring of the name")
    in_holiday: Optional[bool] = None
    before: Optional[datetime] = Field(default=None, description="Created at or before")
    after: Optional[datetime] = Field(default=None, description="Created at or after")

    def search_spec(self) -> SearchSpec:
        return SearchSpec(name=self.name, in_holiday=self.in_holiday)

    def date_range(self) -> DateRange:
        return DateRange(after=_naive_utc(self.after), before=_naive_utc(self.before))

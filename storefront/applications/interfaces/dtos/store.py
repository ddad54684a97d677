from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.applications.interfaces.dtos.product import ProductPublic

# 12-hour clock, as the schedule is split into AM and PM halves
TIME_PATTERN = r"^(0[0-9]|1[0-2]):[0-5][0-9]$"
DAYS_PER_WEEK = 7


class WorktimeSchema(BaseModel):
    day_id: int = Field(ge=1, le=DAYS_PER_WEEK)
    am_open: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    am_close: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    pm_open: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    pm_close: Optional[str] = Field(default=None, pattern=TIME_PATTERN)


class WorktimeUpdateSchema(BaseModel):
    id: int = Field(ge=1)
    day_id: Optional[int] = Field(default=None, ge=1, le=DAYS_PER_WEEK)
    am_open: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    am_close: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    pm_open: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    pm_close: Optional[str] = Field(default=None, pattern=TIME_PATTERN)


class StoreSchema(BaseModel):
    name: str = Field(min_length=2, max_length=256)
    is_holiday: bool
    worktimes: List[WorktimeSchema] = Field(min_length=DAYS_PER_WEEK, max_length=DAYS_PER_WEEK)

    @model_validator(mode="after")
    def one_entry_per_day(self) -> "StoreSchema":
        if len({worktime.day_id for worktime in self.worktimes}) != DAYS_PER_WEEK:
            raise ValueError("worktimes must contain each day_id from 1 to 7 exactly once")
        return self


class StoreUpdateSchema(BaseModel):
    name: str = Field(min_length=2, max_length=256)
    is_holiday: bool
    worktimes: List[WorktimeUpdateSchema] = Field(default_factory=list)


class WorktimePublic(BaseModel):
    id: int
    day_id: int
    store_id: int
    am_open: Optional[str] = None
    am_close: Optional[str] = None
    pm_open: Optional[str] = None
    pm_close: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class StorePublic(BaseModel):
    id: int
    name: str
    is_holiday: bool
    created_at: datetime
    prod_count: int
    worktimes: List[WorktimePublic] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class StoreDetailPublic(StorePublic):
    products: List[ProductPublic] = Field(default_factory=list)


class ProductCount(BaseModel):
    count: int

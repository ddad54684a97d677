from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.domain.models.product import Product


class Worktime(BaseModel):
    day_id: Optional[int] = None
    store_id: Optional[int] = None
    id: Optional[int] = None
    am_open: Optional[str] = None
    am_close: Optional[str] = None
    pm_open: Optional[str] = None
    pm_close: Optional[str] = None


class Store(BaseModel):
    name: str
    is_holiday: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    prod_count: int = 0
    worktimes: List[Worktime] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)

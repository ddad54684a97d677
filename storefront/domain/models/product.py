from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from storefront.domain.models.category import Category


class ProductCategory(BaseModel):
    """Row of the products_categories association table."""

    product_id: int
    category_id: int
    id: Optional[int] = None


class Product(BaseModel):
    name: str
    price: Decimal
    id: Optional[int] = None
    i18n_name: Optional[str] = None
    description: Optional[str] = None
    i18n_description: Optional[str] = None
    created_at: Optional[datetime] = None
    store_id: Optional[int] = None
    categories: List[Category] = Field(default_factory=list)

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.applications.interfaces.dtos.category import CategoryPublic


class ProductUpdateSchema(BaseModel):
    name: str = Field(min_length=3, max_length=256)
    i18n_name: Optional[str] = Field(default=None, max_length=256)
    price: Decimal = Field(ge=0, le=1_000_000, decimal_places=2)
    description: Optional[str] = Field(default=None, min_length=3, max_length=1000)
    i18n_description: Optional[str] = Field(default=None, max_length=1000)
    store_id: Optional[int] = Field(default=None, ge=1)


class ProductSchema(ProductUpdateSchema):
    category_id: Optional[int] = Field(default=None, ge=1)


class ProductPublic(BaseModel):
    id: int
    name: str
    i18n_name: Optional[str] = None
    price: Decimal
    description: Optional[str] = None
    i18n_description: Optional[str] = None
    created_at: datetime
    store_id: Optional[int] = None
    categories: List[CategoryPublic] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


class ProductCategoryPublic(BaseModel):
    id: int
    product_id: int
    category_id: int
    model_config = ConfigDict(from_attributes=True)

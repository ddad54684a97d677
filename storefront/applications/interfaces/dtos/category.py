from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CategorySchema(BaseModel):
    name: str = Field(min_length=3, max_length=256)


class CategoryPublic(BaseModel):
    id: int
    name: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ManyIds(BaseModel):
    ids: List[int] = Field(min_length=1)

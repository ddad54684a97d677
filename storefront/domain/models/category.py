from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Category(BaseModel):
    name: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

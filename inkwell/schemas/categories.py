from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from typing import Optional
from datetime import datetime

from inkwell.constants.number import CategoryLength

class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    created_at: datetime

class CategoryWithCountOut(CategoryOut):
    post_count: int = 0

class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=CategoryLength.NAME_MAX)
    description: Optional[str] = None

class CategoryUpdateRequest(BaseModel):
    id: UUID
    name: Optional[str] = Field(default=None, min_length=1, max_length=CategoryLength.NAME_MAX)
    description: Optional[str] = None

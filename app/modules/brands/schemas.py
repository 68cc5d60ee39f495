# app/modules/brands/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class BrandCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre de la marca")
    description: Optional[str] = Field(None, max_length=2000)

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El nombre no puede estar vacío')
        return v.strip()


class BrandResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BrandListResponse(BaseResponse):
    brands: List[BrandResponse]
    total: int


class BrandBulkResponse(BaseResponse):
    brands: List[BrandResponse]
    affected_count: int

# app/modules/variants/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class VariantCreateRequest(BaseModel):
    brand_id: Optional[int] = Field(None, gt=0, description="ID de la marca")
    sku: str = Field(..., min_length=1, max_length=100, description="Código único")
    name: str = Field(..., min_length=1, max_length=255)
    unit_price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)

    @validator('sku')
    def validate_sku(cls, v):
        if not v.strip():
            raise ValueError('El SKU no puede estar vacío')
        return v.strip().upper()


class VariantResponse(BaseModel):
    id: int
    brand_id: Optional[int] = None
    sku: str
    name: str
    unit_price: Decimal
    stock_quantity: int
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VariantListResponse(BaseResponse):
    variants: List[VariantResponse]
    total: int


class VariantBulkResponse(BaseResponse):
    variants: List[VariantResponse]
    affected_count: int

# app/modules/suppliers/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime

from app.shared.schemas.common import BaseResponse


class SupplierCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del proveedor")
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El nombre no puede estar vacío')
        return v.strip()


class SupplierResponse(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SupplierListResponse(BaseResponse):
    suppliers: List[SupplierResponse]
    total: int


class SupplierBulkResponse(BaseResponse):
    suppliers: List[SupplierResponse]
    affected_count: int

# app/shared/schemas/common.py
from pydantic import BaseModel, Field, validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal


class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class BulkIdsRequest(BaseModel):
    ids: List[int] = Field(..., min_length=1, description="Ids a procesar (todo o nada)")

    @validator('ids')
    def validate_ids(cls, v):
        if any(i <= 0 for i in v):
            raise ValueError('Los ids deben ser positivos')
        return v


class BulkStatusRequest(BulkIdsRequest):
    status_id: str = Field(..., min_length=1, description="Estado destino")


class StatusChangeRequest(BaseModel):
    status_id: str = Field(..., min_length=1, description="Estado destino")


class LineItemRequest(BaseModel):
    product_variant_id: int = Field(..., gt=0, description="ID de la variante")
    quantity: int = Field(..., gt=0, description="Cantidad")
    unit_price: Decimal = Field(..., ge=0, description="Precio unitario")


class LineItemResponse(BaseModel):
    product_variant_id: int
    quantity: int
    unit_price: Decimal

    class Config:
        from_attributes = True


class BulkOperationResponse(BaseResponse):
    affected_ids: List[int]
    affected_count: int


class AllowedStatusesResponse(BaseModel):
    id: int
    status_id: str
    allowed: List[str]
    is_terminal: bool

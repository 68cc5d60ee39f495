# app/modules/orders/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from app.shared.schemas.common import BaseResponse, LineItemRequest, LineItemResponse
from app.shared.lifecycle.statuses import ORDER_STATUSES


class OrderCreateRequest(BaseModel):
    customer_name: Optional[str] = Field(None, max_length=255, description="Nombre del cliente")
    notes: Optional[str] = Field(None, max_length=2000, description="Notas")
    status_id: Optional[str] = Field(None, description="Estado inicial (por defecto 'pending')")
    lines: List[LineItemRequest] = Field(..., min_length=1, description="Líneas del pedido")

    @validator('status_id')
    def validate_status(cls, v):
        if v is not None and not ORDER_STATUSES.is_valid(v):
            raise ValueError(f"Estado '{v}' no válido")
        return v


class OrderUpdateRequest(BaseModel):
    customer_name: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=2000)
    lines: List[LineItemRequest] = Field(..., min_length=1, description="Reemplaza todas las líneas")


class OrderResponse(BaseModel):
    id: int
    customer_name: Optional[str] = None
    notes: Optional[str] = None
    status_id: str
    last_status_changed_at: Optional[datetime] = None
    created_by: Optional[int] = None
    finished_by: Optional[int] = None
    deleted_at: Optional[datetime] = None
    total_amount: Decimal = Decimal("0")
    lines: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class OrderListResponse(BaseResponse):
    orders: List[OrderResponse]
    total: int


class OrderBulkResponse(BaseResponse):
    orders: List[OrderResponse]
    affected_count: int

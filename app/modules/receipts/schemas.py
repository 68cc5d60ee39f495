# app/modules/receipts/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal
from datetime import datetime

from app.shared.schemas.common import BaseResponse, LineItemRequest, LineItemResponse


class ReceiptCreateRequest(BaseModel):
    supplier_id: Optional[int] = Field(None, gt=0, description="ID del proveedor")
    notes: Optional[str] = Field(None, max_length=2000, description="Notas")
    lines: List[LineItemRequest] = Field(..., min_length=1, description="Líneas del recibo")


class ReceiptUpdateRequest(ReceiptCreateRequest):
    pass


class ReceiptResponse(BaseModel):
    id: int
    supplier_id: Optional[int] = None
    notes: Optional[str] = None
    status_id: str
    last_status_changed_at: Optional[datetime] = None
    input_date: Optional[datetime] = None
    created_by: Optional[int] = None
    deleted_at: Optional[datetime] = None
    total_amount: Decimal = Decimal("0")
    lines: List[LineItemResponse] = []

    class Config:
        from_attributes = True


class ReceiptListResponse(BaseResponse):
    receipts: List[ReceiptResponse]
    total: int


class ReceiptBulkResponse(BaseResponse):
    receipts: List[ReceiptResponse]
    affected_count: int


class ReceiptCloneResponse(BaseResponse):
    receipt: ReceiptResponse
    source_receipt_id: int
    skipped_variant_ids: List[int]

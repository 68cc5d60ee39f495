# app/modules/receipts/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, STAFF_ROLES, MANAGER_ROLES
from app.shared.schemas.common import (
    BulkIdsRequest, BulkStatusRequest, StatusChangeRequest,
    BulkOperationResponse, AllowedStatusesResponse
)
from .service import ReceiptsService
from .schemas import (
    ReceiptCreateRequest, ReceiptUpdateRequest, ReceiptResponse,
    ReceiptListResponse, ReceiptBulkResponse, ReceiptCloneResponse
)

router = APIRouter()

READ_ROLES = STAFF_ROLES
WRITE_ROLES = MANAGER_ROLES


@router.post("", response_model=ReceiptResponse, status_code=201)
async def create_receipt(
    receipt_data: ReceiptCreateRequest,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Crear recibo de ingreso de mercadería

    - Siempre inicia en 'working'
    - Proveedor (si se indica) y variantes deben estar activos
    """
    service = ReceiptsService(db)
    return await service.create_receipt(receipt_data, current_user.id)


@router.get("", response_model=ReceiptListResponse)
async def list_receipts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Listar recibos activos"""
    service = ReceiptsService(db)
    return await service.list_receipts(deleted=False, skip=skip, limit=limit)


@router.get("/deleted", response_model=ReceiptListResponse)
async def list_deleted_receipts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceiptsService(db)
    return await service.list_receipts(deleted=True, skip=skip, limit=limit)


@router.patch("/status", response_model=ReceiptBulkResponse)
async def update_many_receipt_status(
    request: BulkStatusRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Cambiar el estado de varios recibos (todo o nada)

    Al pasar a 'finish' se ingresa al stock la mercadería de todo el lote.
    """
    service = ReceiptsService(db)
    return await service.update_many_status(request.ids, request.status_id, current_user.id)


@router.post("/delete-many", response_model=BulkOperationResponse)
async def delete_many_receipts(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Eliminar varios recibos (solo en 'cancel')"""
    service = ReceiptsService(db)
    return await service.delete_many(request.ids)


@router.post("/restore-many", response_model=ReceiptBulkResponse)
async def restore_many_receipts(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceiptsService(db)
    return await service.restore_many(request.ids)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
async def get_receipt(
    receipt_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceiptsService(db)
    return await service.get_receipt(receipt_id)


@router.get("/{receipt_id}/allowed-statuses", response_model=AllowedStatusesResponse)
async def get_allowed_statuses(
    receipt_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceiptsService(db)
    return await service.get_allowed_statuses(receipt_id)


@router.put("/{receipt_id}", response_model=ReceiptResponse)
async def update_receipt(
    receipt_id: int,
    receipt_data: ReceiptUpdateRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Editar recibo (solo en 'working'); las líneas se reemplazan completas"""
    service = ReceiptsService(db)
    return await service.update_receipt(receipt_id, receipt_data)


@router.patch("/{receipt_id}/status", response_model=ReceiptResponse)
async def update_receipt_status(
    receipt_id: int,
    request: StatusChangeRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Cambiar estado de un recibo

    **Flujo:** working → finish | working → cancel.
    Al finalizar se fija input_date y se suma el stock.
    """
    service = ReceiptsService(db)
    return await service.update_status(receipt_id, request.status_id, current_user.id)


@router.delete("/{receipt_id}", response_model=BulkOperationResponse)
async def delete_receipt(
    receipt_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Eliminar recibo (lógico); solo recibos cancelados"""
    service = ReceiptsService(db)
    return await service.delete_receipt(receipt_id)


@router.post("/{receipt_id}/restore", response_model=ReceiptResponse)
async def restore_receipt(
    receipt_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = ReceiptsService(db)
    return await service.restore_receipt(receipt_id)


@router.post("/{receipt_id}/clone", response_model=ReceiptCloneResponse, status_code=201)
async def clone_receipt(
    receipt_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Clonar recibo en uno nuevo en 'working'

    Las líneas con variantes eliminadas se omiten y se informan en skipped_variant_ids.
    """
    service = ReceiptsService(db)
    return await service.clone_receipt(receipt_id, current_user.id)

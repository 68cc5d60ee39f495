# app/modules/orders/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, STAFF_ROLES, MANAGER_ROLES
from app.shared.schemas.common import (
    BulkIdsRequest, BulkStatusRequest, StatusChangeRequest,
    BulkOperationResponse, AllowedStatusesResponse
)
from .service import OrdersService
from .schemas import (
    OrderCreateRequest, OrderUpdateRequest, OrderResponse,
    OrderListResponse, OrderBulkResponse
)

router = APIRouter()

READ_ROLES = STAFF_ROLES
WRITE_ROLES = MANAGER_ROLES


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order_data: OrderCreateRequest,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Crear pedido de venta

    - Estado inicial 'pending' si no se indica
    - Todas las variantes de las líneas deben existir y estar activas
    """
    service = OrdersService(db)
    return await service.create_order(order_data, current_user.id)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Listar pedidos activos"""
    service = OrdersService(db)
    return await service.list_orders(deleted=False, skip=skip, limit=limit)


@router.get("/deleted", response_model=OrderListResponse)
async def list_deleted_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Listar pedidos eliminados (papelera)"""
    service = OrdersService(db)
    return await service.list_orders(deleted=True, skip=skip, limit=limit)


@router.patch("/status", response_model=OrderBulkResponse)
async def update_many_order_status(
    request: BulkStatusRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Cambiar el estado de varios pedidos

    **Todo o nada:**
    - Si falta algún id → 404 con los ids faltantes
    - Si algún pedido no admite la transición → 400 y ningún pedido cambia
    - Al pasar a 'completed' se valida y descuenta stock del lote completo
    """
    service = OrdersService(db)
    return await service.update_many_status(request.ids, request.status_id, current_user.id)


@router.post("/delete-many", response_model=BulkOperationResponse)
async def delete_many_orders(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Eliminar varios pedidos (todo o nada)"""
    service = OrdersService(db)
    return await service.delete_many(request.ids)


@router.post("/restore-many", response_model=OrderBulkResponse)
async def restore_many_orders(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Restaurar varios pedidos eliminados (todo o nada)"""
    service = OrdersService(db)
    return await service.restore_many(request.ids)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Obtener pedido (incluye eliminados)"""
    service = OrdersService(db)
    return await service.get_order(order_id)


@router.get("/{order_id}/allowed-statuses", response_model=AllowedStatusesResponse)
async def get_allowed_statuses(
    order_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Estados a los que puede pasar el pedido en un paso"""
    service = OrdersService(db)
    return await service.get_allowed_statuses(order_id)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: int,
    order_data: OrderUpdateRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Editar pedido (solo en estado 'pending'); las líneas se reemplazan completas"""
    service = OrdersService(db)
    return await service.update_order(order_id, order_data)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    request: StatusChangeRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Cambiar estado de un pedido

    **Flujo:** pending → deposit_50 → confirmed_50 → delivering → completed
    o pending → confirmed_cod → delivering → completed.
    Al completar se registra el usuario en finished_by.
    """
    service = OrdersService(db)
    return await service.update_status(order_id, request.status_id, current_user.id)


@router.delete("/{order_id}", response_model=BulkOperationResponse)
async def delete_order(
    order_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Eliminar pedido (lógico). Pedidos en curso o completados no se pueden eliminar"""
    service = OrdersService(db)
    return await service.delete_order(order_id)


@router.post("/{order_id}/restore", response_model=OrderResponse)
async def restore_order(
    order_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """Restaurar pedido eliminado; conserva el estado que tenía"""
    service = OrdersService(db)
    return await service.restore_order(order_id)

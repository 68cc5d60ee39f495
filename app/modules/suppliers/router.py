# app/modules/suppliers/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, STAFF_ROLES, MANAGER_ROLES
from app.shared.schemas.common import BulkIdsRequest, BulkOperationResponse
from .service import SuppliersService
from .schemas import SupplierCreateRequest, SupplierResponse, SupplierListResponse, SupplierBulkResponse

router = APIRouter()

READ_ROLES = STAFF_ROLES
WRITE_ROLES = MANAGER_ROLES


@router.post("", response_model=SupplierResponse, status_code=201)
async def create_supplier(
    supplier_data: SupplierCreateRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.create_supplier(supplier_data)


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.list_suppliers(deleted=False, skip=skip, limit=limit)


@router.get("/deleted", response_model=SupplierListResponse)
async def list_deleted_suppliers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.list_suppliers(deleted=True, skip=skip, limit=limit)


@router.post("/delete-many", response_model=BulkOperationResponse)
async def delete_many_suppliers(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Eliminar varios proveedores (todo o nada)

    Si alguno tiene recibos en 'working' no se elimina ninguno.
    """
    service = SuppliersService(db)
    return await service.delete_many(request.ids)


@router.post("/restore-many", response_model=SupplierBulkResponse)
async def restore_many_suppliers(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.restore_many(request.ids)


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Obtener proveedor (incluye eliminados)"""
    service = SuppliersService(db)
    return await service.get_supplier(supplier_id)


@router.delete("/{supplier_id}", response_model=BulkOperationResponse)
async def delete_supplier(
    supplier_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.delete_supplier(supplier_id)


@router.post("/{supplier_id}/restore", response_model=SupplierResponse)
async def restore_supplier(
    supplier_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = SuppliersService(db)
    return await service.restore_supplier(supplier_id)

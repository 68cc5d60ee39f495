# app/modules/brands/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, STAFF_ROLES, MANAGER_ROLES
from app.shared.schemas.common import BulkIdsRequest, BulkOperationResponse
from .service import BrandsService
from .schemas import BrandCreateRequest, BrandResponse, BrandListResponse, BrandBulkResponse

router = APIRouter()

READ_ROLES = STAFF_ROLES
WRITE_ROLES = MANAGER_ROLES


@router.post("", response_model=BrandResponse, status_code=201)
async def create_brand(
    brand_data: BrandCreateRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.create_brand(brand_data)


@router.get("", response_model=BrandListResponse)
async def list_brands(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.list_brands(deleted=False, skip=skip, limit=limit)


@router.get("/deleted", response_model=BrandListResponse)
async def list_deleted_brands(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.list_brands(deleted=True, skip=skip, limit=limit)


@router.post("/delete-many", response_model=BulkOperationResponse)
async def delete_many_brands(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Eliminar varias marcas

    Si alguno de los ids no existe o ya está eliminado no se elimina ninguna.
    """
    service = BrandsService(db)
    return await service.delete_many(request.ids)


@router.post("/restore-many", response_model=BrandBulkResponse)
async def restore_many_brands(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.restore_many(request.ids)


@router.delete("/{brand_id}", response_model=BulkOperationResponse)
async def delete_brand(
    brand_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.delete_brand(brand_id)


@router.post("/{brand_id}/restore", response_model=BrandResponse)
async def restore_brand(
    brand_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = BrandsService(db)
    return await service.restore_brand(brand_id)

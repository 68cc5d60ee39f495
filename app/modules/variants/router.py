# app/modules/variants/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles, STAFF_ROLES, MANAGER_ROLES
from app.shared.schemas.common import BulkIdsRequest, BulkOperationResponse
from .service import VariantsService
from .schemas import VariantCreateRequest, VariantResponse, VariantListResponse, VariantBulkResponse

router = APIRouter()

READ_ROLES = STAFF_ROLES
WRITE_ROLES = MANAGER_ROLES


@router.post("", response_model=VariantResponse, status_code=201)
async def create_variant(
    variant_data: VariantCreateRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.create_variant(variant_data)


@router.get("", response_model=VariantListResponse)
async def list_variants(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.list_variants(deleted=False, skip=skip, limit=limit)


@router.get("/deleted", response_model=VariantListResponse)
async def list_deleted_variants(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.list_variants(deleted=True, skip=skip, limit=limit)


@router.post("/delete-many", response_model=BulkOperationResponse)
async def delete_many_variants(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Eliminar varias variantes (todo o nada)

    Los pedidos y recibos existentes conservan sus líneas; las variantes
    eliminadas dejan de aceptarse en líneas nuevas y en clones.
    """
    service = VariantsService(db)
    return await service.delete_many(request.ids)


@router.post("/restore-many", response_model=VariantBulkResponse)
async def restore_many_variants(
    request: BulkIdsRequest,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.restore_many(request.ids)


@router.get("/{variant_id}", response_model=VariantResponse)
async def get_variant(
    variant_id: int,
    current_user = Depends(require_roles(READ_ROLES)),
    db: Session = Depends(get_db)
):
    """Obtener variante (incluye eliminadas)"""
    service = VariantsService(db)
    return await service.get_variant(variant_id)


@router.delete("/{variant_id}", response_model=BulkOperationResponse)
async def delete_variant(
    variant_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.delete_variant(variant_id)


@router.post("/{variant_id}/restore", response_model=VariantResponse)
async def restore_variant(
    variant_id: int,
    current_user = Depends(require_roles(WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    service = VariantsService(db)
    return await service.restore_variant(variant_id)

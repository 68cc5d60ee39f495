# app/modules/brands/service.py
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from .repository import BrandsRepository
from .schemas import BrandCreateRequest, BrandResponse, BrandListResponse, BrandBulkResponse
from app.core.exceptions import raise_for_result
from app.shared.database.repository import SqlAlchemyUnitOfWork
from app.shared.schemas.common import BulkOperationResponse
from app.shared.lifecycle import (
    BulkMutationOrchestrator, FetchMode, SoftDeleteCoordinator,
    delete_operation, restore_operation,
)

logger = logging.getLogger(__name__)


class BrandsService:
    """Marcas: sin estados, solo eliminación lógica y restauración"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = BrandsRepository(db)
        self.unit_of_work = SqlAlchemyUnitOfWork(db)
        self.soft_delete = SoftDeleteCoordinator(None, label="registro de marca")
        self.orchestrator = BulkMutationOrchestrator(self.repository, self.unit_of_work, label="marcas")

    async def create_brand(self, brand_data: BrandCreateRequest) -> BrandResponse:
        try:
            brand = self.repository.create_brand(brand_data.dict())
            self.unit_of_work.commit()
            logger.info(f"✅ Marca creada - ID: {brand.id}, nombre: {brand.name}")
            return BrandResponse.model_validate(brand)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error creando marca")
            raise HTTPException(status_code=500, detail=f"Error creando marca: {str(e)}")

    async def list_brands(self, deleted: bool = False, skip: int = 0, limit: int = 100) -> BrandListResponse:
        fetch_mode = FetchMode.DELETED_ONLY if deleted else FetchMode.ACTIVE_ONLY
        brands = self.repository.list(fetch_mode, skip, limit)
        return BrandListResponse(
            success=True,
            message="Marcas eliminadas" if deleted else "Marcas activas",
            brands=[BrandResponse.model_validate(b) for b in brands],
            total=self.repository.count(fetch_mode)
        )

    async def delete_brand(self, brand_id: int) -> BulkOperationResponse:
        try:
            brand = self.repository.find_by_id(brand_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_delete(brand, brand_id))
            self.unit_of_work.commit()

            logger.info(f"🗑️ Marca {brand_id} eliminada")
            return BulkOperationResponse(
                success=True,
                message=f"Marca {brand_id} eliminada",
                affected_ids=[brand_id],
                affected_count=1
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error eliminando marca {brand_id}")
            raise HTTPException(status_code=500, detail=f"Error eliminando marca: {str(e)}")

    async def delete_many(self, ids: List[int]) -> BulkOperationResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, delete_operation(self.soft_delete)))
            affected = [b.id for b in result.value]
            return BulkOperationResponse(
                success=True,
                message=f"{len(affected)} marcas eliminadas",
                affected_ids=affected,
                affected_count=len(affected)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en eliminación masiva de marcas")
            raise HTTPException(status_code=500, detail=f"Error eliminando marcas: {str(e)}")

    async def restore_brand(self, brand_id: int) -> BrandResponse:
        try:
            brand = self.repository.find_by_id(brand_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_restore(brand, brand_id))
            self.unit_of_work.commit()

            logger.info(f"♻️ Marca {brand_id} restaurada")
            return BrandResponse.model_validate(brand)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error restaurando marca {brand_id}")
            raise HTTPException(status_code=500, detail=f"Error restaurando marca: {str(e)}")

    async def restore_many(self, ids: List[int]) -> BrandBulkResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, restore_operation(self.soft_delete)))
            brands = result.value
            return BrandBulkResponse(
                success=True,
                message=f"{len(brands)} marcas restauradas",
                brands=[BrandResponse.model_validate(b) for b in brands],
                affected_count=len(brands)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en restauración masiva de marcas")
            raise HTTPException(status_code=500, detail=f"Error restaurando marcas: {str(e)}")

# app/modules/variants/service.py
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from .repository import VariantsRepository
from .schemas import VariantCreateRequest, VariantResponse, VariantListResponse, VariantBulkResponse
from app.core.exceptions import raise_for_result
from app.shared.database.repository import SqlAlchemyUnitOfWork
from app.shared.schemas.common import BulkOperationResponse
from app.shared.lifecycle import (
    BulkMutationOrchestrator, FetchMode, LifecycleError, Result, SoftDeleteCoordinator,
    delete_operation, restore_operation,
)

logger = logging.getLogger(__name__)


class VariantsService:
    """Variantes de producto: alta, eliminación lógica y restauración"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = VariantsRepository(db)
        self.unit_of_work = SqlAlchemyUnitOfWork(db)
        self.soft_delete = SoftDeleteCoordinator(None, label="registro de variante")
        self.orchestrator = BulkMutationOrchestrator(self.repository, self.unit_of_work, label="variantes")

    async def create_variant(self, variant_data: VariantCreateRequest) -> VariantResponse:
        """
        Crear variante

        - La marca (si se indica) debe existir y estar activa
        - El SKU no puede repetirse
        """
        try:
            if variant_data.brand_id is not None and self.repository.get_brand(variant_data.brand_id) is None:
                raise_for_result(Result.failure(LifecycleError.not_found(
                    f"Marca {variant_data.brand_id} no existe o no está activa",
                    field="brand_id"
                )))

            existing = self.repository.find_by_sku(variant_data.sku)
            if existing is not None:
                raise_for_result(Result.failure(LifecycleError.conflict(
                    f"El SKU '{variant_data.sku}' ya está en uso por la variante {existing.id}",
                    field="sku",
                    subject_id=existing.id
                )))

            variant = self.repository.create_variant(variant_data.dict())
            self.unit_of_work.commit()

            logger.info(f"✅ Variante creada - ID: {variant.id}, SKU: {variant.sku}")
            return VariantResponse.model_validate(variant)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error creando variante")
            raise HTTPException(status_code=500, detail=f"Error creando variante: {str(e)}")

    async def get_variant(self, variant_id: int) -> VariantResponse:
        variant = self.repository.find_by_id(variant_id, FetchMode.ALL)
        if variant is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Variante {variant_id} no encontrada")))
        return VariantResponse.model_validate(variant)

    async def list_variants(self, deleted: bool = False, skip: int = 0, limit: int = 100) -> VariantListResponse:
        fetch_mode = FetchMode.DELETED_ONLY if deleted else FetchMode.ACTIVE_ONLY
        variants = self.repository.list(fetch_mode, skip, limit)
        return VariantListResponse(
            success=True,
            message="Variantes eliminadas" if deleted else "Variantes activas",
            variants=[VariantResponse.model_validate(v) for v in variants],
            total=self.repository.count(fetch_mode)
        )

    async def delete_variant(self, variant_id: int) -> BulkOperationResponse:
        try:
            variant = self.repository.find_by_id(variant_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_delete(variant, variant_id))
            self.unit_of_work.commit()

            logger.info(f"🗑️ Variante {variant_id} eliminada")
            return BulkOperationResponse(
                success=True,
                message=f"Variante {variant_id} eliminada",
                affected_ids=[variant_id],
                affected_count=1
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error eliminando variante {variant_id}")
            raise HTTPException(status_code=500, detail=f"Error eliminando variante: {str(e)}")

    async def delete_many(self, ids: List[int]) -> BulkOperationResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, delete_operation(self.soft_delete)))
            affected = [v.id for v in result.value]
            return BulkOperationResponse(
                success=True,
                message=f"{len(affected)} variantes eliminadas",
                affected_ids=affected,
                affected_count=len(affected)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en eliminación masiva de variantes")
            raise HTTPException(status_code=500, detail=f"Error eliminando variantes: {str(e)}")

    async def restore_variant(self, variant_id: int) -> VariantResponse:
        try:
            variant = self.repository.find_by_id(variant_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_restore(variant, variant_id))
            self.unit_of_work.commit()

            logger.info(f"♻️ Variante {variant_id} restaurada")
            return VariantResponse.model_validate(variant)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error restaurando variante {variant_id}")
            raise HTTPException(status_code=500, detail=f"Error restaurando variante: {str(e)}")

    async def restore_many(self, ids: List[int]) -> VariantBulkResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, restore_operation(self.soft_delete)))
            variants = result.value
            return VariantBulkResponse(
                success=True,
                message=f"{len(variants)} variantes restauradas",
                variants=[VariantResponse.model_validate(v) for v in variants],
                affected_count=len(variants)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en restauración masiva de variantes")
            raise HTTPException(status_code=500, detail=f"Error restaurando variantes: {str(e)}")

# app/modules/suppliers/service.py
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from .repository import SuppliersRepository
from .schemas import SupplierCreateRequest, SupplierResponse, SupplierListResponse, SupplierBulkResponse
from app.core.exceptions import raise_for_result
from app.shared.database.models import Supplier
from app.shared.database.repository import SqlAlchemyUnitOfWork
from app.shared.schemas.common import BulkOperationResponse
from app.shared.lifecycle import (
    BulkMutationOrchestrator, FetchMode, LifecycleError, Result, SoftDeleteCoordinator,
    delete_operation, restore_operation,
)

logger = logging.getLogger(__name__)


class SuppliersService:
    """
    Proveedores: eliminación lógica y restauración.

    Un proveedor con recibos en 'working' no se puede eliminar.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SuppliersRepository(db)
        self.unit_of_work = SqlAlchemyUnitOfWork(db)
        self.soft_delete = SoftDeleteCoordinator(None, label="proveedor")
        self.orchestrator = BulkMutationOrchestrator(self.repository, self.unit_of_work, label="proveedores")

    async def create_supplier(self, supplier_data: SupplierCreateRequest) -> SupplierResponse:
        try:
            supplier = self.repository.create_supplier(supplier_data.dict())
            self.unit_of_work.commit()
            logger.info(f"✅ Proveedor creado - ID: {supplier.id}, nombre: {supplier.name}")
            return SupplierResponse.model_validate(supplier)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error creando proveedor")
            raise HTTPException(status_code=500, detail=f"Error creando proveedor: {str(e)}")

    async def get_supplier(self, supplier_id: int) -> SupplierResponse:
        supplier = self.repository.find_by_id(supplier_id, FetchMode.ALL)
        if supplier is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Proveedor {supplier_id} no encontrado")))
        return SupplierResponse.model_validate(supplier)

    async def list_suppliers(self, deleted: bool = False, skip: int = 0, limit: int = 100) -> SupplierListResponse:
        fetch_mode = FetchMode.DELETED_ONLY if deleted else FetchMode.ACTIVE_ONLY
        suppliers = self.repository.list(fetch_mode, skip, limit)
        return SupplierListResponse(
            success=True,
            message="Proveedores eliminados" if deleted else "Proveedores activos",
            suppliers=[SupplierResponse.model_validate(s) for s in suppliers],
            total=self.repository.count(fetch_mode)
        )

    async def delete_supplier(self, supplier_id: int) -> BulkOperationResponse:
        try:
            supplier = self.repository.find_by_id(supplier_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.check_delete(supplier, supplier_id))
            raise_for_result(self._check_working_receipts([supplier]))

            self.soft_delete.apply_delete(supplier)
            self.unit_of_work.commit()

            logger.info(f"🗑️ Proveedor {supplier_id} eliminado")
            return BulkOperationResponse(
                success=True,
                message=f"Proveedor {supplier_id} eliminado",
                affected_ids=[supplier_id],
                affected_count=1
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error eliminando proveedor {supplier_id}")
            raise HTTPException(status_code=500, detail=f"Error eliminando proveedor: {str(e)}")

    async def delete_many(self, ids: List[int]) -> BulkOperationResponse:
        try:
            operation = delete_operation(self.soft_delete, check_batch=self._check_working_receipts)
            result = raise_for_result(self.orchestrator.execute(ids, operation))
            affected = [s.id for s in result.value]
            return BulkOperationResponse(
                success=True,
                message=f"{len(affected)} proveedores eliminados",
                affected_ids=affected,
                affected_count=len(affected)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en eliminación masiva de proveedores")
            raise HTTPException(status_code=500, detail=f"Error eliminando proveedores: {str(e)}")

    async def restore_supplier(self, supplier_id: int) -> SupplierResponse:
        try:
            supplier = self.repository.find_by_id(supplier_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_restore(supplier, supplier_id))
            self.unit_of_work.commit()

            logger.info(f"♻️ Proveedor {supplier_id} restaurado")
            return SupplierResponse.model_validate(supplier)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error restaurando proveedor {supplier_id}")
            raise HTTPException(status_code=500, detail=f"Error restaurando proveedor: {str(e)}")

    async def restore_many(self, ids: List[int]) -> SupplierBulkResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, restore_operation(self.soft_delete)))
            suppliers = result.value
            return SupplierBulkResponse(
                success=True,
                message=f"{len(suppliers)} proveedores restaurados",
                suppliers=[SupplierResponse.model_validate(s) for s in suppliers],
                affected_count=len(suppliers)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en restauración masiva de proveedores")
            raise HTTPException(status_code=500, detail=f"Error restaurando proveedores: {str(e)}")

    def _check_working_receipts(self, suppliers: List[Supplier]) -> Result:
        blocked = sorted(self.repository.with_working_receipts([s.id for s in suppliers]))
        if blocked:
            return Result.failure(LifecycleError.bad_request(
                f"Proveedor {blocked[0]} tiene recibos en curso y no se puede eliminar",
                field="Id",
                subject_id=blocked[0],
                details={"blocked_ids": blocked}
            ))
        return Result.success(suppliers)

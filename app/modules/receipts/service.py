# app/modules/receipts/service.py
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from .repository import ReceiptsRepository
from .schemas import (
    ReceiptCreateRequest, ReceiptUpdateRequest, ReceiptResponse,
    ReceiptListResponse, ReceiptBulkResponse, ReceiptCloneResponse
)
from app.core.exceptions import raise_for_result
from app.shared.database.models import Input
from app.shared.database.repository import SqlAlchemyUnitOfWork
from app.shared.schemas.common import AllowedStatusesResponse, BulkOperationResponse
from app.shared.lifecycle import (
    BulkMutationOrchestrator, FetchMode, LifecycleError, LifecycleGuard, Result,
    SoftDeleteCoordinator, ReceiptStatus, RECEIPT_STATUSES, RECEIPT_TRANSITIONS,
    delete_operation, restore_operation, status_operation,
)

logger = logging.getLogger(__name__)


class ReceiptsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ReceiptsRepository(db)
        self.unit_of_work = SqlAlchemyUnitOfWork(db)
        self.guard = LifecycleGuard(RECEIPT_TRANSITIONS, label="recibo")
        self.soft_delete = SoftDeleteCoordinator(RECEIPT_STATUSES, label="recibo")
        self.orchestrator = BulkMutationOrchestrator(self.repository, self.unit_of_work, label="recibos")

    # ==================== CONSULTAS ====================

    async def get_receipt(self, receipt_id: int) -> ReceiptResponse:
        receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
        if receipt is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Recibo {receipt_id} no encontrado")))
        return self._to_response(receipt)

    async def list_receipts(self, deleted: bool = False, skip: int = 0, limit: int = 100) -> ReceiptListResponse:
        fetch_mode = FetchMode.DELETED_ONLY if deleted else FetchMode.ACTIVE_ONLY
        receipts = self.repository.list(fetch_mode, skip, limit)
        return ReceiptListResponse(
            success=True,
            message="Recibos eliminados" if deleted else "Recibos activos",
            receipts=[self._to_response(r) for r in receipts],
            total=self.repository.count(fetch_mode)
        )

    async def get_allowed_statuses(self, receipt_id: int) -> AllowedStatusesResponse:
        receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
        if receipt is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Recibo {receipt_id} no encontrado")))
        allowed = [] if receipt.is_deleted else sorted(RECEIPT_TRANSITIONS.allowed_from(receipt.status_id))
        return AllowedStatusesResponse(
            id=receipt.id,
            status_id=receipt.status_id,
            allowed=allowed,
            is_terminal=RECEIPT_TRANSITIONS.is_terminal(receipt.status_id)
        )

    # ==================== COMANDOS ====================

    async def create_receipt(self, receipt_data: ReceiptCreateRequest, actor_id: int) -> ReceiptResponse:
        """Crear recibo de inventario en estado 'working'"""
        try:
            lines = [line.dict() for line in receipt_data.lines]
            raise_for_result(self._check_supplier(receipt_data.supplier_id))
            raise_for_result(self._check_variants(lines))

            receipt = self.repository.create_receipt(
                {"supplier_id": receipt_data.supplier_id, "notes": receipt_data.notes, "lines": lines},
                status_id=RECEIPT_STATUSES.initial,
                created_by=actor_id
            )
            self.unit_of_work.commit()

            logger.info(f"✅ Recibo creado - ID: {receipt.id}, líneas: {len(lines)}")
            return self._to_response(receipt)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error creando recibo")
            raise HTTPException(status_code=500, detail=f"Error creando recibo: {str(e)}")

    async def update_receipt(self, receipt_id: int, receipt_data: ReceiptUpdateRequest) -> ReceiptResponse:
        """Editar recibo mientras esté en 'working'"""
        try:
            receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
            raise_for_result(self.guard.try_edit(receipt))

            lines = [line.dict() for line in receipt_data.lines]
            raise_for_result(self._check_supplier(receipt_data.supplier_id))
            raise_for_result(self._check_variants(lines))

            receipt.supplier_id = receipt_data.supplier_id
            receipt.notes = receipt_data.notes
            self.repository.replace_lines(receipt, lines)
            self.unit_of_work.commit()

            logger.info(f"✅ Recibo {receipt_id} actualizado ({len(lines)} líneas)")
            return self._to_response(receipt)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error actualizando recibo {receipt_id}")
            raise HTTPException(status_code=500, detail=f"Error actualizando recibo: {str(e)}")

    async def update_status(self, receipt_id: int, status_id: str, actor_id: int) -> ReceiptResponse:
        """Cambiar estado; al pasar a 'finish' ingresa el stock"""
        try:
            receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
            raise_for_result(self.guard.check_transition(receipt, status_id))

            previous = receipt.status_id
            self.guard.apply_transition(receipt, status_id, actor_id)
            if status_id == ReceiptStatus.FINISH:
                self._intake_stock([receipt])
            self.unit_of_work.commit()

            logger.info(f"🔄 Recibo {receipt_id}: {previous} → {status_id} (usuario {actor_id})")
            return self._to_response(receipt)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error cambiando estado del recibo {receipt_id}")
            raise HTTPException(status_code=500, detail=f"Error cambiando estado: {str(e)}")

    async def update_many_status(self, ids: List[int], status_id: str, actor_id: int) -> ReceiptBulkResponse:
        try:
            operation = status_operation(
                self.guard,
                status_id,
                actor_id,
                after_apply=self._intake_stock if status_id == ReceiptStatus.FINISH else None,
            )
            result = raise_for_result(self.orchestrator.execute(ids, operation))
            receipts = result.value

            return ReceiptBulkResponse(
                success=True,
                message=f"{len(receipts)} recibos actualizados a '{status_id}'",
                receipts=[self._to_response(r) for r in receipts],
                affected_count=len(receipts)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en cambio de estado masivo de recibos")
            raise HTTPException(status_code=500, detail=f"Error cambiando estados: {str(e)}")

    async def delete_receipt(self, receipt_id: int) -> BulkOperationResponse:
        try:
            receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_delete(receipt, receipt_id))
            self.unit_of_work.commit()

            logger.info(f"🗑️ Recibo {receipt_id} eliminado")
            return BulkOperationResponse(
                success=True,
                message=f"Recibo {receipt_id} eliminado",
                affected_ids=[receipt_id],
                affected_count=1
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error eliminando recibo {receipt_id}")
            raise HTTPException(status_code=500, detail=f"Error eliminando recibo: {str(e)}")

    async def delete_many(self, ids: List[int]) -> BulkOperationResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, delete_operation(self.soft_delete)))
            affected = [r.id for r in result.value]
            return BulkOperationResponse(
                success=True,
                message=f"{len(affected)} recibos eliminados",
                affected_ids=affected,
                affected_count=len(affected)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en eliminación masiva de recibos")
            raise HTTPException(status_code=500, detail=f"Error eliminando recibos: {str(e)}")

    async def restore_receipt(self, receipt_id: int) -> ReceiptResponse:
        try:
            receipt = self.repository.find_by_id(receipt_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_restore(receipt, receipt_id))
            self.unit_of_work.commit()

            logger.info(f"♻️ Recibo {receipt_id} restaurado en estado '{receipt.status_id}'")
            return self._to_response(receipt)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error restaurando recibo {receipt_id}")
            raise HTTPException(status_code=500, detail=f"Error restaurando recibo: {str(e)}")

    async def restore_many(self, ids: List[int]) -> ReceiptBulkResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, restore_operation(self.soft_delete)))
            receipts = result.value
            return ReceiptBulkResponse(
                success=True,
                message=f"{len(receipts)} recibos restaurados",
                receipts=[self._to_response(r) for r in receipts],
                affected_count=len(receipts)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en restauración masiva de recibos")
            raise HTTPException(status_code=500, detail=f"Error restaurando recibos: {str(e)}")

    async def clone_receipt(self, receipt_id: int, actor_id: int) -> ReceiptCloneResponse:
        """
        Clonar recibo (incluso eliminado) en uno nuevo en 'working'

        - El proveedor debe seguir activo
        - Solo se copian líneas cuya variante siga activa
        """
        try:
            source = self.repository.find_by_id(receipt_id, FetchMode.ALL)
            if source is None:
                raise_for_result(Result.failure(LifecycleError.not_found(f"Recibo {receipt_id} no encontrado")))

            raise_for_result(self._check_supplier(source.supplier_id))

            variants = self.repository.get_variants([line.product_variant_id for line in source.lines])
            kept = [
                {
                    "product_variant_id": line.product_variant_id,
                    "quantity": line.quantity,
                    "unit_price": line.unit_price
                }
                for line in source.lines
                if line.product_variant_id in variants
            ]
            skipped = sorted({
                line.product_variant_id for line in source.lines
                if line.product_variant_id not in variants
            })

            if not kept:
                raise_for_result(Result.failure(LifecycleError.bad_request(
                    "Todas las variantes del recibo original fueron eliminadas",
                    field="lines",
                    details={"skipped_variant_ids": skipped}
                )))

            clone = self.repository.create_receipt(
                {"supplier_id": source.supplier_id, "notes": source.notes, "lines": kept},
                status_id=RECEIPT_STATUSES.initial,
                created_by=actor_id
            )
            self.unit_of_work.commit()

            logger.info(f"📋 Recibo {receipt_id} clonado como {clone.id} ({len(kept)} líneas, {len(skipped)} omitidas)")
            return ReceiptCloneResponse(
                success=True,
                message=f"Recibo {receipt_id} clonado",
                receipt=self._to_response(clone),
                source_receipt_id=receipt_id,
                skipped_variant_ids=skipped
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error clonando recibo {receipt_id}")
            raise HTTPException(status_code=500, detail=f"Error clonando recibo: {str(e)}")

    # ==================== HELPERS ====================

    def _check_supplier(self, supplier_id: Optional[int]) -> Result:
        if supplier_id is None:
            return Result.success()
        if self.repository.get_supplier(supplier_id) is None:
            return Result.failure(LifecycleError.not_found(
                f"Proveedor {supplier_id} no existe o no está activo",
                field="supplier_id"
            ))
        return Result.success()

    def _check_variants(self, lines: List[dict]) -> Result:
        variant_ids = [line['product_variant_id'] for line in lines]
        variants = self.repository.get_variants(variant_ids)
        missing = sorted({vid for vid in variant_ids if vid not in variants})
        if missing:
            return Result.failure(LifecycleError.not_found(
                f"Variantes no encontradas: {', '.join(str(v) for v in missing)}",
                field="lines",
                details={"missing_variant_ids": missing}
            ))
        return Result.success()

    def _intake_stock(self, receipts: List[Input]) -> None:
        """Sumar al stock y fijar la fecha de ingreso"""
        intake = self.repository.intake_by_variant(receipts)
        variants = self.repository.get_variants(list(intake.keys()), FetchMode.ALL)
        for receipt in receipts:
            receipt.input_date = receipt.last_status_changed_at
        for variant_id, quantity in intake.items():
            variants[variant_id].stock_quantity += quantity
            logger.info(f"   📦 Variante {variant_id}: +{quantity} (stock {variants[variant_id].stock_quantity})")

    def _to_response(self, receipt: Input) -> ReceiptResponse:
        return ReceiptResponse.model_validate(receipt)

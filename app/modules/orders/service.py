# app/modules/orders/service.py
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from .repository import OrdersRepository
from .schemas import (
    OrderCreateRequest, OrderUpdateRequest, OrderResponse,
    OrderListResponse, OrderBulkResponse
)
from app.core.exceptions import raise_for_result
from app.shared.database.models import Output
from app.shared.database.repository import SqlAlchemyUnitOfWork
from app.shared.schemas.common import AllowedStatusesResponse, BulkOperationResponse
from app.shared.lifecycle import (
    BulkMutationOrchestrator, FetchMode, LifecycleError, LifecycleGuard, Result,
    SoftDeleteCoordinator, ORDER_STATUSES, ORDER_TRANSITIONS,
    delete_operation, restore_operation, status_operation,
)

logger = logging.getLogger(__name__)


class OrdersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = OrdersRepository(db)
        self.unit_of_work = SqlAlchemyUnitOfWork(db)
        self.guard = LifecycleGuard(ORDER_TRANSITIONS, label="pedido")
        self.soft_delete = SoftDeleteCoordinator(ORDER_STATUSES, label="pedido")
        self.orchestrator = BulkMutationOrchestrator(self.repository, self.unit_of_work, label="pedidos")

    # ==================== CONSULTAS ====================

    async def get_order(self, order_id: int, include_deleted: bool = True) -> OrderResponse:
        fetch_mode = FetchMode.ALL if include_deleted else FetchMode.ACTIVE_ONLY
        order = self.repository.find_by_id(order_id, fetch_mode)
        if order is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Pedido {order_id} no encontrado")))
        return self._to_response(order)

    async def list_orders(self, deleted: bool = False, skip: int = 0, limit: int = 100) -> OrderListResponse:
        fetch_mode = FetchMode.DELETED_ONLY if deleted else FetchMode.ACTIVE_ONLY
        orders = self.repository.list(fetch_mode, skip, limit)
        return OrderListResponse(
            success=True,
            message="Pedidos eliminados" if deleted else "Pedidos activos",
            orders=[self._to_response(o) for o in orders],
            total=self.repository.count(fetch_mode)
        )

    async def get_allowed_statuses(self, order_id: int) -> AllowedStatusesResponse:
        order = self.repository.find_by_id(order_id, FetchMode.ALL)
        if order is None:
            raise_for_result(Result.failure(LifecycleError.not_found(f"Pedido {order_id} no encontrado")))
        # Un pedido eliminado no admite transiciones
        allowed = [] if order.is_deleted else sorted(ORDER_TRANSITIONS.allowed_from(order.status_id))
        return AllowedStatusesResponse(
            id=order.id,
            status_id=order.status_id,
            allowed=allowed,
            is_terminal=ORDER_TRANSITIONS.is_terminal(order.status_id)
        )

    # ==================== COMANDOS ====================

    async def create_order(self, order_data: OrderCreateRequest, actor_id: int) -> OrderResponse:
        """Crear pedido con estado inicial 'pending' si no se indica otro"""
        try:
            status_id = order_data.status_id or ORDER_STATUSES.initial
            if ORDER_STATUSES.is_completion(status_id):
                raise_for_result(Result.failure(LifecycleError.bad_request(
                    f"No se puede crear un pedido directamente en '{status_id}'",
                    field="status_id"
                )))

            lines = [line.dict() for line in order_data.lines]
            raise_for_result(self._check_variants(lines))

            order = self.repository.create_order(
                {"customer_name": order_data.customer_name, "notes": order_data.notes, "lines": lines},
                status_id=status_id,
                created_by=actor_id
            )
            self.unit_of_work.commit()

            logger.info(f"✅ Pedido creado - ID: {order.id}, estado: {order.status_id}")
            return self._to_response(order)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error creando pedido")
            raise HTTPException(status_code=500, detail=f"Error creando pedido: {str(e)}")

    async def update_order(self, order_id: int, order_data: OrderUpdateRequest) -> OrderResponse:
        """Editar pedido; solo mientras siga en un estado editable"""
        try:
            order = self.repository.find_by_id(order_id, FetchMode.ALL)
            raise_for_result(self.guard.try_edit(order))

            lines = [line.dict() for line in order_data.lines]
            raise_for_result(self._check_variants(lines))

            order.customer_name = order_data.customer_name
            order.notes = order_data.notes
            self.repository.replace_lines(order, lines)
            self.unit_of_work.commit()

            logger.info(f"✅ Pedido {order_id} actualizado ({len(lines)} líneas)")
            return self._to_response(order)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error actualizando pedido {order_id}")
            raise HTTPException(status_code=500, detail=f"Error actualizando pedido: {str(e)}")

    async def update_status(self, order_id: int, status_id: str, actor_id: int) -> OrderResponse:
        """Cambiar estado de un pedido validando la tabla de transiciones"""
        try:
            order = self.repository.find_by_id(order_id, FetchMode.ALL)
            raise_for_result(self.guard.check_transition(order, status_id))

            completing = ORDER_STATUSES.is_completion(status_id)
            if completing:
                raise_for_result(self._check_stock([order]))

            previous = order.status_id
            self.guard.apply_transition(order, status_id, actor_id)
            if completing:
                self._deduct_stock([order])
            self.unit_of_work.commit()

            logger.info(f"🔄 Pedido {order_id}: {previous} → {status_id} (usuario {actor_id})")
            return self._to_response(order)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error cambiando estado del pedido {order_id}")
            raise HTTPException(status_code=500, detail=f"Error cambiando estado: {str(e)}")

    async def update_many_status(self, ids: List[int], status_id: str, actor_id: int) -> OrderBulkResponse:
        """Cambio de estado masivo: todos los pedidos o ninguno"""
        try:
            completing = ORDER_STATUSES.is_completion(status_id)
            operation = status_operation(
                self.guard,
                status_id,
                actor_id,
                check_batch=self._check_stock if completing else None,
                after_apply=self._deduct_stock if completing else None,
            )
            result = raise_for_result(self.orchestrator.execute(ids, operation))
            orders = result.value

            return OrderBulkResponse(
                success=True,
                message=f"{len(orders)} pedidos actualizados a '{status_id}'",
                orders=[self._to_response(o) for o in orders],
                affected_count=len(orders)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en cambio de estado masivo de pedidos")
            raise HTTPException(status_code=500, detail=f"Error cambiando estados: {str(e)}")

    async def delete_order(self, order_id: int) -> BulkOperationResponse:
        try:
            order = self.repository.find_by_id(order_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_delete(order, order_id))
            self.unit_of_work.commit()

            logger.info(f"🗑️ Pedido {order_id} eliminado")
            return BulkOperationResponse(
                success=True,
                message=f"Pedido {order_id} eliminado",
                affected_ids=[order_id],
                affected_count=1
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error eliminando pedido {order_id}")
            raise HTTPException(status_code=500, detail=f"Error eliminando pedido: {str(e)}")

    async def delete_many(self, ids: List[int]) -> BulkOperationResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, delete_operation(self.soft_delete)))
            affected = [o.id for o in result.value]
            return BulkOperationResponse(
                success=True,
                message=f"{len(affected)} pedidos eliminados",
                affected_ids=affected,
                affected_count=len(affected)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en eliminación masiva de pedidos")
            raise HTTPException(status_code=500, detail=f"Error eliminando pedidos: {str(e)}")

    async def restore_order(self, order_id: int) -> OrderResponse:
        try:
            order = self.repository.find_by_id(order_id, FetchMode.ALL)
            raise_for_result(self.soft_delete.try_restore(order, order_id))
            self.unit_of_work.commit()

            logger.info(f"♻️ Pedido {order_id} restaurado en estado '{order.status_id}'")
            return self._to_response(order)

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"❌ Error restaurando pedido {order_id}")
            raise HTTPException(status_code=500, detail=f"Error restaurando pedido: {str(e)}")

    async def restore_many(self, ids: List[int]) -> OrderBulkResponse:
        try:
            result = raise_for_result(self.orchestrator.execute(ids, restore_operation(self.soft_delete)))
            orders = result.value
            return OrderBulkResponse(
                success=True,
                message=f"{len(orders)} pedidos restaurados",
                orders=[self._to_response(o) for o in orders],
                affected_count=len(orders)
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.exception("❌ Error en restauración masiva de pedidos")
            raise HTTPException(status_code=500, detail=f"Error restaurando pedidos: {str(e)}")

    # ==================== HELPERS ====================

    def _check_variants(self, lines: List[dict]) -> Result:
        """Las líneas solo pueden referenciar variantes activas"""
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

    def _check_stock(self, orders: List[Output]) -> Result:
        """Stock suficiente para TODO el lote (demanda agregada por variante)"""
        demand = self.repository.demand_by_variant(orders)
        variants = self.repository.get_variants(list(demand.keys()), FetchMode.ALL)

        shortages = []
        for variant_id, needed in demand.items():
            variant = variants.get(variant_id)
            available = variant.stock_quantity if variant else 0
            if available < needed:
                shortages.append({
                    "product_variant_id": variant_id,
                    "available": available,
                    "needed": needed,
                    "missing": needed - available
                })

        if shortages:
            first = shortages[0]
            return Result.failure(LifecycleError.bad_request(
                f"Variante {first['product_variant_id']} sin stock suficiente. "
                f"Disponible: {first['available']}, requerido: {first['needed']}",
                field="lines",
                details={"shortages": shortages}
            ))
        return Result.success(orders)

    def _deduct_stock(self, orders: List[Output]) -> None:
        demand = self.repository.demand_by_variant(orders)
        variants = self.repository.get_variants(list(demand.keys()), FetchMode.ALL)
        for variant_id, quantity in demand.items():
            variants[variant_id].stock_quantity -= quantity
            logger.info(f"   📦 Variante {variant_id}: -{quantity} (stock {variants[variant_id].stock_quantity})")

    def _to_response(self, order: Output) -> OrderResponse:
        return OrderResponse.model_validate(order)

# app/modules/orders/repository.py
from typing import Any, Dict, List, Sequence
from collections import defaultdict

from sqlalchemy.orm import Session, selectinload

from app.shared.database.models import Output, OutputInfo, ProductVariant
from app.shared.database.repository import SoftDeleteRepository, apply_fetch_mode
from app.shared.lifecycle.bulk import FetchMode


class OrdersRepository(SoftDeleteRepository):
    model = Output

    def __init__(self, db: Session):
        super().__init__(db)

    def _query(self):
        return self.db.query(Output).options(selectinload(Output.lines))

    def build_lines(self, lines_data: List[Dict[str, Any]]) -> List[OutputInfo]:
        """Construir líneas en el orden recibido"""
        return [
            OutputInfo(
                product_variant_id=line['product_variant_id'],
                quantity=line['quantity'],
                unit_price=line['unit_price'],
                position=index
            )
            for index, line in enumerate(lines_data)
        ]

    def create_order(self, order_data: Dict[str, Any], status_id: str, created_by: int) -> Output:
        """Crear pedido (sin commit)"""
        order = Output(
            customer_name=order_data.get('customer_name'),
            notes=order_data.get('notes'),
            status_id=status_id,
            created_by=created_by,
            lines=self.build_lines(order_data.get('lines', []))
        )
        self.db.add(order)
        return order

    def replace_lines(self, order: Output, lines_data: List[Dict[str, Any]]) -> None:
        # delete-orphan elimina las líneas anteriores
        order.lines = self.build_lines(lines_data)

    def get_variants(self, variant_ids: Sequence[int], fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> Dict[int, ProductVariant]:
        if not variant_ids:
            return {}
        query = self.db.query(ProductVariant).filter(ProductVariant.id.in_(list(set(variant_ids))))
        query = apply_fetch_mode(query, ProductVariant, fetch_mode)
        return {variant.id: variant for variant in query.all()}

    def demand_by_variant(self, orders: List[Output]) -> Dict[int, int]:
        """Cantidad total requerida por variante en un lote de pedidos"""
        demand = defaultdict(int)
        for order in orders:
            for line in order.lines:
                demand[line.product_variant_id] += line.quantity
        return dict(demand)

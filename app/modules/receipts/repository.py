# app/modules/receipts/repository.py
from typing import Any, Dict, List, Optional, Sequence
from collections import defaultdict

from sqlalchemy.orm import Session, selectinload

from app.shared.database.models import Input, InputInfo, ProductVariant, Supplier
from app.shared.database.repository import SoftDeleteRepository, apply_fetch_mode
from app.shared.lifecycle.bulk import FetchMode


class ReceiptsRepository(SoftDeleteRepository):
    model = Input

    def __init__(self, db: Session):
        super().__init__(db)

    def _query(self):
        return self.db.query(Input).options(selectinload(Input.lines))

    def build_lines(self, lines_data: List[Dict[str, Any]]) -> List[InputInfo]:
        return [
            InputInfo(
                product_variant_id=line['product_variant_id'],
                quantity=line['quantity'],
                unit_price=line['unit_price'],
                position=index
            )
            for index, line in enumerate(lines_data)
        ]

    def create_receipt(self, receipt_data: Dict[str, Any], status_id: str, created_by: Optional[int]) -> Input:
        """Crear recibo (sin commit)"""
        receipt = Input(
            supplier_id=receipt_data.get('supplier_id'),
            notes=receipt_data.get('notes'),
            status_id=status_id,
            created_by=created_by,
            lines=self.build_lines(receipt_data.get('lines', []))
        )
        self.db.add(receipt)
        return receipt

    def replace_lines(self, receipt: Input, lines_data: List[Dict[str, Any]]) -> None:
        receipt.lines = self.build_lines(lines_data)

    def get_supplier(self, supplier_id: int, fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> Optional[Supplier]:
        query = self.db.query(Supplier).filter(Supplier.id == supplier_id)
        return apply_fetch_mode(query, Supplier, fetch_mode).first()

    def get_variants(self, variant_ids: Sequence[int], fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> Dict[int, ProductVariant]:
        if not variant_ids:
            return {}
        query = self.db.query(ProductVariant).filter(ProductVariant.id.in_(list(set(variant_ids))))
        query = apply_fetch_mode(query, ProductVariant, fetch_mode)
        return {variant.id: variant for variant in query.all()}

    def intake_by_variant(self, receipts: List[Input]) -> Dict[int, int]:
        """Cantidad total que ingresa por variante"""
        intake = defaultdict(int)
        for receipt in receipts:
            for line in receipt.lines:
                intake[line.product_variant_id] += line.quantity
        return dict(intake)

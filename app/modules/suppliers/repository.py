# app/modules/suppliers/repository.py
from typing import Any, Dict, Sequence, Set

from sqlalchemy.orm import Session

from app.shared.database.models import Input, Supplier
from app.shared.database.repository import SoftDeleteRepository
from app.shared.lifecycle import ReceiptStatus


class SuppliersRepository(SoftDeleteRepository):
    model = Supplier

    def __init__(self, db: Session):
        super().__init__(db)

    def create_supplier(self, supplier_data: Dict[str, Any]) -> Supplier:
        """Crear proveedor (sin commit)"""
        return self.add(Supplier(
            name=supplier_data['name'],
            phone=supplier_data.get('phone'),
            email=supplier_data.get('email')
        ))

    def with_working_receipts(self, supplier_ids: Sequence[int]) -> Set[int]:
        """Proveedores con recibos activos todavía en 'working'"""
        if not supplier_ids:
            return set()
        rows = (
            self.db.query(Input.supplier_id)
            .filter(
                Input.supplier_id.in_(list(supplier_ids)),
                Input.status_id == ReceiptStatus.WORKING,
                Input.deleted_at.is_(None)
            )
            .distinct()
            .all()
        )
        return {row.supplier_id for row in rows}

# app/modules/variants/repository.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.shared.database.models import Brand, ProductVariant
from app.shared.database.repository import SoftDeleteRepository, apply_fetch_mode
from app.shared.lifecycle import FetchMode


class VariantsRepository(SoftDeleteRepository):
    model = ProductVariant

    def __init__(self, db: Session):
        super().__init__(db)

    def create_variant(self, variant_data: Dict[str, Any]) -> ProductVariant:
        """Crear variante (sin commit)"""
        return self.add(ProductVariant(
            brand_id=variant_data.get('brand_id'),
            sku=variant_data['sku'],
            name=variant_data['name'],
            unit_price=variant_data['unit_price'],
            stock_quantity=variant_data.get('stock_quantity', 0)
        ))

    def find_by_sku(self, sku: str) -> Optional[ProductVariant]:
        # El SKU es único también entre variantes eliminadas
        return self.db.query(ProductVariant).filter(ProductVariant.sku == sku).first()

    def get_brand(self, brand_id: int, fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> Optional[Brand]:
        query = self.db.query(Brand).filter(Brand.id == brand_id)
        return apply_fetch_mode(query, Brand, fetch_mode).first()

# app/modules/brands/repository.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.shared.database.models import Brand
from app.shared.database.repository import SoftDeleteRepository


class BrandsRepository(SoftDeleteRepository):
    model = Brand

    def __init__(self, db: Session):
        super().__init__(db)

    def create_brand(self, brand_data: Dict[str, Any]) -> Brand:
        """Crear marca (sin commit)"""
        return self.add(Brand(
            name=brand_data['name'],
            description=brand_data.get('description')
        ))

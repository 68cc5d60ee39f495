# app/modules/variants/__init__.py
"""
Módulo de Variantes de producto

- Alta con SKU único y marca activa
- Eliminación lógica y restauración, individual y masiva (todo o nada)
"""

from .router import router
from .service import VariantsService
from .repository import VariantsRepository

__all__ = [
    "router",
    "VariantsService",
    "VariantsRepository"
]

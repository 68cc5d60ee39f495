# app/modules/brands/__init__.py
"""
Módulo de Marcas - Catálogo sin estados

Eliminación lógica y restauración, individual y masiva (todo o nada).
"""

from .router import router
from .service import BrandsService
from .repository import BrandsRepository

__all__ = [
    "router",
    "BrandsService",
    "BrandsRepository"
]

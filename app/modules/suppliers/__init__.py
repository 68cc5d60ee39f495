# app/modules/suppliers/__init__.py
"""
Módulo de Proveedores

Eliminación lógica y restauración, individual y masiva (todo o nada).
Los proveedores con recibos en 'working' no se pueden eliminar.
"""

from .router import router
from .service import SuppliersService
from .repository import SuppliersRepository

__all__ = [
    "router",
    "SuppliersService",
    "SuppliersRepository"
]

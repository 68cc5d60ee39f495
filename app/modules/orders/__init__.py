# app/modules/orders/__init__.py
"""
Módulo de Pedidos - Ciclo de vida de pedidos de venta (Output)

- Crear / editar pedidos mientras estén en 'pending'
- Cambios de estado validados contra la tabla de transiciones
- Eliminación lógica y restauración, individual y masiva (todo o nada)
- Validación y descuento de stock al completar

Arquitectura:
- router.py: Endpoints de pedidos
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import OrdersService
from .repository import OrdersRepository

__all__ = [
    "router",
    "OrdersService",
    "OrdersRepository"
]

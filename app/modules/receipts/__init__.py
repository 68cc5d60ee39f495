# app/modules/receipts/__init__.py
"""
Módulo de Recibos - Ingreso de mercadería (Input)

- Crear / editar recibos mientras estén en 'working'
- working → finish ingresa el stock y fija input_date
- Solo recibos cancelados se pueden eliminar
- Clonar recibos omitiendo variantes eliminadas
"""

from .router import router
from .service import ReceiptsService
from .repository import ReceiptsRepository

__all__ = [
    "router",
    "ReceiptsService",
    "ReceiptsRepository"
]

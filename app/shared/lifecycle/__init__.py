# app/shared/lifecycle/__init__.py
"""
Núcleo del ciclo de vida de pedidos y recepciones

- statuses.py: registro de estados válidos y predicados
- transitions.py: tablas de transición
- guard.py: reglas de cambio de estado y edición
- soft_delete.py: eliminación lógica y restauración
- bulk.py: operaciones masivas todo-o-nada
- results.py: resultados tipados y códigos de error
"""

from .results import ErrorCode, LifecycleError, Result
from .statuses import (
    OrderStatus,
    ReceiptStatus,
    StatusRegistry,
    ORDER_STATUSES,
    RECEIPT_STATUSES,
)
from .transitions import TransitionTable, ORDER_TRANSITIONS, RECEIPT_TRANSITIONS
from .guard import LifecycleGuard
from .soft_delete import SoftDeleteCoordinator
from .bulk import (
    BulkMutationOrchestrator,
    BulkOperation,
    CancellationSignal,
    FetchMode,
    OperationCancelled,
    Reader,
    UnitOfWork,
    delete_operation,
    restore_operation,
    status_operation,
)

__all__ = [
    "ErrorCode",
    "LifecycleError",
    "Result",
    "OrderStatus",
    "ReceiptStatus",
    "StatusRegistry",
    "ORDER_STATUSES",
    "RECEIPT_STATUSES",
    "TransitionTable",
    "ORDER_TRANSITIONS",
    "RECEIPT_TRANSITIONS",
    "LifecycleGuard",
    "SoftDeleteCoordinator",
    "BulkMutationOrchestrator",
    "BulkOperation",
    "CancellationSignal",
    "FetchMode",
    "OperationCancelled",
    "Reader",
    "UnitOfWork",
    "delete_operation",
    "restore_operation",
    "status_operation",
]

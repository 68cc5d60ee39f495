# app/shared/lifecycle/transitions.py
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, FrozenSet

from .statuses import OrderStatus, ReceiptStatus, StatusRegistry, ORDER_STATUSES, RECEIPT_STATUSES


class TransitionTable:
    """Adyacencia estado actual → estados alcanzables en un paso"""

    def __init__(self, registry: StatusRegistry, edges: Mapping[str, Iterable[str]]):
        self.registry = registry
        table = {}
        for source, targets in edges.items():
            targets = frozenset(targets)
            unknown = ({source} | targets) - registry.statuses
            if unknown:
                raise ValueError(f"Transición con estados desconocidos: {sorted(unknown)}")
            table[source] = targets
        # Todo estado sin fila es terminal
        for status in registry.statuses:
            table.setdefault(status, frozenset())
        self._table = MappingProxyType(table)

    def is_transition_allowed(self, current: Optional[str], target: Optional[str]) -> bool:
        if not current or not target:
            return False
        return target in self._table.get(current, frozenset())

    def allowed_from(self, current: Optional[str]) -> FrozenSet[str]:
        if not current:
            return frozenset()
        return self._table.get(current, frozenset())

    def is_terminal(self, status: Optional[str]) -> bool:
        return self.registry.is_valid(status) and not self._table[status]


ORDER_TRANSITIONS = TransitionTable(
    ORDER_STATUSES,
    {
        OrderStatus.PENDING: [
            OrderStatus.DEPOSIT_50,
            OrderStatus.CONFIRMED_COD,
            OrderStatus.REFUND,
            OrderStatus.CANCELLED,
        ],
        OrderStatus.DEPOSIT_50: [OrderStatus.CONFIRMED_50, OrderStatus.REFUND],
        OrderStatus.CONFIRMED_50: [OrderStatus.DELIVERING, OrderStatus.REFUND],
        OrderStatus.CONFIRMED_COD: [OrderStatus.DELIVERING, OrderStatus.REFUND],
        OrderStatus.DELIVERING: [OrderStatus.COMPLETED],
        OrderStatus.COMPLETED: [],
        OrderStatus.REFUND: [],
        OrderStatus.CANCELLED: [],
    },
)

RECEIPT_TRANSITIONS = TransitionTable(
    RECEIPT_STATUSES,
    {
        ReceiptStatus.WORKING: [ReceiptStatus.FINISH, ReceiptStatus.CANCEL],
        ReceiptStatus.FINISH: [],
        ReceiptStatus.CANCEL: [],
    },
)

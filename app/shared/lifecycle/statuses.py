# app/shared/lifecycle/statuses.py
"""
Registro de estados por tipo de sujeto (pedido / recepción).

Tablas de solo lectura construidas al importar el módulo; no requieren
sincronización.
"""
from typing import FrozenSet, Iterable, Optional


class OrderStatus:
    PENDING = "pending"
    DEPOSIT_50 = "deposit_50"
    CONFIRMED_50 = "confirmed_50"
    CONFIRMED_COD = "confirmed_cod"
    DELIVERING = "delivering"
    COMPLETED = "completed"
    REFUND = "refund"
    CANCELLED = "cancelled"


class ReceiptStatus:
    WORKING = "working"
    FINISH = "finish"
    CANCEL = "cancel"


class StatusRegistry:
    """Conjunto fijo de estados válidos de un tipo de sujeto y sus predicados"""

    def __init__(
        self,
        kind: str,
        statuses: Iterable[str],
        initial: str,
        editable: Iterable[str],
        cannot_delete: Iterable[str],
        completion: Optional[str] = None,
    ):
        self.kind = kind
        self.statuses: FrozenSet[str] = frozenset(statuses)
        self.initial = initial
        self.editable: FrozenSet[str] = frozenset(editable)
        self.cannot_delete: FrozenSet[str] = frozenset(cannot_delete)
        # Estado terminal que registra al usuario que finaliza (finished_by)
        self.completion = completion

        unknown = (self.editable | self.cannot_delete | {initial}) - self.statuses
        if completion is not None:
            unknown |= {completion} - self.statuses
        if unknown:
            raise ValueError(f"Estados desconocidos para '{kind}': {sorted(unknown)}")

    def is_valid(self, status: Optional[str]) -> bool:
        return bool(status) and status in self.statuses

    def is_editable(self, status: Optional[str]) -> bool:
        return bool(status) and status in self.editable

    def is_cannot_delete(self, status: Optional[str]) -> bool:
        return bool(status) and status in self.cannot_delete

    def is_completion(self, status: Optional[str]) -> bool:
        return self.completion is not None and status == self.completion

    def __repr__(self) -> str:
        return f"StatusRegistry(kind={self.kind!r}, statuses={sorted(self.statuses)})"


ORDER_STATUSES = StatusRegistry(
    kind="order",
    statuses=[
        OrderStatus.PENDING,
        OrderStatus.DEPOSIT_50,
        OrderStatus.CONFIRMED_50,
        OrderStatus.CONFIRMED_COD,
        OrderStatus.DELIVERING,
        OrderStatus.COMPLETED,
        OrderStatus.REFUND,
        OrderStatus.CANCELLED,
    ],
    initial=OrderStatus.PENDING,
    editable=[OrderStatus.PENDING],
    cannot_delete=[
        OrderStatus.DEPOSIT_50,
        OrderStatus.CONFIRMED_50,
        OrderStatus.CONFIRMED_COD,
        OrderStatus.DELIVERING,
        OrderStatus.COMPLETED,
    ],
    completion=OrderStatus.COMPLETED,
)

RECEIPT_STATUSES = StatusRegistry(
    kind="receipt",
    statuses=[ReceiptStatus.WORKING, ReceiptStatus.FINISH, ReceiptStatus.CANCEL],
    initial=ReceiptStatus.WORKING,
    editable=[ReceiptStatus.WORKING],
    cannot_delete=[ReceiptStatus.WORKING, ReceiptStatus.FINISH],
)

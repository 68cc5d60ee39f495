# app/shared/lifecycle/bulk.py
"""
Orquestador de operaciones masivas "todo o nada".

Flujo único para delete-many, restore-many y status-change-many:

1. Validar que haya ids (se colapsan duplicados conservando el orden)
2. Cargar los sujetos con el modo de búsqueda de la operación
3. Verificar que el conjunto encontrado sea idéntico al solicitado
4. Verificar cada sujeto (y el lote completo si la operación lo pide)
5. Mutar en memoria y hacer UN solo commit

Si falla cualquier paso antes del 5, ningún sujeto se modifica.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence
import logging

from .guard import LifecycleGuard
from .results import LifecycleError, Result, collect_rejections
from .soft_delete import SoftDeleteCoordinator

logger = logging.getLogger(__name__)


class FetchMode(str, Enum):
    ACTIVE_ONLY = "active_only"
    DELETED_ONLY = "deleted_only"
    ALL = "all"


class Reader(Protocol):
    def find_by_ids(self, ids: Sequence[int], fetch_mode: FetchMode) -> List[Any]: ...

    def find_by_id(self, subject_id: int, fetch_mode: FetchMode) -> Optional[Any]: ...


class CancellationSignal(Protocol):
    """Cualquier objeto con is_set() (threading.Event, asyncio.Event)"""
    def is_set(self) -> bool: ...


class UnitOfWork(Protocol):
    def commit(self, cancel: Optional[CancellationSignal] = None) -> None: ...


class OperationCancelled(Exception):
    """La operación se canceló antes del commit; nada se persistió"""


def raise_if_cancelled(cancel: Optional[CancellationSignal]) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelled("Operación cancelada antes de guardar")


@dataclass
class BulkOperation:
    """Operación por sujeto que el orquestador aplica al lote"""
    name: str
    fetch_mode: FetchMode
    check: Callable[[Any], Result]
    apply: Callable[[Any], None]
    # Verificación sobre el lote completo (p.ej. stock agregado)
    check_batch: Optional[Callable[[List[Any]], Result]] = None
    # Efectos adicionales después de mutar todos los sujetos, antes del commit
    after_apply: Optional[Callable[[List[Any]], None]] = None


def delete_operation(
    coordinator: SoftDeleteCoordinator,
    check_batch: Optional[Callable[[List[Any]], Result]] = None,
) -> BulkOperation:
    return BulkOperation(
        name="delete",
        fetch_mode=FetchMode.ACTIVE_ONLY,
        check=coordinator.check_delete,
        apply=coordinator.apply_delete,
        check_batch=check_batch,
    )


def restore_operation(coordinator: SoftDeleteCoordinator) -> BulkOperation:
    return BulkOperation(
        name="restore",
        fetch_mode=FetchMode.DELETED_ONLY,
        check=coordinator.check_restore,
        apply=coordinator.apply_restore,
    )


def status_operation(
    guard: LifecycleGuard,
    target: str,
    actor_id: Optional[int],
    check_batch: Optional[Callable[[List[Any]], Result]] = None,
    after_apply: Optional[Callable[[List[Any]], None]] = None,
) -> BulkOperation:
    return BulkOperation(
        name=f"status:{target}",
        fetch_mode=FetchMode.ACTIVE_ONLY,
        check=lambda subject: guard.check_transition(subject, target),
        apply=lambda subject: guard.apply_transition(subject, target, actor_id),
        check_batch=check_batch,
        after_apply=after_apply,
    )


def unique_ids(ids: Sequence[int]) -> List[int]:
    return list(dict.fromkeys(ids))


class BulkMutationOrchestrator:
    def __init__(self, reader: Reader, unit_of_work: UnitOfWork, label: str = "registros"):
        self.reader = reader
        self.unit_of_work = unit_of_work
        self.label = label

    def load_complete(self, ids: Sequence[int], fetch_mode: FetchMode) -> Result:
        """Pasos 1-3: carga y verificación de completitud"""
        requested = unique_ids(ids or [])
        if not requested:
            return Result.failure(LifecycleError.bad_request("Debe indicar al menos un Id", field="Ids"))

        subjects = self.reader.find_by_ids(requested, fetch_mode)
        found_ids = {subject.id for subject in subjects}
        missing = [subject_id for subject_id in requested if subject_id not in found_ids]

        if missing or len(subjects) != len(requested):
            return Result.failure(LifecycleError.not_found(
                f"No se encontraron {len(missing)} {self.label}: {', '.join(str(i) for i in missing)}",
                field="Ids",
                details={"missing_ids": missing, "fetch_mode": fetch_mode.value},
            ))

        return Result.success(subjects)

    def validate(self, subjects: List[Any], operation: BulkOperation) -> Result:
        """Paso 4: verificación por sujeto y por lote, sin mutar"""
        checks = [operation.check(subject) for subject in subjects]
        first_rejection = next((r for r in checks if r.failed), None)

        if first_rejection is not None:
            rejections = collect_rejections(checks)
            error = first_rejection.error
            return Result.failure(LifecycleError(
                code=error.code,
                message=error.message,
                field=error.field,
                subject_id=error.subject_id,
                details={**error.details, "rejected": rejections, "rejected_count": len(rejections)},
            ))

        if operation.check_batch is not None:
            batch_result = operation.check_batch(subjects)
            if batch_result.failed:
                return batch_result

        return Result.success(subjects)

    def execute(self, ids: Sequence[int], operation: BulkOperation, cancel: Optional[CancellationSignal] = None) -> Result:
        loaded = self.load_complete(ids, operation.fetch_mode)
        if loaded.failed:
            logger.warning(f"⛔ Bulk {operation.name} rechazado: {loaded.error.message}")
            return loaded

        subjects = loaded.value
        validated = self.validate(subjects, operation)
        if validated.failed:
            logger.warning(f"⛔ Bulk {operation.name} rechazado: {validated.error.message}")
            return validated

        # Paso 5: mutación en memoria + commit único
        raise_if_cancelled(cancel)
        for subject in subjects:
            operation.apply(subject)
        if operation.after_apply is not None:
            operation.after_apply(subjects)

        self.unit_of_work.commit(cancel)
        logger.info(f"✅ Bulk {operation.name} aplicado a {len(subjects)} {self.label}")

        return Result.success(subjects)

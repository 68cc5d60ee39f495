from datetime import datetime
from typing import Any, Optional

from .guard import Clock
from .results import LifecycleError, Result
from .statuses import StatusRegistry


class SoftDeleteCoordinator:
    """
    Eliminación lógica y restauración mediante deleted_at.

    Si no hay registry (entidades sin estado, p.ej. marcas) no se bloquea
    ninguna eliminación por estado.
    """

    def __init__(self, registry: Optional[StatusRegistry] = None, label: str = "registro", clock: Clock = datetime.now):
        self.registry = registry
        self.label = label
        self.clock = clock

    def _not_found(self, subject_id: Optional[int]) -> Result:
        if subject_id is None:
            message = f"{self.label.capitalize()} no encontrado"
        else:
            message = f"{self.label.capitalize()} {subject_id} no encontrado"
        return Result.failure(LifecycleError.not_found(message, subject_id=subject_id))

    def check_delete(self, subject: Any, subject_id: Optional[int] = None) -> Result:
        if subject is None:
            return self._not_found(subject_id)

        if subject.deleted_at is not None:
            return Result.failure(LifecycleError.not_found(
                f"{self.label.capitalize()} {subject.id} ya fue eliminado",
                subject_id=subject.id,
            ))

        if self.registry is not None and self.registry.is_cannot_delete(subject.status_id):
            return Result.failure(LifecycleError.conflict(
                f"No se puede eliminar {self.label} {subject.id} en estado '{subject.status_id}'. "
                f"Debe cancelarse primero",
                field="status_id",
                subject_id=subject.id,
            ))

        return Result.success(subject)

    def apply_delete(self, subject: Any) -> None:
        subject.deleted_at = self.clock()

    def try_delete(self, subject: Any, subject_id: Optional[int] = None) -> Result:
        result = self.check_delete(subject, subject_id)
        if result.ok:
            self.apply_delete(subject)
        return result

    def check_restore(self, subject: Any, subject_id: Optional[int] = None) -> Result:
        if subject is None:
            return self._not_found(subject_id)

        if subject.deleted_at is None:
            return Result.failure(LifecycleError.bad_request(
                f"{self.label.capitalize()} {subject.id} no está eliminado",
                field="Id",
                subject_id=subject.id,
            ))

        return Result.success(subject)

    def apply_restore(self, subject: Any) -> None:
        # El estado no se toca: se retoma donde estaba
        subject.deleted_at = None

    def try_restore(self, subject: Any, subject_id: Optional[int] = None) -> Result:
        result = self.check_restore(subject, subject_id)
        if result.ok:
            self.apply_restore(subject)
        return result

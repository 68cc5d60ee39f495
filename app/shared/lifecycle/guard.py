# app/shared/lifecycle/guard.py
from datetime import datetime
from typing import Any, Callable, Optional

from .results import LifecycleError, Result
from .transitions import TransitionTable

Clock = Callable[[], datetime]


class LifecycleGuard:
    """
    Reglas de transición de estado y edición sobre un sujeto en memoria.

    Cada operación tiene una mitad de verificación pura (check_*) y una mitad
    que muta (apply_*). try_* combina ambas. Nada aquí hace commit.
    """

    def __init__(self, transitions: TransitionTable, label: str = "registro", clock: Clock = datetime.now):
        self.transitions = transitions
        self.registry = transitions.registry
        self.label = label
        self.clock = clock

    # ---------- transiciones ----------

    def check_transition(self, subject: Any, target: Optional[str]) -> Result:
        if subject is None:
            return Result.failure(LifecycleError.not_found(f"{self.label.capitalize()} no encontrado"))

        if subject.deleted_at is not None:
            return Result.failure(LifecycleError.conflict(
                f"{self.label.capitalize()} {subject.id} está eliminado y no admite cambios de estado",
                subject_id=subject.id,
            ))

        if not self.transitions.is_transition_allowed(subject.status_id, target):
            allowed = sorted(self.transitions.allowed_from(subject.status_id))
            return Result.failure(LifecycleError.invalid_transition(
                f"{self.label.capitalize()} {subject.id}: no se puede cambiar de "
                f"'{subject.status_id}' a '{target}'. "
                f"Permitidos: {', '.join(allowed) if allowed else 'ninguno (estado terminal)'}",
                subject_id=subject.id,
                details={"current": subject.status_id, "target": target, "allowed": allowed},
            ))

        return Result.success(subject)

    def apply_transition(self, subject: Any, target: str, actor_id: Optional[int]) -> None:
        subject.status_id = target
        subject.last_status_changed_at = self.clock()
        if self.registry.is_completion(target):
            subject.finished_by = actor_id

    def try_transition(self, subject: Any, target: Optional[str], actor_id: Optional[int]) -> Result:
        result = self.check_transition(subject, target)
        if result.ok:
            self.apply_transition(subject, target, actor_id)
        return result

    # ---------- edición ----------

    def try_edit(self, subject: Any) -> Result:
        """Solo verifica; la edición de campos la hace el servicio"""
        if subject is None:
            return Result.failure(LifecycleError.not_found(f"{self.label.capitalize()} no encontrado"))

        if subject.deleted_at is not None:
            return Result.failure(LifecycleError.conflict(
                f"{self.label.capitalize()} {subject.id} está eliminado y no se puede editar",
                subject_id=subject.id,
            ))

        if not self.registry.is_editable(subject.status_id):
            return Result.failure(LifecycleError.conflict(
                f"{self.label.capitalize()} {subject.id} en estado '{subject.status_id}' ya no se puede editar",
                field="status_id",
                subject_id=subject.id,
            ))

        return Result.success(subject)

# app/shared/lifecycle/results.py
import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    BAD_REQUEST = "BAD_REQUEST"


@dataclass(frozen=True)
class LifecycleError:
    """Error de negocio detectado en memoria (nunca se lanza como excepción)"""
    code: ErrorCode
    message: str
    field: Optional[str] = None
    subject_id: Optional[int] = None
    details: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def not_found(cls, message: str, field: Optional[str] = "Id", **kwargs) -> "LifecycleError":
        return cls(ErrorCode.NOT_FOUND, message, field, **kwargs)

    @classmethod
    def conflict(cls, message: str, field: Optional[str] = "Id", **kwargs) -> "LifecycleError":
        return cls(ErrorCode.CONFLICT, message, field, **kwargs)

    @classmethod
    def invalid_transition(cls, message: str, field: Optional[str] = "status_id", **kwargs) -> "LifecycleError":
        return cls(ErrorCode.INVALID_TRANSITION, message, field, **kwargs)

    @classmethod
    def bad_request(cls, message: str, field: Optional[str] = None, **kwargs) -> "LifecycleError":
        return cls(ErrorCode.BAD_REQUEST, message, field, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "error_code": self.code.value,
            "message": self.message,
            "field": self.field,
        }
        if self.subject_id is not None:
            data["subject_id"] = self.subject_id
        if self.details:
            data["details"] = self.details
        return data


@dataclass
class Result(Generic[T]):
    """
    Resultado tipado de una operación del ciclo de vida.

    - ok=True  → value contiene el dato (sujeto o lista de sujetos)
    - ok=False → error describe el motivo; no hubo mutación
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[LifecycleError] = None

    def __post_init__(self):
        if self.ok and self.error is not None:
            raise ValueError("Un resultado exitoso no puede tener error")
        if not self.ok and self.error is None:
            raise ValueError("Un resultado fallido debe tener un error")

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: LifecycleError) -> "Result[T]":
        return cls(ok=False, error=error)

    @property
    def failed(self) -> bool:
        return not self.ok


def collect_rejections(results: List["Result"]) -> List[Dict[str, Any]]:
    """Resumen de todos los rechazos de un lote (para el campo details)"""
    return [r.error.to_dict() for r in results if r.failed]

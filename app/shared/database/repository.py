# app/shared/database/repository.py
from typing import Any, List, Optional, Sequence, Type
import logging

from sqlalchemy.orm import Session, Query

from app.shared.lifecycle.bulk import CancellationSignal, FetchMode, OperationCancelled

logger = logging.getLogger(__name__)


def apply_fetch_mode(query: Query, model: Type[Any], fetch_mode: FetchMode) -> Query:
    """Filtrar estrictamente por el modo de búsqueda solicitado"""
    if fetch_mode == FetchMode.ACTIVE_ONLY:
        return query.filter(model.deleted_at.is_(None))
    if fetch_mode == FetchMode.DELETED_ONLY:
        return query.filter(model.deleted_at.isnot(None))
    return query


class SoftDeleteRepository:
    """Lectura de entidades con eliminación lógica (implementa Reader)"""

    model: Type[Any] = None

    def __init__(self, db: Session):
        self.db = db

    def _query(self) -> Query:
        return self.db.query(self.model)

    def find_by_ids(self, ids: Sequence[int], fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> List[Any]:
        if not ids:
            return []
        query = self._query().filter(self.model.id.in_(list(ids)))
        return apply_fetch_mode(query, self.model, fetch_mode).order_by(self.model.id).all()

    def find_by_id(self, subject_id: int, fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> Optional[Any]:
        query = self._query().filter(self.model.id == subject_id)
        return apply_fetch_mode(query, self.model, fetch_mode).first()

    def list(self, fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY, skip: int = 0, limit: int = 100) -> List[Any]:
        query = apply_fetch_mode(self._query(), self.model, fetch_mode)
        return query.order_by(self.model.id.desc()).offset(skip).limit(limit).all()

    def count(self, fetch_mode: FetchMode = FetchMode.ACTIVE_ONLY) -> int:
        return apply_fetch_mode(self._query(), self.model, fetch_mode).count()

    def add(self, entity: Any) -> Any:
        self.db.add(entity)
        return entity


class SqlAlchemyUnitOfWork:
    """Commit atómico de todo lo mutado en la sesión (implementa UnitOfWork)"""

    def __init__(self, db: Session):
        self.db = db

    def commit(self, cancel: Optional[CancellationSignal] = None) -> None:
        if cancel is not None and cancel.is_set():
            self.db.rollback()
            logger.warning("⛔ Commit cancelado, se descartan los cambios pendientes")
            raise OperationCancelled("Operación cancelada antes de guardar")
        try:
            self.db.commit()
        except Exception:
            # El error de almacenamiento se propaga sin cambios
            logger.exception("❌ Error en commit, revirtiendo sesión")
            self.db.rollback()
            raise

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from leadintake.core.exceptions import StorageError
from leadintake.models.intake import IntakeStatusEnum

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 200
# Ids are signed 64-bit integers in every supported database
MAX_RECORD_ID = 2 ** 63 - 1


def _valid_id(record_id: int) -> bool:
    return 1 <= record_id <= MAX_RECORD_ID


class RecordStore:
    """One table of intake submissions.

    Every call runs in its own session and transaction, so a caller always
    sees its own committed writes on the next read.
    """

    def __init__(self, session_factory: sessionmaker, model: type, max_limit: int = DEFAULT_LIST_LIMIT):
        self._session_factory = session_factory
        self.model = model
        self.max_limit = max_limit

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def _fail(self, session, action: str, exc: Exception) -> StorageError:
        session.rollback()
        logger.error(f"❌ {self.table_name} {action} failed: {exc}")
        return StorageError(details=str(exc))

    def insert(self, record: Dict[str, Any]) -> int:
        """Persist a new pending row and return its id."""
        with self._session_factory() as session:
            row = self.model(**record, status=IntakeStatusEnum.PENDING)
            session.add(row)
            try:
                session.commit()
            except SQLAlchemyError as e:
                raise self._fail(session, "insert", e)
            return row.id

    def list(self, limit: Optional[int] = None) -> List[Any]:
        """Newest rows first, never more than ``max_limit``."""
        if limit is None or limit > self.max_limit:
            limit = self.max_limit
        if limit <= 0:
            return []
        with self._session_factory() as session:
            try:
                return (
                    session.query(self.model)
                    .order_by(self.model.id.desc())
                    .limit(limit)
                    .all()
                )
            except SQLAlchemyError as e:
                raise self._fail(session, "list", e)

    def get(self, record_id: int) -> Optional[Any]:
        if not _valid_id(record_id):
            return None
        with self._session_factory() as session:
            try:
                return session.get(self.model, record_id)
            except SQLAlchemyError as e:
                raise self._fail(session, "get", e)

    def set_status(self, record_id: int, status: IntakeStatusEnum) -> int:
        """Return the number of rows matched (0 or 1)."""
        if not _valid_id(record_id):
            return 0
        with self._session_factory() as session:
            try:
                updated = (
                    session.query(self.model)
                    .filter(self.model.id == record_id)
                    .update({self.model.status: status}, synchronize_session=False)
                )
                session.commit()
            except SQLAlchemyError as e:
                raise self._fail(session, "status update", e)
            return int(updated)

    def delete(self, record_id: int) -> int:
        if not _valid_id(record_id):
            return 0
        with self._session_factory() as session:
            try:
                deleted = (
                    session.query(self.model)
                    .filter(self.model.id == record_id)
                    .delete(synchronize_session=False)
                )
                session.commit()
            except SQLAlchemyError as e:
                raise self._fail(session, "delete", e)
            return int(deleted)

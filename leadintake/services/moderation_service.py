import logging
import secrets
from typing import Any, Dict, List, Mapping, Optional

from leadintake.core.exceptions import AdminNotConfigured, Unauthorized
from leadintake.models.intake import IntakeStatusEnum
from leadintake.services.intake_types import IntakeDefinition
from leadintake.services.record_store import RecordStore
from leadintake.utils.audit import audit

logger = logging.getLogger(__name__)


class ModerationService:
    """Admin-only reads and status changes over the intake tables.

    Every operation checks the shared admin key before touching a store.
    A missing row and an already-deleted row both report 0; callers already
    have the listing to tell them apart.
    """

    def __init__(self, stores: Mapping[str, RecordStore], admin_key: Optional[str]):
        self.stores = stores
        self._admin_key = (admin_key or "").strip()

    def authorize(self, credential: Optional[str]) -> None:
        if not self._admin_key:
            raise AdminNotConfigured()
        got = (credential or "").strip()
        if not got or not secrets.compare_digest(got.encode(), self._admin_key.encode()):
            audit("ADMIN_AUTH_FAILED")
            raise Unauthorized()

    def list_entries(self, credential: Optional[str], intake_type: IntakeDefinition, limit: Optional[int] = None) -> List[Any]:
        self.authorize(credential)
        return self.stores[intake_type.name].list(limit)

    def accept(self, credential: Optional[str], intake_type: IntakeDefinition, record_id: int) -> Dict[str, int]:
        return self._set_status(credential, intake_type, record_id, IntakeStatusEnum.ACCEPTED)

    def reject(self, credential: Optional[str], intake_type: IntakeDefinition, record_id: int) -> Dict[str, int]:
        return self._set_status(credential, intake_type, record_id, IntakeStatusEnum.REJECTED)

    def remove(self, credential: Optional[str], intake_type: IntakeDefinition, record_id: int) -> Dict[str, int]:
        self.authorize(credential)
        deleted = self.stores[intake_type.name].delete(record_id)
        audit("INTAKE_DELETED", intake_type=intake_type.name, record_id=record_id, deleted=deleted)
        return {"deleted": deleted}

    def _set_status(self, credential, intake_type, record_id, status: IntakeStatusEnum) -> Dict[str, int]:
        self.authorize(credential)
        updated = self.stores[intake_type.name].set_status(record_id, status)
        audit("INTAKE_STATUS_SET", intake_type=intake_type.name, record_id=record_id, status=status.value, updated=updated)
        return {"updated": updated}

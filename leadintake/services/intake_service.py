import logging
from typing import Any, Dict, Mapping

from fastapi import BackgroundTasks

from leadintake.services.intake_types import IntakeDefinition
from leadintake.services.record_store import RecordStore
from leadintake.services.validation import validate_submission

logger = logging.getLogger(__name__)


class IntakeService:
    """Validate, store and acknowledge public form submissions."""

    def __init__(self, stores: Mapping[str, RecordStore], notifier=None, site_name: str = "ZigaSwift"):
        self.stores = stores
        self.notifier = notifier
        self.site_name = site_name

    def submit(
        self, intake_type: IntakeDefinition, raw: Any, background: BackgroundTasks | None = None
    ) -> Dict[str, int]:
        """Store one submission; the confirmation runs after the response when ``background`` is given."""
        record = validate_submission(intake_type.schema, raw)
        record_id = self.stores[intake_type.name].insert(record)
        logger.info(f"✅ New {intake_type.name} submission id={record_id}")
        if background is not None:
            background.add_task(self._confirm, intake_type, record)
        else:
            self._confirm(intake_type, record)
        return {"id": record_id}

    def _confirm(self, intake_type: IntakeDefinition, record: Dict[str, Any]) -> None:
        if self.notifier is None or intake_type.confirmation is None:
            return
        try:
            subject, html = intake_type.confirmation(record, self.site_name)
            self.notifier.notify(record["email"], subject, html)
        except Exception as e:
            # The row is committed; a lost confirmation email is only logged
            logger.warning(f"⚠️ Confirmation for {intake_type.name} not sent: {e}")

"""Audit outbox domain service.

Journal state changes write their audit events into an outbox table in the
same transaction as the change. A separate consumer drains the outbox with
``dispatch_pending``.
"""

from datetime import datetime, UTC
from typing import Callable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import AuditEvent
from ledgerkit.logging_config import get_logger

logger = get_logger(__name__)


class AuditService:
    """Service for reading and delivering audit outbox events."""

    def __init__(self, db: Database):
        """Initialize audit service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_events(self, company_id: Optional[int] = None) -> list[AuditEvent]:
        return self.db.list_audit_events(company_id=company_id)

    def pending_events(self, company_id: Optional[int] = None) -> list[AuditEvent]:
        """List events not yet delivered, oldest first."""
        return self.db.list_audit_events(company_id=company_id, pending_only=True)

    def dispatch_pending(
        self,
        handler: Callable[[AuditEvent], None],
        company_id: Optional[int] = None,
    ) -> int:
        """Deliver pending events to ``handler`` in order.

        An event is marked dispatched only after the handler returns. If the
        handler raises, the event stays pending for the next run and the
        remaining events are still offered.

        Returns:
            Number of events delivered
        """
        delivered = 0
        for event in self.pending_events(company_id):
            try:
                handler(event)
            except Exception:
                logger.warning(
                    "Audit event delivery failed; leaving it pending",
                    exc_info=True,
                    extra={"audit_event_id": event.id},
                )
                continue
            self.db.mark_audit_event_dispatched(event.id, datetime.now(UTC))
            delivered += 1
        return delivered

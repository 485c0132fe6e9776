# =============================================================================
# FILE: infrastructure/repositories/in_memory/audit_events.py
# =============================================================================
"""
In-Memory Audit Event Repository for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import List, Optional
from uuid import UUID

from ....domain.audit import AuditEvent
from ....domain.repositories import AuditEventRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryAuditEventRepository(AuditEventRepository):
    """
    In-memory implementation of AuditEventRepository (append-only).

    Useful for:
      - Unit testing
      - Local development without database
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[AuditEvent] = []

    def record_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._events.append(event)

    def list_events(
        self,
        *,
        target_id: Optional[UUID] = None,
        actor_id: Optional[str] = None,
        action_prefix: Optional[str] = None,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[AuditEvent]:
        """List events with filters, newest first (stable for equal timestamps)."""
        with self._lock:
            indexed = list(enumerate(self._events))

        def predicate(event: AuditEvent) -> bool:
            if target_id is not None and event.target_id != target_id:
                return False
            if actor_id is not None and event.actor != actor_id:
                return False
            if action_prefix is not None and not event.action.startswith(action_prefix):
                return False
            created = event.created_at or _EPOCH
            if start_at is not None and created < start_at:
                return False
            if end_at is not None and created > end_at:
                return False
            return True

        filtered = [(i, e) for i, e in indexed if predicate(e)]
        # Sort by created_at descending; insertion order breaks ties.
        filtered.sort(key=lambda pair: (pair[1].created_at or _EPOCH, pair[0]), reverse=True)
        return [e for _, e in filtered][offset : offset + limit]

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def clear(self) -> None:
        """Clear all data (for testing)."""
        with self._lock:
            self._events.clear()

    def get_all_events(self) -> List[AuditEvent]:
        """Get all events in insertion order (for testing)."""
        with self._lock:
            return list(self._events)

"""
In-memory ShiftScheduler (tests / local dev).

The real scheduler lives outside this core; this adapter only serves the
shift assignment, geofence and hourly rate the check-in flow needs.
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import ScheduledShift
from ....domain.services import ShiftScheduler


class InMemoryShiftScheduler(ShiftScheduler):
    def __init__(self) -> None:
        self._lock = Lock()
        self._shifts: Dict[UUID, ScheduledShift] = {}

    def get_shift(self, shift_id: UUID) -> Optional[ScheduledShift]:
        with self._lock:
            return self._shifts.get(shift_id)

    def add_shift(self, shift: ScheduledShift) -> None:
        with self._lock:
            self._shifts[shift.id] = shift

"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/check_ins.py
============================================================
Class: InMemoryCheckInRepository

Responsibilities:
  - Guardar el estado "latest" del check-in por (shift_id, staff_user_id).
  - Compare-and-set por versión: a lo sumo un write exitoso por clave e instante.

Collaborators:
  - domain.entities.GeofenceCheckIn
  - domain.repositories.CheckInRepository
  - crosscutting.exceptions.ConflictError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - expected_version == 0 significa "no debe existir todavía".
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, Optional, Tuple
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....domain.entities import GeofenceCheckIn
from ....domain.repositories import CheckInRepository


class InMemoryCheckInRepository(CheckInRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._check_ins: Dict[Tuple[UUID, UUID], GeofenceCheckIn] = {}

    def get_check_in(
        self, shift_id: UUID, staff_user_id: UUID
    ) -> Optional[GeofenceCheckIn]:
        with self._lock:
            found = self._check_ins.get((shift_id, staff_user_id))
            return replace(found) if found else None

    def save_check_in(
        self, check_in: GeofenceCheckIn, expected_version: int
    ) -> GeofenceCheckIn:
        key = (check_in.shift_id, check_in.staff_user_id)
        with self._lock:
            current = self._check_ins.get(key)
            current_version = current.version if current else 0
            if current_version != expected_version:
                raise ConflictError(
                    "Check-in was modified concurrently",
                    entity="geofence_check_in",
                    expected_version=expected_version,
                    actual_version=current_version,
                )
            stored = replace(check_in, version=expected_version + 1)
            self._check_ins[key] = stored
            return replace(stored)

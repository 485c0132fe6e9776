"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/identity_store.py
============================================================
Class: InMemoryIdentityStore

Responsibilities:
  - Almacenar ProviderOwner y Employee en memoria (tests / local dev).
  - Resolver lookups por user_id sin cache (cada llamada lee el estado actual).
  - Crear owners de forma idempotente (un provider por usuario owner).

Collaborators:
  - domain.entities.ProviderOwner, Employee
  - domain.repositories.IdentityStore (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Los helpers add_/remove_ existen para sembrar datos en tests y en el host.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID, uuid4

from ....domain.entities import Employee, ProviderOwner
from ....domain.repositories import IdentityStore


class InMemoryIdentityStore(IdentityStore):
    """Repositorio in-memory, thread-safe, para owners y empleados."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._owners: Dict[UUID, ProviderOwner] = {}  # user_id -> owner
        self._employees: Dict[UUID, Employee] = {}  # user_id -> employee

    # =========================================================
    # Contrato IdentityStore
    # =========================================================
    def find_provider_owner_by_user_id(self, user_id: UUID) -> Optional[ProviderOwner]:
        with self._lock:
            return self._owners.get(user_id)

    def find_employee_by_user_id(self, user_id: UUID) -> Optional[Employee]:
        with self._lock:
            return self._employees.get(user_id)

    def create_provider_owner(self, user_id: UUID) -> ProviderOwner:
        with self._lock:
            existing = self._owners.get(user_id)
            if existing is not None:
                return existing
            owner = ProviderOwner(id=uuid4(), user_id=user_id)
            self._owners[user_id] = owner
            return owner

    # =========================================================
    # Seeding helpers
    # =========================================================
    def add_provider_owner(self, owner: ProviderOwner) -> None:
        with self._lock:
            self._owners[owner.user_id] = owner

    def add_employee(self, employee: Employee) -> None:
        """Alta o reemplazo (p.ej. re-vinculación a otro provider)."""
        with self._lock:
            self._employees[employee.user_id] = employee

    def remove_employee(self, user_id: UUID) -> None:
        with self._lock:
            self._employees.pop(user_id, None)

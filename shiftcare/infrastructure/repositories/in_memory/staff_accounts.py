"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/staff_accounts.py
============================================================
Class: InMemoryStaffAccountRepository

Responsibilities:
  - Almacenar el agregado StaffAccount en memoria.
  - Garantizar unicidad de email (normalizado) y de user_id.
  - Implementar compare-and-set por `version` (concurrencia optimista).

Collaborators:
  - domain.entities.StaffAccount
  - domain.repositories.StaffAccountRepository (contrato a implementar)
  - crosscutting.exceptions.ConflictError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca comparten la instancia almacenada,
    así una mutación local no "salta" el control de versión.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....domain.entities import StaffAccount
from ....domain.repositories import StaffAccountRepository


class InMemoryStaffAccountRepository(StaffAccountRepository):
    """Repositorio in-memory, thread-safe, para cuentas de onboarding."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._accounts: Dict[UUID, StaffAccount] = {}
        self._ids_by_email: Dict[str, UUID] = {}

    @staticmethod
    def _copy(account: StaffAccount) -> StaffAccount:
        """R: Copia defensiva (StaffProfile es frozen, alcanza shallow copy)."""
        return replace(account)

    @staticmethod
    def _email_key(email: str) -> str:
        return email.strip().lower()

    def get_account(self, user_id: UUID) -> Optional[StaffAccount]:
        with self._lock:
            account = self._accounts.get(user_id)
            return self._copy(account) if account else None

    def get_account_by_email(self, email: str) -> Optional[StaffAccount]:
        with self._lock:
            user_id = self._ids_by_email.get(self._email_key(email))
            if user_id is None:
                return None
            return self._copy(self._accounts[user_id])

    def create_account(self, account: StaffAccount) -> StaffAccount:
        key = self._email_key(account.email)
        with self._lock:
            if key in self._ids_by_email or account.user_id in self._accounts:
                raise ConflictError("Account already registered", entity="staff_account")
            stored = self._copy(account)
            self._accounts[account.user_id] = stored
            self._ids_by_email[key] = account.user_id
            return self._copy(stored)

    def save_account(self, account: StaffAccount, expected_version: int) -> StaffAccount:
        with self._lock:
            current = self._accounts.get(account.user_id)
            if current is None or current.version != expected_version:
                raise ConflictError(
                    "Account was modified concurrently",
                    entity="staff_account",
                    expected_version=expected_version,
                    actual_version=current.version if current else None,
                )
            stored = self._copy(account)
            stored.version = expected_version + 1
            self._accounts[account.user_id] = stored
            return self._copy(stored)

    def delete_account(self, user_id: UUID, expected_version: int) -> bool:
        with self._lock:
            current = self._accounts.get(user_id)
            if current is None or current.version != expected_version:
                return False
            del self._accounts[user_id]
            self._ids_by_email.pop(self._email_key(current.email), None)
            return True

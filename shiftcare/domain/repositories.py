"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure (SQL, Redis, in-memory).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: StaffAccount, StaffCertificate, DbsInfo, GeofenceCheckIn, ...
- domain.audit: AuditEvent
- infrastructure.repositories.in_memory: reference implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- Versioned writes (`expected_version`) MUST be atomic compare-and-set and raise
  crosscutting.exceptions.ConflictError on mismatch. Never overwrite silently.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from .audit import AuditEvent
from .entities import (
    DbsInfo,
    Employee,
    EmailVerificationChallenge,
    GeofenceCheckIn,
    ProviderOwner,
    ServiceProviderProfile,
    StaffAccount,
    StaffCertificate,
)
from .value_objects import CertificateType


class IdentityStore(Protocol):
    """
    R: Interface for provider-owner / employee lookups.

    Implementations must read authoritative state on every call (no caching),
    so promotions and deactivations are reflected immediately.
    """

    def find_provider_owner_by_user_id(self, user_id: UUID) -> Optional[ProviderOwner]:
        """R: Owner record keyed by user id, or None."""
        ...

    def find_employee_by_user_id(self, user_id: UUID) -> Optional[Employee]:
        """R: Employee record keyed by user id, or None."""
        ...

    def create_provider_owner(self, user_id: UUID) -> ProviderOwner:
        """
        R: Create the owner record for a user (idempotent per user_id).

        Returns the existing record when the user already owns a provider.
        """
        ...


class StaffAccountRepository(Protocol):
    """R: Interface for the onboarding aggregate."""

    def get_account(self, user_id: UUID) -> Optional[StaffAccount]:
        """R: Return a detached copy of the account, or None."""
        ...

    def get_account_by_email(self, email: str) -> Optional[StaffAccount]:
        """R: Lookup by normalized (lower-case) email."""
        ...

    def create_account(self, account: StaffAccount) -> StaffAccount:
        """
        R: Insert a new account.

        Raises:
            ConflictError: email or user_id already registered.
        """
        ...

    def save_account(self, account: StaffAccount, expected_version: int) -> StaffAccount:
        """
        R: Compare-and-set write.

        Persists `account` only if the stored version equals `expected_version`;
        the stored copy gets version `expected_version + 1`.

        Raises:
            ConflictError: stored version differs (lost race).
        """
        ...

    def delete_account(self, user_id: UUID, expected_version: int) -> bool:
        """
        R: Compare-and-delete (rollback de un alta incompleta).

        Borra la cuenta solo si su versión sigue siendo `expected_version`;
        retorna False si no existe o si ya fue modificada.
        """
        ...


class CertificateRepository(Protocol):
    """R: Interface for staff certificates keyed by (user_id, certificate_type)."""

    def upsert_certificates(
        self, certificates: List[StaffCertificate]
    ) -> List[StaffCertificate]:
        """R: Insert or overwrite each certificate by its natural key (atomic batch)."""
        ...

    def get_certificate(
        self, user_id: UUID, certificate_type: CertificateType
    ) -> Optional[StaffCertificate]:
        ...

    def list_certificates(self, user_id: UUID) -> List[StaffCertificate]:
        """R: All certificates of a user, ordered by certificate type."""
        ...


class DbsInfoRepository(Protocol):
    """R: Interface for DBS info (one per user)."""

    def upsert_dbs_info(self, info: DbsInfo) -> DbsInfo:
        ...

    def get_dbs_info(self, user_id: UUID) -> Optional[DbsInfo]:
        ...


class ServiceProviderProfileRepository(Protocol):
    """R: Interface for service-provider organization profiles."""

    def save_profile(self, profile: ServiceProviderProfile) -> ServiceProviderProfile:
        ...

    def get_profile_by_user_id(self, user_id: UUID) -> Optional[ServiceProviderProfile]:
        ...


class ChallengeStore(Protocol):
    """
    R: Interface for transient email verification challenges.

    Rules:
      - One active challenge per user: put() replaces any previous one.
      - consume() is atomic and single-use.
    """

    def put(self, challenge: EmailVerificationChallenge) -> None:
        ...

    def consume(self, user_id: UUID, code: str, now: datetime) -> bool:
        """
        R: True only if an unexpired challenge with `code` exists for user_id.

        On success the challenge is deleted. A wrong code leaves it in place.
        """
        ...


class CheckInRepository(Protocol):
    """R: Latest check-in state keyed by (shift_id, staff_user_id)."""

    def get_check_in(
        self, shift_id: UUID, staff_user_id: UUID
    ) -> Optional[GeofenceCheckIn]:
        ...

    def save_check_in(
        self, check_in: GeofenceCheckIn, expected_version: int
    ) -> GeofenceCheckIn:
        """
        R: Compare-and-set upsert by natural key.

        expected_version == 0 means "must not exist yet".

        Raises:
            ConflictError: stored version differs (lost race).
        """
        ...


class AuditEventRepository(Protocol):
    """R: Interface for audit event persistence (append-only)."""

    def record_event(self, event: AuditEvent) -> None:
        """R: Persist an audit event."""
        ...

    def list_events(
        self,
        *,
        target_id: UUID | None = None,
        actor_id: str | None = None,
        action_prefix: str | None = None,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditEvent]:
        """R: Fetch audit events with optional filters, newest first."""
        ...

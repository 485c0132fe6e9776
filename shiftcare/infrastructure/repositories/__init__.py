"""Repository adapters (in-memory reference implementations)."""

from .in_memory import (
    InMemoryAuditEventRepository,
    InMemoryCertificateRepository,
    InMemoryCheckInRepository,
    InMemoryDbsInfoRepository,
    InMemoryIdentityStore,
    InMemoryServiceProviderProfileRepository,
    InMemoryShiftScheduler,
    InMemoryStaffAccountRepository,
)

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryCertificateRepository",
    "InMemoryCheckInRepository",
    "InMemoryDbsInfoRepository",
    "InMemoryIdentityStore",
    "InMemoryServiceProviderProfileRepository",
    "InMemoryShiftScheduler",
    "InMemoryStaffAccountRepository",
]

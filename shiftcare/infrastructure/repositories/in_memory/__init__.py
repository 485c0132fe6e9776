"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .audit_events import InMemoryAuditEventRepository
from .check_ins import InMemoryCheckInRepository
from .compliance import InMemoryCertificateRepository, InMemoryDbsInfoRepository
from .identity_store import InMemoryIdentityStore
from .provider_profiles import InMemoryServiceProviderProfileRepository
from .shifts import InMemoryShiftScheduler
from .staff_accounts import InMemoryStaffAccountRepository

__all__ = [
    # Identity / onboarding
    "InMemoryIdentityStore",
    "InMemoryStaffAccountRepository",
    "InMemoryServiceProviderProfileRepository",
    # Compliance
    "InMemoryCertificateRepository",
    "InMemoryDbsInfoRepository",
    # Shifts / check-in
    "InMemoryShiftScheduler",
    "InMemoryCheckInRepository",
    # Audit
    "InMemoryAuditEventRepository",
]

"""
In-memory ServiceProviderProfile repository (tests / local dev).

One profile per user; saving again replaces it.
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.entities import ServiceProviderProfile
from ....domain.repositories import ServiceProviderProfileRepository


class InMemoryServiceProviderProfileRepository(ServiceProviderProfileRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._profiles: Dict[UUID, ServiceProviderProfile] = {}

    def save_profile(self, profile: ServiceProviderProfile) -> ServiceProviderProfile:
        with self._lock:
            self._profiles[profile.user_id] = profile
        return profile

    def get_profile_by_user_id(self, user_id: UUID) -> Optional[ServiceProviderProfile]:
        with self._lock:
            return self._profiles.get(user_id)

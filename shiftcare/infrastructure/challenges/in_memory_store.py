"""
============================================================
TARJETA CRC — infrastructure/challenges/in_memory_store.py
============================================================
Class: InMemoryChallengeStore

Responsibilities:
  - Guardar un challenge activo por usuario (put reemplaza el anterior).
  - consume(): comparar en tiempo constante, verificar expiración y borrar
    (uso único) bajo el mismo lock.

Collaborators:
  - domain.entities.EmailVerificationChallenge
  - domain.repositories.ChallengeStore (contrato a implementar)

Constraints / Notes:
  - NO comparte estado entre procesos: en prod usar RedisChallengeStore.
============================================================
"""

from __future__ import annotations

import hmac
from datetime import datetime
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ...domain.entities import EmailVerificationChallenge
from ...domain.repositories import ChallengeStore


def _constant_time_compare(a: str, b: str) -> bool:
    """Comparación en tiempo constante (mitiga timing attacks)."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class InMemoryChallengeStore(ChallengeStore):
    def __init__(self) -> None:
        self._lock = Lock()
        self._challenges: Dict[UUID, EmailVerificationChallenge] = {}

    def put(self, challenge: EmailVerificationChallenge) -> None:
        with self._lock:
            self._challenges[challenge.user_id] = challenge

    def consume(self, user_id: UUID, code: str, now: datetime) -> bool:
        with self._lock:
            challenge = self._challenges.get(user_id)
            if challenge is None:
                return False
            if not _constant_time_compare(challenge.code, code or ""):
                return False
            # Código correcto: se elimina siempre (vencido o no).
            del self._challenges[user_id]
            return not challenge.is_expired(now)

    def peek(self, user_id: UUID) -> Optional[EmailVerificationChallenge]:
        """Challenge activo (solo tests / diagnóstico)."""
        with self._lock:
            return self._challenges.get(user_id)

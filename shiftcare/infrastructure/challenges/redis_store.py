"""
============================================================
TARJETA CRC — infrastructure/challenges/redis_store.py
============================================================
Class: RedisChallengeStore

Responsibilities:
  - Persistir challenges de verificación en Redis (compartidos entre workers).
  - Expiración nativa (PEXPIREAT) alineada con expires_at del challenge.
  - consume() atómico: compare-and-delete en un script Lua (sin carreras
    entre dos verificaciones simultáneas del mismo código).

Collaborators:
  - redis-py (cliente sync)
  - domain.repositories.ChallengeStore (contrato a implementar)
  - crosscutting.exceptions.ChallengeStoreError

Policy / Design Notes:
  - A diferencia de una caché, acá un fallo de Redis NO es un miss: se
    propaga como ChallengeStoreError para no aceptar/rechazar en silencio.
  - Layout: hash `shiftcare:email_challenge:{user_id}` con campos
    email, code, expires_at_ms.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Final
from uuid import UUID

import redis
from redis.exceptions import RedisError

from ...crosscutting.exceptions import ChallengeStoreError
from ...crosscutting.logger import logger
from ...domain.entities import EmailVerificationChallenge
from ...domain.repositories import ChallengeStore

KEY_PREFIX: Final[str] = "shiftcare:email_challenge:"

# KEYS[1] = hash del challenge; ARGV[1] = código; ARGV[2] = now (epoch ms).
# Devuelve 1 solo si el código coincide y no venció. Código correcto => DEL.
_CONSUME_LUA: Final[str] = """
local stored = redis.call('HGET', KEYS[1], 'code')
if not stored or stored ~= ARGV[1] then
  return 0
end
local expires_at = tonumber(redis.call('HGET', KEYS[1], 'expires_at_ms'))
redis.call('DEL', KEYS[1])
if expires_at and expires_at <= tonumber(ARGV[2]) then
  return 0
end
return 1
"""


def _epoch_ms(value: datetime) -> int:
    return int(value.timestamp() * 1000)


class RedisChallengeStore(ChallengeStore):
    """Challenge store respaldado por Redis."""

    def __init__(self, client: "redis.Redis", *, key_prefix: str = KEY_PREFIX) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._consume_script = client.register_script(_CONSUME_LUA)

    @classmethod
    def from_url(cls, redis_url: str) -> "RedisChallengeStore":
        if not redis_url:
            raise ValueError("redis_url is required")
        return cls(redis.Redis.from_url(redis_url, decode_responses=True))

    def _key(self, user_id: UUID) -> str:
        return f"{self._key_prefix}{user_id}"

    def put(self, challenge: EmailVerificationChallenge) -> None:
        key = self._key(challenge.user_id)
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.delete(key)
            pipe.hset(
                key,
                mapping={
                    "email": challenge.email,
                    "code": challenge.code,
                    "expires_at_ms": str(_epoch_ms(challenge.expires_at)),
                },
            )
            pipe.pexpireat(key, _epoch_ms(challenge.expires_at))
            pipe.execute()
        except RedisError as exc:
            logger.error(
                "Challenge store write failed",
                extra={"user_id": str(challenge.user_id), "error": str(exc)},
            )
            raise ChallengeStoreError(
                "Could not store verification challenge", original_error=exc
            ) from exc

    def consume(self, user_id: UUID, code: str, now: datetime) -> bool:
        try:
            result = self._consume_script(
                keys=[self._key(user_id)], args=[code or "", _epoch_ms(now)]
            )
        except RedisError as exc:
            logger.error(
                "Challenge store consume failed",
                extra={"user_id": str(user_id), "error": str(exc)},
            )
            raise ChallengeStoreError(
                "Could not verify challenge", original_error=exc
            ) from exc
        return int(result or 0) == 1

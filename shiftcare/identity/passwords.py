"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hashing de credenciales (Argon2)

Responsabilidades:
    - Derivar un hash one-way del password al completar el perfil.
    - Verificar password vs hash almacenado (login del host).
    - Nunca loguear ni devolver el password en claro.

Colaboradores:
    - argon2-cffi (PasswordHasher)
    - domain.services.CredentialHasher (puerto que implementa)
    - container.py (inyección en use cases)
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


class Argon2CredentialHasher:
    """Adapter del puerto CredentialHasher."""

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or _password_hasher

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password_hash: str, password: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

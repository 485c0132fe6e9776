"""Identity helpers: credential hashing."""

from .passwords import Argon2CredentialHasher, hash_password, verify_password

__all__ = ["Argon2CredentialHasher", "hash_password", "verify_password"]

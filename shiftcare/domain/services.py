"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para colaboradores externos (hashing de credenciales,
      generación de códigos, scheduler de turnos).
    - Mantener el dominio independiente de librerías concretas.

Colaboradores:
    - identity/passwords.py: CredentialHasher (argon2).
    - infrastructure/services/*: implementaciones concretas.
    - application/usecases: consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Optional, Protocol
from uuid import UUID

from .entities import ScheduledShift


class CredentialHasher(Protocol):
    """Derivación one-way de passwords (el resultado es opaco)."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password_hash: str, password: str) -> bool:
        ...


class VerificationCodeGenerator(Protocol):
    """Genera códigos numéricos para challenges de email."""

    def generate(self) -> str:
        ...


class ShiftScheduler(Protocol):
    """Colaborador de scheduling: provee asignación y geofence del turno."""

    def get_shift(self, shift_id: UUID) -> Optional[ScheduledShift]:
        ...

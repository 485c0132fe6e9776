"""
===============================================================================
ACTOR CONTEXT RESULTS (Result / Error Models)
===============================================================================

Name:
    Actor Context Results

Business Goal:
    Contrato estable para la resolución del contexto de service provider:
    éxito con ActorContext, o UNAUTHORIZED_CONTEXT (nunca un provider default).

Collaborators:
    - domain.entities.ActorContext
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import ActorContext


class ActorContextErrorCode(str, Enum):
    """
    Códigos:
      - UNAUTHORIZED_CONTEXT: el actor no es owner ni empleado vinculado.
    """

    UNAUTHORIZED_CONTEXT = "UNAUTHORIZED_CONTEXT"


@dataclass(frozen=True)
class ActorContextError:
    code: ActorContextErrorCode
    message: str


@dataclass
class ActorContextResult:
    """
    Contrato:
      - error is None => context presente
      - error != None => context es None
    """

    context: ActorContext | None = None
    error: ActorContextError | None = None

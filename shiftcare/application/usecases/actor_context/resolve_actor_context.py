"""
===============================================================================
USE CASE: Resolve Actor Context
===============================================================================

Name:
    Actor Context Resolver

Business Goal:
    Mapear un user_id autenticado a su contexto de service provider
    {service_provider_id, employee_id?} para operaciones provider-scoped.

Why (Context / Intención):
    - Toda operación provider-scoped consulta primero este resolver.
    - Un owner ES el provider (employee_id ausente); un empleado pertenece a uno.
    - Fallar es terminal: nunca se cae a un provider "por defecto".
    - Sin cache: cada resolución relee el estado (promociones / bajas).

-------------------------------------------------------------------------------
CRC CARD (Functions/Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    resolve_actor_context (helper) + ResolveActorContextUseCase

Responsibilities:
    - Buscar owner por user_id (precedencia).
    - Si no, buscar empleado con link a provider no nulo.
    - Retornar (ActorContext | None, ActorContextError | None).

Collaborators:
    - IdentityStore:
        find_provider_owner_by_user_id(user_id)
        find_employee_by_user_id(user_id)
    - actor_context_results
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import ActorContext
from ....domain.repositories import IdentityStore
from .actor_context_results import (
    ActorContextError,
    ActorContextErrorCode,
    ActorContextResult,
)

_NO_CONTEXT_MESSAGE: Final[str] = (
    "No service-provider profile associated with this actor."
)


def resolve_actor_context(
    *,
    identity_store: IdentityStore,
    user_id: UUID | None,
) -> Tuple[ActorContext | None, ActorContextError | None]:
    """
    Resuelve el contexto del actor.

    Reglas:
      - Owner tiene precedencia sobre un eventual registro de empleado.
      - Empleado sin provider (desvinculado) => UNAUTHORIZED_CONTEXT.
    """
    if user_id is None:
        return None, _unauthorized()

    owner = identity_store.find_provider_owner_by_user_id(user_id)
    if owner is not None:
        return ActorContext(service_provider_id=owner.id), None

    employee = identity_store.find_employee_by_user_id(user_id)
    if employee is not None and employee.service_provider_id is not None:
        return (
            ActorContext(
                service_provider_id=employee.service_provider_id,
                employee_id=employee.id,
            ),
            None,
        )

    logger.info(
        "Actor context not resolved",
        extra={"user_id": str(user_id), "employee_unlinked": employee is not None},
    )
    return None, _unauthorized()


def _unauthorized() -> ActorContextError:
    return ActorContextError(
        code=ActorContextErrorCode.UNAUTHORIZED_CONTEXT,
        message=_NO_CONTEXT_MESSAGE,
    )


@dataclass(frozen=True)
class ResolveActorContextInput:
    user_id: UUID | None


class ResolveActorContextUseCase:
    """Use Case (Query): expone el resolver con resultado tipado."""

    def __init__(self, identity_store: IdentityStore) -> None:
        self._identity = identity_store

    def execute(self, input_data: ResolveActorContextInput) -> ActorContextResult:
        context, error = resolve_actor_context(
            identity_store=self._identity, user_id=input_data.user_id
        )
        return ActorContextResult(context=context, error=error)

"""
Name: Actor Context Resolver Tests

Responsibilities:
  - Owner precedence, employee scoping, unlinked employees
  - No default provider for unknown actors
"""

from uuid import uuid4

import pytest

from shiftcare.application.usecases import (
    ActorContextErrorCode,
    ResolveActorContextInput,
    ResolveActorContextUseCase,
    resolve_actor_context,
)
from shiftcare.domain.entities import Employee, ProviderOwner

pytestmark = pytest.mark.unit


def test_owner_resolves_to_own_provider(identity_store):
    owner = ProviderOwner(id=uuid4(), user_id=uuid4())
    identity_store.add_provider_owner(owner)

    context, error = resolve_actor_context(
        identity_store=identity_store, user_id=owner.user_id
    )

    assert error is None
    assert context.service_provider_id == owner.id
    assert context.employee_id is None
    assert context.is_owner


def test_employee_resolves_to_employer(identity_store):
    provider_id = uuid4()
    employee = Employee(id=uuid4(), user_id=uuid4(), service_provider_id=provider_id)
    identity_store.add_employee(employee)

    result = ResolveActorContextUseCase(identity_store).execute(
        ResolveActorContextInput(user_id=employee.user_id)
    )

    assert result.error is None
    assert result.context.service_provider_id == provider_id
    assert result.context.employee_id == employee.id
    assert not result.context.is_owner


def test_owner_takes_precedence_over_employee_record(identity_store):
    user_id = uuid4()
    owner = ProviderOwner(id=uuid4(), user_id=user_id)
    identity_store.add_provider_owner(owner)
    identity_store.add_employee(
        Employee(id=uuid4(), user_id=user_id, service_provider_id=uuid4())
    )

    context, _ = resolve_actor_context(identity_store=identity_store, user_id=user_id)

    assert context.service_provider_id == owner.id
    assert context.employee_id is None


def test_unlinked_employee_is_unauthorized(identity_store):
    employee = Employee(id=uuid4(), user_id=uuid4(), service_provider_id=None)
    identity_store.add_employee(employee)

    context, error = resolve_actor_context(
        identity_store=identity_store, user_id=employee.user_id
    )

    assert context is None
    assert error.code == ActorContextErrorCode.UNAUTHORIZED_CONTEXT


@pytest.mark.parametrize("user_id", [None, uuid4()])
def test_unknown_actor_is_unauthorized(identity_store, user_id):
    result = ResolveActorContextUseCase(identity_store).execute(
        ResolveActorContextInput(user_id=user_id)
    )

    assert result.context is None
    assert result.error.code == ActorContextErrorCode.UNAUTHORIZED_CONTEXT
    assert "service-provider" in result.error.message


def test_relinking_takes_effect_immediately(identity_store):
    user_id = uuid4()
    identity_store.add_employee(
        Employee(id=uuid4(), user_id=user_id, service_provider_id=uuid4())
    )
    new_provider = uuid4()
    identity_store.add_employee(
        Employee(id=uuid4(), user_id=user_id, service_provider_id=new_provider)
    )

    context, _ = resolve_actor_context(identity_store=identity_store, user_id=user_id)

    assert context.service_provider_id == new_provider

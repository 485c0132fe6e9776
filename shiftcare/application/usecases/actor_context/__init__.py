"""Actor context resolution (provider scoping)."""

from .actor_context_results import (
    ActorContextError,
    ActorContextErrorCode,
    ActorContextResult,
)
from .resolve_actor_context import (
    ResolveActorContextInput,
    ResolveActorContextUseCase,
    resolve_actor_context,
)

__all__ = [
    "ActorContextError",
    "ActorContextErrorCode",
    "ActorContextResult",
    "ResolveActorContextInput",
    "ResolveActorContextUseCase",
    "resolve_actor_context",
]

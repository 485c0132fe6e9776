"""
===============================================================================
TARJETA CRC — shiftcare/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / actor / provider activos en ContextVars.
  - Exponerlos al logger JSON sin pasarlos por cada firma.

Colaboradores:
  - crosscutting.logger (get_context_dict)
  - El host (HTTP, worker, CLI) llama set_request_context() al entrar y
    clear_context() al salir.

Restricciones:
  - Valores str; "" = no disponible (no aparece en el log).
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Dict

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
actor_user_id_var: ContextVar[str] = ContextVar("actor_user_id", default="")
# Provider resuelto por el actor context (scoping de operaciones de manager).
service_provider_id_var: ContextVar[str] = ContextVar("service_provider_id", default="")

_VARS: Dict[str, ContextVar[str]] = {
    "request_id": request_id_var,
    "actor_user_id": actor_user_id_var,
    "service_provider_id": service_provider_id_var,
}


def set_request_context(
    *,
    request_id: str = "",
    actor_user_id: str = "",
    service_provider_id: str = "",
) -> None:
    request_id_var.set(request_id or "")
    actor_user_id_var.set(actor_user_id or "")
    service_provider_id_var.set(service_provider_id or "")


def get_context_dict() -> dict[str, str]:
    """Solo las claves con valor."""
    return {name: var.get() for name, var in _VARS.items() if var.get()}


def clear_context() -> None:
    for var in _VARS.values():
        var.set("")

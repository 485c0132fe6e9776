"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) — Observabilidad de bajo acoplamiento

Responsabilidades:
    - Definir contadores Prometheus del core en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos.
    - Cuidar cardinalidad (NO user_id, NO shift_id, NO emails).
    - Exponer helpers para generar la respuesta /metrics del host.

Colaboradores:
    - application/usecases/onboarding + compliance: record_onboarding_event
    - application/usecases/geofence: record_check_in
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    generate_latest,
)

# Registro único del proceso (no usamos el REGISTRY global de la librería).
_registry = CollectorRegistry()

# -----------------------------------------------------------------------------
# Onboarding / compliance
# -----------------------------------------------------------------------------
_onboarding_events_total = Counter(
    "shiftcare_onboarding_events_total",
    "Operaciones de onboarding y compliance por resultado",
    ["operation", "outcome"],
    registry=_registry,
)

# -----------------------------------------------------------------------------
# Check-in (geofence)
# -----------------------------------------------------------------------------
_check_ins_total = Counter(
    "shiftcare_check_ins_total",
    "Intentos de check-in por resultado",
    ["outcome"],
    registry=_registry,
)

_check_in_conflict_retries_total = Counter(
    "shiftcare_check_in_conflict_retries_total",
    "Reintentos de check-in por conflicto de versión",
    registry=_registry,
)


def record_onboarding_event(operation: str, outcome: str) -> None:
    """outcome: "ok" o el código de error (baja cardinalidad)."""
    _onboarding_events_total.labels(operation=operation, outcome=outcome).inc()


def record_check_in(outcome: str) -> None:
    """outcome: verified | unverified | código de error."""
    _check_ins_total.labels(outcome=outcome).inc()


def record_check_in_conflict_retry() -> None:
    _check_in_conflict_retries_total.inc()


def get_registry() -> CollectorRegistry:
    return _registry


def get_metrics_response() -> tuple[bytes, str]:
    """Payload + content type para el endpoint /metrics del host."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST

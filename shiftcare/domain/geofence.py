"""
===============================================================================
TARJETA CRC — domain/geofence.py
===============================================================================

Módulo:
    Verificación de Geofence (funciones puras)

Responsabilidades:
    - Calcular distancia great-circle (haversine) entre dos GeoPoint.
    - Decidir un intento de check-in contra el geofence del turno.
    - Resolver el estado "latest" (verificado es sticky, no se degrada).
    - Calcular totales de check-out (horas y pago, Decimal a 2 decimales).

Colaboradores:
    - domain.entities: ShiftGeofence, GeofenceCheckIn, VerificationMethod
    - domain.value_objects: GeoPoint
    - application/usecases/geofence: orquestan IO alrededor de esta policy

Invariantes:
    - distance == radius cuenta como dentro.
    - Sin ubicación reportada: reason = "no_location_reported", nunca levanta.
===============================================================================
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Final
from uuid import UUID

from .entities import GeofenceCheckIn, ShiftGeofence, VerificationMethod
from .value_objects import GeoPoint

EARTH_RADIUS_METERS: Final[float] = 6_371_000.0

REASON_WITHIN: Final[str] = "within_geofence"
REASON_OUTSIDE_PREFIX: Final[str] = "outside_geofence"
REASON_NO_LOCATION: Final[str] = "no_location_reported"

_CENTS: Final[Decimal] = Decimal("0.01")


def haversine_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Distancia great-circle en metros."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # min() evita dominio > 1 por error de punto flotante.
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def outside_reason(distance_meters: float) -> str:
    return f"{REASON_OUTSIDE_PREFIX}:{distance_meters:.0f}"


def verify_check_in(
    geofence: ShiftGeofence,
    reported: GeoPoint | None,
    *,
    shift_id: UUID,
    staff_user_id: UUID,
    timestamp: datetime,
    alternate_verified: bool | None = None,
) -> GeofenceCheckIn:
    """
    Decide un intento de check-in.

    - reported presente: verified = distancia <= radio.
    - reported ausente: verified = señal alternativa (default False).
    """
    if reported is None:
        confirmed = bool(alternate_verified)
        return GeofenceCheckIn(
            shift_id=shift_id,
            staff_user_id=staff_user_id,
            timestamp=timestamp,
            verified=confirmed,
            reason=REASON_NO_LOCATION,
            verification_method=(
                VerificationMethod.MANAGER_CONFIRMATION
                if alternate_verified is not None
                else VerificationMethod.NONE
            ),
        )

    distance = haversine_meters(geofence.center, reported)
    within = distance <= geofence.radius_meters
    return GeofenceCheckIn(
        shift_id=shift_id,
        staff_user_id=staff_user_id,
        timestamp=timestamp,
        verified=within,
        reason=REASON_WITHIN if within else outside_reason(distance),
        reported_latitude=reported.latitude,
        reported_longitude=reported.longitude,
        distance_meters=distance,
        verification_method=VerificationMethod.DEVICE_LOCATION,
    )


def should_replace_latest(
    existing: GeofenceCheckIn | None, attempt: GeofenceCheckIn
) -> bool:
    """
    True si el intento debe reemplazar el estado latest.

    - Sin estado previo: siempre.
    - Previo verificado: nunca (sticky; cubre también el mismo timestamp).
    - Previo no verificado: sí, salvo que sea el mismo intento repetido.
    """
    if existing is None:
        return True
    if existing.verified:
        return False
    return not (
        existing.timestamp == attempt.timestamp
        and existing.verified == attempt.verified
        and existing.reason == attempt.reason
    )


def compute_shift_totals(
    checked_in_at: datetime, checked_out_at: datetime, hourly_rate: Decimal
) -> tuple[Decimal, Decimal]:
    """
    Horas trabajadas y pago, ambos a 2 decimales (ROUND_HALF_UP).

    El pago se calcula sobre las horas ya redondeadas.
    """
    seconds = max(0.0, (checked_out_at - checked_in_at).total_seconds())
    hours = (Decimal(str(seconds)) / Decimal(3600)).quantize(
        _CENTS, rounding=ROUND_HALF_UP
    )
    pay = (hours * Decimal(str(hourly_rate))).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return hours, pay

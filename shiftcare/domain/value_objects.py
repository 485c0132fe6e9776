# =============================================================================
# FILE: domain/value_objects.py
# =============================================================================
"""
===============================================================================
DOMAIN: Value Objects (Immutable Domain Primitives)
===============================================================================

Name:
    Domain Value Objects

Qué es:
    Objetos de valor inmutables y catálogos cerrados del dominio de staffing.
    Son iguales si sus atributos son iguales.

Contenido:
    - Enums cerrados: RoleTag, CertificateType, CertificateStatus,
      AccountType, OnboardingStep, MainServiceType
    - GeoPoint: coordenada validada (lat/lon)
    - Constructores explícitos: parse_enum, parse_role_tags, parse_date,
      normalize_email, coerce_flag

Principios:
    - Inmutabilidad (frozen dataclasses)
    - Validación en constructor (ValueError / InvalidEnumValueError)
    - Sin side effects
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Final, Iterable, Type, TypeVar

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
_MIN_LATITUDE: Final[float] = -90.0
_MAX_LATITUDE: Final[float] = 90.0
_MIN_LONGITUDE: Final[float] = -180.0
_MAX_LONGITUDE: Final[float] = 180.0

_TRUTHY_STRINGS: Final[frozenset[str]] = frozenset({"true", "1", "yes"})

# Forma mínima local@dominio.tld (no pretende ser RFC 5322 completo).
_EMAIL_RE: Final[re.Pattern] = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

E = TypeVar("E", bound=Enum)


class InvalidEnumValueError(ValueError):
    """Valor fuera de un catálogo cerrado."""

    def __init__(self, enum_name: str, value: Any, allowed: Iterable[str]):
        self.enum_name = enum_name
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid {enum_name} '{value}'. Allowed: {', '.join(self.allowed)}"
        )


# -----------------------------------------------------------------------------
# Closed catalogs
# -----------------------------------------------------------------------------
class RoleTag(str, Enum):
    """Roles de staff declarables en el perfil."""

    NURSE = "nurse"
    SENIOR_HCA = "senior_hca"
    HCA_CARER = "hca_carer"
    SUPPORT_WORKER = "support_worker"


class CertificateType(str, Enum):
    """Categorías de training (12)."""

    CARE_CERTIFICATE = "care_certificate"
    MOVING_HANDLING = "moving_handling"
    FIRST_AID = "first_aid"
    BASIC_LIFE_SUPPORT = "basic_life_support"
    INFECTION_CONTROL = "infection_control"
    SAFEGUARDING = "safeguarding"
    HEALTH_SAFETY = "health_safety"
    EQUALITY_DIVERSITY = "equality_diversity"
    COSHH = "coshh"
    MEDICATION_TRAINING = "medication_training"
    NVQ_III = "nvq_iii"
    ADDITIONAL_TRAINING = "additional_training"


class CertificateStatus(str, Enum):
    """Estado de revisión (admin) de un certificado."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AccountType(str, Enum):
    """Selector de rama de onboarding (one-time)."""

    STAFF = "staff"
    SERVICE_PROVIDER = "service_provider"
    ADMIN = "admin"


class OnboardingStep(str, Enum):
    """
    Estados del agregado de onboarding, en orden.

    REGISTERED -> EMAIL_VERIFIED -> ACCOUNT_TYPE_SELECTED -> PROFILE_COMPLETED
    """

    REGISTERED = "registered"
    EMAIL_VERIFIED = "email_verified"
    ACCOUNT_TYPE_SELECTED = "account_type_selected"
    PROFILE_COMPLETED = "profile_completed"


class MainServiceType(str, Enum):
    """Tipo de servicio principal de un service provider."""

    RESIDENTIAL_CARE = "residential_care"
    DOMICILIARY_CARE = "domiciliary_care"
    NURSING_CARE = "nursing_care"
    SUPPORTED_LIVING = "supported_living"
    OTHER = "other"


# -----------------------------------------------------------------------------
# GeoPoint
# -----------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class GeoPoint:
    """
    Coordenada WGS84 en grados decimales.

    Invariantes:
      - latitude ∈ [-90, 90]
      - longitude ∈ [-180, 180]
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        for name, value in (("latitude", self.latitude), ("longitude", self.longitude)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number")
            if value != value:  # NaN
                raise ValueError(f"{name} must be a number")
        if not (_MIN_LATITUDE <= self.latitude <= _MAX_LATITUDE):
            raise ValueError("latitude must be between -90 and 90")
        if not (_MIN_LONGITUDE <= self.longitude <= _MAX_LONGITUDE):
            raise ValueError("longitude must be between -180 and 180")


# -----------------------------------------------------------------------------
# Explicit constructors
# -----------------------------------------------------------------------------
def parse_enum(enum_cls: Type[E], raw: Any) -> E:
    """
    Convierte un valor crudo (str o enum) al miembro del catálogo.

    - Case-insensitive y con trim para strings.
    - Raises InvalidEnumValueError si no pertenece al catálogo.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        candidate = raw.strip().lower()
        for member in enum_cls:
            if member.value == candidate:
                return member
    raise InvalidEnumValueError(
        enum_cls.__name__, raw, (member.value for member in enum_cls)
    )


def parse_role_tags(raw: Any) -> frozenset[RoleTag]:
    """
    Normaliza roles: acepta None, lista/tupla/set o string separado por comas.

    El set resultante puede ser vacío (roles son opcionales).
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items: Iterable[Any] = [part for part in raw.split(",") if part.strip()]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        raise InvalidEnumValueError(
            RoleTag.__name__, raw, (member.value for member in RoleTag)
        )
    return frozenset(parse_enum(RoleTag, item) for item in items)


def parse_date(raw: Any, *, field_name: str) -> date:
    """
    Acepta date, datetime o string ISO (YYYY-MM-DD o datetime ISO).

    Raises:
        ValueError con el nombre del campo si el valor no es una fecha.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str) and raw.strip():
        text = raw.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValueError(f"{field_name} must be a valid ISO date")


def normalize_email(raw: str | None) -> str:
    """Trim + lower. Devuelve "" si no hay valor."""
    return (raw or "").strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def coerce_flag(value: Any) -> bool:
    """
    Coerción heterogénea a bool (formularios multipart, JSON, etc.).

    Reglas:
      - bool: tal cual
      - número: True solo si == 1
      - string: strip().lower() ∈ {"true", "1", "yes"}
      - cualquier otra cosa (None, listas, "maybe"): False

    Nunca levanta excepción.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return False

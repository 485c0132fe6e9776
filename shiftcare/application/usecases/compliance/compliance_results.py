"""
===============================================================================
COMPLIANCE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Compliance Use Case Results

Business Goal:
    Contrato de resultado/errores para certificados de training y DBS.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - ComplianceErrorCode + ComplianceError.
    - CertificatesResult (bulk), CertificateResult (single), DbsInfoResult.

Collaborators:
    - domain.entities.StaffCertificate, DbsInfo
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import DbsInfo, StaffCertificate


class ComplianceErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: campos faltantes o fechas inválidas.
      - NOT_FOUND: cuenta o certificado inexistente.
      - FORBIDDEN: el revisor no es admin.
      - ILLEGAL_STATE_TRANSITION: perfil de staff aún no completo.
      - INVALID_ENUM_VALUE: tipo de certificado o estado de revisión desconocido.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    ILLEGAL_STATE_TRANSITION = "ILLEGAL_STATE_TRANSITION"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"


@dataclass(frozen=True)
class ComplianceError:
    code: ComplianceErrorCode
    message: str


@dataclass
class CertificatesResult:
    certificates: List[StaffCertificate] = field(default_factory=list)
    error: ComplianceError | None = None


@dataclass
class CertificateResult:
    certificate: StaffCertificate | None = None
    error: ComplianceError | None = None


@dataclass
class DbsInfoResult:
    dbs_info: DbsInfo | None = None
    error: ComplianceError | None = None


def compliance_error(code: ComplianceErrorCode, message: str) -> ComplianceError:
    return ComplianceError(code=code, message=message)


def outcome_of(error: ComplianceError | None) -> str:
    return "ok" if error is None else error.code.value

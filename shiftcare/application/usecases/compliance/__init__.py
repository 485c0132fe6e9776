"""Compliance use cases (training certificates, DBS)."""

from .compliance_results import (
    CertificateResult,
    CertificatesResult,
    ComplianceError,
    ComplianceErrorCode,
    DbsInfoResult,
)
from .review_certificate import ReviewCertificateInput, ReviewCertificateUseCase
from .submit_certificates import SubmitCertificatesInput, SubmitCertificatesUseCase
from .submit_dbs_info import SubmitDbsInfoInput, SubmitDbsInfoUseCase

__all__ = [
    "SubmitCertificatesUseCase",
    "SubmitCertificatesInput",
    "ReviewCertificateUseCase",
    "ReviewCertificateInput",
    "SubmitDbsInfoUseCase",
    "SubmitDbsInfoInput",
    "CertificateResult",
    "CertificatesResult",
    "ComplianceError",
    "ComplianceErrorCode",
    "DbsInfoResult",
]

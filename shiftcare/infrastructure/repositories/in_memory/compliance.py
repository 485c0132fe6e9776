"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/compliance.py
============================================================
Classes:
  - InMemoryCertificateRepository
  - InMemoryDbsInfoRepository

Responsibilities:
  - Upsert de certificados por (user_id, certificate_type) y de DBS por user_id.
  - Batch atómico: un bulk de certificados se escribe completo o nada.
  - Ordering determinístico (por tipo de certificado) para tests estables.

Collaborators:
  - domain.entities.StaffCertificate, DbsInfo
  - domain.repositories.CertificateRepository, DbsInfoRepository

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from ....domain.entities import DbsInfo, StaffCertificate
from ....domain.repositories import CertificateRepository, DbsInfoRepository
from ....domain.value_objects import CertificateType


class InMemoryCertificateRepository(CertificateRepository):
    """Certificados en memoria: la "tabla" tiene PK compuesta."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._certificates: Dict[Tuple[UUID, CertificateType], StaffCertificate] = {}

    def upsert_certificates(
        self, certificates: List[StaffCertificate]
    ) -> List[StaffCertificate]:
        with self._lock:
            for certificate in certificates:
                key = (certificate.user_id, certificate.certificate_type)
                self._certificates[key] = replace(certificate)
            return [replace(c) for c in certificates]

    def get_certificate(
        self, user_id: UUID, certificate_type: CertificateType
    ) -> Optional[StaffCertificate]:
        with self._lock:
            found = self._certificates.get((user_id, certificate_type))
            return replace(found) if found else None

    def list_certificates(self, user_id: UUID) -> List[StaffCertificate]:
        with self._lock:
            items = [
                replace(c) for (uid, _), c in self._certificates.items() if uid == user_id
            ]
        return sorted(items, key=lambda c: c.certificate_type.value)


class InMemoryDbsInfoRepository(DbsInfoRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._records: Dict[UUID, DbsInfo] = {}

    def upsert_dbs_info(self, info: DbsInfo) -> DbsInfo:
        with self._lock:
            self._records[info.user_id] = replace(info)
            return replace(info)

    def get_dbs_info(self, user_id: UUID) -> Optional[DbsInfo]:
        with self._lock:
            found = self._records.get(user_id)
            return replace(found) if found else None

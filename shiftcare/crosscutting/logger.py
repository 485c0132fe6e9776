"""
===============================================================================
MÓDULO: Logger estructurado (JSON) para onboarding y check-ins
===============================================================================

Objetivo
--------
Una línea JSON por evento, correlacionable por request_id / actor_user_id,
sin filtrar secretos (passwords, códigos de verificación, hashes) ni PII de
compliance (número de certificado DBS, fecha de nacimiento).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON (extras incluidos)
  - Mezclar el contexto de request
  - Redactar claves sensibles y acotar tamaño/profundidad

Colaboradores:
  - shiftcare/context.py (ContextVars)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict
from .config import get_settings

# Atributos estándar de LogRecord: todo lo demás llegó vía `extra=`.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

REDACTED = "***REDACTADO***"
TRUNCATED = "***TRUNCADO***"


class _Redactor:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      _Redactor

    Responsabilidades:
      - Reemplazar valores cuya clave sea sensible
      - Cortar strings largos y estructuras profundas
      - Dejar todo serializable (UUID/Decimal/date -> str)

    Colaboradores:
      - JSONFormatter
    ----------------------------------------------------------------------------
    """

    SENSITIVE_KEYS = frozenset(
        {
            # credenciales
            "password",
            "password_hash",
            "secret",
            "token",
            "authorization",
            "redis_url",
            # challenge de email
            "code",
            "verification_code",
            # PII de compliance
            "certificate_number",
            "dob_on_certificate",
            "date_of_birth",
        }
    )

    def __init__(self, max_str: int = 8_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        if key is not None and key.lower() in self.SENSITIVE_KEYS:
            return REDACTED
        if depth > self._max_depth:
            return TRUNCATED

        if value is None or isinstance(value, (bool, int, float)):
            return value
        if isinstance(value, str):
            return self._clip(value)
        if isinstance(value, (bytes, bytearray)):
            return f"<{len(value)} bytes>"
        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, depth=depth + 1, key=str(k))
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set, frozenset)):
            # Los elementos heredan la clave del contenedor (p.ej. "codes").
            return [self.sanitize(item, depth=depth + 1, key=key) for item in value]
        return self._clip(str(value))

    def _clip(self, text: str) -> str:
        if len(text) <= self._max_str:
            return text
        return text[: self._max_str] + "…(truncado)"


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON compacto (una línea), con contexto y extras redactados."""

    def __init__(self, *, service: str = "shiftcare"):
        super().__init__()
        self._service = service
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._service,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
            **get_context_dict(),
        }

        extras = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS
        }
        payload.update(self._redactor.sanitize(extras))

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "shiftcare") -> logging.Logger:
    """
    Logger raíz del paquete.

    - Idempotente: no duplica handlers si el módulo se reimporta.
    - LOG_JSON=false => formato plano legible para desarrollo local.
    """
    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(logging.getLevelName(settings.log_level))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_json:
            handler.setFormatter(JSONFormatter(service=name))
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        log.addHandler(handler)

    return log


logger = setup_logger()

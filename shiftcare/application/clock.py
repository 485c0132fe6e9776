"""
Fuente única de tiempo (UTC) para los use cases.

Los use cases reciben un `Clock` por constructor para que los tests fijen el
instante (vencimiento de códigos, timestamps de check-in/out).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Naive => se asume UTC; aware => se convierte a UTC."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)

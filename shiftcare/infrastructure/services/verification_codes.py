"""
Numeric verification code generator (email challenges).

Uses `secrets` (CSPRNG); codes keep leading zeros, so they are strings.
"""

from __future__ import annotations

import secrets

from ...domain.services import VerificationCodeGenerator


class NumericCodeGenerator(VerificationCodeGenerator):
    def __init__(self, length: int = 6) -> None:
        if length <= 0:
            raise ValueError("length must be > 0")
        self._length = length

    def generate(self) -> str:
        return "".join(secrets.choice("0123456789") for _ in range(self._length))

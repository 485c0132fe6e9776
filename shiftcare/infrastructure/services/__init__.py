"""Concrete implementations of domain service ports."""

from .verification_codes import NumericCodeGenerator

__all__ = ["NumericCodeGenerator"]

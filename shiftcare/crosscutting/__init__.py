"""Crosscutting concerns: config, logging, errores, métricas, reintentos."""

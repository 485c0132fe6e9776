"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso del core (un use case por operación, `execute(input)` con
resultado tipado). Se importan desde `usecases/` subdirectories.
===============================================================================
"""

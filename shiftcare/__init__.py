"""
shiftcare: core de onboarding, compliance y check-in por geofence para
staffing de cuidado (actor context, agregado StaffAccount, verificación de
ubicación).
"""

__version__ = "0.1.0"

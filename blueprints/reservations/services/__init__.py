"""Reservation services package."""

from blueprints.reservations.services.export_service import (  # noqa: F401
    build_reservations_workbook,
)

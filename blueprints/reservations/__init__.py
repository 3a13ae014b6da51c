"""
Reservations blueprint initialization.

Route logic is split by area:
- routes/reservations.py - Submission, listing, detail, delete
- routes/lifecycle.py - Status changes, attendance, notification re-send
- routes/reports.py - Analytics and Excel export
- routes/slots.py - Blocked time slots (separate /slots blueprint)
"""

from flask import Blueprint

reservations_bp = Blueprint('reservations', __name__)
slots_bp = Blueprint('slots', __name__)

from blueprints.reservations.routes import reservations, lifecycle, reports, slots

reports.register_routes(reservations_bp)
reservations.register_routes(reservations_bp)
lifecycle.register_routes(reservations_bp)
slots.register_routes(slots_bp)

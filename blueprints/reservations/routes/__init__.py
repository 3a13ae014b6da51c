"""Reservation route modules; each exposes register_routes(bp)."""

"""
Event subscribers that turn reservation events into customer notifications.
"""

from utils.events import reservation_created, reservation_status_changed

from .dispatcher import notify_reservation

NOTIFIED_STATUSES = ('confirmed', 'declined')


def on_reservation_created(app, reservation, **kwargs):
    if not app.config.get('NOTIFY_ON_RECEIVED', True):
        return None
    return notify_reservation(reservation, 'received')


def on_reservation_status_changed(app, reservation, previous_status=None, **kwargs):
    if reservation['status'] not in NOTIFIED_STATUSES:
        return None
    return notify_reservation(reservation, reservation['status'])


def register_subscribers(app):
    """Connect notification subscribers for this application instance."""
    reservation_created.connect(on_reservation_created, sender=app)
    reservation_status_changed.connect(on_reservation_status_changed, sender=app)

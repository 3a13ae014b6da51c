"""
Domain events for the reservation lifecycle.

Signals are sent after the triggering write has been committed. Receivers
run in-process; a receiver that raises is logged and reported as a failed
outcome, never propagated to the code that made the change.

Receiver return values are collected on the request context so the API
layer can report notification problems without the store knowing about them.

Usage:
    from utils.events import reservation_status_changed, emit, pop_outcomes

    emit(reservation_status_changed, reservation=res,
         previous_status='pending', changed_by='alice')
    outcomes = pop_outcomes()
"""

from blinker import Namespace
from flask import current_app, g

_signals = Namespace()

reservation_created = _signals.signal('reservation-created')
reservation_status_changed = _signals.signal('reservation-status-changed')


def emit(signal, **kwargs) -> list:
    """
    Send a signal from the current application to its receivers.

    Args:
        signal: blinker signal to send
        **kwargs: Event payload passed to each receiver

    Returns:
        List of receiver return values; a failed receiver contributes
        a dict with status 'failed'
    """
    app = current_app._get_current_object()
    outcomes = []

    for receiver in signal.receivers_for(app):
        try:
            outcome = receiver(app, **kwargs)
        except Exception as e:
            app.logger.exception('Subscriber for %s failed', signal.name)
            outcome = {'status': 'failed', 'error': str(e)}
        if outcome is not None:
            outcomes.append(outcome)

    g.setdefault('event_outcomes', []).extend(outcomes)
    return outcomes


def pop_outcomes() -> list:
    """Return and clear the outcomes collected during this context."""
    return g.pop('event_outcomes', [])

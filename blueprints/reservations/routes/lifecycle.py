"""
Reservation lifecycle API routes.
Status changes, attendance marking and notification re-send.
"""

from flask import current_app
from flask_login import login_required, current_user

from utils.api_response import api_success, api_error, request_json
from utils.decorators import permission_required
from utils.events import pop_outcomes
from utils.exceptions import NotFoundError
from utils.messages import MESSAGES
from models.reservation import (
    get_reservation, set_status, set_attendance, get_allowed_transitions
)
from notifications.dispatcher import notify_reservation, kind_for_status, summarize_outcomes


def _lifecycle_payload(reservation: dict, outcomes: list) -> dict:
    return {
        'reservation': reservation,
        'allowed_transitions': get_allowed_transitions(
            reservation['status'], reservation['attendance']
        ),
        'notifications': outcomes,
    }


def register_routes(bp):
    """Register lifecycle routes on the blueprint."""

    @bp.route('/<reservation_id>/status', methods=['POST'])
    @login_required
    @permission_required('manage_reservations')
    def reservation_status(reservation_id):
        """
        Change reservation status.

        Request body:
            status: confirmed | declined

        Returns:
            JSON with the reservation, its next allowed transitions and the
            notification outcomes; a warning if the customer was not reached
        """
        data = request_json()
        if not data.get('status'):
            return api_error(MESSAGES['data_required'])

        before = get_reservation(reservation_id)
        if not before:
            raise NotFoundError(MESSAGES['reservation_not_found'])

        new_status = data['status']
        reservation = set_status(reservation_id, new_status, changed_by=current_user.username)
        if reservation is None:
            raise NotFoundError(MESSAGES['reservation_not_found'])

        outcomes = pop_outcomes()

        if before['status'] == new_status:
            return api_success(
                data=_lifecycle_payload(reservation, outcomes),
                message=MESSAGES['reservation_status_unchanged'].format(status=new_status)
            )

        current_app.logger.info(
            'Reservation %s %s -> %s by %s',
            reservation_id, before['status'], new_status, current_user.username
        )
        return api_success(
            data=_lifecycle_payload(reservation, outcomes),
            message=MESSAGES['reservation_status_updated'].format(status=new_status),
            warning=summarize_outcomes(outcomes)
        )

    @bp.route('/<reservation_id>/attendance', methods=['POST'])
    @login_required
    @permission_required('mark_attendance')
    def reservation_attendance(reservation_id):
        """
        Record attendance for a confirmed reservation.

        Request body:
            attendance: attended | no-show
        """
        data = request_json()
        if not data.get('attendance'):
            return api_error(MESSAGES['data_required'])

        reservation = set_attendance(reservation_id, data['attendance'], current_user.username)
        if reservation is None:
            raise NotFoundError(MESSAGES['reservation_not_found'])

        return api_success(
            data=_lifecycle_payload(reservation, []),
            message=MESSAGES['attendance_marked'].format(attendance=reservation['attendance'])
        )

    @bp.route('/<reservation_id>/notify', methods=['POST'])
    @login_required
    @permission_required('manage_reservations')
    def reservation_notify(reservation_id):
        """Re-send the notification matching the reservation's current status."""
        reservation = get_reservation(reservation_id)
        if not reservation:
            raise NotFoundError(MESSAGES['reservation_not_found'])

        outcome = notify_reservation(reservation, kind_for_status(reservation['status']))
        return api_success(
            data=outcome,
            message=MESSAGES['notification_resent'],
            warning=summarize_outcomes([outcome])
        )

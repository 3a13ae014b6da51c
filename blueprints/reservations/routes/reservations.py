"""
Reservation API routes.
Public submission and availability, staff listing, detail and deletion.
"""

from flask import current_app, request
from flask_login import login_required, current_user

from utils.api_response import api_success, request_json
from utils.decorators import permission_required
from utils.events import pop_outcomes
from utils.exceptions import NotFoundError, ValidationError
from utils.messages import MESSAGES
from utils.validators import validate_date_format, validate_time_format
from models.blocked_slot import is_blocked
from models.delivery_log import get_delivery_log
from models.reservation import (
    STATUSES, create_reservation, get_reservation, list_reservations,
    delete_reservation, get_allowed_transitions
)

CHANNEL_LABELS = {
    'email': 'email',
    'sms': 'SMS',
    'whatsapp': 'WhatsApp',
}

PUBLIC_FIELDS = (
    'id', 'customer_name', 'reservation_date', 'reservation_time',
    'party_size', 'status', 'communication_preference', 'created_at'
)


def register_routes(bp):
    """Register reservation routes on the blueprint."""

    @bp.route('', methods=['POST'])
    def submit_reservation():
        """
        Submit a reservation (public).

        Request body:
            customer_name, email, phone, date (YYYY-MM-DD), time (HH:MM),
            party_size (default 2), special_requests, communication_preference

        Returns:
            JSON with the pending reservation; a warning for large parties
        """
        data = request_json()

        reservation = create_reservation(data)

        # The customer is not told about delivery problems; staff see them in the log
        outcomes = pop_outcomes()
        for outcome in outcomes:
            if outcome.get('status') not in ('sent', 'composed'):
                current_app.logger.warning(
                    'Received notice for %s: %s', reservation['id'], outcome.get('status')
                )

        warning = None
        threshold = current_app.config['LARGE_PARTY_THRESHOLD']
        if reservation['party_size'] >= threshold:
            warning = MESSAGES['large_party'].format(
                threshold=threshold, phone=current_app.config['RESTAURANT_PHONE']
            )

        channel = CHANNEL_LABELS[reservation['communication_preference']]
        return api_success(
            data={key: reservation[key] for key in PUBLIC_FIELDS},
            message=MESSAGES['reservation_created'].format(channel=channel),
            warning=warning,
            status=201
        )

    @bp.route('/availability')
    def availability():
        """
        Check whether an exact slot accepts bookings (public).

        Query params:
            date: YYYY-MM-DD
            time: HH:MM
        """
        slot_date = request.args.get('date', '')
        slot_time = request.args.get('time', '')

        if not validate_date_format(slot_date):
            raise ValidationError(MESSAGES['invalid_date'])
        if not validate_time_format(slot_time):
            raise ValidationError(MESSAGES['invalid_time'])

        return api_success(data={
            'date': slot_date,
            'time': slot_time,
            'available': not is_blocked(slot_date, slot_time),
        })

    @bp.route('')
    @login_required
    @permission_required('view_reservations')
    def reservations_list():
        """
        List reservations.

        Query params:
            status: pending | confirmed | declined
            date: YYYY-MM-DD
            order: created (default) | schedule
        """
        status = request.args.get('status') or None
        if status and status not in STATUSES:
            raise ValidationError(MESSAGES['invalid_status'].format(choices=', '.join(STATUSES)))

        reservation_date = request.args.get('date') or None
        if reservation_date and not validate_date_format(reservation_date):
            raise ValidationError(MESSAGES['invalid_date'])

        reservations = list_reservations(
            status=status,
            reservation_date=reservation_date,
            order_by=request.args.get('order', 'created')
        )
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/<reservation_id>')
    @login_required
    @permission_required('view_reservations')
    def reservation_detail(reservation_id):
        """Reservation with allowed transitions and its delivery history."""
        reservation = get_reservation(reservation_id)
        if not reservation:
            raise NotFoundError(MESSAGES['reservation_not_found'])

        return api_success(data={
            'reservation': reservation,
            'allowed_transitions': get_allowed_transitions(
                reservation['status'], reservation['attendance']
            ),
            'deliveries': get_delivery_log(reservation_id=reservation_id),
        })

    @bp.route('/<reservation_id>', methods=['DELETE'])
    @login_required
    @permission_required('manage_reservations')
    def reservation_delete(reservation_id):
        """Delete a reservation."""
        if not delete_reservation(reservation_id):
            raise NotFoundError(MESSAGES['reservation_not_found'])

        current_app.logger.info('Reservation %s deleted by %s', reservation_id, current_user.username)
        return api_success(message=MESSAGES['reservation_deleted'])

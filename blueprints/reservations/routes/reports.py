"""
Reservation reporting routes: analytics summary and Excel export.
"""

from flask import current_app, request, send_file
from flask_login import login_required

from utils.api_response import api_success
from utils.datetime_helpers import get_today
from utils.decorators import permission_required
from utils.exceptions import ValidationError
from utils.messages import MESSAGES
from utils.validators import validate_date_format
from models.analytics import get_reservation_analytics, get_daily_stats
from models.reservation import list_reservations
from blueprints.reservations.services import build_reservations_workbook


def _reservations_in_range() -> list:
    """Reservations filtered by optional ?from=YYYY-MM-DD&to=YYYY-MM-DD."""
    start = request.args.get('from') or None
    end = request.args.get('to') or None
    for value in (start, end):
        if value and not validate_date_format(value):
            raise ValidationError(MESSAGES['invalid_date'])

    reservations = list_reservations(order_by='schedule')
    if start:
        reservations = [r for r in reservations if r['reservation_date'] >= start]
    if end:
        reservations = [r for r in reservations if r['reservation_date'] <= end]
    return reservations


def register_routes(bp):
    """Register reporting routes on the blueprint."""

    @bp.route('/analytics')
    @login_required
    @permission_required('view_analytics')
    def reservation_analytics():
        """
        Analytics summary.

        Query params:
            from: Start date YYYY-MM-DD (inclusive)
            to: End date YYYY-MM-DD (inclusive)
        """
        return api_success(data=get_reservation_analytics(_reservations_in_range()))

    @bp.route('/export')
    @login_required
    @permission_required('export_data')
    def reservation_export():
        """Excel export of reservations and daily statistics (same filters as analytics)."""
        reservations = _reservations_in_range()
        output = build_reservations_workbook(
            reservations,
            get_daily_stats(reservations),
            current_app.config['RESTAURANT_NAME']
        )

        filename = f"reservations-{get_today().isoformat()}.xlsx"
        return send_file(
            output,
            mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            as_attachment=True,
            download_name=filename
        )

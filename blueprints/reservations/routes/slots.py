"""
Blocked time slot API routes.
"""

from flask import request
from flask_login import login_required, current_user

from utils.api_response import api_success, request_json
from utils.decorators import permission_required
from utils.exceptions import NotFoundError
from utils.messages import MESSAGES
from models.blocked_slot import block_slot, unblock_slot, get_blocked_slots


def register_routes(bp):
    """Register blocked slot routes on the blueprint."""

    @bp.route('')
    @login_required
    @permission_required('manage_slots')
    def slots_list():
        """
        List blocked slots.

        Query params:
            date: Only this date (YYYY-MM-DD)
            upcoming: '1' to hide slots already in the past
        """
        slots = get_blocked_slots(
            slot_date=request.args.get('date') or None,
            include_past=request.args.get('upcoming') != '1'
        )
        return api_success(data=slots)

    @bp.route('', methods=['POST'])
    @login_required
    @permission_required('manage_slots')
    def slots_block():
        """
        Block a time slot.

        Request body:
            date: YYYY-MM-DD
            time: HH:MM
            reason: Free text
        """
        data = request_json()

        slot = block_slot(
            slot_date=str(data.get('date') or '').strip(),
            slot_time=str(data.get('time') or '').strip(),
            reason=str(data.get('reason') or ''),
            blocked_by=current_user.username
        )
        return api_success(data=slot, message=MESSAGES['slot_blocked'], status=201)

    @bp.route('/<slot_id>', methods=['DELETE'])
    @login_required
    @permission_required('manage_slots')
    def slots_unblock(slot_id):
        """Unblock a time slot."""
        if not unblock_slot(slot_id):
            raise NotFoundError(MESSAGES['slot_not_found'])
        return api_success(message=MESSAGES['slot_unblocked'])

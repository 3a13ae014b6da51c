"""
Reservation submission and storage tests.
"""

import pytest
from datetime import timedelta

from utils.exceptions import ConflictError, ValidationError


class TestCreateReservation:
    """Tests for create_reservation."""

    def test_create_reservation(self, app, reservation_data, tomorrow):
        """A valid submission is stored as pending."""
        from models.reservation import create_reservation, get_reservation

        reservation = create_reservation(reservation_data)

        assert reservation['status'] == 'pending'
        assert reservation['attendance'] is None
        assert reservation['reservation_date'] == tomorrow
        assert reservation['reservation_time'] == '19:00'
        assert reservation['party_size'] == 4
        assert reservation['special_requests'] == 'Window table please'
        assert len(reservation['id']) == 32
        assert get_reservation(reservation['id']) == reservation

    def test_defaults(self, app, reservation_data):
        """Party size defaults to 2, preference to email."""
        from models.reservation import create_reservation

        del reservation_data['party_size']
        del reservation_data['communication_preference']
        del reservation_data['special_requests']

        reservation = create_reservation(reservation_data)

        assert reservation['party_size'] == 2
        assert reservation['communication_preference'] == 'email'
        assert reservation['special_requests'] is None

    def test_party_size_string_accepted(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['party_size'] = '6'
        assert create_reservation(reservation_data)['party_size'] == 6

    def test_largest_party_size_accepted(self, app, reservation_data):
        from models.reservation import create_reservation
        from models.reservation_crud import MAX_PARTY_SIZE

        reservation_data['party_size'] = MAX_PARTY_SIZE
        assert create_reservation(reservation_data)['party_size'] == MAX_PARTY_SIZE

    def test_special_requests_truncated(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['special_requests'] = 'a' * 700
        reservation = create_reservation(reservation_data)
        assert len(reservation['special_requests']) == 500

    def test_same_slot_accepts_many_reservations(self, app, reservation_data):
        """No capacity limit per slot."""
        from models.reservation import create_reservation, list_reservations

        for _ in range(3):
            create_reservation(reservation_data)

        assert len(list_reservations()) == 3

    def test_today_is_accepted(self, app, reservation_data):
        """Same-day bookings are allowed, even for an earlier hour."""
        from models.reservation import create_reservation
        from utils.datetime_helpers import get_today

        reservation_data['date'] = get_today().isoformat()
        reservation_data['time'] = '00:00'
        assert create_reservation(reservation_data)['status'] == 'pending'


class TestReservationValidation:
    """Rejected submissions write nothing."""

    def _assert_nothing_stored(self):
        from models.reservation import list_reservations
        assert list_reservations() == []

    @pytest.mark.parametrize('field', ['customer_name', 'email', 'phone', 'date', 'time'])
    def test_missing_required_field(self, app, reservation_data, field):
        from models.reservation import create_reservation

        reservation_data[field] = '  '
        with pytest.raises(ValidationError, match=field):
            create_reservation(reservation_data)
        self._assert_nothing_stored()

    def test_invalid_email(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['email'] = 'not-an-email'
        with pytest.raises(ValidationError, match='valid email'):
            create_reservation(reservation_data)
        self._assert_nothing_stored()

    def test_invalid_phone(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['phone'] = '12345'
        with pytest.raises(ValidationError, match='phone'):
            create_reservation(reservation_data)

    @pytest.mark.parametrize('party_size', [0, -1, 2.5, 'four', True, 101, '9' * 30, '²'])
    def test_invalid_party_size(self, app, reservation_data, party_size):
        from models.reservation import create_reservation

        reservation_data['party_size'] = party_size
        with pytest.raises(ValidationError, match='Party size'):
            create_reservation(reservation_data)

    @pytest.mark.parametrize('draft', [['Efua Owusu'], 'Efua Owusu', 42])
    def test_draft_must_be_object(self, app, draft):
        from models.reservation import create_reservation

        with pytest.raises(ValidationError, match='JSON object'):
            create_reservation(draft)
        self._assert_nothing_stored()

    def test_invalid_preference(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['communication_preference'] = 'pigeon'
        with pytest.raises(ValidationError, match='Communication preference'):
            create_reservation(reservation_data)

    def test_invalid_time(self, app, reservation_data):
        from models.reservation import create_reservation

        reservation_data['time'] = '7pm'
        with pytest.raises(ValidationError, match='HH:MM'):
            create_reservation(reservation_data)

    def test_past_date_rejected(self, app, reservation_data):
        from models.reservation import create_reservation
        from utils.datetime_helpers import get_today

        reservation_data['date'] = (get_today() - timedelta(days=1)).isoformat()
        with pytest.raises(ValidationError, match='future date'):
            create_reservation(reservation_data)
        self._assert_nothing_stored()

    def test_first_failure_wins(self, app, reservation_data):
        """Date format is checked before email."""
        from models.reservation import create_reservation

        reservation_data['date'] = '12/31/2030'
        reservation_data['email'] = 'broken'
        with pytest.raises(ValidationError, match='YYYY-MM-DD'):
            create_reservation(reservation_data)

    def test_blocked_slot_rejected(self, app, reservation_data, tomorrow):
        """A blocked slot refuses bookings with a conflict."""
        from models.blocked_slot import block_slot
        from models.reservation import create_reservation

        block_slot(tomorrow, '19:00', 'Private event', 'manager')

        with pytest.raises(ConflictError, match='not available'):
            create_reservation(reservation_data)
        self._assert_nothing_stored()

    def test_block_is_exact_match(self, app, reservation_data, tomorrow):
        """A block at 19:00 leaves 19:30 bookable."""
        from models.blocked_slot import block_slot
        from models.reservation import create_reservation

        block_slot(tomorrow, '19:00', 'Private event', 'manager')
        reservation_data['time'] = '19:30'

        assert create_reservation(reservation_data)['status'] == 'pending'


class TestQueries:

    def test_list_filters(self, app, reservation_data, tomorrow):
        from models.reservation import create_reservation, list_reservations, set_status
        from utils.datetime_helpers import get_today

        first = create_reservation(reservation_data)
        reservation_data['date'] = (get_today() + timedelta(days=2)).isoformat()
        second = create_reservation(reservation_data)
        set_status(second['id'], 'confirmed', changed_by='manager')

        assert [r['id'] for r in list_reservations(status='pending')] == [first['id']]
        assert [r['id'] for r in list_reservations(reservation_date=tomorrow)] == [first['id']]

    def test_list_orderings(self, app, reservation_data):
        from models.reservation import create_reservation, list_reservations
        from utils.datetime_helpers import get_today

        early = create_reservation(reservation_data)
        reservation_data['date'] = (get_today() + timedelta(days=5)).isoformat()
        late = create_reservation(reservation_data)
        reservation_data['date'] = (get_today() + timedelta(days=3)).isoformat()
        middle = create_reservation(reservation_data)

        newest_first = [r['id'] for r in list_reservations(order_by='created')]
        assert newest_first == [middle['id'], late['id'], early['id']]

        latest_slot_first = [r['id'] for r in list_reservations(order_by='schedule')]
        assert latest_slot_first == [late['id'], middle['id'], early['id']]

    def test_delete_reservation(self, app, pending_reservation):
        from models.reservation import delete_reservation, get_reservation

        assert delete_reservation(pending_reservation['id']) is True
        assert get_reservation(pending_reservation['id']) is None
        assert delete_reservation(pending_reservation['id']) is False

    def test_get_unknown_reservation(self, app):
        from models.reservation import get_reservation
        assert get_reservation('missing') is None

"""
Tests for input validation and date/time helpers.
"""

import pytest
from utils.validators import (
    validate_email,
    validate_phone,
    phone_digits,
    validate_password,
    validate_date_format,
    validate_time_format,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        """Test valid email formats."""
        assert validate_email('user@example.com') is True
        assert validate_email('user.name@example.com') is True
        assert validate_email('user+tag@example.co.uk') is True

    def test_invalid_email(self):
        """Test invalid email formats."""
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('@nodomain.com') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePhone:
    """Phone numbers need 10 to 15 digits after stripping separators."""

    def test_valid_phones(self):
        assert validate_phone('0244365634') is True
        assert validate_phone('+233 24 436 5634') is True
        assert validate_phone('(024) 436-5634') is True
        assert validate_phone('123456789012345') is True

    def test_invalid_phones(self):
        assert validate_phone('') is False
        assert validate_phone(None) is False
        assert validate_phone('024436563') is False
        assert validate_phone('1234567890123456') is False
        assert validate_phone('call me') is False

    def test_phone_digits(self):
        assert phone_digits('+233 (24) 436-5634') == '233244365634'
        assert phone_digits(None) == ''


class TestValidatePassword:

    def test_valid_password(self):
        assert validate_password('Secret123') == (True, '')

    def test_too_short(self):
        is_valid, error = validate_password('Ab1')
        assert is_valid is False
        assert '8 characters' in error

    def test_missing_character_classes(self):
        assert validate_password('alllowercase1')[0] is False
        assert validate_password('ALLUPPERCASE1')[0] is False
        assert validate_password('NoDigitsHere')[0] is False

    def test_empty(self):
        assert validate_password('') == (False, 'Password is required')


class TestDateTimeFormats:

    def test_valid_date_format(self):
        assert validate_date_format('2025-12-25') is True
        assert validate_date_format('2024-02-29') is True

    def test_invalid_date_format(self):
        assert validate_date_format('25/12/2025') is False
        assert validate_date_format('2025-02-30') is False
        assert validate_date_format('') is False
        assert validate_date_format(None) is False

    def test_valid_time_format(self):
        assert validate_time_format('19:00') is True
        assert validate_time_format('00:00') is True
        assert validate_time_format('23:59') is True

    def test_invalid_time_format(self):
        assert validate_time_format('7:00') is False
        assert validate_time_format('24:00') is False
        assert validate_time_format('19:60') is False
        assert validate_time_format('19:00:00') is False
        assert validate_time_format(None) is False


class TestSanitizeInput:

    def test_strips_and_truncates(self):
        assert sanitize_input('  hello  ') == 'hello'
        assert sanitize_input('x' * 600, 500) == 'x' * 500

    def test_empty(self):
        assert sanitize_input(None) == ''
        assert sanitize_input('') == ''


class TestDisplayFormats:
    """Customer-facing date and time rendering."""

    def test_format_display_date(self):
        from utils.datetime_helpers import format_display_date
        assert format_display_date('2025-12-25') == 'Thu, Dec 25, 2025'
        assert format_display_date('2026-03-01') == 'Sun, Mar 1, 2026'

    def test_format_display_time(self):
        from utils.datetime_helpers import format_display_time
        assert format_display_time('19:00') == '7:00 PM'
        assert format_display_time('00:30') == '12:30 AM'
        assert format_display_time('12:05') == '12:05 PM'

    def test_is_slot_in_past(self, app):
        from datetime import timedelta
        from utils.datetime_helpers import get_today, is_slot_in_past

        yesterday = (get_today() - timedelta(days=1)).isoformat()
        tomorrow = (get_today() + timedelta(days=1)).isoformat()

        assert is_slot_in_past(yesterday, '23:59') is True
        assert is_slot_in_past(tomorrow, '00:00') is False

    def test_parse_slot_rejects_malformed(self, app):
        from utils.datetime_helpers import parse_slot

        with pytest.raises(ValueError):
            parse_slot('2025-13-01', '19:00')

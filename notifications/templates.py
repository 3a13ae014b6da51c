"""
Customer-facing message templates.

Two families: email (subject plus long body) and text (SMS and WhatsApp
share one short message). Placeholders are filled with str.format.
"""

from flask import current_app

from utils.datetime_helpers import format_display_date, format_display_time

KINDS = ('received', 'confirmed', 'declined')

EMAIL_TEMPLATES = {
    'received': {
        'subject': 'Reservation Received - {restaurant}',
        'body': (
            'Dear {name},\n\n'
            'Thank you for your reservation request. We have received it and '
            'will confirm shortly.\n\n'
            'Date: {date}\n'
            'Time: {time}\n'
            'Party Size: {party_size} guests\n'
            'Reservation ID: {reservation_id}\n\n'
            'If you need to make any changes, please call us at {phone}.\n\n'
            'Best regards,\n'
            '{restaurant}'
        ),
    },
    'confirmed': {
        'subject': 'Reservation Confirmed - {restaurant}',
        'body': (
            'Dear {name},\n\n'
            'Great news! Your reservation has been CONFIRMED.\n\n'
            'Date: {date}\n'
            'Time: {time}\n'
            'Party Size: {party_size} guests\n'
            'Reservation ID: {reservation_id}\n\n'
            'We look forward to serving you at {restaurant}!\n\n'
            'If you need to make any changes, please call us at {phone}.\n\n'
            'Best regards,\n'
            '{restaurant}'
        ),
    },
    'declined': {
        'subject': 'Reservation Update - {restaurant}',
        'body': (
            'Dear {name},\n\n'
            'We regret to inform you that we cannot accommodate your reservation.\n\n'
            'Requested Date: {date}\n'
            'Requested Time: {time}\n'
            'Party Size: {party_size} guests\n\n'
            'Please call us at {phone} to discuss alternative dates and times.\n\n'
            'We sincerely apologize for any inconvenience.\n\n'
            'Best regards,\n'
            '{restaurant}'
        ),
    },
}

TEXT_TEMPLATES = {
    'received': (
        'Hi {name}! {restaurant} has received your reservation request for '
        '{date} at {time} for {party_size} guests. We will confirm shortly.'
    ),
    'confirmed': (
        'Hi {name}! Your {restaurant} reservation for {date} at {time} for '
        '{party_size} guests is CONFIRMED. See you soon!'
    ),
    'declined': (
        'Hi {name}. Unfortunately, we cannot accommodate your {restaurant} '
        'reservation for {date} at {time}. Please call {phone} for alternatives. Sorry!'
    ),
}


def template_context(reservation: dict) -> dict:
    """Placeholder values for a reservation."""
    return {
        'name': reservation['customer_name'],
        'date': format_display_date(reservation['reservation_date']),
        'time': format_display_time(reservation['reservation_time']),
        'party_size': reservation['party_size'],
        'reservation_id': reservation['id'],
        'restaurant': current_app.config['RESTAURANT_NAME'],
        'phone': current_app.config['RESTAURANT_PHONE'],
    }


def render_message(kind: str, channel: str, reservation: dict) -> tuple:
    """
    Render the notification for a reservation.

    Args:
        kind: 'received', 'confirmed' or 'declined'
        channel: 'email', 'sms' or 'whatsapp'
        reservation: Reservation dict

    Returns:
        Tuple of (subject, body); subject is None for text channels

    Raises:
        ValueError: Unknown kind
    """
    if kind not in KINDS:
        raise ValueError(f'Unknown notification kind: {kind}')

    context = template_context(reservation)
    if channel == 'email':
        template = EMAIL_TEMPLATES[kind]
        return template['subject'].format(**context), template['body'].format(**context)

    return None, TEXT_TEMPLATES[kind].format(**context)


TEST_SUBJECT = 'Test message - {restaurant}'

TEST_BODY = (
    'This is a test message from {restaurant} sent via {provider}. '
    'Customer notifications will arrive like this one.'
)


def render_test_message(channel: str, provider: str) -> tuple:
    """Fixed message used to check a provider configuration."""
    context = {'restaurant': current_app.config['RESTAURANT_NAME'], 'provider': provider}
    body = TEST_BODY.format(**context)
    if channel == 'email':
        return TEST_SUBJECT.format(**context), body
    return None, body

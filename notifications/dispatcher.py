"""
Notification dispatcher.

Turns a reservation plus a notification kind into exactly one delivery
attempt and one delivery-log entry:

1. Pick the channel: the customer's preference if its contact field is
   present, otherwise email, otherwise no_contact
2. Render the template for that channel family
3. Resolve the channel adapter (ConfigurationError -> not_configured,
   with a manual compose link so staff can still reach the customer)
4. Send (any adapter error or a False result -> failed)
5. Record the outcome

Nothing here raises to the caller; reservation state is never affected.
"""

import logging

from flask import current_app

from models.delivery_log import record_delivery
from models.provider_config import get_provider_config
from utils.exceptions import ConfigurationError, DeliveryError, ValidationError
from utils.messages import MESSAGES
from utils.validators import validate_email, validate_phone

from .base import DeliveryOutcome, to_e164
from .factory import create_adapter, get_channel_adapter
from .providers.manual import ManualAdapter, build_compose_url
from .registry import get_provider_class
from .templates import render_message, render_test_message

logger = logging.getLogger(__name__)

CONTACT_FIELDS = {
    'email': 'email',
    'sms': 'phone',
    'whatsapp': 'phone',
}

TEST_KIND = 'test'


def select_channel(reservation: dict) -> tuple:
    """
    Choose the channel and recipient for a reservation.

    Phone recipients are returned in E.164 form, using DEFAULT_COUNTRY_CODE
    for local numbers.

    Returns:
        Tuple of (channel, recipient), or (None, None) when there is no contact
    """
    preference = reservation.get('communication_preference') or 'email'
    field = CONTACT_FIELDS.get(preference, 'email')
    if reservation.get(field):
        return preference, format_recipient(preference, reservation[field])
    if reservation.get('email'):
        return 'email', reservation['email']
    return None, None


def format_recipient(channel: str, recipient: str) -> str:
    if channel == 'email':
        return recipient
    return to_e164(recipient, current_app.config.get('DEFAULT_COUNTRY_CODE', ''))


def _not_configured(outcome: DeliveryOutcome, error: ConfigurationError) -> DeliveryOutcome:
    outcome.status = 'not_configured'
    outcome.error = error.message
    outcome.compose_url = build_compose_url(
        outcome.channel, outcome.recipient, outcome.subject, outcome.message
    )
    return outcome


def _send(adapter, outcome: DeliveryOutcome) -> DeliveryOutcome:
    outcome.provider = adapter.provider_name
    try:
        accepted = adapter.send(outcome.recipient, outcome.subject, outcome.message)
    except DeliveryError as e:
        outcome.status = 'failed'
        outcome.error = e.message
        return outcome
    except Exception as e:
        # A broken adapter or bad stored setting still gets its log row
        logger.exception('%s adapter raised while sending', adapter.provider_name)
        outcome.status = 'failed'
        outcome.error = f'{adapter.provider_name}: {e}'
        return outcome

    if isinstance(adapter, ManualAdapter):
        outcome.status = 'composed'
        outcome.compose_url = adapter.compose_url
    elif accepted:
        outcome.status = 'sent'
    else:
        outcome.status = 'failed'
        outcome.error = f'{adapter.provider_name} did not accept the message'
    return outcome


def _attempt(outcome: DeliveryOutcome) -> DeliveryOutcome:
    try:
        adapter = get_channel_adapter(outcome.channel)
    except ConfigurationError as e:
        return _not_configured(outcome, e)
    return _send(adapter, outcome)


def _log_outcome(outcome: DeliveryOutcome, subject: str) -> None:
    if outcome.status == 'sent':
        logger.info('%s notification for %s sent via %s/%s',
                    outcome.kind, subject, outcome.channel, outcome.provider)
    elif outcome.status == 'composed':
        logger.info('%s notification for %s composed for manual %s send',
                    outcome.kind, subject, outcome.channel)
    elif outcome.status == 'failed':
        logger.error('%s notification for %s failed via %s: %s',
                     outcome.kind, subject, outcome.provider, outcome.error)
    else:
        logger.warning('%s notification for %s not sent (%s): %s',
                       outcome.kind, subject, outcome.status, outcome.error)


def notify_reservation(reservation: dict, kind: str) -> dict:
    """
    Send one notification about a reservation and log it.

    Args:
        reservation: Reservation dict
        kind: 'received', 'confirmed' or 'declined'

    Returns:
        Outcome dict (status, channel, provider, recipient, error, compose_url, ...)
    """
    channel, recipient = select_channel(reservation)

    if channel is None:
        outcome = DeliveryOutcome(status='no_contact', kind=kind,
                                  error='Reservation has no email or phone')
    else:
        subject, body = render_message(kind, channel, reservation)
        outcome = _attempt(DeliveryOutcome(
            status='pending', kind=kind, channel=channel,
            recipient=recipient, subject=subject, message=body,
        ))

    _log_outcome(outcome, reservation['id'])
    record_delivery(outcome, reservation_id=reservation['id'])
    return outcome.to_dict()


def send_test_message(provider: str, recipient: str, channel: str = None) -> dict:
    """
    Send a fixed test message through one stored provider configuration.

    The configuration is used whether or not it is active, so a provider can
    be checked before it starts serving customers. The attempt is logged
    with kind 'test' and no reservation.

    Args:
        provider: Provider name
        recipient: Email address or phone number to send to
        channel: Channel for providers that serve any channel (manual);
                 defaults to email

    Returns:
        Outcome dict

    Raises:
        ValidationError: Unknown provider, unknown channel or a malformed recipient
    """
    adapter_class = get_provider_class(provider)
    if adapter_class.channel == 'any':
        channel = channel or 'email'
    else:
        channel = adapter_class.channel

    if not isinstance(channel, str) or channel not in CONTACT_FIELDS:
        raise ValidationError(MESSAGES['invalid_preference'].format(
            choices=', '.join(CONTACT_FIELDS)
        ))
    recipient = str(recipient or '').strip()
    if not recipient:
        raise ValidationError(MESSAGES['test_recipient_required'])
    if channel == 'email' and not validate_email(recipient):
        raise ValidationError(MESSAGES['invalid_email'])
    if channel != 'email' and not validate_phone(recipient):
        raise ValidationError(MESSAGES['invalid_phone'])

    recipient = format_recipient(channel, recipient)
    subject, body = render_test_message(channel, provider)
    outcome = DeliveryOutcome(
        status='pending', kind=TEST_KIND, channel=channel,
        recipient=recipient, subject=subject, message=body,
    )

    config = get_provider_config(provider)
    try:
        if config is None:
            raise ConfigurationError(
                MESSAGES['provider_not_configured'].format(provider=provider), provider=provider
            )
        adapter = create_adapter(provider, config['settings'], channel)
    except ConfigurationError as e:
        _not_configured(outcome, e)
        outcome.provider = provider
    else:
        _send(adapter, outcome)

    _log_outcome(outcome, f'provider {provider}')
    record_delivery(outcome)
    return outcome.to_dict()


def kind_for_status(status: str) -> str:
    """Notification kind matching a reservation's current status."""
    return status if status in ('confirmed', 'declined') else 'received'


def summarize_outcomes(outcomes: list) -> str:
    """
    Staff-facing warning for notifications that did not go out.

    Returns:
        Warning text, or None when every attempt was sent or composed
    """
    problems = sorted({o.get('status') for o in outcomes if o.get('status') not in ('sent', 'composed')})
    if not problems:
        return None
    return MESSAGES['notification_not_sent'].format(outcome=', '.join(problems))

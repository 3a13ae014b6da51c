"""
Provider registry: which adapter serves which channel, and which settings it needs.

Settings are validated here when an administrator saves them, so a stored
configuration always carries every required field for its provider and
passes the adapter's own checks.
"""

from utils.exceptions import ValidationError
from utils.messages import MESSAGES

from .providers.aws import SesEmailAdapter, SnsEmailAdapter, SnsSmsAdapter
from .providers.email import (
    EmailJsAdapter, MailgunAdapter, PostmarkAdapter, SendGridAdapter, SmtpAdapter
)
from .providers.manual import ManualAdapter
from .providers.sms import TextbeltAdapter, TwilioAdapter, VonageAdapter
from .providers.whatsapp import WhatsAppBusinessAdapter

CHANNELS = ('email', 'sms', 'whatsapp')

PROVIDERS = {
    adapter.provider_name: adapter
    for adapter in (
        EmailJsAdapter,
        SmtpAdapter,
        SendGridAdapter,
        MailgunAdapter,
        PostmarkAdapter,
        SesEmailAdapter,
        SnsEmailAdapter,
        TwilioAdapter,
        VonageAdapter,
        TextbeltAdapter,
        SnsSmsAdapter,
        WhatsAppBusinessAdapter,
        ManualAdapter,
    )
}

MASK = '********'


def get_provider_class(provider: str):
    """
    Look up an adapter class by provider name.

    Raises:
        ValidationError: If the provider is not registered
    """
    try:
        return PROVIDERS[provider]
    except KeyError:
        raise ValidationError(MESSAGES['unknown_provider'].format(provider=provider))


def validate_settings(provider: str, settings: dict) -> dict:
    """
    Check a provider configuration before it is stored.

    Unknown keys are dropped; values are stripped strings except booleans.

    Args:
        provider: Provider name
        settings: Submitted settings

    Returns:
        Cleaned settings dict

    Raises:
        ValidationError: Unknown provider, missing required fields or a
            malformed value (e.g. a non-numeric SMTP port)
    """
    adapter = get_provider_class(provider)
    settings = settings or {}
    if not isinstance(settings, dict):
        raise ValidationError(MESSAGES['provider_invalid_settings'].format(
            provider=provider, problems='settings must be an object'
        ))
    allowed = adapter.REQUIRED_FIELDS + adapter.OPTIONAL_FIELDS

    cleaned = {}
    for field in allowed:
        value = settings.get(field)
        if isinstance(value, bool):
            cleaned[field] = value
        elif value is not None and str(value).strip():
            cleaned[field] = str(value).strip()

    missing = [field for field in adapter.REQUIRED_FIELDS if field not in cleaned]
    if missing:
        raise ValidationError(MESSAGES['provider_missing_fields'].format(
            provider=provider, fields=', '.join(missing)
        ))

    problems = adapter.check_settings(cleaned)
    if problems:
        raise ValidationError(MESSAGES['provider_invalid_settings'].format(
            provider=provider, problems='; '.join(problems)
        ))

    return cleaned


def mask_settings(provider: str, settings: dict) -> dict:
    """Replace secret values so configurations can be shown to administrators."""
    adapter = PROVIDERS.get(provider)
    secrets = adapter.SECRET_FIELDS if adapter else ()
    return {
        key: (MASK if key in secrets and value else value)
        for key, value in (settings or {}).items()
    }


def describe_providers() -> list:
    """Registry summary for the admin API."""
    return [
        {
            'provider': name,
            'channel': adapter.channel,
            'required_fields': list(adapter.REQUIRED_FIELDS),
            'optional_fields': list(adapter.OPTIONAL_FIELDS),
        }
        for name, adapter in PROVIDERS.items()
    ]

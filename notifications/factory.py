"""
Factory for creating channel adapters from stored provider configurations.
"""

from flask import current_app

from models.provider_config import get_active_provider_for_channel, get_provider_config
from utils.exceptions import ConfigurationError

from .base import ChannelAdapter
from .providers.manual import DryRunAdapter, ManualAdapter
from .registry import PROVIDERS


def create_adapter(provider: str, settings: dict, channel: str = None) -> ChannelAdapter:
    """
    Create an adapter for the given provider.

    Args:
        provider: Provider name ('sendgrid', 'twilio', ...)
        settings: Provider settings dict
        channel: Channel being served (used by the manual adapter)

    Returns:
        A configured ChannelAdapter instance

    Raises:
        ConfigurationError: If the provider is unknown or settings are incomplete
    """
    adapter_class = PROVIDERS.get(provider)
    if adapter_class is None:
        raise ConfigurationError(f'Unknown provider: {provider}', provider=provider)

    timeout = current_app.config.get('NOTIFICATION_TIMEOUT', 10)
    country_code = current_app.config.get('DEFAULT_COUNTRY_CODE', '')
    if adapter_class is ManualAdapter:
        return ManualAdapter(settings, timeout, country_code, target_channel=channel or 'email')
    return adapter_class(settings, timeout, country_code)


def get_channel_adapter(channel: str) -> ChannelAdapter:
    """
    Get the adapter that serves a channel.

    Order: dry-run (only when NOTIFICATIONS_DRY_RUN), the channel's active
    provider, then an active manual provider.

    Args:
        channel: 'email', 'sms' or 'whatsapp'

    Returns:
        A configured ChannelAdapter instance

    Raises:
        ConfigurationError: If nothing is configured for the channel
    """
    if current_app.config.get('NOTIFICATIONS_DRY_RUN'):
        return DryRunAdapter()

    config = get_active_provider_for_channel(channel)
    if config:
        return create_adapter(config['provider'], config['settings'], channel)

    manual = get_provider_config(ManualAdapter.provider_name)
    if manual and manual['is_active']:
        return create_adapter(ManualAdapter.provider_name, manual['settings'], channel)

    raise ConfigurationError(f'No {channel} provider configured', provider='none')

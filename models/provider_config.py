"""
Notification provider configuration data access functions.
One stored configuration per provider; at most one active provider per channel.
"""

import json

from database import get_db
from notifications.registry import PROVIDERS, mask_settings, validate_settings
from utils.datetime_helpers import now_iso


def _row_to_config(row, masked: bool = False) -> dict:
    config = dict(row)
    settings = json.loads(config['settings'] or '{}')
    config['settings'] = mask_settings(config['provider'], settings) if masked else settings
    config['is_active'] = bool(config['is_active'])
    return config


def get_provider_config(provider: str, masked: bool = False) -> dict:
    """
    Get a stored provider configuration.

    Args:
        provider: Provider name
        masked: Hide secret values

    Returns:
        Config dict with parsed settings, or None
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM provider_configs WHERE provider = ?', (provider,))
    row = cursor.fetchone()
    return _row_to_config(row, masked) if row else None


def get_all_provider_configs(masked: bool = True) -> list:
    """Get every stored configuration ordered by channel."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM provider_configs ORDER BY channel, provider')
    return [_row_to_config(row, masked) for row in cursor.fetchall()]


def get_active_provider_for_channel(channel: str) -> dict:
    """
    Get the active provider configuration serving a channel.

    The manual provider is not returned here; the factory falls back to it.

    Args:
        channel: 'email', 'sms' or 'whatsapp'

    Returns:
        Config dict or None
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT * FROM provider_configs
        WHERE channel = ? AND is_active = 1
        ORDER BY updated_at DESC
        LIMIT 1
    ''', (channel,))
    row = cursor.fetchone()
    return _row_to_config(row) if row else None


def save_provider_config(provider: str, settings: dict, updated_by: str,
                         is_active: bool = True) -> dict:
    """
    Validate and store a provider configuration.

    Activating a provider deactivates the other providers of its channel.

    Args:
        provider: Provider name
        settings: Provider settings
        updated_by: Username saving the configuration
        is_active: Whether the provider should serve its channel

    Returns:
        Saved config dict (secrets masked)

    Raises:
        ValidationError: Unknown provider or missing required fields
    """
    cleaned = validate_settings(provider, settings)
    channel = PROVIDERS[provider].channel

    db = get_db()
    if is_active and channel != 'any':
        db.execute('''
            UPDATE provider_configs SET is_active = 0
            WHERE channel = ? AND provider != ?
        ''', (channel, provider))

    db.execute('''
        INSERT INTO provider_configs (provider, channel, settings, is_active, updated_by, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        ON CONFLICT(provider) DO UPDATE SET
            settings = excluded.settings,
            is_active = excluded.is_active,
            updated_by = excluded.updated_by,
            updated_at = excluded.updated_at
    ''', (provider, channel, json.dumps(cleaned), 1 if is_active else 0, updated_by, now_iso()))
    db.commit()

    return get_provider_config(provider, masked=True)


def delete_provider_config(provider: str) -> bool:
    """
    Remove a provider configuration.

    Returns:
        True if a configuration was removed
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('DELETE FROM provider_configs WHERE provider = ?', (provider,))
    db.commit()
    return cursor.rowcount > 0

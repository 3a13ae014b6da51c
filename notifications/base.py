"""
Shared channel adapter interface for customer notifications.

Every provider (SendGrid, Twilio, WhatsApp Business, ...) implements the
ChannelAdapter ABC so the dispatcher can deliver through any of them with a
single send(recipient, subject, body) call.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from utils.exceptions import ConfigurationError, DeliveryError


@dataclass
class DeliveryOutcome:
    """Result of one notification attempt, as written to the delivery log."""
    status: str  # sent | failed | not_configured | no_contact | composed
    kind: str
    channel: Optional[str] = None
    provider: Optional[str] = None
    recipient: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    compose_url: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.status in ('sent', 'composed')

    def to_dict(self) -> dict:
        return asdict(self)


def to_e164(phone: str, country_code: str = '') -> str:
    """
    Format a stored phone number as +<digits>.

    Numbers starting with + or 00 are already international. A local number
    with a leading trunk 0 (e.g. 0244 123 4567) gets country_code in its place.
    """
    raw = (phone or '').strip()
    digits = re.sub(r'\D', '', raw)
    if raw.startswith('+'):
        return '+' + digits
    if digits.startswith('00'):
        return '+' + digits[2:]
    if country_code and digits.startswith('0'):
        return '+' + re.sub(r'\D', '', country_code) + digits[1:]
    return '+' + digits


class ChannelAdapter(ABC):
    """Abstract base class for provider adapters."""

    provider_name = 'unknown'
    channel = 'any'

    REQUIRED_FIELDS = ()
    OPTIONAL_FIELDS = ()
    SECRET_FIELDS = ()

    def __init__(self, settings: dict, timeout: float = 10, country_code: str = ''):
        missing = [f for f in self.REQUIRED_FIELDS if not str(settings.get(f) or '').strip()]
        if missing:
            raise ConfigurationError(
                f"{self.provider_name} is missing settings: {', '.join(missing)}",
                provider=self.provider_name,
            )
        self.settings = settings
        self.timeout = timeout
        self.country_code = country_code

    @abstractmethod
    def send(self, recipient: str, subject: str, body: str) -> bool:
        """
        Deliver a rendered message.

        Args:
            recipient: Email address or phone number for this channel
            subject: Subject line (ignored by text channels)
            body: Rendered message text

        Returns:
            True if the provider accepted the message

        Raises:
            DeliveryError: If the provider call fails
        """
        ...

    @classmethod
    def check_settings(cls, settings: dict) -> list:
        """Problems with saved settings beyond missing fields; empty when usable."""
        return []

    def _phone(self, recipient: str) -> str:
        return to_e164(recipient, self.country_code)

    def _fail(self, message: str, cause: Exception = None):
        raise DeliveryError(f'{self.provider_name}: {message}', provider=self.provider_name) from cause


class HttpChannelAdapter(ChannelAdapter):
    """Adapter for vendors reached over a JSON/form HTTP API."""

    def _post(self, url: str, expected=(200, 201, 202), **kwargs) -> requests.Response:
        """POST to the vendor API, turning transport and HTTP errors into DeliveryError."""
        try:
            response = requests.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            self._fail(f'request failed: {e}', e)

        if response.status_code not in expected:
            self._fail(f'{response.status_code} {response.text[:200]}')

        return response

    def _json(self, response: requests.Response) -> dict:
        try:
            return response.json()
        except ValueError as e:
            self._fail(f'unreadable response: {response.text[:200]}', e)

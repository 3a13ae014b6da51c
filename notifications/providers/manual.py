"""
Adapters that do not call a vendor: manual compose links and dry-run.
"""

import logging
import re
from urllib.parse import quote

from ..base import ChannelAdapter

logger = logging.getLogger(__name__)


def build_compose_url(channel: str, recipient: str, subject: str, body: str) -> str:
    """
    Build a link that opens the staff member's own client with the message filled in.

    Args:
        channel: 'email', 'sms' or 'whatsapp'
        recipient: Email address or phone number
        subject: Subject line (email only)
        body: Message text

    Returns:
        mailto:, sms: or https://wa.me/ URL
    """
    if channel == 'email':
        return f'mailto:{recipient}?subject={quote(subject or "")}&body={quote(body)}'

    digits = re.sub(r'\D', '', recipient or '')
    if channel == 'whatsapp':
        return f'https://wa.me/{digits}?text={quote(body)}'
    return f'sms:+{digits}?body={quote(body)}'


class ManualAdapter(ChannelAdapter):
    """
    Usable by any channel: nothing is sent, staff open the compose link.
    Delivery is logged as 'composed'.
    """

    provider_name = 'manual'
    channel = 'any'

    def __init__(self, settings: dict = None, timeout: float = 10, country_code: str = '',
                 target_channel: str = 'email'):
        super().__init__(settings or {}, timeout, country_code)
        self.target_channel = target_channel
        self.compose_url = None

    def send(self, recipient, subject, body):
        if self.target_channel != 'email':
            recipient = self._phone(recipient)
        self.compose_url = build_compose_url(self.target_channel, recipient, subject, body)
        return True


class DryRunAdapter(ChannelAdapter):
    """Logs instead of sending. Only selected when NOTIFICATIONS_DRY_RUN is set."""

    provider_name = 'dry_run'
    channel = 'any'

    def __init__(self, settings: dict = None, timeout: float = 10, country_code: str = ''):
        super().__init__(settings or {}, timeout, country_code)

    def send(self, recipient, subject, body):
        logger.info('[dry-run] to=%s subject=%r body=%r', recipient, subject, body)
        return True

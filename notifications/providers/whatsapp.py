"""
WhatsApp Business Cloud API adapter.
"""

from ..base import HttpChannelAdapter

GRAPH_URL = 'https://graph.facebook.com/{version}/{phone_number_id}/messages'
DEFAULT_API_VERSION = 'v18.0'


class WhatsAppBusinessAdapter(HttpChannelAdapter):
    provider_name = 'whatsapp_business'
    channel = 'whatsapp'

    REQUIRED_FIELDS = ('access_token', 'phone_number_id')
    OPTIONAL_FIELDS = ('business_account_id', 'api_version')
    SECRET_FIELDS = ('access_token',)

    def send(self, recipient, subject, body):
        url = GRAPH_URL.format(
            version=self.settings.get('api_version') or DEFAULT_API_VERSION,
            phone_number_id=self.settings['phone_number_id'],
        )
        response = self._post(
            url,
            expected=(200,),
            headers={'Authorization': f"Bearer {self.settings['access_token']}"},
            json={
                'messaging_product': 'whatsapp',
                'to': self._phone(recipient).lstrip('+'),
                'type': 'text',
                'text': {'body': body},
            },
        )
        return bool(self._json(response).get('messages'))

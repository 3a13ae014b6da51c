"""
SMS gateway adapters: Twilio, Vonage (formerly Nexmo) and Textbelt.
Amazon SNS SMS lives in aws.py.
"""

from ..base import HttpChannelAdapter

TWILIO_URL = 'https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json'
VONAGE_URL = 'https://rest.nexmo.com/sms/json'
TEXTBELT_URL = 'https://textbelt.com/text'


class TwilioAdapter(HttpChannelAdapter):
    provider_name = 'twilio'
    channel = 'sms'

    REQUIRED_FIELDS = ('account_sid', 'auth_token', 'from_number')
    SECRET_FIELDS = ('auth_token',)

    def send(self, recipient, subject, body):
        account_sid = self.settings['account_sid']
        self._post(
            TWILIO_URL.format(account_sid=account_sid),
            auth=(account_sid, self.settings['auth_token']),
            data={
                'To': self._phone(recipient),
                'From': self.settings['from_number'],
                'Body': body,
            },
        )
        return True


class VonageAdapter(HttpChannelAdapter):
    provider_name = 'vonage'
    channel = 'sms'

    REQUIRED_FIELDS = ('api_key', 'api_secret', 'from_number')
    SECRET_FIELDS = ('api_secret',)

    def send(self, recipient, subject, body):
        response = self._post(
            VONAGE_URL,
            expected=(200,),
            data={
                'api_key': self.settings['api_key'],
                'api_secret': self.settings['api_secret'],
                'from': self.settings['from_number'],
                'to': self._phone(recipient).lstrip('+'),
                'text': body,
            },
        )
        messages = self._json(response).get('messages') or [{}]
        # Vonage answers 200 even for rejected messages; status "0" means accepted
        return all(str(m.get('status')) == '0' for m in messages)


class TextbeltAdapter(HttpChannelAdapter):
    provider_name = 'textbelt'
    channel = 'sms'

    REQUIRED_FIELDS = ('api_key',)
    SECRET_FIELDS = ('api_key',)

    def send(self, recipient, subject, body):
        response = self._post(
            TEXTBELT_URL,
            expected=(200,),
            data={
                'phone': self._phone(recipient),
                'message': body,
                'key': self.settings['api_key'],
            },
        )
        return bool(self._json(response).get('success'))

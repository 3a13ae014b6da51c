"""
Email adapters: EmailJS, direct SMTP and transactional-API vendors.
"""

import smtplib
from email.message import EmailMessage

from utils.validators import validate_email

from ..base import ChannelAdapter, HttpChannelAdapter

EMAILJS_URL = 'https://api.emailjs.com/api/v1.0/email/send'
SENDGRID_URL = 'https://api.sendgrid.com/v3/mail/send'
MAILGUN_BASE_URL = 'https://api.mailgun.net/v3'
POSTMARK_URL = 'https://api.postmarkapp.com/email'


class EmailJsAdapter(HttpChannelAdapter):
    """Sends through an EmailJS template (to_email, subject, message params)."""

    provider_name = 'emailjs'
    channel = 'email'

    REQUIRED_FIELDS = ('service_id', 'template_id', 'user_id')
    OPTIONAL_FIELDS = ('access_token',)
    SECRET_FIELDS = ('access_token',)

    def send(self, recipient, subject, body):
        payload = {
            'service_id': self.settings['service_id'],
            'template_id': self.settings['template_id'],
            'user_id': self.settings['user_id'],
            'template_params': {
                'to_email': recipient,
                'subject': subject,
                'message': body,
            },
        }
        if self.settings.get('access_token'):
            payload['accessToken'] = self.settings['access_token']

        self._post(EMAILJS_URL, json=payload)
        return True


class SmtpAdapter(ChannelAdapter):
    provider_name = 'smtp'
    channel = 'email'

    REQUIRED_FIELDS = ('host', 'port', 'username', 'password', 'from_email')
    OPTIONAL_FIELDS = ('use_tls',)
    SECRET_FIELDS = ('password',)

    @classmethod
    def check_settings(cls, settings):
        problems = []
        port = str(settings.get('port', ''))
        if not port.isdecimal() or not 0 < int(port) < 65536:
            problems.append('port must be a number between 1 and 65535')
        if not validate_email(settings.get('from_email', '')):
            problems.append('from_email must be an email address')
        return problems

    def _use_tls(self) -> bool:
        value = self.settings.get('use_tls', True)
        if isinstance(value, str):
            return value.lower() in ('1', 'true', 'yes')
        return bool(value)

    def send(self, recipient, subject, body):
        message = EmailMessage()
        message['From'] = self.settings['from_email']
        message['To'] = recipient
        message['Subject'] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.settings['host'], int(self.settings['port']),
                              timeout=self.timeout) as server:
                if self._use_tls():
                    server.starttls()
                server.login(self.settings['username'], self.settings['password'])
                refused = server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            self._fail(f'SMTP delivery failed: {e}', e)

        return not refused


class SendGridAdapter(HttpChannelAdapter):
    provider_name = 'sendgrid'
    channel = 'email'

    REQUIRED_FIELDS = ('api_key', 'from_email')
    OPTIONAL_FIELDS = ('from_name',)
    SECRET_FIELDS = ('api_key',)

    def send(self, recipient, subject, body):
        sender = {'email': self.settings['from_email']}
        if self.settings.get('from_name'):
            sender['name'] = self.settings['from_name']

        self._post(
            SENDGRID_URL,
            headers={'Authorization': f"Bearer {self.settings['api_key']}"},
            json={
                'personalizations': [{'to': [{'email': recipient}]}],
                'from': sender,
                'subject': subject,
                'content': [{'type': 'text/plain', 'value': body}],
            },
        )
        return True


class MailgunAdapter(HttpChannelAdapter):
    provider_name = 'mailgun'
    channel = 'email'

    REQUIRED_FIELDS = ('api_key', 'domain', 'from_email')
    OPTIONAL_FIELDS = ('base_url',)
    SECRET_FIELDS = ('api_key',)

    def send(self, recipient, subject, body):
        base_url = (self.settings.get('base_url') or MAILGUN_BASE_URL).rstrip('/')
        self._post(
            f"{base_url}/{self.settings['domain']}/messages",
            auth=('api', self.settings['api_key']),
            data={
                'from': self.settings['from_email'],
                'to': recipient,
                'subject': subject,
                'text': body,
            },
        )
        return True


class PostmarkAdapter(HttpChannelAdapter):
    provider_name = 'postmark'
    channel = 'email'

    REQUIRED_FIELDS = ('server_token', 'from_email')
    OPTIONAL_FIELDS = ('message_stream',)
    SECRET_FIELDS = ('server_token',)

    def send(self, recipient, subject, body):
        payload = {
            'From': self.settings['from_email'],
            'To': recipient,
            'Subject': subject,
            'TextBody': body,
        }
        if self.settings.get('message_stream'):
            payload['MessageStream'] = self.settings['message_stream']

        response = self._post(
            POSTMARK_URL,
            expected=(200,),
            headers={
                'Accept': 'application/json',
                'X-Postmark-Server-Token': self.settings['server_token'],
            },
            json=payload,
        )
        return self._json(response).get('ErrorCode', 0) == 0

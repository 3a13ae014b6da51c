"""
Amazon Web Services adapters: SES email, SNS topic email and SNS SMS.
"""

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..base import ChannelAdapter

# SNS rejects topic subjects longer than this
SNS_SUBJECT_MAX_LENGTH = 100


class AwsChannelAdapter(ChannelAdapter):
    """Adapter backed by a boto3 client built from stored credentials."""

    service = None

    REQUIRED_FIELDS = ('access_key_id', 'secret_access_key', 'region')
    SECRET_FIELDS = ('secret_access_key',)

    def _client(self):
        return boto3.client(
            self.service,
            region_name=self.settings['region'],
            aws_access_key_id=self.settings['access_key_id'],
            aws_secret_access_key=self.settings['secret_access_key'],
            config=BotoConfig(connect_timeout=self.timeout, read_timeout=self.timeout),
        )

    def _call(self, operation: str, **params) -> dict:
        try:
            return getattr(self._client(), operation)(**params)
        except (BotoCoreError, ClientError) as e:
            self._fail(f'{operation} failed: {e}', e)


class SesEmailAdapter(AwsChannelAdapter):
    provider_name = 'ses'
    channel = 'email'
    service = 'ses'

    REQUIRED_FIELDS = AwsChannelAdapter.REQUIRED_FIELDS + ('from_email',)
    OPTIONAL_FIELDS = ('configuration_set',)

    def send(self, recipient, subject, body):
        params = {
            'Source': self.settings['from_email'],
            'Destination': {'ToAddresses': [recipient]},
            'Message': {
                'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                'Body': {'Text': {'Data': body, 'Charset': 'UTF-8'}},
            },
        }
        if self.settings.get('configuration_set'):
            params['ConfigurationSetName'] = self.settings['configuration_set']

        response = self._call('send_email', **params)
        return bool(response.get('MessageId'))


class SnsEmailAdapter(AwsChannelAdapter):
    """Publishes to an SNS topic whose subscribers receive the email."""

    provider_name = 'sns_email'
    channel = 'email'
    service = 'sns'

    REQUIRED_FIELDS = AwsChannelAdapter.REQUIRED_FIELDS + ('topic_arn',)

    def send(self, recipient, subject, body):
        response = self._call(
            'publish',
            TopicArn=self.settings['topic_arn'],
            Subject=subject[:SNS_SUBJECT_MAX_LENGTH],
            Message=body,
        )
        return bool(response.get('MessageId'))


class SnsSmsAdapter(AwsChannelAdapter):
    provider_name = 'sns'
    channel = 'sms'
    service = 'sns'

    OPTIONAL_FIELDS = ('sender_id',)

    def send(self, recipient, subject, body):
        attributes = {
            'AWS.SNS.SMS.SMSType': {'DataType': 'String', 'StringValue': 'Transactional'},
        }
        if self.settings.get('sender_id'):
            attributes['AWS.SNS.SMS.SenderID'] = {
                'DataType': 'String', 'StringValue': self.settings['sender_id']
            }

        response = self._call(
            'publish',
            PhoneNumber=self._phone(recipient),
            Message=body,
            MessageAttributes=attributes,
        )
        return bool(response.get('MessageId'))

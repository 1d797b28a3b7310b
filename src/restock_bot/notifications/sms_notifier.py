"""SMS notifications via Twilio"""

import logging

import requests
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from ..config import TwilioSettings, WatchTarget
from ..errors import NotificationError


def build_cart_message(target: WatchTarget) -> str:
    return f"{target.name} has been added to your cart at {target.cart_url}"


class SmsNotifier:
    """Sends one text message to the operator's phone"""

    def __init__(self, settings: TwilioSettings, client=None):
        self.settings = settings
        self.client = client if client is not None else Client(settings.account_sid, settings.auth_token)
        self.logger = logging.getLogger(__name__)

    def send(self, body: str) -> str:
        """Send body to the configured number and return the message SID"""
        self.logger.info("Texting you about this Great Success...")
        try:
            msg = self.client.messages.create(
                body=body,
                from_=self.settings.from_number,
                to=self.settings.to_number
            )
        except TwilioRestException as e:
            raise NotificationError(f"Twilio rejected the message (HTTP {e.status}): {e.msg}") from e
        except requests.RequestException as e:
            raise NotificationError(f"Could not reach Twilio: {e}") from e

        self.logger.info(f"✅ Successfully sent SMS! SID: {msg.sid}")
        return msg.sid

"""Feishu webhook bot for delivering reports."""

import json
import logging
from enum import Enum
from typing import Dict

import requests

from .errors import DeliveryError

WEBHOOK_URL = 'https://open.feishu.cn/open-apis/bot/v2/hook/{token}'


class TitleColor(str, Enum):
    """Header colors supported by Feishu message cards."""
    BLUE = 'blue'
    WATHET = 'wathet'
    TURQUOISE = 'turquoise'
    GREEN = 'green'
    YELLOW = 'yellow'
    ORANGE = 'orange'
    RED = 'red'
    CARMINE = 'carmine'
    VIOLET = 'violet'
    PURPLE = 'purple'
    INDIGO = 'indigo'
    GREY = 'grey'


class WebhookBot:
    """Sends markdown cards to a Feishu group chat."""

    def __init__(self, token: str, dry_run: bool = False, timeout: float = 30.0):
        """Initialize the bot.

        Args:
            token: Webhook token (the last path segment of the webhook URL)
            dry_run: Only print messages locally instead of sending them
            timeout: Request timeout in seconds
        """
        self.token = token
        self.dry_run = dry_run
        self.timeout = timeout
        self.session = requests.Session()

    @staticmethod
    def build_payload(title: str, body: str, color: TitleColor = TitleColor.WATHET) -> Dict:
        """Build an interactive card with a plain-text header and one lark_md block.

        The body must already be markdown escaped.
        """
        return {
            'msg_type': 'interactive',
            'card': {
                'config': {
                    'wide_screen_mode': True,
                    'enable_forward': True,
                },
                'header': {
                    'title': {
                        'tag': 'plain_text',
                        'content': title,
                    },
                    'template': TitleColor(color).value,
                },
                'elements': [
                    {
                        'tag': 'div',
                        'text': {
                            'tag': 'lark_md',
                            'content': body,
                        },
                    },
                ],
            },
        }

    def send_markdown(self, title: str, body: str, color: TitleColor = TitleColor.WATHET):
        """Send a markdown message, or print it when running dry.

        Raises:
            DeliveryError: If the webhook rejects the message
        """
        payload = self.build_payload(title, body, color)
        if self.dry_run:
            print(f"Print messages locally only: {json.dumps(payload, ensure_ascii=False, indent=2)}")
            return

        if not self.token:
            raise DeliveryError("No Feishu webhook token configured")

        response = self.session.post(WEBHOOK_URL.format(token=self.token), json=payload, timeout=self.timeout)
        if response.status_code != 200:
            raise DeliveryError(f"Feishu send markdown error [{response.status_code}] {response.text}")

        try:
            result = response.json()
        except ValueError:
            result = {}
        code = result.get('code', result.get('StatusCode', 0))
        if code:
            raise DeliveryError(f"Feishu rejected message [{code}] {result.get('msg') or result.get('StatusMessage')}")

        logging.info(f"Sent '{title}' to Feishu")

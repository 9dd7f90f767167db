import json
import logging
from typing import Optional

import requests

from .constants import TELEGRAM_API_BASE
from .models import OutboundMessage
from .transport import LoggingHTTPAdapter

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """Mensagem não pôde ser preparada para envio."""


def build_logging_session(secrets=None) -> requests.Session:
    session = requests.Session()
    adapter = LoggingHTTPAdapter(secrets=secrets)
    session.mount('https://', adapter)
    session.mount('http://', adapter)
    return session


class TelegramClient:
    """Envia mensagens pela Bot API do Telegram (sendMessage), uma chamada por mensagem, sem retry."""

    def __init__(self, token: str, chat_id: str, session: Optional[requests.Session] = None, api_base: str = TELEGRAM_API_BASE):
        self.token = token
        self.chat_id = chat_id
        self.api_base = api_base.rstrip('/')
        self.session = session or build_logging_session(secrets=[token])

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base}/bot{self.token}/sendMessage"

    def build_message(self, text: str) -> OutboundMessage:
        return OutboundMessage(chat_id=self.chat_id, text=text)

    def send_message(self, message: OutboundMessage) -> requests.Response:
        try:
            body = json.dumps(message.to_payload(), ensure_ascii=False).encode('utf-8')
        except (TypeError, ValueError) as exc:
            raise DeliveryError(f"falha ao serializar mensagem: {exc}") from exc

        resp = self.session.post(
            self.send_message_url,
            data=body,
            headers={'Content-Type': 'application/json'},
        )
        if not resp.ok:
            logger.warning(f"Telegram respondeu {resp.status_code}: {resp.text}")
        return resp

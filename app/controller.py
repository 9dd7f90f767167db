import logging

import requests
from flask import Flask, request

from .constants import TELEGRAM_API_BASE, TELEGRAM_CHAT_ID, TELEGRAM_TOKEN
from .formatters import format_alert_message
from .models import AlertBatch, AlertDecodeError
from .services import DeliveryError, TelegramClient

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = {
    'TELEGRAM_TOKEN': 'TOKEN',
    'TELEGRAM_CHAT_ID': 'CHAT_ID',
}


class ConfigError(RuntimeError):
    """Configuração obrigatória ausente na inicialização."""


def validate_config(config) -> None:
    missing = [env for key, env in REQUIRED_SETTINGS.items() if not config.get(key)]
    for env in missing:
        logger.error(f"variável de ambiente obrigatória ausente: {env}")
    if missing:
        raise ConfigError(f"configuração obrigatória ausente: {', '.join(missing)}")


def create_app(test_config=None, telegram_client=None):
    app = Flask(__name__)
    app.config.from_mapping(
        TELEGRAM_TOKEN=TELEGRAM_TOKEN,
        TELEGRAM_CHAT_ID=TELEGRAM_CHAT_ID,
        TELEGRAM_API_BASE=TELEGRAM_API_BASE,
    )
    if test_config:
        app.config.update(test_config)

    # Falha na subida em vez de rodar sem token/chat
    validate_config(app.config)

    client = telegram_client or TelegramClient(
        app.config['TELEGRAM_TOKEN'],
        app.config['TELEGRAM_CHAT_ID'],
        api_base=app.config['TELEGRAM_API_BASE'],
    )

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'signoz-telegram-proxy'}, 200

    @app.route('/alert', methods=['POST'])
    def alert():
        body = request.get_data()
        try:
            batch = AlertBatch.from_json(body)
        except AlertDecodeError as exc:
            logger.error(f"failed to parse alert json: {exc}", extra={'error': str(exc), 'body': body.decode('utf-8', errors='replace')})
            return 'Error parsing JSON\n', 400, {'Content-Type': 'text/plain; charset=utf-8'}

        logger.debug(f"received {len(batch.alerts)} alert(s), batch status={batch.status!r}")
        message = client.build_message(format_alert_message(batch))
        deliver(client, message)

        # Sempre 200 para o remetente, independente do resultado da entrega
        return '', 200, {'Content-Type': 'application/json'}

    return app


def deliver(client, message) -> bool:
    try:
        resp = client.send_message(message)
    except DeliveryError as exc:
        logger.error(f"failed to marshal telegram message: {exc}", extra={'error': str(exc)})
        return False
    except requests.RequestException as exc:
        logger.error(f"failed to make proxied request: {exc}", extra={'error': str(exc)})
        return False
    return resp.ok

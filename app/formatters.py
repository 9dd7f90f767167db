from typing import List

from .constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_SEVERITY,
    DEFAULT_TITLE,
    MARKDOWN_SPECIAL_CHARS,
    MESSAGE_HEADER,
    RESOLVED_STATUS,
)
from .models import AlertBatch, AlertEvent
from .utils import format_timestamp, get_value

_ESCAPE_TABLE = str.maketrans({ch: '\\' + ch for ch in MARKDOWN_SPECIAL_CHARS})


def escape_markdown(text: str) -> str:
    # Passada única: nenhum caractere já escapado é escapado de novo
    return text.translate(_ESCAPE_TABLE)


def format_alert_block(alert: AlertEvent) -> str:
    title = get_value(alert.annotations, 'info', DEFAULT_TITLE)
    description = get_value(alert.annotations, 'description', DEFAULT_DESCRIPTION)
    severity = get_value(alert.labels, 'severity', DEFAULT_SEVERITY)

    lines: List[str] = [
        f"*Alerta:* {escape_markdown(title)}",
        f"*Descrição:* {escape_markdown(description)}",
        f"*Severidade:* {escape_markdown(severity)}",
        f"*Status:* {escape_markdown(alert.status)}",
        f"*Início:* {escape_markdown(format_timestamp(alert.starts_at))}",
    ]
    if alert.status == RESOLVED_STATUS:
        lines.append(f"*Resolvido:* {escape_markdown(format_timestamp(alert.ends_at))}")
    return "\n".join(lines) + "\n"


def format_alert_message(batch: AlertBatch) -> str:
    """
    Gera o texto enviado ao Telegram: cabeçalho fixo seguido de um bloco por alerta,
    na ordem recebida, cada bloco terminado por uma linha em branco.
    Lote vazio resulta apenas no cabeçalho.
    """
    message = MESSAGE_HEADER + "\n"
    for alert in batch.alerts:
        message += format_alert_block(alert) + "\n"
    return message

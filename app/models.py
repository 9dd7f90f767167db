import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .constants import TELEGRAM_PARSE_MODE


class AlertDecodeError(ValueError):
    """Corpo do webhook não pôde ser decodificado como lote de alertas."""


def _string_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise AlertDecodeError(f"campo '{key}' deve ser string, recebido {type(value).__name__}")
    return value


def _string_map_field(data: Dict[str, Any], key: str) -> Dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise AlertDecodeError(f"campo '{key}' deve ser objeto, recebido {type(value).__name__}")
    result: Dict[str, str] = {}
    for k, v in value.items():
        # null dentro do mapa vira string vazia
        if v is None:
            v = ""
        if not isinstance(v, str):
            raise AlertDecodeError(f"valor de '{key}.{k}' deve ser string, recebido {type(v).__name__}")
        result[k] = v
    return result


@dataclass
class AlertEvent:
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    status: str = ""
    starts_at: str = ""
    ends_at: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> 'AlertEvent':
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise AlertDecodeError(f"alerta deve ser objeto, recebido {type(data).__name__}")
        return cls(
            annotations=_string_map_field(data, 'annotations'),
            labels=_string_map_field(data, 'labels'),
            status=_string_field(data, 'status'),
            starts_at=_string_field(data, 'startsAt'),
            ends_at=_string_field(data, 'endsAt'),
        )


@dataclass
class AlertBatch:
    alerts: List[AlertEvent] = field(default_factory=list)
    status: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> 'AlertBatch':
        """
        Monta o lote a partir do JSON já decodificado.
        Campos ausentes ou null assumem o valor vazio; chaves desconhecidas são ignoradas.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise AlertDecodeError(f"payload deve ser objeto, recebido {type(data).__name__}")
        raw_alerts = data.get('alerts')
        if raw_alerts is None:
            raw_alerts = []
        if not isinstance(raw_alerts, list):
            raise AlertDecodeError(f"campo 'alerts' deve ser lista, recebido {type(raw_alerts).__name__}")
        return cls(
            alerts=[AlertEvent.from_dict(a) for a in raw_alerts],
            status=_string_field(data, 'status'),
        )

    @classmethod
    def from_json(cls, raw: bytes) -> 'AlertBatch':
        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as exc:
            raise AlertDecodeError(f"JSON inválido: {exc}") from exc
        return cls.from_dict(data)


@dataclass
class OutboundMessage:
    chat_id: str
    text: str
    parse_mode: str = TELEGRAM_PARSE_MODE

    def to_payload(self) -> Dict[str, Any]:
        return {
            "chat_id": self.chat_id,
            "text": self.text,
            "parse_mode": self.parse_mode,
        }

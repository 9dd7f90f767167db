import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

# Instante zero usado quando o timestamp não pode ser interpretado
ZERO_TIME = datetime(1, 1, 1)

_RFC3339_RE = re.compile(
    r'(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})',
    re.ASCII,
)


def get_value(mapping: Optional[Dict[str, str]], key: str, default: str) -> str:
    # Chave presente com string vazia mantém a string vazia
    if mapping and key in mapping:
        return mapping[key]
    return default


def parse_timestamp(timestamp_str: str) -> Optional[datetime]:
    """
    Interpreta um timestamp RFC 3339 (ex.: '2025-10-08T16:29:55.933582749Z').
    Retorna None se o formato ou os valores forem inválidos.
    """
    if not timestamp_str:
        return None
    match = _RFC3339_RE.fullmatch(timestamp_str)
    if not match:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction, offset = match.group(7), match.group(8)
    if offset == 'Z':
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == '-' else 1
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        if delta >= timedelta(hours=24):
            return None
        tz = timezone(sign * delta)
    # Frações além de microssegundos são truncadas
    microsecond = int(fraction[1:7].ljust(6, '0')) if fraction else 0
    try:
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError:
        return None


def format_timestamp(timestamp_str: str) -> str:
    """
    Formata como 'YYYY-MM-DD HH:MM:SS' no próprio fuso do timestamp.
    Valores inválidos viram silenciosamente o instante zero.
    """
    parsed = parse_timestamp(timestamp_str) or ZERO_TIME
    # isoformat evita o strftime('%Y') sem zeros à esquerda para o ano 1
    return parsed.replace(microsecond=0, tzinfo=None).isoformat(sep=' ')

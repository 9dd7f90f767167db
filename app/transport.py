import logging
from typing import Any, Dict, Iterable, Optional

from requests import PreparedRequest, Response
from requests.adapters import HTTPAdapter

from .constants import MAX_LOGGED_BODY

logger = logging.getLogger(__name__)


def _materialize_body(body) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode('utf-8')
    if hasattr(body, 'read'):
        data = body.read()
        return data.encode('utf-8') if isinstance(data, str) else data
    # iterável/gerador (upload em chunks)
    return b"".join(chunk.encode('utf-8') if isinstance(chunk, str) else chunk for chunk in body)


def _format_fields(fields: Dict[str, Any]) -> str:
    return " ".join(f"{k}={v!r}" for k, v in fields.items())


class LoggingHTTPAdapter(HTTPAdapter):
    """
    Adapter do requests que registra requisição e resposta de toda chamada de saída.

    O corpo da requisição é lido por inteiro e devolvido à PreparedRequest antes do envio,
    e o corpo da resposta é carregado em memória (continua legível para quem chamou).
    Só é adequado para payloads pequenos: corpos são truncados no log em `max_logged_body`
    bytes e respostas com Content-Length acima desse limite não são carregadas para log.
    """

    def __init__(self, max_logged_body: int = MAX_LOGGED_BODY, secrets: Optional[Iterable[str]] = None, **kwargs):
        super().__init__(**kwargs)
        self.max_logged_body = max_logged_body
        self.secrets = [s for s in (secrets or []) if s]

    def _redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, '***')
        return text

    def _preview(self, body: bytes) -> str:
        if len(body) > self.max_logged_body:
            omitted = len(body) - self.max_logged_body
            return body[: self.max_logged_body].decode('utf-8', errors='replace') + f"... [{omitted} bytes omitidos]"
        return body.decode('utf-8', errors='replace')

    def _buffer_request_body(self, request: PreparedRequest) -> bytes:
        body = _materialize_body(request.body)
        if request.body is not None and not isinstance(request.body, bytes):
            request.body = body
            request.headers.pop('Transfer-Encoding', None)
            request.headers['Content-Length'] = str(len(body))
        return body

    def _response_body_preview(self, resp: Response) -> str:
        declared = resp.headers.get('Content-Length')
        if declared and declared.isdigit() and int(declared) > self.max_logged_body:
            return f"[{declared} bytes não carregados]"
        return self._preview(resp.content or b"")

    def send(self, request: PreparedRequest, **kwargs) -> Response:
        req_body = self._buffer_request_body(request)
        url = self._redact(request.url or '')

        try:
            resp = super().send(request, **kwargs)
        except Exception as exc:
            fields = {
                'url': url,
                'method': request.method,
                'request_body': self._preview(req_body),
                'request_headers': dict(request.headers),
                'error': str(exc),
            }
            logger.error(f"error sending request {_format_fields(fields)}", extra=fields)
            raise

        fields = {
            'url': url,
            'method': request.method,
            'response_status': resp.status_code,
            'request_body': self._preview(req_body),
            'response_body': self._response_body_preview(resp),
            'response_headers': dict(resp.headers),
            'request_headers': dict(request.headers),
        }
        logger.info(f"got response {_format_fields(fields)}", extra=fields)
        return resp

#!/usr/bin/env python3
import os
import sys
import unittest
from unittest.mock import patch

import requests
from requests.adapters import HTTPAdapter

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.transport import LoggingHTTPAdapter


def make_response(status=200, content=b'{"ok":true}', headers=None):
    resp = requests.Response()
    resp.status_code = status
    resp._content = content
    resp.headers.update(headers or {'Content-Type': 'application/json'})
    return resp


class TestLoggingHTTPAdapter(unittest.TestCase):
    def test_logs_request_and_response_and_keeps_bodies(self):
        adapter = LoggingHTTPAdapter()
        prepared = requests.Request('POST', 'https://example.org/hook', data=b'{"a": 1}').prepare()

        with patch.object(HTTPAdapter, 'send', return_value=make_response()) as mock_send:
            with self.assertLogs('app.transport', level='INFO') as logs:
                resp = adapter.send(prepared)

        sent = mock_send.call_args[0][0]
        self.assertEqual(sent.body, b'{"a": 1}')
        self.assertEqual(resp.content, b'{"ok":true}')
        self.assertEqual(len(logs.records), 1)
        record = logs.records[0]
        self.assertEqual(record.levelname, 'INFO')
        self.assertEqual(record.response_status, 200)
        self.assertEqual(record.request_body, '{"a": 1}')
        self.assertEqual(record.response_body, '{"ok":true}')
        self.assertEqual(record.method, 'POST')
        self.assertIn('got response', record.getMessage())

    def test_streamed_body_is_buffered_and_restored(self):
        adapter = LoggingHTTPAdapter()
        prepared = requests.Request('POST', 'https://example.org/hook', data=iter([b'ab', b'cd'])).prepare()
        self.assertEqual(prepared.headers.get('Transfer-Encoding'), 'chunked')

        with patch.object(HTTPAdapter, 'send', return_value=make_response()) as mock_send:
            with self.assertLogs('app.transport', level='INFO'):
                adapter.send(prepared)

        sent = mock_send.call_args[0][0]
        self.assertEqual(sent.body, b'abcd')
        self.assertEqual(sent.headers['Content-Length'], '4')
        self.assertNotIn('Transfer-Encoding', sent.headers)

    def test_transport_error_is_logged_and_reraised(self):
        adapter = LoggingHTTPAdapter()
        prepared = requests.Request('POST', 'https://example.org/hook', data=b'corpo').prepare()
        error = requests.ConnectionError('connection refused')

        with patch.object(HTTPAdapter, 'send', side_effect=error):
            with self.assertLogs('app.transport', level='ERROR') as logs:
                with self.assertRaises(requests.ConnectionError) as ctx:
                    adapter.send(prepared)

        self.assertIs(ctx.exception, error)
        record = logs.records[0]
        self.assertEqual(record.url, 'https://example.org/hook')
        self.assertEqual(record.request_body, 'corpo')
        self.assertEqual(record.error, 'connection refused')

    def test_secrets_are_masked_in_logged_url(self):
        adapter = LoggingHTTPAdapter(secrets=['123:SEGREDO'])
        prepared = requests.Request('POST', 'https://api.telegram.org/bot123:SEGREDO/sendMessage', data=b'{}').prepare()

        with patch.object(HTTPAdapter, 'send', return_value=make_response()):
            with self.assertLogs('app.transport', level='INFO') as logs:
                adapter.send(prepared)

        self.assertNotIn('SEGREDO', logs.output[0])
        self.assertEqual(logs.records[0].url, 'https://api.telegram.org/bot***/sendMessage')

    def test_large_bodies_are_bounded_in_log(self):
        adapter = LoggingHTTPAdapter(max_logged_body=8)
        prepared = requests.Request('POST', 'https://example.org/hook', data=b'x' * 20).prepare()
        big = make_response(content=b'y' * 100, headers={'Content-Length': '100'})

        with patch.object(HTTPAdapter, 'send', return_value=big):
            with self.assertLogs('app.transport', level='INFO') as logs:
                resp = adapter.send(prepared)

        record = logs.records[0]
        self.assertTrue(record.request_body.startswith('x' * 8))
        self.assertIn('12 bytes omitidos', record.request_body)
        self.assertIn('100 bytes não carregados', record.response_body)
        self.assertEqual(resp.content, b'y' * 100)


if __name__ == '__main__':
    unittest.main()

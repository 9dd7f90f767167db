#!/usr/bin/env python3
import json
import logging
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.logging_config import JsonFormatter, setup_logging


class TestJsonFormatter(unittest.TestCase):
    def test_includes_extra_fields(self):
        record = logging.LogRecord('app.transport', logging.INFO, __file__, 1, 'got response', (), None)
        record.response_status = 200
        record.url = 'https://example.org'
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload['level'], 'INFO')
        self.assertEqual(payload['logger'], 'app.transport')
        self.assertEqual(payload['msg'], 'got response')
        self.assertEqual(payload['response_status'], 200)
        self.assertEqual(payload['url'], 'https://example.org')
        self.assertNotIn('pathname', payload)


class TestSetupLogging(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
        root.setLevel(self._saved[0])
        for h in self._saved[1]:
            root.addHandler(h)

    def test_installs_single_json_handler(self):
        setup_logging(level='WARNING', use_json=True)
        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)


if __name__ == '__main__':
    unittest.main()

#!/usr/bin/env python3
"""
Tests for configuration loading and logging setup.

Run with:
    python -m pytest tests/test_config.py
"""
import json
import logging
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gamelibrary.config import DEFAULT_CONFIG, load_config
from gamelibrary.library import setup_logging

_ENV_KEYS = ('DATABASE_URL', 'GAMELIB_LOG_LEVEL', 'GAMELIB_LOG_FILE', 'GAMELIB_SEED',
             'GAMELIB_SEED_DIR', 'GAMELIB_HOST', 'GAMELIB_PORT')


def _clean_env():
    return {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        path = os.path.join(self.tmpdir.name, 'config.json')
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            self.assertEqual(load_config(), DEFAULT_CONFIG)

    def test_file_values_applied(self):
        path = self._write(json.dumps({'port': 8080, 'seed': False}))
        with patch.dict(os.environ, _clean_env(), clear=True):
            config = load_config(path)
        self.assertEqual(config['port'], 8080)
        self.assertFalse(config['seed'])
        self.assertEqual(config['host'], DEFAULT_CONFIG['host'])

    def test_env_overrides_file(self):
        path = self._write(json.dumps({'database_url': 'sqlite:///file.db',
                                       'port': 8080}))
        env = dict(_clean_env(), DATABASE_URL='sqlite://', GAMELIB_PORT='9090',
                   GAMELIB_LOG_LEVEL='DEBUG', GAMELIB_HOST='0.0.0.0')
        with patch.dict(os.environ, env, clear=True):
            config = load_config(path)
        self.assertEqual(config['database_url'], 'sqlite://')
        self.assertEqual(config['port'], 9090)
        self.assertEqual(config['log_level'], 'DEBUG')
        self.assertEqual(config['host'], '0.0.0.0')

    def test_seed_flag_from_env(self):
        for value, expected in (('0', False), ('off', False), ('NO', False),
                                ('1', True), ('true', True)):
            with patch.dict(os.environ, dict(_clean_env(), GAMELIB_SEED=value),
                            clear=True):
                self.assertEqual(load_config()['seed'], expected, msg=value)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(self.tmpdir.name, 'nope.json'))

    def test_invalid_json(self):
        with self.assertRaises(ValueError):
            load_config(self._write('{not json'))

    def test_non_object_json(self):
        with self.assertRaises(ValueError):
            load_config(self._write('[1, 2]'))


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger('gamelibrary')
        self.saved_handlers = list(self.logger.handlers)
        self.saved_level = self.logger.level

    def tearDown(self):
        for handler in self.logger.handlers:
            if handler not in self.saved_handlers:
                handler.close()
        self.logger.handlers = self.saved_handlers
        self.logger.setLevel(self.saved_level)

    def test_level_applied(self):
        setup_logging('DEBUG')
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_unknown_level_falls_back_to_warning(self):
        setup_logging('chatty')
        self.assertEqual(self.logger.level, logging.WARNING)

    def test_handler_not_duplicated(self):
        setup_logging('INFO')
        setup_logging('INFO')
        streams = [h for h in self.logger.handlers if type(h) is logging.StreamHandler]
        self.assertEqual(len(streams), 1)

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'gamelib.log')
            setup_logging('INFO', path)
            logging.getLogger('gamelibrary.test').info('hello file')
            for handler in self.logger.handlers:
                handler.flush()
            with open(path) as f:
                self.assertIn('hello file', f.read())
            for handler in list(self.logger.handlers):
                if isinstance(handler, logging.FileHandler):
                    handler.close()
                    self.logger.removeHandler(handler)


if __name__ == '__main__':
    unittest.main()

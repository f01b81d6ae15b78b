"""Unit tests for environment configuration loading."""

import os
import unittest
from unittest.mock import patch

from utils.config import Settings, load_settings, parse_duration

REQUIRED_ENV = {
    'JWT_SECRET_KEY': 'jwt-secret',
    'PRICE_ENCRYPTION_KEY': 'price-secret',
}


class TestParseDuration(unittest.TestCase):

    def test_units(self):
        self.assertEqual(parse_duration('7d'), 7 * 86400)
        self.assertEqual(parse_duration('12h'), 12 * 3600)
        self.assertEqual(parse_duration('30m'), 1800)
        self.assertEqual(parse_duration('45s'), 45)
        self.assertEqual(parse_duration('3600'), 3600)

    def test_invalid(self):
        for value in ('', 'soon', '7w', '-1d', '0'):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_duration(value)


class TestLoadSettings(unittest.TestCase):

    @patch.dict(os.environ, REQUIRED_ENV, clear=True)
    def test_defaults(self):
        settings = load_settings()

        self.assertEqual(settings.jwt_secret_key, 'jwt-secret')
        self.assertEqual(settings.price_encryption_key, 'price-secret')
        self.assertEqual(settings.jwt_expires_in, 7 * 86400)
        self.assertEqual(settings.price_cipher_mode, 'fernet')
        self.assertEqual(settings.bcrypt_rounds, 10)
        self.assertFalse(settings.is_production)

    @patch.dict(os.environ, {'PRICE_ENCRYPTION_KEY': 'price-secret'}, clear=True)
    def test_missing_jwt_secret(self):
        with self.assertRaises(ValueError) as context:
            load_settings()
        self.assertIn('JWT_SECRET_KEY', str(context.exception))

    @patch.dict(os.environ, {'JWT_SECRET_KEY': 'jwt-secret'}, clear=True)
    def test_missing_price_secret(self):
        with self.assertRaises(ValueError) as context:
            load_settings()
        self.assertIn('PRICE_ENCRYPTION_KEY', str(context.exception))

    @patch.dict(os.environ, {**REQUIRED_ENV, 'PRICE_CIPHER_MODE': 'rot13'}, clear=True)
    def test_invalid_cipher_mode(self):
        with self.assertRaises(ValueError):
            load_settings()

    @patch.dict(os.environ, {**REQUIRED_ENV, 'PRICE_CIPHER_MODE': 'Legacy'}, clear=True)
    def test_legacy_cipher_mode(self):
        self.assertEqual(load_settings().price_cipher_mode, 'legacy')

    @patch.dict(os.environ, {**REQUIRED_ENV, 'BCRYPT_ROUNDS': '3'}, clear=True)
    def test_bcrypt_rounds_out_of_range(self):
        with self.assertRaises(ValueError):
            load_settings()

    @patch.dict(os.environ, {**REQUIRED_ENV, 'APP_ENV': 'Production', 'JWT_EXPIRES_IN': '1h'}, clear=True)
    def test_production_and_expiry(self):
        settings = load_settings()

        self.assertTrue(settings.is_production)
        self.assertEqual(settings.jwt_expires_in, 3600)

    def test_settings_is_immutable(self):
        settings = Settings(jwt_secret_key='a', price_encryption_key='b')
        with self.assertRaises(Exception):
            settings.app_env = 'production'


if __name__ == '__main__':
    unittest.main()

import asyncio
import os
import unittest
import logging
import io
from unittest.mock import patch, MagicMock

from config import settings as config_settings
from clients.garmin_client import GarminConnectProvider


class CredentialsSmokeTest(unittest.TestCase):

    def setUp(self):
        """Set up test environment for each test."""
        self.original_environ = dict(os.environ)
        config_settings._deprecation_warned = False

        self.log_stream = io.StringIO()
        self.log_handler = logging.StreamHandler(self.log_stream)
        self.logger = logging.getLogger("config.settings")
        self.original_level = self.logger.level
        self.logger.setLevel(logging.INFO)
        self.logger.addHandler(self.log_handler)

    def tearDown(self):
        """Clean up test environment after each test."""
        os.environ.clear()
        os.environ.update(self.original_environ)

        self.logger.removeHandler(self.log_handler)
        self.logger.setLevel(self.original_level)
        config_settings._deprecation_warned = False

    def test_email_and_password(self):
        os.environ["GARMIN_EMAIL"] = "test@example.com"
        os.environ["GARMIN_PASSWORD"] = "password123"
        os.environ.pop("GARMIN_USERNAME", None)

        email, password = config_settings.get_garmin_credentials()
        self.assertEqual(email, "test@example.com")
        self.assertEqual(password, "password123")
        self.assertNotIn("deprecated", self.log_stream.getvalue())

    def test_username_fallback_warns_once(self):
        os.environ["GARMIN_USERNAME"] = "testuser"
        os.environ["GARMIN_PASSWORD"] = "password456"
        os.environ.pop("GARMIN_EMAIL", None)

        email, password = config_settings.get_garmin_credentials()
        self.assertEqual(email, "testuser")
        self.assertEqual(password, "password456")

        config_settings.get_garmin_credentials()

        log_output = self.log_stream.getvalue()
        self.assertEqual(log_output.count("GARMIN_USERNAME is deprecated"), 1)

    def test_missing_credentials_raise(self):
        for key in ("GARMIN_EMAIL", "GARMIN_USERNAME", "GARMIN_PASSWORD"):
            os.environ.pop(key, None)

        with self.assertRaises(ValueError):
            config_settings.get_garmin_credentials()

    def test_provider_uses_accessor_credentials(self):
        with patch('clients.garmin_client.get_garmin_credentials', return_value=("test@example.com", "secret")) as mock_get_creds:
            with patch('clients.garmin_client.Garmin') as mock_garmin_connect:
                mock_client_instance = MagicMock()
                mock_garmin_connect.return_value = mock_client_instance

                provider = GarminConnectProvider()
                self.assertTrue(provider.authenticate())

                mock_get_creds.assert_called_once()
                mock_garmin_connect.assert_called_once_with("test@example.com", "secret")
                mock_client_instance.login.assert_called_once()

    def test_provider_without_credentials_is_unavailable(self):
        for key in ("GARMIN_EMAIL", "GARMIN_USERNAME", "GARMIN_PASSWORD"):
            os.environ.pop(key, None)

        with patch('clients.garmin_client.Garmin') as mock_garmin_connect:
            provider = GarminConnectProvider()

            self.assertFalse(asyncio.run(provider.is_data_available()))
            self.assertFalse(asyncio.run(provider.request_authorization()))
            mock_garmin_connect.assert_not_called()


if __name__ == '__main__':
    unittest.main()

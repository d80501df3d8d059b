"""Unit tests for OAuth state signing."""

import unittest
from unittest.mock import patch

from services.oauth_state import create_state, validate_state
from domain.model.errors import ValidationError


class TestOAuthState(unittest.TestCase):

    def test_valid_state(self):
        state = create_state("key", "google")

        validate_state("key", state, "google")

    def test_states_are_unique(self):
        self.assertNotEqual(create_state("key", "google"), create_state("key", "google"))

    def test_missing_state(self):
        for state in (None, ""):
            with self.subTest(state=state):
                with self.assertRaises(ValidationError):
                    validate_state("key", state, "google")

    def test_forged_state(self):
        with self.assertRaises(ValidationError):
            validate_state("key", "forged", "google")

    def test_wrong_key(self):
        state = create_state("key", "google")

        with self.assertRaises(ValidationError):
            validate_state("other", state, "google")

    def test_other_provider(self):
        state = create_state("key", "facebook")

        with self.assertRaises(ValidationError):
            validate_state("key", state, "google")

    def test_expired_state(self):
        with patch('itsdangerous.timed.time.time', return_value=1_000_000):
            state = create_state("key", "google")
        with patch('itsdangerous.timed.time.time', return_value=1_000_000 + 3600):
            with self.assertRaises(ValidationError) as raised:
                validate_state("key", state, "google")
        self.assertIn("expired", str(raised.exception))


if __name__ == '__main__':
    unittest.main()

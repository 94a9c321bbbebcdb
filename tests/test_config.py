"""
Tests for settings validation and the logging helper.
"""

import logging
import pytest
from unittest.mock import patch

from prompt_writer.config import Settings
from prompt_writer.utils.logging import get_logger, resolve_level


class TestSettingsValidation:

    def test_missing_required(self):
        with patch.object(Settings, "SUPABASE_URL", ""):
            with pytest.raises(ValueError, match="SUPABASE_URL"):
                Settings.validate()

    def test_thresholds_must_be_ordered(self):
        with patch.object(Settings, "SUPABASE_URL", "http://localhost:54321"), \
                patch.object(Settings, "SUPABASE_PUBLISHABLE_KEY", "key"), \
                patch.object(Settings, "TEMPLATE_TRENDING_THRESHOLD", 60):
            with pytest.raises(ValueError, match="TEMPLATE_TRENDING_THRESHOLD"):
                Settings.validate()

    def test_valid(self):
        with patch.object(Settings, "SUPABASE_URL", "http://localhost:54321"), \
                patch.object(Settings, "SUPABASE_PUBLISHABLE_KEY", "key"):
            Settings.validate()

    def test_jwks_url(self):
        with patch.object(Settings, "SUPABASE_URL", "https://abc.supabase.co"):
            assert Settings().SUPABASE_JWKS_URL == "https://abc.supabase.co/auth/v1/.well-known/jwks.json"

    def test_scoring_defaults(self):
        assert Settings.TEMPLATE_POPULAR_THRESHOLD == 50
        assert Settings.TEMPLATE_TRENDING_THRESHOLD == 10
        assert Settings.FALLBACK_LIMIT == 3


class TestLogging:

    @pytest.mark.parametrize(
        "level, expected",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("nonsense", logging.INFO), (logging.ERROR, logging.ERROR)],
    )
    def test_resolve_level(self, level, expected):
        assert resolve_level(level) == expected

    def test_single_handler(self):
        logger = get_logger("prompt_writer.tests.single_handler")
        get_logger("prompt_writer.tests.single_handler")

        assert len(logger.handlers) == 1

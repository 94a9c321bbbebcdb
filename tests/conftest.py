"""
Pytest configuration for Prompt Writer backend tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for service tests.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


def make_model(
    model_id: int,
    name: str,
    model_key: str,
    pricing_tier: str = "standard",
    performance_score: float = 8,
    is_active: bool = True,
) -> dict:
    """Build an AI model row shaped like the catalog service returns it."""
    return {
        "id": model_id,
        "name": name,
        "model_key": model_key,
        "pricing_tier": pricing_tier,
        "performance_score": performance_score,
        "is_active": is_active,
        "provider_name": "Provider",
    }


@pytest.fixture
def catalog_models():
    """The seeded catalog: 7 models in storage (id) order."""
    return [
        make_model(1, "GPT-4", "gpt-4", "premium", 9),
        make_model(2, "GPT-3.5 Turbo", "gpt-3.5-turbo", "standard", 7),
        make_model(3, "Claude 3", "claude-3-opus", "premium", 9),
        make_model(4, "Gemini Pro", "gemini-pro", "standard", 8),
        make_model(5, "DALL-E 3", "dall-e-3", "premium", 9),
        make_model(6, "Midjourney", "midjourney-v6", "premium", 9),
        make_model(7, "Stable Diffusion", "stable-diffusion-xl", "free", 7),
    ]

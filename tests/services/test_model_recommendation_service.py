"""
Tests for the AI model recommendation service.

Tests cover:
- Rule matches hydrated through the catalog
- Fallback path for unknown and missing purposes
- Unrecognized purpose reporting
- Question steps and service info
"""

import pytest
from unittest.mock import MagicMock, patch

from prompt_writer.services.recommendation_service import (
    get_question_step,
    get_service_info,
    recommend_models,
)


@pytest.fixture
def mock_client():
    return MagicMock()


class TestRecommendModels:

    @pytest.mark.asyncio
    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    @patch("prompt_writer.services.recommendation_service.get_models_by_keys")
    async def test_rule_match(self, mock_by_keys, mock_fallback, mock_client, catalog_models):
        mock_by_keys.return_value = [catalog_models[0], catalog_models[3]]

        result = await recommend_models(mock_client, ["coding", "complex", "performance"])

        mock_by_keys.assert_called_once_with(mock_client, ("gpt-4", "gemini-pro"), active_only=True)
        mock_fallback.assert_not_called()
        assert result.match_reason == "고급 코딩 지원"
        assert result.confidence == 95
        assert result.is_fallback is False
        assert result.matched_keywords == ["coding", "complex", "performance"]
        assert [m["name"] for m in result.recommendations] == ["GPT-4", "Gemini Pro"]

    @pytest.mark.asyncio
    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    @patch("prompt_writer.services.recommendation_service.get_models_by_keys")
    async def test_unknown_purpose_uses_fallback(self, mock_by_keys, mock_fallback, mock_client, catalog_models):
        mock_fallback.return_value = [m for m in catalog_models if m["pricing_tier"] != "free"]

        result = await recommend_models(mock_client, ["gardening", "simple", "cost"])

        mock_by_keys.assert_not_called()
        assert result.is_fallback is True
        assert result.match_reason == "범용 추천"
        assert result.confidence == 60
        assert result.unrecognized_purpose == "gardening"
        assert [m["name"] for m in result.recommendations] == ["GPT-4", "Claude 3", "GPT-3.5 Turbo"]

    @pytest.mark.asyncio
    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    async def test_missing_purpose_is_not_flagged(self, mock_fallback, mock_client):
        mock_fallback.return_value = []

        result = await recommend_models(mock_client, [])

        assert result.is_fallback is True
        assert result.unrecognized_purpose is None
        assert result.recommendations == []

    @pytest.mark.asyncio
    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    async def test_fallback_filters_ineligible_candidates(self, mock_fallback, mock_client, catalog_models):
        """Candidates are filtered again even if storage returns free or inactive rows."""
        inactive = {**catalog_models[0], "is_active": False}
        mock_fallback.return_value = [inactive, catalog_models[6], catalog_models[3]]

        result = await recommend_models(mock_client, ["unknown"])

        assert [m["name"] for m in result.recommendations] == ["Gemini Pro"]

    @pytest.mark.asyncio
    @patch("prompt_writer.services.recommendation_service.get_models_by_keys")
    async def test_matched_keywords_skip_missing_slots(self, mock_by_keys, mock_client):
        mock_by_keys.return_value = []

        result = await recommend_models(mock_client, ["translation", None])

        assert result.matched_keywords == ["translation"]
        assert result.match_reason == "번역"


class TestQuestionStep:

    def test_step_two(self):
        payload = get_question_step(2)

        assert payload["current_question"]["step"] == 2
        assert payload["total_steps"] == 3

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            get_question_step(5)


class TestServiceInfo:

    def test_lists_endpoints(self):
        info = get_service_info()

        assert info["version"] == "3.1"
        assert any("POST /recommend/ai-models" in e for e in info["endpoints"])

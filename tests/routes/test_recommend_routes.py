"""
Tests for the /recommend endpoints.

Tests cover:
- Model recommendation (rule match, fallback, validation)
- Wizard questions
- Catalog listings and details
- Error mapping
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

from prompt_writer.main import app
from prompt_writer.services.recommendation_service import ModelRecommendation, get_question_step

client = TestClient(app)


@pytest.fixture(autouse=True)
def mock_public_client():
    """Routes never build a real Supabase client in these tests."""
    with patch("prompt_writer.routes.recommend.get_public_client") as mock:
        mock.return_value = MagicMock()
        yield mock


@pytest.fixture
def gpt4_row():
    return {
        "id": 1,
        "name": "GPT-4",
        "model_key": "gpt-4",
        "version": "4.0",
        "modality": "text",
        "strengths": ["창작", "분석"],
        "use_cases": ["코드 생성"],
        "pricing_tier": "premium",
        "performance_score": "9.00",
        "is_active": True,
        "provider_name": "OpenAI",
    }


class TestRecommendAIModels:
    """Tests for POST /recommend/ai-models"""

    @patch("prompt_writer.routes.recommend.recommend_models")
    def test_rule_match(self, mock_recommend, gpt4_row):
        mock_recommend.return_value = ModelRecommendation(
            recommendations=[gpt4_row],
            match_reason="고급 코딩 지원",
            confidence=95,
            matched_keywords=["coding", "complex", "performance"],
        )

        response = client.post(
            "/recommend/ai-models",
            json={"keywords": ["coding", "complex", "performance"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["match_reason"] == "고급 코딩 지원"
        assert data["confidence"] == 95
        assert data["is_fallback"] is False
        assert data["recommendations"][0]["model_key"] == "gpt-4"
        assert data["recommendations"][0]["performance_score"] == 9.0
        assert "고급 코딩 지원" in data["message"]

    @patch("prompt_writer.routes.recommend.recommend_models")
    def test_fallback(self, mock_recommend, gpt4_row):
        mock_recommend.return_value = ModelRecommendation(
            recommendations=[gpt4_row],
            match_reason="범용 추천",
            confidence=60,
            matched_keywords=["gardening"],
            is_fallback=True,
            unrecognized_purpose="gardening",
        )

        response = client.post("/recommend/ai-models", json={"keywords": ["gardening"]})

        assert response.status_code == 200
        data = response.json()
        assert data["is_fallback"] is True
        assert data["confidence"] == 60
        assert data["match_reason"] == "범용 추천"

    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    def test_null_keywords_return_fallback(self, mock_candidates, gpt4_row):
        mock_candidates.return_value = [gpt4_row]

        response = client.post("/recommend/ai-models", json={"keywords": None})

        assert response.status_code == 200
        data = response.json()
        assert data["is_fallback"] is True
        assert data["confidence"] == 60
        assert data["match_reason"] == "범용 추천"
        assert data["matched_keywords"] == []
        assert data["recommendations"][0]["model_key"] == "gpt-4"

    @patch("prompt_writer.services.recommendation_service.get_fallback_candidates")
    def test_null_purpose_slot_returns_fallback(self, mock_candidates, gpt4_row):
        mock_candidates.return_value = [gpt4_row]

        response = client.post("/recommend/ai-models", json={"keywords": [None, "simple", "cost"]})

        assert response.status_code == 200
        data = response.json()
        assert data["is_fallback"] is True
        assert data["confidence"] == 60
        assert data["matched_keywords"] == ["simple", "cost"]

    def test_more_than_three_keywords_rejected(self):
        response = client.post(
            "/recommend/ai-models",
            json={"keywords": ["coding", "complex", "performance", "extra"]}
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    @patch("prompt_writer.routes.recommend.recommend_models")
    def test_service_error(self, mock_recommend):
        mock_recommend.side_effect = Exception("database down")

        response = client.post("/recommend/ai-models", json={"keywords": ["coding"]})

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "recommend_error"


class TestQuestions:
    """Tests for POST /recommend/questions"""

    def test_first_step(self):
        response = client.post("/recommend/questions", json={"step": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["total_steps"] == 3
        assert len(data["current_question"]["options"]) == 6

    def test_default_step(self):
        response = client.post("/recommend/questions", json={})

        assert response.json()["current_question"]["step"] == 1

    @patch("prompt_writer.routes.recommend.get_question_step", wraps=get_question_step)
    def test_passes_initial_input(self, mock_step):
        response = client.post(
            "/recommend/questions", json={"step": 2, "initial_input": "블로그 글 작성"}
        )

        assert response.status_code == 200
        mock_step.assert_called_once_with(2, "블로그 글 작성")

    def test_invalid_step(self):
        response = client.post("/recommend/questions", json={"step": 4})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "validation_error"


class TestCatalog:

    def test_service_info(self):
        response = client.get("/recommend")

        assert response.status_code == 200
        assert response.json()["version"] == "3.1"
        assert set(response.json()) == {"message", "version", "endpoints"}

    @patch("prompt_writer.routes.recommend.get_all_models")
    def test_list_models(self, mock_get_all, gpt4_row):
        mock_get_all.return_value = [gpt4_row]

        response = client.get("/recommend/ai-models")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    @patch("prompt_writer.routes.recommend.get_model_by_id")
    def test_model_not_found(self, mock_get_model):
        mock_get_model.return_value = None

        response = client.get("/recommend/ai-models/999")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"

    @patch("prompt_writer.routes.recommend.get_model_by_id")
    def test_model_found(self, mock_get_model, gpt4_row):
        mock_get_model.return_value = gpt4_row

        response = client.get("/recommend/ai-models/1")

        assert response.status_code == 200
        assert response.json()["provider_name"] == "OpenAI"

    @patch("prompt_writer.routes.recommend.get_active_categories")
    def test_categories(self, mock_categories):
        mock_categories.return_value = [{"id": 1, "name": "번역", "icon": "🌐", "sort_order": 4}]

        response = client.get("/recommend/categories")

        assert response.status_code == 200
        assert response.json()["categories"][0]["name"] == "번역"

    @patch("prompt_writer.routes.recommend.get_all_tags")
    def test_tags_error(self, mock_tags):
        mock_tags.side_effect = Exception("boom")

        response = client.get("/recommend/tags")

        assert response.status_code == 500
        assert response.json()["detail"]["error"] == "fetch_error"

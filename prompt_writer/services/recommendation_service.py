"""
Recommendation Service - Rule-Based AI Model Matching

Flow for POST /recommend/ai-models:
1. Classify the wizard answers (purpose, complexity, priority) with the
   rule table in prompt_writer/recommendation/rules.py
2. Match found: resolve the rule's model keys against the live catalog,
   ordered by pricing tier and performance score
3. No match: fetch active standard/premium models and apply the fallback
   selector (GPT-4 family, then Claude, then others; at most 3),
   confidence 60, label "범용 추천"

Unrecognized purposes are not errors. They take the fallback path and are
logged so typos can be told apart from deliberate "other" requests.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from prompt_writer.config import settings
from prompt_writer.recommendation import classify, get_question, is_recognized_purpose, select_fallback
from prompt_writer.services.ai_model_service import get_fallback_candidates, get_models_by_keys
from prompt_writer.utils.constants import FALLBACK_CATEGORY_LABEL, FALLBACK_CONFIDENCE

logger = logging.getLogger(__name__)

API_VERSION = "3.1"


@dataclass
class ModelRecommendation:
    """Service-level result handed to the route for response mapping."""
    recommendations: List[Dict[str, Any]]
    match_reason: str
    confidence: int
    matched_keywords: List[str] = field(default_factory=list)
    is_fallback: bool = False
    unrecognized_purpose: Optional[str] = None


async def recommend_models(
    supabase_client: Client,
    keywords: Optional[Sequence[Optional[str]]],
    requirements: Optional[str] = None,
) -> ModelRecommendation:
    """
    Recommend AI models for the wizard answers.

    Args:
        supabase_client: Supabase client used for catalog lookups
        keywords: [purpose, complexity, priority] (up to 3 entries)
        requirements: Free-text requirements (logged only, not used for matching)

    Returns:
        ModelRecommendation with hydrated catalog rows
    """
    answers = list(keywords or [])
    logger.info(
        f"recommend_models called with keywords={answers}, "
        f"requirements_len={len(requirements) if requirements else 0}"
    )

    match = classify(answers)

    if match is None:
        purpose = answers[0] if answers else None
        unrecognized = purpose if purpose and not is_recognized_purpose(purpose) else None
        if unrecognized:
            logger.warning(f"Unrecognized purpose '{unrecognized}', using fallback recommendation")
        else:
            logger.info("No purpose supplied, using fallback recommendation")

        candidates = await get_fallback_candidates(supabase_client)
        models = select_fallback(candidates, limit=settings.FALLBACK_LIMIT)

        return ModelRecommendation(
            recommendations=models,
            match_reason=FALLBACK_CATEGORY_LABEL,
            confidence=FALLBACK_CONFIDENCE,
            matched_keywords=[str(k) for k in answers if k is not None],
            is_fallback=True,
            unrecognized_purpose=unrecognized,
        )

    models = await get_models_by_keys(supabase_client, match.model_keys, active_only=True)

    logger.info(
        f"Rule matched: category='{match.category_label}', "
        f"confidence={match.confidence}, models={len(models)}"
    )

    return ModelRecommendation(
        recommendations=models,
        match_reason=match.category_label,
        confidence=match.confidence,
        matched_keywords=[str(k) for k in answers if k is not None],
    )


def get_question_step(step: int, initial_input: Optional[str] = None) -> Dict[str, Any]:
    """
    Return the wizard question for a step.

    initial_input is what the user typed before starting the wizard; only its
    length is logged.

    Raises:
        ValueError: If step is outside 1..3
    """
    logger.info(
        f"Question step {step} requested, "
        f"initial_input_len={len(initial_input) if initial_input else 0}"
    )
    return get_question(step)


def get_service_info() -> Dict[str, Any]:
    """Describe the recommendation API for GET /recommend."""
    return {
        "version": API_VERSION,
        "endpoints": [
            "POST /recommend/ai-models - AI 모델 추천",
            "POST /recommend/questions - 대화형 질문 생성",
            "GET /recommend/ai-models - 전체 AI 모델 목록",
            "GET /recommend/ai-models/{model_id} - AI 모델 상세",
            "GET /recommend/categories - 템플릿 카테고리 목록",
            "GET /recommend/tags - 태그 목록",
        ],
    }

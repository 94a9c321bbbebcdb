"""
AI model recommendation API endpoints.

All endpoints are PUBLIC and read through the anonymous Supabase client.

Endpoints:
- GET /recommend - Service info
- POST /recommend/ai-models - Recommend models for wizard answers
- POST /recommend/questions - Wizard question for a step
- GET /recommend/ai-models - Full active model catalog
- GET /recommend/ai-models/{model_id} - One model
- GET /recommend/categories - Template categories
- GET /recommend/tags - Template tags
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, status

from prompt_writer.db.client import get_public_client
from prompt_writer.schemas.ai_models import AIModelListResponse, AIModelResponse
from prompt_writer.schemas.catalog import (
    CategoryListResponse,
    CategoryResponse,
    TagListResponse,
    TagResponse,
)
from prompt_writer.schemas.recommendations import (
    ModelRecommendationRequest,
    ModelRecommendationResponse,
    QuestionRequest,
    QuestionResponse,
    ServiceInfoResponse,
)
from prompt_writer.services.ai_model_service import get_all_models, get_model_by_id
from prompt_writer.services.category_service import get_active_categories, get_all_tags
from prompt_writer.services.recommendation_service import (
    get_question_step,
    get_service_info,
    recommend_models,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommend", tags=["recommend"])


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _optional_float(value: Any) -> Optional[float]:
    # NUMERIC columns arrive as strings from PostgREST
    return float(value) if value is not None else None


def _build_model_response(model: Dict[str, Any]) -> AIModelResponse:
    """Helper to build AIModelResponse from a catalog row."""
    return AIModelResponse(
        id=int(model.get("id", 0)),
        name=model.get("name", ""),
        model_key=model.get("model_key", ""),
        version=_optional_str(model.get("version")),
        description=model.get("description"),
        modality=model.get("modality"),
        context_length=model.get("context_length"),
        max_tokens=model.get("max_tokens"),
        supports_streaming=bool(model.get("supports_streaming", False)),
        supports_functions=bool(model.get("supports_functions", False)),
        strengths=_as_list(model.get("strengths")),
        use_cases=_as_list(model.get("use_cases")),
        pricing_tier=model.get("pricing_tier"),
        performance_score=_optional_float(model.get("performance_score")),
        input_price_per_1k=_optional_float(model.get("input_price_per_1k")),
        output_price_per_1k=_optional_float(model.get("output_price_per_1k")),
        api_available=bool(model.get("api_available", True)),
        is_active=bool(model.get("is_active", True)),
        provider_name=model.get("provider_name"),
        provider_company=model.get("provider_company"),
        provider_website=model.get("provider_website"),
        provider_api_base=model.get("provider_api_base"),
    )


def _recommendation_message(match_reason: str, count: int, is_fallback: bool) -> str:
    if is_fallback:
        return f"일치하는 추천 규칙이 없어 범용 AI 모델 {count}개를 추천합니다."
    return f"'{match_reason}' 용도에 맞는 AI 모델 {count}개를 추천합니다."


@router.get(
    "",
    response_model=ServiceInfoResponse,
    status_code=status.HTTP_200_OK,
    summary="Recommendation service info",
)
async def service_info() -> ServiceInfoResponse:
    info = get_service_info()
    return ServiceInfoResponse(
        message="AI 모델 추천 API",
        version=info["version"],
        endpoints=info["endpoints"],
    )


@router.post(
    "/ai-models",
    response_model=ModelRecommendationResponse,
    status_code=status.HTTP_200_OK,
    summary="Recommend AI models",
    description="""
    Recommend AI models for the wizard answers.

    This endpoint:
    - Reads keywords as [purpose, complexity, priority]
    - Applies the first matching rule for the purpose
    - Falls back to up to 3 general-purpose models (confidence 60) when no rule matches
    - Never errors on unknown answers

    Security:
    - Public endpoint (no authentication required)
    """
)
async def recommend_ai_models(request: ModelRecommendationRequest) -> ModelRecommendationResponse:
    """Recommend AI models from wizard answers."""
    logger.info(f"Model recommendation requested: keywords={request.keywords}")

    supabase_client = get_public_client()

    try:
        result = await recommend_models(
            supabase_client=supabase_client,
            keywords=request.keywords,
            requirements=request.requirements,
        )

        models = [_build_model_response(m) for m in result.recommendations]

        return ModelRecommendationResponse(
            recommendations=models,
            match_reason=result.match_reason,
            confidence=result.confidence,
            matched_keywords=result.matched_keywords,
            is_fallback=result.is_fallback,
            message=_recommendation_message(result.match_reason, len(models), result.is_fallback),
        )

    except Exception as e:
        logger.error(f"Failed to recommend AI models: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "recommend_error",
                "details": "Failed to generate AI model recommendations"
            }
        )


@router.post(
    "/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get wizard question",
    description="Returns the question for step 1, 2 or 3. Other steps return 400.",
)
async def get_question(request: QuestionRequest) -> QuestionResponse:
    try:
        payload = get_question_step(request.step, request.initial_input)
    except ValueError as e:
        logger.warning(f"Invalid question step: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "validation_error",
                "details": str(e)
            }
        )

    return QuestionResponse(**payload)


@router.get(
    "/ai-models",
    response_model=AIModelListResponse,
    status_code=status.HTTP_200_OK,
    summary="List AI models",
    description="All active models, premium first, then by performance score.",
)
async def list_ai_models() -> AIModelListResponse:
    supabase_client = get_public_client()

    try:
        models = await get_all_models(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch AI models: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve AI models from database"
            }
        )

    responses = [_build_model_response(m) for m in models]
    return AIModelListResponse(models=responses, count=len(responses))


@router.get(
    "/ai-models/{model_id}",
    response_model=AIModelResponse,
    status_code=status.HTTP_200_OK,
    summary="Get AI model details",
)
async def get_ai_model(model_id: int) -> AIModelResponse:
    """Get details of a single active model."""
    supabase_client = get_public_client()

    try:
        model = await get_model_by_id(supabase_client, model_id)

        if not model:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={
                    "error": "not_found",
                    "details": f"AI model {model_id} not found"
                }
            )

        return _build_model_response(model)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch AI model {model_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve AI model from database"
            }
        )


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="List template categories",
)
async def list_categories() -> CategoryListResponse:
    supabase_client = get_public_client()

    try:
        categories = await get_active_categories(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch categories: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve categories from database"
            }
        )

    responses = [
        CategoryResponse(
            id=int(cat.get("id", 0)),
            name=cat.get("name", ""),
            description=cat.get("description"),
            icon=cat.get("icon"),
            color=cat.get("color"),
            sort_order=cat.get("sort_order"),
        )
        for cat in categories
    ]
    return CategoryListResponse(categories=responses, count=len(responses))


@router.get(
    "/tags",
    response_model=TagListResponse,
    status_code=status.HTTP_200_OK,
    summary="List template tags",
)
async def list_tags() -> TagListResponse:
    supabase_client = get_public_client()

    try:
        tags = await get_all_tags(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch tags: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve tags from database"
            }
        )

    responses = [
        TagResponse(
            id=int(tag.get("id", 0)),
            name=tag.get("name", ""),
            description=tag.get("description"),
            color=tag.get("color"),
            usage_count=int(tag.get("usage_count") or 0),
        )
        for tag in tags
    ]
    return TagListResponse(tags=responses, count=len(responses))

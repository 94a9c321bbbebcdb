"""
Prompt template API endpoints.

Endpoints:
- GET /templates - List public templates (filters, pagination)
- GET /templates/{template_id} - Template details (counts a view)
- POST /templates - Create a template (auth)
- PUT /templates/{template_id} - Update a template and bump its version (auth)
- DELETE /templates/{template_id} - Soft-delete a template (auth)
- POST /templates/recommend - Relevance search
- POST /templates/{template_id}/copy - Copy a template (auth)
- POST /templates/{template_id}/favorite - Favorite a template (auth)
- GET /templates/{template_id}/export - Download as JSON or text
- POST /templates/{template_id}/feedback - Rate a template
- GET /templates/{template_id}/stats - Usage and feedback statistics

Reads, search, export and feedback use the anonymous client; writes use the
caller's client so RLS sees the user.
"""

import json
import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from prompt_writer.auth.dependencies import AuthenticatedUser, get_authenticated_user
from prompt_writer.db.client import get_public_client, get_supabase_client
from prompt_writer.schemas.templates import (
    DifficultyLevel,
    ExportFormat,
    FeedbackCreateRequest,
    FeedbackResponse,
    FeedbackStats,
    PaginationInfo,
    StatusMessageResponse,
    TemplateCopyRequest,
    TemplateCounters,
    TemplateCreateRequest,
    TemplateListResponse,
    TemplateMutationResponse,
    TemplateResponse,
    TemplateSearchRequest,
    TemplateSearchResponse,
    TemplateStatsResponse,
    TemplateUpdateRequest,
)
from prompt_writer.services.template_service import (
    copy_template,
    create_template,
    delete_template,
    export_template,
    format_template_text,
    get_template_by_id,
    get_template_stats,
    list_templates,
    recommend_templates,
    record_favorite,
    submit_feedback,
    total_pages,
    update_template,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _build_template_response(template: Dict[str, Any]) -> TemplateResponse:
    """Helper to build TemplateResponse from a template dict."""
    return TemplateResponse(
        id=int(template.get("id", 0)),
        title=template.get("title", ""),
        description=template.get("description"),
        template_content=template.get("template_content", ""),
        system_role=template.get("system_role"),
        category_id=template.get("category_id"),
        category_name=template.get("category_name"),
        tag_names=list(template.get("tag_names") or []),
        difficulty_level=template.get("difficulty_level"),
        example_usage=template.get("example_usage"),
        estimated_tokens=template.get("estimated_tokens"),
        usage_count=int(template.get("usage_count") or 0),
        view_count=int(template.get("view_count") or 0),
        is_featured=bool(template.get("is_featured", False)),
        is_public=bool(template.get("is_public", True)),
        version=_optional_str(template.get("version")),
        created_at=_optional_str(template.get("created_at")),
        updated_at=_optional_str(template.get("updated_at")),
        relevance_score=template.get("relevance_score"),
    )


def _not_found(template_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": "not_found",
            "details": f"Template {template_id} not found"
        }
    )


def _server_error(code: str, details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": code,
            "details": details
        }
    )


@router.get(
    "",
    response_model=TemplateListResponse,
    status_code=status.HTTP_200_OK,
    summary="List templates",
    description="""
    List public, active templates.

    Filters:
    - category: partial, case-insensitive match on the category name
    - difficulty: easy, medium or hard
    - search: partial match on title or description
    - featured_only: only featured templates

    Ordered featured first, then by usage_count and created_at (newest first).
    """
)
async def get_templates(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, ge=1, le=100, description="Page size"),
    category: Optional[str] = Query(None, description="Category name filter"),
    difficulty: Optional[DifficultyLevel] = Query(None, description="Difficulty filter"),
    search: Optional[str] = Query(None, description="Title/description search"),
    featured_only: bool = Query(False, description="Only featured templates"),
) -> TemplateListResponse:
    """List templates with filters and pagination."""
    supabase_client = get_public_client()

    try:
        templates, total = await list_templates(
            supabase_client=supabase_client,
            page=page,
            limit=limit,
            category=category,
            difficulty=difficulty,
            search=search,
            featured_only=featured_only,
        )
    except Exception as e:
        logger.error(f"Failed to list templates: {e}", exc_info=True)
        raise _server_error("fetch_error", "Failed to retrieve templates from database")

    return TemplateListResponse(
        templates=[_build_template_response(t) for t in templates],
        pagination=PaginationInfo(
            current_page=page,
            total_pages=total_pages(total, limit),
            total_items=total,
            items_per_page=limit,
        ),
    )


@router.post(
    "/recommend",
    response_model=TemplateSearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search templates by relevance",
    description="""
    Score public templates against a category and keyword.

    Scoring: category match +3, keyword match +2, popular +2 (or trending +1),
    featured +1. Templates scoring 0 are omitted.
    """
)
async def search_templates(request: TemplateSearchRequest) -> TemplateSearchResponse:
    logger.info(f"Template search requested: category={request.category}, purpose={request.purpose}")

    supabase_client = get_public_client()

    try:
        ranked = await recommend_templates(
            supabase_client=supabase_client,
            keywords=request.keywords,
            category=request.category,
            purpose=request.purpose,
        )
    except Exception as e:
        logger.error(f"Failed to search templates: {e}", exc_info=True)
        raise _server_error("recommend_error", "Failed to search templates")

    return TemplateSearchResponse(
        recommendations=[_build_template_response(t) for t in ranked],
        count=len(ranked),
        message=f"{len(ranked)}개의 관련 템플릿을 찾았습니다.",
    )


@router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    status_code=status.HTTP_200_OK,
    summary="Get template details",
    description="Returns a public template with category and tag names and counts a view.",
)
async def get_template(template_id: int) -> TemplateResponse:
    supabase_client = get_public_client()

    try:
        template = await get_template_by_id(supabase_client, template_id, count_view=True)

        if not template:
            raise _not_found(template_id)

        return _build_template_response(template)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch template {template_id}: {e}", exc_info=True)
        raise _server_error("fetch_error", "Failed to retrieve template from database")


@router.post(
    "",
    response_model=TemplateMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a template",
    description="""
    Create a template owned by the authenticated user.

    - Category and tags are matched by exact name and created when missing
    - New templates start at version 1.0
    """
)
async def create_user_template(
    request: TemplateCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> TemplateMutationResponse:
    """Create a new template."""
    logger.info(f"Creating template for user {auth_user.user_id}: category={request.category_name}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        created = await create_template(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            title=request.title,
            template_content=request.template_content,
            description=request.description,
            system_role=request.system_role,
            category_name=request.category_name,
            tags=request.tags,
            difficulty_level=request.difficulty_level,
            example_usage=request.example_usage,
            is_public=request.is_public,
        )

        return TemplateMutationResponse(
            status="CREATED",
            template=_build_template_response(created),
            message="템플릿이 성공적으로 생성되었습니다."
        )

    except ValueError as e:
        logger.warning(f"Validation error creating template: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "validation_error",
                "details": str(e)
            }
        )
    except Exception as e:
        logger.error(f"Failed to create template: {e}", exc_info=True)
        raise _server_error("create_error", "Failed to create template")


@router.put(
    "/{template_id}",
    response_model=TemplateMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a template",
    description="""
    Update editable fields of a template.

    Every update bumps the minor version (1.3 -> 1.4) and records the
    previous and new data in content_version.
    """
)
async def update_user_template(
    template_id: int,
    request: TemplateUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> TemplateMutationResponse:
    logger.info(f"Updating template {template_id} for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        updated = await update_template(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            template_id=template_id,
            updates=request.model_dump(exclude={"version_notes"}, exclude_none=True),
            version_notes=request.version_notes,
        )

        if not updated:
            raise _not_found(template_id)

        return TemplateMutationResponse(
            status="UPDATED",
            template=_build_template_response(updated),
            message=f"템플릿이 버전 {updated.get('version')}(으)로 업데이트되었습니다."
        )

    except HTTPException:
        raise
    except ValueError as e:
        logger.warning(f"Validation error updating template {template_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "validation_error",
                "details": str(e)
            }
        )
    except Exception as e:
        logger.error(f"Failed to update template {template_id}: {e}", exc_info=True)
        raise _server_error("update_error", "Failed to update template")


@router.delete(
    "/{template_id}",
    response_model=StatusMessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a template",
    description="Soft delete: the template is deactivated and a delete version row is recorded.",
)
async def delete_user_template(
    template_id: int,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> StatusMessageResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        deleted = await delete_template(supabase_client, auth_user.user_id, template_id)

        if not deleted:
            raise _not_found(template_id)

        return StatusMessageResponse(status="DELETED", message="템플릿이 삭제되었습니다.")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete template {template_id}: {e}", exc_info=True)
        raise _server_error("delete_error", "Failed to delete template")


@router.post(
    "/{template_id}/copy",
    response_model=TemplateMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Copy a template",
    description="Creates a copy owned by the caller and counts a use of the original.",
)
async def copy_user_template(
    template_id: int,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    request: Optional[TemplateCopyRequest] = None,
) -> TemplateMutationResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        copied = await copy_template(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            template_id=template_id,
            new_title=request.new_title if request else None,
        )

        if not copied:
            raise _not_found(template_id)

        return TemplateMutationResponse(
            status="COPIED",
            template=_build_template_response(copied),
            message="템플릿이 복사되었습니다."
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to copy template {template_id}: {e}", exc_info=True)
        raise _server_error("create_error", "Failed to copy template")


@router.post(
    "/{template_id}/favorite",
    response_model=StatusMessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Favorite a template",
)
async def favorite_template(
    template_id: int,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> StatusMessageResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        await record_favorite(supabase_client, auth_user.user_id, template_id)
    except Exception as e:
        logger.error(f"Failed to favorite template {template_id}: {e}", exc_info=True)
        raise _server_error("create_error", "Failed to record favorite")

    return StatusMessageResponse(status="FAVORITED", message="즐겨찾기에 추가되었습니다.")


@router.get(
    "/{template_id}/export",
    status_code=status.HTTP_200_OK,
    summary="Export a template",
    description="Downloads the template as a JSON document or a plain-text block.",
    responses={200: {"content": {"application/json": {}, "text/plain": {}}}},
)
async def export_user_template(
    template_id: int,
    format: ExportFormat = Query("json", description="'json' or 'text'"),
) -> Response:
    """Export a template as an attachment."""
    supabase_client = get_public_client()

    try:
        template = await export_template(supabase_client, template_id, format)

        if not template:
            raise _not_found(template_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to export template {template_id}: {e}", exc_info=True)
        raise _server_error("fetch_error", "Failed to export template")

    if format == "text":
        return Response(
            content=format_template_text(template),
            media_type="text/plain; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="template_{template_id}.txt"'},
        )

    return Response(
        content=json.dumps(template, ensure_ascii=False, indent=2, default=str),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="template_{template_id}.json"'},
    )


@router.post(
    "/{template_id}/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Rate a template",
)
async def create_feedback(template_id: int, request: FeedbackCreateRequest) -> FeedbackResponse:
    supabase_client = get_public_client()

    try:
        feedback = await submit_feedback(
            supabase_client=supabase_client,
            template_id=template_id,
            rating=request.rating,
            comment=request.comment,
            accuracy_rating=request.accuracy_rating,
            usefulness_rating=request.usefulness_rating,
            ease_of_use_rating=request.ease_of_use_rating,
            session_uuid=request.session_uuid,
        )
    except Exception as e:
        logger.error(f"Failed to store feedback for template {template_id}: {e}", exc_info=True)
        raise _server_error("create_error", "Failed to store feedback")

    return FeedbackResponse(
        id=int(feedback.get("id", 0)),
        rating=int(feedback.get("rating", request.rating)),
        message="피드백이 등록되었습니다."
    )


@router.get(
    "/{template_id}/stats",
    response_model=TemplateStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Template statistics",
)
async def template_stats(template_id: int) -> TemplateStatsResponse:
    supabase_client = get_public_client()

    try:
        stats = await get_template_stats(supabase_client, template_id)

        if not stats:
            raise _not_found(template_id)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch stats for template {template_id}: {e}", exc_info=True)
        raise _server_error("fetch_error", "Failed to retrieve template statistics")

    counters = stats["template_stats"]
    return TemplateStatsResponse(
        template_stats=TemplateCounters(
            usage_count=int(counters.get("usage_count") or 0),
            view_count=int(counters.get("view_count") or 0),
            created_at=_optional_str(counters.get("created_at")),
            updated_at=_optional_str(counters.get("updated_at")),
        ),
        feedback_stats=FeedbackStats(**stats["feedback_stats"]),
    )

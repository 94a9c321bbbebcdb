"""
Saved prompt API endpoints.

Endpoints:
- GET /prompts - List prompts, newest first
- GET /prompts/{prompt_id} - One prompt
- POST /prompts - Save a prompt (auth)
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from prompt_writer.auth.dependencies import AuthenticatedUser, get_authenticated_user
from prompt_writer.db.client import get_public_client, get_supabase_client
from prompt_writer.schemas.prompts import (
    PromptCreateRequest,
    PromptCreateResponse,
    PromptListResponse,
    PromptResponse,
)
from prompt_writer.services.prompt_service import create_prompt, get_prompt_by_id, list_prompts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/prompts", tags=["prompts"])


def _build_prompt_response(row: Dict[str, Any]) -> PromptResponse:
    """Helper to build PromptResponse from a prompt row."""
    return PromptResponse(
        id=int(row.get("id", 0)),
        title=row.get("title", ""),
        description=row.get("description"),
        prompt=row.get("prompt", ""),
        role=row.get("role"),
        tags=list(row.get("tags") or []),
        created_at=str(row["created_at"]) if row.get("created_at") is not None else None,
        updated_at=str(row["updated_at"]) if row.get("updated_at") is not None else None,
    )


@router.get(
    "",
    response_model=PromptListResponse,
    status_code=status.HTTP_200_OK,
    summary="List prompts",
)
async def get_prompts() -> PromptListResponse:
    supabase_client = get_public_client()

    try:
        prompts = await list_prompts(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch prompts: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve prompts from database"
            }
        )

    responses = [_build_prompt_response(p) for p in prompts]
    return PromptListResponse(prompts=responses, count=len(responses))


@router.get(
    "/{prompt_id}",
    response_model=PromptResponse,
    status_code=status.HTTP_200_OK,
    summary="Get prompt details",
)
async def get_prompt(prompt_id: int) -> PromptResponse:
    supabase_client = get_public_client()

    try:
        prompt = await get_prompt_by_id(supabase_client, prompt_id)

        if not prompt:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={
                    "error": "not_found",
                    "details": f"Prompt {prompt_id} not found"
                }
            )

        return _build_prompt_response(prompt)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch prompt {prompt_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve prompt from database"
            }
        )


@router.post(
    "",
    response_model=PromptCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a prompt",
    description="""
    Save a prompt for the authenticated user.

    Security:
    - Requires valid authentication token
    """
)
async def create_user_prompt(
    request: PromptCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> PromptCreateResponse:
    logger.info(f"Creating prompt for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        created = await create_prompt(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            title=request.title,
            prompt=request.prompt,
            role=request.role,
            description=request.description,
            tags=request.tags,
        )
    except Exception as e:
        logger.error(f"Failed to create prompt: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "create_error",
                "details": "Failed to create prompt"
            }
        )

    return PromptCreateResponse(
        status="CREATED",
        prompt=_build_prompt_response(created),
        message="프롬프트가 저장되었습니다."
    )

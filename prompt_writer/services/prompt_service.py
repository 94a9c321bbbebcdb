"""
Saved prompt service.

Prompts are standalone snippets (title, body, role, free-form tags) kept
separately from versioned templates.
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

logger = logging.getLogger(__name__)


async def list_prompts(supabase_client: Client) -> List[Dict[str, Any]]:
    """All saved prompts, newest first."""
    result = (
        supabase_client.table("prompt")
        .select("*")
        .order("created_at", desc=True)
        .execute()
    )

    prompts = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(prompts)} prompts")

    return prompts


async def get_prompt_by_id(supabase_client: Client, prompt_id: int) -> Optional[Dict[str, Any]]:
    result = supabase_client.table("prompt").select("*").eq("id", prompt_id).execute()

    if not result.data:
        logger.warning(f"Prompt {prompt_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])


async def create_prompt(
    supabase_client: Client,
    user_id: str,
    title: str,
    prompt: str,
    role: str,
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Store a new prompt for the user.

    Raises:
        Exception: If the insert returns no row
    """
    logger.info(f"Creating prompt for user {user_id}: role={role}, tags={len(tags or [])}")

    result = supabase_client.table("prompt").insert({
        "title": title,
        "description": description,
        "prompt": prompt,
        "role": role,
        "tags": list(tags or []),
        "created_by": user_id,
    }).execute()

    if not result.data:
        raise Exception("Failed to create prompt: no data returned")

    return cast(Dict[str, Any], result.data[0])

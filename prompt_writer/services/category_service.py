"""
Template category and tag service.

Categories and tags are shared, public catalog rows:
1. Listing is public (anonymous client)
2. Template creation auto-creates missing categories/tags by exact name
3. Search resolves a human-entered category name with a case-insensitive
   partial match; the first match (lowest id) wins
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

logger = logging.getLogger(__name__)


async def get_active_categories(supabase_client: Client) -> List[Dict[str, Any]]:
    """Active categories ordered by sort_order, then name."""
    result = (
        supabase_client.table("category")
        .select("*")
        .eq("is_active", True)
        .order("sort_order")
        .order("name")
        .execute()
    )

    categories = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(categories)} active categories")

    return categories


async def get_all_tags(supabase_client: Client) -> List[Dict[str, Any]]:
    """All tags ordered by usage_count desc, then name."""
    result = (
        supabase_client.table("tag")
        .select("*")
        .order("usage_count", desc=True)
        .order("name")
        .execute()
    )

    tags = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(tags)} tags")

    return tags


async def resolve_category_id(
    supabase_client: Client,
    category_name: Optional[str],
) -> Optional[int]:
    """
    Resolve a category name typed by a user to a category id.

    Args:
        supabase_client: Supabase client
        category_name: Free text, matched case-insensitively anywhere in the name

    Returns:
        The id of the first matching category, or None when nothing matches
        or no name was given
    """
    if not category_name or not category_name.strip():
        return None

    result = (
        supabase_client.table("category")
        .select("id, name")
        .ilike("name", f"%{category_name.strip()}%")
        .order("id")
        .limit(1)
        .execute()
    )

    if not result.data:
        logger.info(f"No category matches '{category_name}'")
        return None

    category = cast(Dict[str, Any], result.data[0])
    logger.debug(f"Category '{category_name}' resolved to id={category['id']} ({category.get('name')})")

    return int(category["id"])


async def get_or_create_category(supabase_client: Client, name: str) -> int:
    """
    Return the id of the category with this exact name, creating it if needed.

    Raises:
        Exception: If the insert returns no row
    """
    result = (
        supabase_client.table("category")
        .select("id")
        .eq("name", name)
        .execute()
    )

    if result.data:
        return int(cast(Dict[str, Any], result.data[0])["id"])

    logger.info(f"Auto-creating category '{name}'")
    created = (
        supabase_client.table("category")
        .insert({"name": name, "description": f"Auto-created category for {name}"})
        .execute()
    )

    if not created.data:
        raise Exception(f"Failed to create category '{name}'")

    return int(cast(Dict[str, Any], created.data[0])["id"])


async def get_or_create_tag(supabase_client: Client, name: str) -> int:
    """
    Return the id of the tag with this exact name, creating it if needed.

    Raises:
        Exception: If the insert returns no row
    """
    result = (
        supabase_client.table("tag")
        .select("id")
        .eq("name", name)
        .execute()
    )

    if result.data:
        return int(cast(Dict[str, Any], result.data[0])["id"])

    logger.info(f"Auto-creating tag '{name}'")
    created = (
        supabase_client.table("tag")
        .insert({"name": name, "description": f"Auto-created tag for {name}"})
        .execute()
    )

    if not created.data:
        raise Exception(f"Failed to create tag '{name}'")

    return int(cast(Dict[str, Any], created.data[0])["id"])

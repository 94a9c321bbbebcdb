"""
Prompt template service.

CRUD, search and usage bookkeeping for prompt_template rows.

RULES:
1. Only public, active templates are listed, searched or shown anonymously
2. Deletion is soft: is_active=false plus a 'delete' content_version row
3. Every update bumps the minor version ("1.3" -> "1.4") and records a
   content_version row with the old and new data
4. view_count (detail view) and usage_count (copy) are bumped through the
   increment_template_counter RPC so concurrent requests never lose updates
5. Relevance search scores rows in Python with
   prompt_writer.recommendation.scoring; scores are never stored
"""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, cast

from supabase import Client

from prompt_writer.config import settings
from prompt_writer.recommendation import ScoringThresholds, SearchQuery, rank_templates
from prompt_writer.services.category_service import (
    get_or_create_category,
    get_or_create_tag,
    resolve_category_id,
)
from prompt_writer.utils.constants import INITIAL_TEMPLATE_VERSION, USAGE_ACTIONS

logger = logging.getLogger(__name__)

TEMPLATE_SELECT = "*, category(name), prompt_template_tag(tag(name))"
TEMPLATE_SELECT_CATEGORY_INNER = "*, category!inner(name), prompt_template_tag(tag(name))"

EDITABLE_FIELDS = (
    "title",
    "description",
    "template_content",
    "system_role",
    "difficulty_level",
    "example_usage",
)


def _flatten_template(row: Dict[str, Any]) -> Dict[str, Any]:
    """Replace embedded category/tag objects with category_name and tag_names."""
    template = dict(row)
    category = template.pop("category", None) or {}
    links = template.pop("prompt_template_tag", None) or []

    template["category_name"] = category.get("name")
    tag_names = {
        (link.get("tag") or {}).get("name")
        for link in links
    }
    template["tag_names"] = sorted(name for name in tag_names if name)
    return template


def next_version(version: Optional[str]) -> str:
    """
    Bump the minor part of a "major.minor" version string.

    Raises:
        ValueError: If the stored version is not "<int>.<int>"
    """
    parts = (version or INITIAL_TEMPLATE_VERSION).split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Unsupported template version format: {version!r}")
    return f"{parts[0]}.{int(parts[1]) + 1}"


def format_template_text(template: Dict[str, Any]) -> str:
    """Plain-text export layout used by GET /templates/{id}/export?format=text."""
    tags = ", ".join(template.get("tag_names") or []) or "없음"
    return "\n".join([
        f"=== {template.get('title', '')} ===",
        "",
        f"설명: {template.get('description') or ''}",
        f"카테고리: {template.get('category_name') or ''}",
        f"태그: {tags}",
        f"난이도: {template.get('difficulty_level') or ''}",
        "",
        "--- 시스템 역할 ---",
        f"{template.get('system_role') or ''}",
        "",
        "--- 프롬프트 템플릿 ---",
        f"{template.get('template_content') or ''}",
        "",
        "--- 사용 예시 ---",
        f"{template.get('example_usage') or '예시 없음'}",
    ])


def _increment_counter(supabase_client: Client, template_id: int, column: str) -> None:
    supabase_client.rpc(
        "increment_template_counter",
        {"p_template_id": template_id, "p_column": column}
    ).execute()


def _record_usage(
    supabase_client: Client,
    action_type: str,
    template_id: int,
    action_data: Dict[str, Any],
) -> None:
    supabase_client.table("usage_log").insert({
        "action_type": action_type,
        "target_type": "template",
        "target_id": template_id,
        "action_data": json.dumps(action_data, ensure_ascii=False),
    }).execute()


def _record_version(
    supabase_client: Client,
    template_id: int,
    version: str,
    change_type: str,
    old_data: Dict[str, Any],
    new_data: Optional[Dict[str, Any]],
    change_summary: str,
    changed_by: str,
) -> None:
    supabase_client.table("content_version").insert({
        "content_type": "prompt_template",
        "content_id": template_id,
        "version_number": version,
        "change_type": change_type,
        "old_data": json.dumps(old_data, ensure_ascii=False, default=str),
        "new_data": json.dumps(new_data, ensure_ascii=False, default=str) if new_data is not None else None,
        "change_summary": change_summary,
        "changed_by": changed_by,
    }).execute()


async def list_templates(
    supabase_client: Client,
    page: int = 1,
    limit: int = 20,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
    featured_only: bool = False,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Fetch one page of public templates.

    Args:
        supabase_client: Supabase client
        page: 1-based page number
        limit: Page size
        category: Case-insensitive partial match on the category name
        difficulty: Exact difficulty_level
        search: Case-insensitive partial match on title or description
        featured_only: Restrict to is_featured = true

    Returns:
        Tuple of (templates, total_count)
    """
    offset = (page - 1) * limit
    logger.debug(
        f"Listing templates page={page} limit={limit} category={category} "
        f"difficulty={difficulty} featured_only={featured_only}"
    )

    select = TEMPLATE_SELECT_CATEGORY_INNER if category else TEMPLATE_SELECT
    query = (
        supabase_client.table("prompt_template")
        .select(select, count=cast(Any, "exact"))
        .eq("is_public", True)
        .eq("is_active", True)
    )

    if category:
        query = query.ilike("category.name", f"%{category}%")
    if difficulty:
        query = query.eq("difficulty_level", difficulty)
    if search:
        query = query.or_(ilike_or_filter(("title", "description"), search))
    if featured_only:
        query = query.eq("is_featured", True)

    result = (
        query.order("is_featured", desc=True)
        .order("usage_count", desc=True)
        .order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )

    templates = [_flatten_template(row) for row in cast(List[Dict[str, Any]], result.data or [])]
    total = getattr(result, "count", None) or 0

    logger.info(f"Found {len(templates)} templates (total={total})")

    return templates, int(total)


def ilike_or_filter(columns: Tuple[str, ...], term: str) -> str:
    """
    Build a PostgREST or= filter matching term in any of columns.

    The pattern is double-quoted with backslash and quote escaped so commas
    and parentheses in term stay part of the value.
    """
    escaped = term.replace("\\", "\\\\").replace('"', '\\"')
    return ",".join(f'{column}.ilike."%{escaped}%"' for column in columns)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


async def get_template_by_id(
    supabase_client: Client,
    template_id: int,
    public_only: bool = True,
    count_view: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Fetch one template with category_name and tag_names.

    Args:
        supabase_client: Supabase client
        template_id: Template id
        public_only: Only return rows with is_public = true
        count_view: Bump view_count after a successful read

    Returns:
        Template dict, or None if not found
    """
    logger.debug(f"Fetching template {template_id} (public_only={public_only})")

    query = supabase_client.table("prompt_template").select(TEMPLATE_SELECT).eq("id", template_id)
    if public_only:
        query = query.eq("is_public", True)

    result = query.execute()

    if not result.data:
        logger.warning(f"Template {template_id} not found")
        return None

    template = _flatten_template(cast(Dict[str, Any], result.data[0]))

    if count_view:
        _increment_counter(supabase_client, template_id, "view_count")

    return template


async def create_template(
    supabase_client: Client,
    user_id: str,
    title: str,
    template_content: str,
    description: Optional[str] = None,
    system_role: Optional[str] = None,
    category_name: Optional[str] = None,
    tags: Optional[List[str]] = None,
    difficulty_level: str = "medium",
    example_usage: str = "",
    is_public: bool = True,
) -> Dict[str, Any]:
    """
    Create a template, auto-creating its category and tags by name.

    If linking tags fails, the template row is deleted before re-raising.

    Returns:
        The created template dict

    Raises:
        Exception: If the insert returns no row
    """
    logger.info(
        f"Creating template for user {user_id}: category={category_name}, "
        f"tags={len(tags) if tags else 0}"
    )

    category_id = await get_or_create_category(supabase_client, category_name) if category_name else None

    template_data = {
        "title": title,
        "description": description,
        "template_content": template_content,
        "system_role": system_role,
        "category_id": category_id,
        "difficulty_level": difficulty_level,
        "example_usage": example_usage,
        "is_public": is_public,
        "created_by": user_id,
        "version": INITIAL_TEMPLATE_VERSION,
    }

    result = supabase_client.table("prompt_template").insert(template_data).execute()

    if not result.data:
        raise Exception("Failed to create template: no data returned")

    created: Dict[str, Any] = cast(Dict[str, Any], result.data[0])
    template_id = created["id"]

    tag_names = list(dict.fromkeys(t.strip() for t in (tags or []) if t and t.strip()))
    if tag_names:
        try:
            tag_ids = [await get_or_create_tag(supabase_client, name) for name in tag_names]
            supabase_client.table("prompt_template_tag").insert(
                [{"template_id": template_id, "tag_id": tag_id} for tag_id in tag_ids]
            ).execute()
        except Exception:
            logger.error(f"Failed to link tags, rolling back template {template_id}")
            supabase_client.table("prompt_template").delete().eq("id", template_id).execute()
            raise

    created["category_name"] = category_name
    created["tag_names"] = sorted(tag_names)
    logger.info(f"Template {template_id} created with {len(tag_names)} tags")

    return created


async def update_template(
    supabase_client: Client,
    user_id: str,
    template_id: int,
    updates: Dict[str, Any],
    version_notes: str = "",
) -> Optional[Dict[str, Any]]:
    """
    Update editable fields and bump the version.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID (recorded as changed_by)
        template_id: Template id
        updates: Subset of EDITABLE_FIELDS
        version_notes: Change summary stored with the content_version row

    Returns:
        The updated template dict, or None if not found

    Raises:
        ValueError: If no editable field is given or the stored version is malformed
    """
    changes = {k: v for k, v in updates.items() if k in EDITABLE_FIELDS}
    if not changes:
        raise ValueError("No editable fields provided")

    logger.info(f"Updating template {template_id} for user {user_id}: {sorted(changes)}")

    old_result = supabase_client.table("prompt_template").select("*").eq("id", template_id).execute()
    if not old_result.data:
        logger.warning(f"Template {template_id} not found for update")
        return None

    old_data = cast(Dict[str, Any], old_result.data[0])
    new_version = next_version(old_data.get("version"))

    result = (
        supabase_client.table("prompt_template")
        .update({
            **changes,
            "version": new_version,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })
        .eq("id", template_id)
        .execute()
    )

    if not result.data:
        logger.warning(f"Template {template_id} disappeared during update")
        return None

    updated = cast(Dict[str, Any], result.data[0])

    _record_version(
        supabase_client,
        template_id=template_id,
        version=new_version,
        change_type="update",
        old_data=old_data,
        new_data=updated,
        change_summary=version_notes or "템플릿 업데이트",
        changed_by=user_id,
    )

    logger.info(f"Template {template_id} updated to version {new_version}")

    return updated


async def delete_template(
    supabase_client: Client,
    user_id: str,
    template_id: int,
) -> bool:
    """
    Soft-delete a template.

    Returns:
        True if the template existed, False otherwise
    """
    logger.info(f"Soft-deleting template {template_id} for user {user_id}")

    result = (
        supabase_client.table("prompt_template")
        .update({
            "is_active": False,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })
        .eq("id", template_id)
        .execute()
    )

    if not result.data:
        logger.warning(f"Template {template_id} not found for delete")
        return False

    deleted = cast(Dict[str, Any], result.data[0])
    _record_version(
        supabase_client,
        template_id=template_id,
        version=str(deleted.get("version") or INITIAL_TEMPLATE_VERSION),
        change_type="delete",
        old_data=deleted,
        new_data=None,
        change_summary="템플릿 삭제",
        changed_by=user_id,
    )

    return True


async def copy_template(
    supabase_client: Client,
    user_id: str,
    template_id: int,
    new_title: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Copy a template into a new row owned by the user.

    The original's usage_count is incremented.

    Returns:
        The new template dict, or None if the original was not found
    """
    original_result = supabase_client.table("prompt_template").select("*").eq("id", template_id).execute()
    if not original_result.data:
        logger.warning(f"Template {template_id} not found for copy")
        return None

    original = cast(Dict[str, Any], original_result.data[0])

    copy_data = {
        "title": new_title or f"{original.get('title')} (복사본)",
        "description": original.get("description"),
        "template_content": original.get("template_content"),
        "system_role": original.get("system_role"),
        "category_id": original.get("category_id"),
        "difficulty_level": original.get("difficulty_level"),
        "estimated_tokens": original.get("estimated_tokens"),
        "created_by": user_id,
        "version": INITIAL_TEMPLATE_VERSION,
    }

    result = supabase_client.table("prompt_template").insert(copy_data).execute()
    if not result.data:
        raise Exception("Failed to copy template: no data returned")

    _increment_counter(supabase_client, template_id, "usage_count")

    copied = cast(Dict[str, Any], result.data[0])
    logger.info(f"Template {template_id} copied to {copied.get('id')} by user {user_id}")

    return copied


async def record_favorite(
    supabase_client: Client,
    user_id: str,
    template_id: int,
) -> None:
    """Log a favorite action for the template."""
    logger.info(f"User {user_id} favorited template {template_id}")
    _record_usage(
        supabase_client,
        USAGE_ACTIONS["FAVORITE"],
        template_id,
        {"user_id": user_id, "action": "add_favorite"},
    )


async def export_template(
    supabase_client: Client,
    template_id: int,
    export_format: str = "json",
) -> Optional[Dict[str, Any]]:
    """
    Load a template for export and log the export.

    Returns:
        Template dict (any visibility), or None if not found
    """
    template = await get_template_by_id(supabase_client, template_id, public_only=False)
    if template is None:
        return None

    _record_usage(supabase_client, USAGE_ACTIONS["EXPORT"], template_id, {"format": export_format})
    logger.info(f"Template {template_id} exported as {export_format}")

    return template


async def _resolve_session_id(supabase_client: Client, session_uuid: Optional[str]) -> Optional[int]:
    if not session_uuid:
        return None

    result = (
        supabase_client.table("user_session")
        .select("id")
        .eq("session_uuid", session_uuid)
        .execute()
    )

    if not result.data:
        return None
    return int(cast(Dict[str, Any], result.data[0])["id"])


async def submit_feedback(
    supabase_client: Client,
    template_id: int,
    rating: int,
    comment: Optional[str] = None,
    accuracy_rating: Optional[int] = None,
    usefulness_rating: Optional[int] = None,
    ease_of_use_rating: Optional[int] = None,
    session_uuid: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Store a feedback row for a template.

    Unknown session UUIDs are stored with a NULL session_id.

    Raises:
        Exception: If the insert returns no row
    """
    session_id = await _resolve_session_id(supabase_client, session_uuid)

    result = supabase_client.table("user_feedback").insert({
        "session_id": session_id,
        "feedback_type": "template",
        "target_id": template_id,
        "rating": rating,
        "comment": comment,
        "accuracy_rating": accuracy_rating,
        "usefulness_rating": usefulness_rating,
        "ease_of_use_rating": ease_of_use_rating,
    }).execute()

    if not result.data:
        raise Exception("Failed to store feedback: no data returned")

    logger.info(f"Feedback stored for template {template_id} (rating={rating})")

    return cast(Dict[str, Any], result.data[0])


def _average(rows: List[Dict[str, Any]], column: str) -> Optional[float]:
    values = [float(row[column]) for row in rows if row.get(column) is not None]
    if not values:
        return None
    return round(sum(values) / len(values), 2)


async def get_template_stats(
    supabase_client: Client,
    template_id: int,
) -> Optional[Dict[str, Any]]:
    """
    Usage counters and feedback averages for a template.

    Returns:
        {"template_stats": {...}, "feedback_stats": {...}}, or None if not found
    """
    template_result = (
        supabase_client.table("prompt_template")
        .select("usage_count, view_count, created_at, updated_at")
        .eq("id", template_id)
        .execute()
    )

    if not template_result.data:
        logger.warning(f"Template {template_id} not found for stats")
        return None

    feedback_result = (
        supabase_client.table("user_feedback")
        .select("rating, accuracy_rating, usefulness_rating, ease_of_use_rating")
        .eq("target_id", template_id)
        .eq("feedback_type", "template")
        .execute()
    )
    feedback = cast(List[Dict[str, Any]], feedback_result.data or [])

    return {
        "template_stats": cast(Dict[str, Any], template_result.data[0]),
        "feedback_stats": {
            "total_feedback": len(feedback),
            "avg_rating": _average(feedback, "rating"),
            "avg_accuracy": _average(feedback, "accuracy_rating"),
            "avg_usefulness": _average(feedback, "usefulness_rating"),
            "avg_ease_of_use": _average(feedback, "ease_of_use_rating"),
        },
    }


def scoring_thresholds() -> ScoringThresholds:
    return ScoringThresholds(
        popular=settings.TEMPLATE_POPULAR_THRESHOLD,
        trending=settings.TEMPLATE_TRENDING_THRESHOLD,
    )


async def recommend_templates(
    supabase_client: Client,
    keywords: Optional[str] = None,
    category: Optional[str] = None,
    purpose: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Relevance search over public, active templates.

    Args:
        supabase_client: Supabase client
        keywords: Free-text keyword (title/description substring)
        category: Human-entered category name, resolved by partial match
        purpose: Echoed in logs only
        limit: Maximum results (defaults to settings.TEMPLATE_RECOMMEND_LIMIT)

    Returns:
        Templates with relevance_score > 0, best first
    """
    logger.info(f"Template search: category={category}, purpose={purpose}, has_keywords={bool(keywords)}")

    category_id = await resolve_category_id(supabase_client, category)

    result = (
        supabase_client.table("prompt_template")
        .select(TEMPLATE_SELECT)
        .eq("is_public", True)
        .eq("is_active", True)
        .execute()
    )
    templates = [_flatten_template(row) for row in cast(List[Dict[str, Any]], result.data or [])]

    ranked = rank_templates(
        templates,
        SearchQuery(category_id=category_id, keyword=keywords),
        thresholds=scoring_thresholds(),
        limit=limit if limit is not None else settings.TEMPLATE_RECOMMEND_LIMIT,
    )

    logger.info(f"Template search returned {len(ranked)} of {len(templates)} candidates")

    return ranked

"""
AI model catalog service.

Read-only access to ai_model rows joined with their ai_provider. The
recommendation rules reference models by model_key; this module resolves
keys to rows against the live catalog.

Ordering rules:
- Recommendation and catalog lists: premium, standard, everything else;
  then performance_score descending
- Fallback candidates: storage order (ordering is applied by
  recommendation.fallback.select_fallback)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, cast

from supabase import Client

from prompt_writer.recommendation.fallback import FALLBACK_TIERS
from prompt_writer.utils.constants import DEFAULT_TIER_RANK, PRICING_TIER_RANK

logger = logging.getLogger(__name__)

MODEL_SELECT = "*, ai_provider(name, company, website_url, api_base_url)"


def _flatten_provider(row: Dict[str, Any]) -> Dict[str, Any]:
    """Move the embedded ai_provider object into provider_* columns."""
    model = dict(row)
    provider = model.pop("ai_provider", None) or {}
    model["provider_name"] = provider.get("name")
    model["provider_company"] = provider.get("company")
    model["provider_website"] = provider.get("website_url")
    model["provider_api_base"] = provider.get("api_base_url")
    return model


def tier_rank(pricing_tier: Optional[str]) -> int:
    return PRICING_TIER_RANK.get(pricing_tier or "", DEFAULT_TIER_RANK)


def order_by_tier_and_performance(models: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort by tier (premium first), performance_score desc, then name."""
    return sorted(
        models,
        key=lambda m: (
            tier_rank(m.get("pricing_tier")),
            -float(m.get("performance_score") or 0),
            str(m.get("name") or ""),
        ),
    )


async def get_models_by_keys(
    supabase_client: Client,
    model_keys: Sequence[str],
    active_only: bool = True,
) -> List[Dict[str, Any]]:
    """
    Resolve model keys against the catalog.

    Args:
        supabase_client: Supabase client (public or authenticated)
        model_keys: ai_model.model_key values from a classification rule
        active_only: Skip models with is_active = false

    Returns:
        Matching rows with provider fields, ordered by tier and performance.
        Keys missing from the catalog are logged and skipped.
    """
    if not model_keys:
        return []

    logger.debug(f"Resolving model keys {list(model_keys)} (active_only={active_only})")

    query = supabase_client.table("ai_model").select(MODEL_SELECT).in_("model_key", list(model_keys))
    if active_only:
        query = query.eq("is_active", True)

    result = query.execute()
    rows = cast(List[Dict[str, Any]], result.data or [])
    models = [_flatten_provider(row) for row in rows]

    found = {m.get("model_key") for m in models}
    missing = [key for key in model_keys if key not in found]
    if missing:
        logger.warning(f"Model keys not found in active catalog: {missing}")

    return order_by_tier_and_performance(models)


async def get_all_models(supabase_client: Client) -> List[Dict[str, Any]]:
    """Fetch every active model, ordered by tier, performance desc, name."""
    logger.debug("Fetching full AI model catalog")

    result = (
        supabase_client.table("ai_model")
        .select(MODEL_SELECT)
        .eq("is_active", True)
        .execute()
    )

    models = [_flatten_provider(row) for row in cast(List[Dict[str, Any]], result.data or [])]
    logger.info(f"Fetched {len(models)} active AI models")

    return order_by_tier_and_performance(models)


async def get_model_by_id(supabase_client: Client, model_id: int) -> Optional[Dict[str, Any]]:
    """
    Fetch one active model by id.

    Returns:
        Model row with provider fields, or None if missing or inactive
    """
    logger.debug(f"Fetching AI model {model_id}")

    result = (
        supabase_client.table("ai_model")
        .select(MODEL_SELECT)
        .eq("id", model_id)
        .eq("is_active", True)
        .execute()
    )

    if not result.data:
        logger.warning(f"AI model {model_id} not found or inactive")
        return None

    return _flatten_provider(cast(Dict[str, Any], result.data[0]))


async def get_fallback_candidates(supabase_client: Client) -> List[Dict[str, Any]]:
    """Active standard/premium models in storage (id) order."""
    result = (
        supabase_client.table("ai_model")
        .select(MODEL_SELECT)
        .in_("pricing_tier", sorted(FALLBACK_TIERS))
        .eq("is_active", True)
        .order("id")
        .execute()
    )

    return [_flatten_provider(row) for row in cast(List[Dict[str, Any]], result.data or [])]

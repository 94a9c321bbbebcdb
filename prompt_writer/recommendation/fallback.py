"""
Fallback selector for AI model recommendations.

Used when the answer classifier finds no rule. Picks up to three active
standard/premium models, GPT-4 family first, then Claude, then the rest in
storage order.
"""

from typing import Any, Dict, Iterable, List

from prompt_writer.recommendation.types import PricingTier

FALLBACK_TIERS = frozenset({PricingTier.STANDARD.value, PricingTier.PREMIUM.value})


def _name_rank(name: str) -> int:
    if "GPT-4" in name:
        return 1
    if "Claude" in name:
        return 2
    return 3


def is_fallback_eligible(model: Dict[str, Any]) -> bool:
    """Active and priced standard or premium."""
    return bool(model.get("is_active")) and model.get("pricing_tier") in FALLBACK_TIERS


def select_fallback(models: Iterable[Dict[str, Any]], limit: int = 3) -> List[Dict[str, Any]]:
    """
    Choose the default recommendation list.

    Args:
        models: Catalog rows in storage order
        limit: Maximum number of rows to return

    Returns:
        At most `limit` eligible rows. sorted() is stable, so models with the
        same name rank keep their storage order.
    """
    eligible = [model for model in models if is_fallback_eligible(model)]
    ranked = sorted(eligible, key=lambda model: _name_rank(str(model.get("name") or "")))
    return ranked[:max(limit, 0)]

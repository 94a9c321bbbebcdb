"""
Relevance scoring for prompt template search.

A template's score is the sum of four independent predicates:

    category match (query category set and equal)          3
    keyword in title or description (case-insensitive)     2
    popularity: usage_count > popular                      2
                trending < usage_count <= popular          1
    is_featured                                            1

With the default thresholds (50 / 10) the range is 0-8. Scores are computed
per request and never stored.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from prompt_writer.recommendation.types import ScoringThresholds, SearchQuery

CATEGORY_MATCH_POINTS = 3
KEYWORD_MATCH_POINTS = 2
POPULAR_POINTS = 2
TRENDING_POINTS = 1
FEATURED_POINTS = 1

DEFAULT_THRESHOLDS = ScoringThresholds()


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.casefold() in str(haystack).casefold()


def popularity_points(usage_count: int, thresholds: ScoringThresholds = DEFAULT_THRESHOLDS) -> int:
    if thresholds.popular is not None and usage_count > thresholds.popular:
        return POPULAR_POINTS
    if usage_count > thresholds.trending:
        return TRENDING_POINTS
    return 0


def compute_relevance_score(
    template: Dict[str, Any],
    query: SearchQuery,
    thresholds: ScoringThresholds = DEFAULT_THRESHOLDS,
) -> int:
    """
    Score one template row against a search query.

    Args:
        template: Row with category_id, title, description, usage_count, is_featured
        query: Resolved category id and free-text keyword
        thresholds: Popularity thresholds

    Returns:
        Integer score (0 means "not relevant")
    """
    score = 0

    if query.category_id is not None and template.get("category_id") == query.category_id:
        score += CATEGORY_MATCH_POINTS

    keyword = (query.keyword or "").strip()
    if keyword and (
        _contains(template.get("title"), keyword)
        or _contains(template.get("description"), keyword)
    ):
        score += KEYWORD_MATCH_POINTS

    score += popularity_points(int(template.get("usage_count") or 0), thresholds)

    if template.get("is_featured") is True:
        score += FEATURED_POINTS

    return score


def _created_at_key(value: Any) -> float:
    """Sortable timestamp; unparsable or missing values sort last."""
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
        except ValueError:
            return float("-inf")
    return float("-inf")


def rank_templates(
    templates: Iterable[Dict[str, Any]],
    query: SearchQuery,
    thresholds: ScoringThresholds = DEFAULT_THRESHOLDS,
    limit: Optional[int] = 10,
) -> List[Dict[str, Any]]:
    """
    Score, filter and order templates for the search endpoint.

    Rows with score 0 are dropped. Remaining rows get a relevance_score key
    (on a copy) and are ordered by score desc, usage_count desc,
    created_at desc.
    """
    scored: List[Dict[str, Any]] = []
    for template in templates:
        score = compute_relevance_score(template, query, thresholds)
        if score > 0:
            scored.append({**template, "relevance_score": score})

    scored.sort(
        key=lambda row: (
            row["relevance_score"],
            int(row.get("usage_count") or 0),
            _created_at_key(row.get("created_at")),
        ),
        reverse=True,
    )

    if limit is not None:
        return scored[:limit]
    return scored

"""
Recommendation Engine - Rule-Based Matching

Pure decision logic with no database access:

- rules: answer classifier (purpose/complexity/priority -> label, confidence, model keys)
- fallback: default model list when no rule matches
- scoring: template relevance score for the search endpoint
- questions: the fixed three-step wizard

The service layer that fetches catalog rows and applies this logic is in:
- prompt_writer/services/recommendation_service.py
- prompt_writer/services/template_service.py
"""

from prompt_writer.recommendation.fallback import select_fallback
from prompt_writer.recommendation.questions import QUESTIONS, TOTAL_STEPS, get_question
from prompt_writer.recommendation.rules import RULES, classify, is_recognized_purpose
from prompt_writer.recommendation.scoring import compute_relevance_score, rank_templates
from prompt_writer.recommendation.types import (
    AnswerVector,
    ClassificationRule,
    Complexity,
    MatchResult,
    PricingTier,
    Priority,
    Purpose,
    ScoringThresholds,
    SearchQuery,
)

__all__ = [
    # Classifier
    "classify",
    "is_recognized_purpose",
    "RULES",
    # Fallback
    "select_fallback",
    # Scoring
    "compute_relevance_score",
    "rank_templates",
    # Wizard
    "get_question",
    "QUESTIONS",
    "TOTAL_STEPS",
    # Types
    "AnswerVector",
    "ClassificationRule",
    "MatchResult",
    "Purpose",
    "Complexity",
    "Priority",
    "PricingTier",
    "ScoringThresholds",
    "SearchQuery",
]

"""
Answer classifier for AI model recommendations.

Maps the three wizard answers (purpose, complexity, priority) to a category
label, a confidence percentage and an ordered list of ai_model.model_key
values. The rule table is plain data; the first matching rule wins.

Unknown or missing purposes produce no match. Callers then fall back to
recommendation.fallback.select_fallback.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from prompt_writer.recommendation.types import (
    AnswerVector,
    ClassificationRule,
    Complexity,
    MatchResult,
    Priority,
    Purpose,
)
from prompt_writer.utils.constants import MODEL_KEYS


def _complex_or_performance(complexity: Optional[str], priority: Optional[str]) -> bool:
    return complexity == Complexity.COMPLEX.value or priority == Priority.PERFORMANCE.value


def _complex(complexity: Optional[str], priority: Optional[str]) -> bool:
    return complexity == Complexity.COMPLEX.value


def _cost(complexity: Optional[str], priority: Optional[str]) -> bool:
    return priority == Priority.COST.value


GPT_4 = MODEL_KEYS["GPT_4"]
GPT_35 = MODEL_KEYS["GPT_35_TURBO"]
CLAUDE_3 = MODEL_KEYS["CLAUDE_3"]
GEMINI_PRO = MODEL_KEYS["GEMINI_PRO"]
DALL_E_3 = MODEL_KEYS["DALL_E_3"]
MIDJOURNEY = MODEL_KEYS["MIDJOURNEY"]
STABLE_DIFFUSION = MODEL_KEYS["STABLE_DIFFUSION"]


# Order matters within a purpose: conditional rule first, catch-all second.
RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        purpose=Purpose.WRITING,
        condition=_complex_or_performance,
        category_label="고급 텍스트 생성",
        confidence=90,
        model_keys=(GPT_4, CLAUDE_3),
        description="complex writing or performance first",
    ),
    ClassificationRule(
        purpose=Purpose.WRITING,
        category_label="일반 텍스트 생성",
        confidence=85,
        model_keys=(GPT_35,),
    ),
    ClassificationRule(
        purpose=Purpose.CODING,
        condition=_complex_or_performance,
        category_label="고급 코딩 지원",
        confidence=95,
        model_keys=(GPT_4, GEMINI_PRO),
        description="complex coding or performance first",
    ),
    ClassificationRule(
        purpose=Purpose.CODING,
        category_label="일반 코딩 지원",
        confidence=80,
        model_keys=(GPT_35, GPT_4),
    ),
    ClassificationRule(
        purpose=Purpose.ANALYSIS,
        condition=_complex,
        category_label="고급 데이터 분석",
        confidence=90,
        model_keys=(GPT_4, CLAUDE_3, GEMINI_PRO),
        description="complex analysis",
    ),
    ClassificationRule(
        purpose=Purpose.ANALYSIS,
        category_label="기본 데이터 분석",
        confidence=75,
        model_keys=(GPT_35, GEMINI_PRO),
    ),
    ClassificationRule(
        purpose=Purpose.TRANSLATION,
        category_label="번역",
        confidence=85,
        model_keys=(GPT_4, CLAUDE_3, GEMINI_PRO),
    ),
    ClassificationRule(
        purpose=Purpose.VISUAL,
        condition=_cost,
        category_label="경제적 이미지 생성",
        confidence=90,
        model_keys=(STABLE_DIFFUSION,),
        description="image generation on a budget",
    ),
    ClassificationRule(
        purpose=Purpose.VISUAL,
        category_label="고품질 이미지 생성",
        confidence=95,
        model_keys=(DALL_E_3, MIDJOURNEY),
    ),
    ClassificationRule(
        purpose=Purpose.GENERAL,
        condition=_cost,
        category_label="경제적 범용 AI",
        confidence=75,
        model_keys=(GPT_35,),
        description="general use on a budget",
    ),
    ClassificationRule(
        purpose=Purpose.GENERAL,
        category_label="고성능 범용 AI",
        confidence=85,
        model_keys=(GPT_4, CLAUDE_3),
    ),
)


def _index_rules(rules: Sequence[ClassificationRule]) -> Dict[Purpose, List[ClassificationRule]]:
    indexed: Dict[Purpose, List[ClassificationRule]] = {purpose: [] for purpose in Purpose}
    for rule in rules:
        indexed[rule.purpose].append(rule)
    return indexed


_RULES_BY_PURPOSE = _index_rules(RULES)


def is_recognized_purpose(value: Optional[str]) -> bool:
    """True when value is one of the six known purposes."""
    return AnswerVector(purpose=value).parsed_purpose() is not None


def classify(
    keywords: Optional[Sequence[Optional[str]]],
    rules: Optional[Sequence[ClassificationRule]] = None,
) -> Optional[MatchResult]:
    """
    Classify wizard answers into a recommendation.

    Args:
        keywords: [purpose, complexity, priority]; shorter lists are padded
                  with None, extra entries ignored
        rules: Optional replacement rule table (defaults to RULES)

    Returns:
        MatchResult for the first satisfied rule, or None when the purpose is
        absent, empty or unrecognized.

    Examples:
        >>> classify(["coding", "complex", "performance"]).confidence
        95
        >>> classify(["gardening", "simple", "cost"]) is None
        True
    """
    answers = AnswerVector.from_keywords(keywords)
    purpose = answers.parsed_purpose()
    if purpose is None:
        return None

    candidates = _RULES_BY_PURPOSE[purpose] if rules is None else [
        rule for rule in rules if rule.purpose is purpose
    ]

    for rule in candidates:
        if rule.matches(answers):
            return MatchResult(
                category_label=rule.category_label,
                confidence=rule.confidence,
                model_keys=rule.model_keys,
            )

    return None

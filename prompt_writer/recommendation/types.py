"""
Recommendation Engine Type Definitions

Value types shared by the answer classifier, the fallback selector and the
template relevance scorer. Everything here is immutable and free of I/O.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple


class Purpose(str, Enum):
    """First answer: what the user wants the AI for."""
    WRITING = "writing"
    CODING = "coding"
    ANALYSIS = "analysis"
    TRANSLATION = "translation"
    VISUAL = "visual"
    GENERAL = "general"


class Complexity(str, Enum):
    """Second answer: how demanding the task is."""
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class Priority(str, Enum):
    """Third answer: cost versus performance trade-off."""
    COST = "cost"
    PERFORMANCE = "performance"
    BALANCED = "balanced"


class PricingTier(str, Enum):
    """Pricing tier of a catalogued AI model."""
    FREE = "free"
    STANDARD = "standard"
    PREMIUM = "premium"


@dataclass(frozen=True)
class AnswerVector:
    """
    Positional answers to the three recommendation questions.

    Slots are kept as the raw strings the client sent. Values outside the
    known enums are allowed; they simply do not match any rule.
    """
    purpose: Optional[str] = None
    complexity: Optional[str] = None
    priority: Optional[str] = None

    @classmethod
    def from_keywords(cls, keywords: Optional[Sequence[Optional[str]]]) -> "AnswerVector":
        """Build from the [purpose, complexity, priority] list sent by clients."""
        slots = list(keywords or [])[:3]
        slots += [None] * (3 - len(slots))
        return cls(purpose=slots[0], complexity=slots[1], priority=slots[2])

    def parsed_purpose(self) -> Optional[Purpose]:
        """Return the Purpose enum member, or None when the value is not recognized."""
        if not self.purpose:
            return None
        try:
            return Purpose(self.purpose)
        except ValueError:
            return None


# Predicate over (complexity, priority) raw answer strings
RuleCondition = Callable[[Optional[str], Optional[str]], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """
    One row of the decision table.

    condition=None means the rule applies to every answer with this purpose.
    model_keys are stable ai_model.model_key values in authored priority order.
    """
    purpose: Purpose
    category_label: str
    confidence: int
    model_keys: Tuple[str, ...]
    condition: Optional[RuleCondition] = None
    description: str = ""

    def matches(self, answers: AnswerVector) -> bool:
        if answers.parsed_purpose() is not self.purpose:
            return False
        if self.condition is None:
            return True
        return self.condition(answers.complexity, answers.priority)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of classification: label, confidence (0-100) and model keys."""
    category_label: str
    confidence: int
    model_keys: Tuple[str, ...]


@dataclass(frozen=True)
class ScoringThresholds:
    """
    Popularity thresholds for template relevance scoring.

    usage_count > popular               -> 2 points
    trending < usage_count <= popular   -> 1 point
    popular=None selects the single-cutoff variant (usage_count > trending -> 1).
    """
    popular: Optional[int] = 50
    trending: int = 10


@dataclass(frozen=True)
class SearchQuery:
    """Context for template relevance scoring."""
    category_id: Optional[int] = None
    keyword: Optional[str] = None

"""
Pydantic schemas for the AI model recommendation wizard.

The wizard asks three questions (purpose, complexity, priority) and posts the
answers back as an ordered keyword list. Matching is rule-based; see
prompt_writer/recommendation/rules.py.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from prompt_writer.schemas.ai_models import AIModelResponse

# ============================================================================
# REQUEST MODELS
# ============================================================================

class ModelRecommendationRequest(BaseModel):
    """
    Wizard answers for POST /recommend/ai-models.

    keywords[0] is the purpose, keywords[1] the complexity and keywords[2]
    the priority. Missing or null slots are treated as unanswered, and a
    null list means no answers at all.
    """
    keywords: Optional[List[Optional[str]]] = Field(
        default=None,
        max_length=3,
        description="Answers in order: purpose, complexity, priority",
        examples=[["coding", "complex", "performance"], ["visual", "simple", "cost"]]
    )
    requirements: Optional[str] = Field(
        None,
        max_length=2000,
        description="Free-text requirements (recorded in logs, not used for matching)"
    )


class QuestionRequest(BaseModel):
    """Request body for POST /recommend/questions."""
    step: int = Field(1, description="Wizard step (1-3)", examples=[1, 2, 3])
    initial_input: Optional[str] = Field(
        None,
        max_length=2000,
        description="What the user typed before starting the wizard"
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ModelRecommendationResponse(BaseModel):
    """
    Response for POST /recommend/ai-models.

    is_fallback is true when no rule matched and the generic default list
    (confidence 60, label '범용 추천') was returned.
    """
    recommendations: List[AIModelResponse] = Field(..., description="Recommended models, best first")
    match_reason: str = Field(..., description="Matched category label", examples=["고급 코딩 지원"])
    confidence: int = Field(..., ge=0, le=100, description="Rule confidence (0-100)")
    matched_keywords: List[str] = Field(default_factory=list, description="Answers used for matching")
    is_fallback: bool = Field(False, description="True when the fallback list was returned")
    message: str = Field(..., description="Human-readable summary")


class QuestionOption(BaseModel):
    value: str = Field(..., description="Answer value posted back in keywords")
    label: str = Field(..., description="Display label")


class Question(BaseModel):
    step: int = Field(..., description="Wizard step (1-3)")
    question: str = Field(..., description="Question text")
    options: List[QuestionOption] = Field(..., description="Available answers")


class QuestionResponse(BaseModel):
    """Response for POST /recommend/questions."""
    current_question: Question = Field(..., description="Question for the requested step")
    total_steps: int = Field(..., description="Number of wizard steps")
    progress: float = Field(..., ge=0, le=100, description="Completion percentage for this step")


class ServiceInfoResponse(BaseModel):
    """Response for GET /recommend."""
    message: str = Field(..., description="Service banner")
    version: str = Field(..., description="API version")
    endpoints: List[str] = Field(..., description="Available recommendation endpoints")

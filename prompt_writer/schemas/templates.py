"""
Pydantic models for prompt template endpoints.

Templates are versioned ("major.minor"), soft-deleted, and linked to one
category and any number of tags. Categories and tags are referenced by name
in requests and auto-created when missing.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

# Literal type for difficulty_level
DifficultyLevel = Literal["easy", "medium", "hard"]

# Literal type for the export format query parameter
ExportFormat = Literal["json", "text"]


# ============================================================================
# REQUEST MODELS
# ============================================================================

class TemplateCreateRequest(BaseModel):
    """
    Request model for POST /templates.

    category_name and tags are matched by exact name; missing ones are created.
    """
    title: str = Field(..., min_length=1, max_length=255, description="Template title")
    description: Optional[str] = Field(None, max_length=2000, description="Short description")
    template_content: str = Field(..., min_length=1, description="Prompt template body")
    system_role: Optional[str] = Field(None, description="System role text sent with the template")
    category_name: Optional[str] = Field(None, max_length=100, description="Category name", examples=["코딩"])
    tags: List[str] = Field(default_factory=list, description="Tag names", examples=[["리뷰", "파이썬"]])
    difficulty_level: DifficultyLevel = Field("medium", description="'easy', 'medium' or 'hard'")
    example_usage: str = Field("", description="Example of the template in use")
    is_public: bool = Field(True, description="Visible in public listings and search")


class TemplateUpdateRequest(BaseModel):
    """
    Request model for PUT /templates/{template_id}.

    Only provided fields are changed. The version is bumped on every update.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    template_content: Optional[str] = Field(None, min_length=1)
    system_role: Optional[str] = None
    difficulty_level: Optional[DifficultyLevel] = None
    example_usage: Optional[str] = None
    version_notes: str = Field("", max_length=500, description="Change summary stored with the version row")

    @model_validator(mode="after")
    def check_has_changes(self) -> "TemplateUpdateRequest":
        """At least one editable field must be provided."""
        editable = self.model_dump(exclude={"version_notes"}, exclude_none=True)
        if not editable:
            raise ValueError("At least one field must be provided for update")
        return self


class TemplateCopyRequest(BaseModel):
    new_title: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Title for the copy (defaults to '<title> (복사본)')"
    )


class TemplateSearchRequest(BaseModel):
    """Request model for POST /templates/recommend."""
    keywords: Optional[str] = Field(
        None,
        max_length=200,
        description="Keyword matched against title and description",
        examples=["코드 리뷰"]
    )
    purpose: Optional[str] = Field(None, max_length=100, description="Wizard purpose (informational)")
    category: Optional[str] = Field(None, max_length=100, description="Category name, partial match")
    user_requirements: Optional[str] = Field(None, max_length=2000, description="Free-text requirements")


class FeedbackCreateRequest(BaseModel):
    """Request model for POST /templates/{template_id}/feedback."""
    rating: int = Field(..., ge=1, le=5, description="Overall rating (1-5)")
    comment: Optional[str] = Field(None, max_length=2000, description="Free-text comment")
    accuracy_rating: Optional[int] = Field(None, ge=1, le=5)
    usefulness_rating: Optional[int] = Field(None, ge=1, le=5)
    ease_of_use_rating: Optional[int] = Field(None, ge=1, le=5)
    session_uuid: Optional[str] = Field(None, description="Client session identifier")


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class TemplateResponse(BaseModel):
    """A template with its category name and tag names."""
    id: int = Field(..., description="Template id")
    title: str = Field(..., description="Template title")
    description: Optional[str] = None
    template_content: str = Field(..., description="Prompt template body")
    system_role: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    tag_names: List[str] = Field(default_factory=list)
    difficulty_level: Optional[str] = None
    example_usage: Optional[str] = None
    estimated_tokens: Optional[int] = None
    usage_count: int = 0
    view_count: int = 0
    is_featured: bool = False
    is_public: bool = True
    version: Optional[str] = Field(None, examples=["1.0"])
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    relevance_score: Optional[int] = Field(None, description="Search relevance (search results only)")


class PaginationInfo(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class TemplateListResponse(BaseModel):
    """Response model for GET /templates."""
    templates: List[TemplateResponse]
    pagination: PaginationInfo


class TemplateMutationResponse(BaseModel):
    """Response for create, update and copy."""
    status: str = Field(..., examples=["CREATED", "UPDATED", "COPIED"])
    template: TemplateResponse
    message: str


class TemplateSearchResponse(BaseModel):
    """Response model for POST /templates/recommend."""
    recommendations: List[TemplateResponse]
    count: int
    message: str


class StatusMessageResponse(BaseModel):
    """Response for delete and favorite."""
    status: str = Field(..., examples=["DELETED", "FAVORITED"])
    message: str


class FeedbackResponse(BaseModel):
    id: int = Field(..., description="Feedback id")
    rating: int
    message: str


class TemplateCounters(BaseModel):
    usage_count: int = 0
    view_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FeedbackStats(BaseModel):
    total_feedback: int = 0
    avg_rating: Optional[float] = None
    avg_accuracy: Optional[float] = None
    avg_usefulness: Optional[float] = None
    avg_ease_of_use: Optional[float] = None


class TemplateStatsResponse(BaseModel):
    """Response model for GET /templates/{template_id}/stats."""
    template_stats: TemplateCounters
    feedback_stats: FeedbackStats

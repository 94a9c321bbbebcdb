"""
Pydantic models for saved prompts.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PromptCreateRequest(BaseModel):
    """Request model for POST /prompts."""
    title: str = Field(..., min_length=1, max_length=255, description="Prompt title")
    description: Optional[str] = Field(None, max_length=2000, description="Short description")
    prompt: str = Field(..., min_length=1, description="Prompt body")
    role: str = Field(
        "user",
        min_length=1,
        max_length=100,
        description="Message role the prompt is written for",
        examples=["system", "user"]
    )
    tags: List[str] = Field(default_factory=list, description="Free-form tags")


class PromptResponse(BaseModel):
    id: int = Field(..., description="Prompt id")
    title: str = Field(..., description="Prompt title")
    description: Optional[str] = Field(None, description="Short description")
    prompt: str = Field(..., description="Prompt body")
    role: Optional[str] = Field(None, description="Message role")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO-8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO-8601)")


class PromptListResponse(BaseModel):
    """Response model for GET /prompts."""
    prompts: List[PromptResponse] = Field(..., description="Prompts, newest first")
    count: int = Field(..., description="Number of prompts returned")


class PromptCreateResponse(BaseModel):
    status: str = Field("CREATED", description="Operation status")
    prompt: PromptResponse = Field(..., description="The created prompt")
    message: str = Field(..., description="Human-readable summary")

"""
Pydantic models for the AI model catalog.

Models are read-only catalog rows joined with their provider. Rules refer to
them by model_key (e.g. 'gpt-4'), never by numeric id.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AIModelResponse(BaseModel):
    """A single AI model with flattened provider fields."""
    id: int = Field(..., description="Model id")
    name: str = Field(..., description="Display name", examples=["GPT-4"])
    model_key: str = Field(..., description="Stable symbolic key used by recommendation rules", examples=["gpt-4"])
    version: Optional[str] = Field(None, description="Model version", examples=["4.0"])
    description: Optional[str] = Field(None, description="Short description")
    modality: Optional[str] = Field(None, description="'text', 'image' or 'multimodal'")
    context_length: Optional[int] = Field(None, description="Context window size in tokens")
    max_tokens: Optional[int] = Field(None, description="Maximum output tokens")
    supports_streaming: bool = Field(False, description="Streaming responses available")
    supports_functions: bool = Field(False, description="Function calling available")
    strengths: List[str] = Field(default_factory=list, description="Strength labels")
    use_cases: List[str] = Field(default_factory=list, description="Typical use cases")
    pricing_tier: Optional[str] = Field(None, description="'premium', 'standard' or 'free'")
    performance_score: Optional[float] = Field(None, description="Relative performance score (0-10)")
    input_price_per_1k: Optional[float] = Field(None, description="USD per 1K input tokens")
    output_price_per_1k: Optional[float] = Field(None, description="USD per 1K output tokens")
    api_available: bool = Field(True, description="Public API available")
    is_active: bool = Field(True, description="Whether the model is offered")
    provider_name: Optional[str] = Field(None, description="Provider display name")
    provider_company: Optional[str] = Field(None, description="Provider company")
    provider_website: Optional[str] = Field(None, description="Provider website URL")
    provider_api_base: Optional[str] = Field(None, description="Provider API base URL")


class AIModelListResponse(BaseModel):
    """Response model for GET /recommend/ai-models."""
    models: List[AIModelResponse] = Field(..., description="Active models, premium first")
    count: int = Field(..., description="Number of models returned")

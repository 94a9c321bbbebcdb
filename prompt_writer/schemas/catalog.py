"""
Pydantic models for template categories and tags.

Both are shared, public catalog rows. Template creation auto-creates missing
ones by name, so there are no create endpoints here.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CategoryResponse(BaseModel):
    id: int = Field(..., description="Category id")
    name: str = Field(..., description="Category name", examples=["코딩"])
    description: Optional[str] = Field(None, description="Category description")
    icon: Optional[str] = Field(None, description="Icon identifier or emoji")
    color: Optional[str] = Field(None, description="Hex color code for UI display")
    sort_order: Optional[int] = Field(None, description="Display order")


class CategoryListResponse(BaseModel):
    """Response model for GET /recommend/categories."""
    categories: List[CategoryResponse] = Field(..., description="Active categories in display order")
    count: int = Field(..., description="Number of categories returned")


class TagResponse(BaseModel):
    id: int = Field(..., description="Tag id")
    name: str = Field(..., description="Tag name")
    description: Optional[str] = Field(None, description="Tag description")
    color: Optional[str] = Field(None, description="Hex color code for UI display")
    usage_count: int = Field(0, description="How many templates use the tag")


class TagListResponse(BaseModel):
    """Response model for GET /recommend/tags."""
    tags: List[TagResponse] = Field(..., description="Tags, most used first")
    count: int = Field(..., description="Number of tags returned")

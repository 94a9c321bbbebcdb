"""
Service layer for the Prompt Writer backend.

Services sit between the routes (HTTP layer) and Supabase:
- Fetch catalog and template rows under the caller's client (RLS applies)
- Apply the pure decision logic in prompt_writer.recommendation
- Return plain dicts/dataclasses that routes map into Pydantic ResponseModels
"""

from .ai_model_service import (
    get_all_models,
    get_fallback_candidates,
    get_model_by_id,
    get_models_by_keys,
)
from .category_service import (
    get_active_categories,
    get_all_tags,
    get_or_create_category,
    get_or_create_tag,
    resolve_category_id,
)
from .prompt_service import (
    create_prompt,
    get_prompt_by_id,
    list_prompts,
)
from .recommendation_service import (
    ModelRecommendation,
    get_question_step,
    get_service_info,
    recommend_models,
)
from .template_service import (
    copy_template,
    create_template,
    delete_template,
    export_template,
    format_template_text,
    get_template_by_id,
    get_template_stats,
    list_templates,
    recommend_templates,
    record_favorite,
    submit_feedback,
    update_template,
)

__all__ = [
    # AI models
    "get_all_models",
    "get_fallback_candidates",
    "get_model_by_id",
    "get_models_by_keys",
    # Categories and tags
    "get_active_categories",
    "get_all_tags",
    "get_or_create_category",
    "get_or_create_tag",
    "resolve_category_id",
    # Prompts
    "create_prompt",
    "get_prompt_by_id",
    "list_prompts",
    # Recommendations
    "ModelRecommendation",
    "get_question_step",
    "get_service_info",
    "recommend_models",
    # Templates
    "copy_template",
    "create_template",
    "delete_template",
    "export_template",
    "format_template_text",
    "get_template_by_id",
    "get_template_stats",
    "list_templates",
    "recommend_templates",
    "record_favorite",
    "submit_feedback",
    "update_template",
]

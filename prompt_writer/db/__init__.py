"""
Database access layer for the Prompt Writer backend.

All database operations go through supabase-py clients created here and
passed explicitly into the service layer.

Tables used by the service layer (owned by the database project):
- ai_provider, ai_model
- category, tag
- prompt_template, prompt_template_tag, content_version
- user_session, user_feedback, usage_log
- prompt

RPC functions:
- increment_template_counter(p_template_id, p_column): atomic counter bump
  for view_count / usage_count

DO NOT define table schemas, migrations, or RLS policies here.
"""

from .client import get_public_client, get_supabase_client

__all__ = ["get_supabase_client", "get_public_client"]

"""
Supabase client factories.

Two kinds of clients are handed to the service layer:

1. get_supabase_client(access_token): per-request client carrying the
   user's JWT. Writes (templates, prompts, feedback, favorites) go through
   this client so Row Level Security sees auth.uid().
2. get_public_client(): client with the publishable key only. Used for
   anonymous catalog reads (AI models, categories, tags, public templates)
   and for the recommendation endpoints.

Rules:
- NEVER use the service_role key from the API process
- Service functions receive the client as an argument and never create one
"""

import logging

from prompt_writer.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    Args:
        access_token: The user's JWT access token from Supabase Auth,
                      already verified in prompt_writer/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.

    Example:
        >>> client = get_supabase_client(auth_user.access_token)
        >>> client.table("prompt_template").select("*").execute()
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    # The token's 'sub' claim becomes auth.uid() in RLS policies
    client.auth.set_session(access_token, access_token)

    logger.debug("Created authenticated Supabase client with user token (RLS enforced)")

    return client


def get_public_client() -> Client:
    """
    Create an anonymous Supabase client for public catalog reads.

    RLS policies expose only public rows (active AI models, public templates,
    categories and tags) to this client. It carries no user session; the only
    writes RLS accepts from it are anonymous feedback, usage_log rows and the
    increment_template_counter RPC.

    Returns:
        A Supabase client authenticated with the publishable key only.
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    logger.debug("Created anonymous Supabase client for public reads")

    return client

"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use explicit Pydantic models. Catalog rows coming back
from Supabase are mapped field by field in the routes.
"""

"""
FastAPI routers for all API endpoints.

Each module defines a router for one area (recommend, templates, prompts).
Endpoints follow the same flow: auth (write endpoints only), validate,
call the service layer, map to a ResponseModel.
"""

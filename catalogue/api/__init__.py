"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalogue.api.admin import router as admin_router
from catalogue.api.health import router as health_router
from catalogue.api.products import router as products_router

__all__ = [
    "admin_router",
    "health_router",
    "products_router",
]

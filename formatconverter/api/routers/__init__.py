"""FormatConverter API routers package."""

from formatconverter.api.routers.conversion import router as conversion_router
from formatconverter.api.routers.health import router as health_router

__all__ = [
    "conversion_router",
    "health_router",
]

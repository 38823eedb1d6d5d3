"""
app/api/routers package marker.
"""

from app.api.routers.reporting import router as reporting_router
from app.api.routers.sales_import import router as sales_import_router

__all__ = [
    "reporting_router",
    "sales_import_router",
]

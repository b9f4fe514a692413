"""
API route modules.
"""

from routes.planning import router as planning_router

__all__ = [
    "planning_router",
]

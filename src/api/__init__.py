"""API Package - FastAPI routes, middleware, and dependencies.

Components:
- routes: API endpoint routers (chat)
- middleware: Request/response logging
- deps: FastAPI dependency injection functions

Note: Import routers directly from src.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps"]

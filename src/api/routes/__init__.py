"""Routes Package - API endpoint definitions.

Note: Import routers directly from individual modules to avoid circular imports.
Example: from src.api.routes.chat import router as chat_router
"""

__all__ = ["chat"]

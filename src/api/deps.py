"""
API Dependencies

This module provides FastAPI dependency injection functions for the API layer.

Pattern: Centralized dependency injection following FastAPI conventions.
The chat service is created once by the app factory and stored on
``app.state``; route handlers receive it through ``Depends`` and tests can
swap it via ``app.dependency_overrides``.
"""

from fastapi import Request

from src.services.chat import ChatService


def get_chat_service(request: Request) -> ChatService:
    """
    Get the ChatService instance.

    Returns:
        ChatService: Chat service bound to the app's settings
    """
    return request.app.state.chat_service


__all__ = [
    "get_chat_service",
]

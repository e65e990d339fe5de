"""
Services Package - Service Layer

Business logic for relaying chat requests to the upstream provider.
"""

from src.services.chat import ChatService, extract_first_choice_text, resolve_api_key

__all__ = [
    "ChatService",
    "resolve_api_key",
    "extract_first_choice_text",
]

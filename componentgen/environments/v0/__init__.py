"""
v0 Module - v0 Platform API Integration.

This module provides:
- V0Client: API client for creating chats and sending follow-ups
- Chat / ChatFile: Pydantic models for chat responses

Usage:
======
    from componentgen.environments.v0 import V0Client

    client = V0Client(api_key="v1:xxx")
    chat = await client.create_chat("Build a footer", system=SYSTEM_PROMPT)
"""

from componentgen.environments.v0.client import V0Client
from componentgen.environments.v0.schemas import Chat, ChatFile

__all__ = [
    "V0Client",
    "Chat",
    "ChatFile",
]

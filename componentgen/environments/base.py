"""
Base classes and interfaces for external generation services.

This module defines the contract every generation service client must
implement, plus the exceptions those clients raise.

Design Pattern: Strategy Pattern
================================
- GenerationService: Abstract base for conversational generation APIs
- The ComponentGenerator only talks to this interface, so tests (or another
  provider) can stand in for the v0 Platform API without code changes.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from componentgen.environments.v0.schemas import Chat


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class ServiceError(Exception):
    """Base exception for all generation-service errors."""
    pass


class APIError(ServiceError):
    """Raised when an API call to the service fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class ErrorKind(str, Enum):
    """Discriminates service failures so callers can decide on retries."""
    RATE_LIMIT = "rate_limit"
    INSUFFICIENT_RESOURCES = "insufficient_resources"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    INVALID_RESPONSE = "invalid_response"
    API_ERROR = "api_error"


class V0APIError(APIError):
    """An APIError raised by the v0 Platform API client, tagged with its kind."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.API_ERROR,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message, status_code=status_code, response=response)
        self.kind = kind

    @property
    def is_rate_limit(self) -> bool:
        return self.kind == ErrorKind.RATE_LIMIT


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class GenerationService(ABC):
    """
    Abstract base class for conversational generation services.

    A conversation is opened with an instruction and a system prompt;
    follow-up messages in the same conversation can change the returned
    file set.

    Example Implementation:
        class MyService(GenerationService):
            service_name = "my-service"

            async def create_chat(self, message, system=None):
                ...
    """

    # Unique identifier for this service
    service_name: str = ""

    @abstractmethod
    async def create_chat(self, message: str, system: Optional[str] = None) -> "Chat":
        """
        Open a new conversation.

        Args:
            message: The instruction to generate from
            system: Optional system-level instruction

        Returns:
            Chat with id, reference URLs and generated files

        Raises:
            V0APIError: If the service rejects or fails the request
        """
        pass

    @abstractmethod
    async def send_message(self, chat_id: str, message: str) -> "Chat":
        """
        Send a follow-up message in an existing conversation.

        Args:
            chat_id: Identifier returned by create_chat
            message: Follow-up instruction

        Returns:
            Chat reflecting the follow-up

        Raises:
            V0APIError: If the service rejects or fails the request
        """
        pass

"""
v0 Platform API Client - Create chats and send follow-up messages.

This client provides the two calls the component generator needs from the
v0 Platform API. It handles API requests, error classification, and
response parsing.

Key Features:
=============
1. Open a chat with an instruction and a system prompt
2. Send a follow-up message in the same chat
3. Classify failures by kind (rate limit, insufficient resources, ...)

API Reference:
==============
- Chats: https://v0.dev/docs/api/platform/reference/chats/create

Usage Example:
==============
    from componentgen.environments.v0 import V0Client

    client = V0Client(api_key="v1:xxx")
    chat = await client.create_chat("Build a hero section", system=SYSTEM_PROMPT)
    chat = await client.send_message(chat.id, "Make the CTA larger")
    print(chat.demo)
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from componentgen.core.config import settings
from componentgen.core.exceptions import ConfigurationError
from componentgen.environments.base import ErrorKind, GenerationService, V0APIError
from componentgen.environments.v0.schemas import Chat


logger = logging.getLogger("componentgen.environments.v0")


# ---------------------------------------------------------------------------
# ERROR TYPE MAPPING
# ---------------------------------------------------------------------------
# Error "type"/"code" values reported in the API's JSON error body
RATE_LIMIT_TYPES = {"rate_limit_exceeded", "rate_limited", "too_many_requests"}
INSUFFICIENT_RESOURCES_TYPES = {"insufficient_resources", "insufficient_credits", "payment_required"}


class V0Client(GenerationService):
    """
    v0 Platform API client.

    Attributes:
        api_key: v0 API key (bearer token)
        base_url: API base URL
        timeout: Per-request timeout in seconds

    Example:
        client = V0Client(api_key="v1:xxx")
        chat = await client.create_chat("Build a pricing table")
    """

    service_name = "v0"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the v0 client.

        Args:
            api_key: API key (default: settings.V0_API_KEY)
            base_url: API base URL (default: settings.V0_API_URL)
            timeout: Request timeout (default: settings.V0_REQUEST_TIMEOUT)
            transport: Optional httpx transport, used by tests

        Raises:
            ConfigurationError: No API key given or configured
        """
        self.api_key = api_key or settings.V0_API_KEY
        if not self.api_key:
            raise ConfigurationError("V0_API_KEY environment variable not set")
        self.base_url = (base_url or settings.V0_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.V0_REQUEST_TIMEOUT
        self._transport = transport

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[dict] = None,
    ) -> dict:
        """
        Make an authenticated request to the v0 API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path (e.g., "/chats")
            payload: JSON body

        Returns:
            Parsed JSON response

        Raises:
            V0APIError: If the request fails, tagged with the failure kind
        """
        url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    json=payload,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in v0 API: {e}")
                raise V0APIError(f"Network error: {e}", kind=ErrorKind.NETWORK)

        if response.status_code >= 400:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError:
            logger.error(f"v0 API returned non-JSON body ({response.status_code})")
            raise V0APIError(
                "Invalid JSON in v0 API response",
                kind=ErrorKind.INVALID_RESPONSE,
                status_code=response.status_code,
                response=response.text,
            )

    def _error_from_response(self, response: httpx.Response) -> V0APIError:
        """Build a V0APIError from a failed HTTP response."""
        error_type, message = _parse_error_body(response)
        status = response.status_code

        if status == 429 or error_type in RATE_LIMIT_TYPES:
            kind = ErrorKind.RATE_LIMIT
        elif status == 402 or error_type in INSUFFICIENT_RESOURCES_TYPES:
            kind = ErrorKind.INSUFFICIENT_RESOURCES
        elif status in (401, 403):
            kind = ErrorKind.UNAUTHORIZED
        elif status == 404:
            kind = ErrorKind.NOT_FOUND
        else:
            kind = ErrorKind.API_ERROR

        logger.error(f"v0 API error: {status} [{kind.value}] - {message}")
        return V0APIError(message, kind=kind, status_code=status, response=response.text)

    def _parse_chat(self, data: Any) -> Chat:
        try:
            return Chat.model_validate(data)
        except ValidationError as e:
            raise V0APIError(
                f"Unexpected chat payload: {e.error_count()} validation error(s)",
                kind=ErrorKind.INVALID_RESPONSE,
                response=data,
            )

    # -------------------------------------------------------------------------
    # CHAT OPERATIONS
    # -------------------------------------------------------------------------

    async def create_chat(self, message: str, system: Optional[str] = None) -> Chat:
        """
        Open a new chat.

        Args:
            message: The instruction to generate from
            system: Optional system prompt

        Returns:
            Chat with id, URLs and generated files

        Raises:
            V0APIError: On any failure
        """
        payload = {"message": message}
        if system:
            payload["system"] = system

        logger.info(f"Creating chat ({len(message)} chars)")
        data = await self._make_request("POST", "/chats", payload)
        chat = self._parse_chat(data)
        logger.info(f"Created chat {chat.id} with {len(chat.files)} file(s)")
        return chat

    async def send_message(self, chat_id: str, message: str) -> Chat:
        """
        Send a follow-up message to an existing chat.

        Args:
            chat_id: Chat identifier from create_chat
            message: Follow-up instruction

        Returns:
            Chat reflecting the follow-up

        Raises:
            V0APIError: On any failure
        """
        logger.info(f"Sending follow-up to chat {chat_id}")
        data = await self._make_request("POST", f"/chats/{chat_id}/messages", {"message": message})
        chat = self._parse_chat(data)
        logger.info(f"Chat {chat.id} now has {len(chat.files)} file(s)")
        return chat


def _parse_error_body(response: httpx.Response) -> tuple:
    """
    Extract (error_type, message) from an error response.

    Handles {"error": {"type": ..., "message": ...}}, {"error": "..."},
    {"code": ..., "message": ...} and plain-text bodies.
    """
    try:
        body = response.json()
    except ValueError:
        return None, response.text or f"HTTP {response.status_code}"

    if not isinstance(body, dict):
        return None, response.text

    error = body.get("error")
    if isinstance(error, dict):
        error_type = error.get("type") or error.get("code")
        message = error.get("message") or response.text
    else:
        error_type = body.get("type") or body.get("code")
        message = body.get("message") or (error if isinstance(error, str) else None) or response.text

    return error_type, message

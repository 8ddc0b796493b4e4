"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- A scripted fake generation service (no network calls)
- Chat factories
- Design package folders on tmp_path
- A no-op sleep so retries and pacing don't slow tests down
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from componentgen.environments.base import ErrorKind, GenerationService, V0APIError
from componentgen.environments.v0.schemas import Chat, ChatFile
from componentgen.generation.contracts import RunConfig


# ---------------------------------------------------------------------------
# FAKE SERVICE
# ---------------------------------------------------------------------------

class FakeGenerationService(GenerationService):
    """
    GenerationService that replays scripted responses.

    Each queue item is a Chat to return or an exception to raise. The last
    item repeats once the queue runs out.
    """

    service_name = "fake"

    def __init__(self, responses=None, followups=None):
        self.create_calls: List[tuple] = []
        self.message_calls: List[tuple] = []
        self._responses = list(responses or [])
        self._followups = list(followups or [])

    async def create_chat(self, message, system=None):
        self.create_calls.append((message, system))
        return self._next(self._responses)

    async def send_message(self, chat_id, message):
        self.message_calls.append((chat_id, message))
        return self._next(self._followups)

    @staticmethod
    def _next(queue):
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_service_cls():
    """The FakeGenerationService class, for tests that script their own."""
    return FakeGenerationService


@pytest.fixture
def make_chat() -> Callable[..., Chat]:
    """Factory for Chat responses."""
    def _make(
        chat_id: str = "chat_1",
        files: Optional[Dict[str, str]] = None,
        web_url: Optional[str] = "https://v0.dev/chat/chat_1",
        demo: Optional[str] = "https://demo.v0.dev/chat_1",
    ) -> Chat:
        if files is None:
            files = {"page.tsx": "export default function Page() { return null }"}
        return Chat(
            id=chat_id,
            web_url=web_url,
            demo=demo,
            files=[ChatFile(name=n, content=c) for n, c in files.items()],
        )
    return _make


@pytest.fixture
def rate_limit_error() -> V0APIError:
    return V0APIError("Rate limit exceeded", kind=ErrorKind.RATE_LIMIT, status_code=429)


@pytest.fixture
def no_sleep() -> AsyncMock:
    """Awaitable stand-in for asyncio.sleep that records its calls."""
    return AsyncMock(return_value=None)


@pytest.fixture
def run_config() -> RunConfig:
    return RunConfig()


@pytest.fixture
def make_package(tmp_path: Path, run_config: RunConfig) -> Callable[[Dict[str, str]], Path]:
    """
    Create a design package with the given prompt files.

    Returns the package path; prompts go under run_config.prompts_dir.
    """
    def _make(prompts: Dict[str, str]) -> Path:
        package = tmp_path / "DesignPackage"
        prompts_dir = package / run_config.prompts_dir
        prompts_dir.mkdir(parents=True, exist_ok=True)
        for filename, content in prompts.items():
            (prompts_dir / filename).write_text(content, encoding="utf-8")
        return package
    return _make


@pytest.fixture
def hero_prompt() -> str:
    return "Title\n---\nBuild a hero section with a headline and CTA button."

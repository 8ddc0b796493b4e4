"""
ComponentGenerator - Generates one React component through a v0 chat.

Opens a chat with the prompt and system prompt, optionally sends a
follow-up in the same chat, and picks the main component file from the
returned files.
"""

import logging
import time
from typing import List, Optional, Sequence
from uuid import uuid4

from componentgen.environments.base import GenerationService, V0APIError
from componentgen.environments.v0.schemas import Chat, ChatFile
from componentgen.generation.contracts import GenerationRequest, GenerationResult
from componentgen.generation.retry import RetryPolicy
from componentgen.monitoring.logger import GenerationLogger, generation_logger

logger = logging.getLogger("componentgen.generation.generator")

# Main-file selection, in order of precedence
SOURCE_EXTENSIONS = (".tsx", ".jsx")
ENTRY_POINT_NAME = "page.tsx"
COMPONENT_KEYWORD = "component"


def select_main_file(files: Sequence[ChatFile]) -> Optional[ChatFile]:
    """
    Pick the main component file from a chat's files.

    Precedence: first file with a source extension, then a file named
    page.tsx, then a file whose name contains "component".
    """
    for f in files:
        if f.name.endswith(SOURCE_EXTENSIONS):
            return f
    for f in files:
        if f.name == ENTRY_POINT_NAME:
            return f
    for f in files:
        if COMPONENT_KEYWORD in f.name:
            return f
    return None


class ComponentGenerator:
    """
    Generates components using a GenerationService (the v0 client).

    Usage:
        generator = ComponentGenerator(V0Client(), RetryPolicy())
        result = await generator.generate(
            "Hero",
            GenerationRequest(prompt="Build a hero...", system_prompt=SYSTEM_PROMPT),
        )

        if result.success:
            source = result.content
    """

    def __init__(
        self,
        service: GenerationService,
        retry_policy: Optional[RetryPolicy] = None,
        output_extension: str = ".tsx",
        gen_logger: Optional[GenerationLogger] = None,
    ):
        """
        Initialize the generator.

        Args:
            service: Conversational generation service
            retry_policy: Rate-limit policy (default: one retry after 60s)
            output_extension: Extension of the output filename
            gen_logger: Structured event logger
        """
        self._service = service
        self._retry = retry_policy or RetryPolicy()
        self._output_extension = output_extension
        self._events = gen_logger or generation_logger

    async def generate(self, name: str, request: GenerationRequest) -> GenerationResult:
        """
        Generate one component.

        Never raises: service errors, exhausted rate-limit retries and
        unexpected faults all come back as a failed GenerationResult.

        Args:
            name: Component name (also the output file stem)
            request: Prompt, system prompt and optional follow-up

        Returns:
            GenerationResult for the component
        """
        request_id = uuid4().hex[:12]
        start_time = time.time()
        attempts = 0

        async def exchange() -> Chat:
            nonlocal attempts
            attempts += 1
            self._events.log_request(
                request_id=request_id,
                component=name,
                prompt=request.prompt,
                iterate=request.iterate,
                attempt=attempts,
            )
            return await self._exchange(request)

        def on_retry(error: Exception, retry_number: int) -> None:
            self._events.log_retry(
                request_id=request_id,
                component=name,
                error=str(error),
                cooldown_seconds=self._retry.cooldown_seconds,
            )

        try:
            chat = await self._retry.run(exchange, on_retry=on_retry)
            result = self._build_result(name, chat)
        except V0APIError as e:
            logger.error(f"Error generating {name}: {e}")
            result = GenerationResult(name=name, success=False, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected failure generating {name}: {e}")
            result = GenerationResult(name=name, success=False, error=str(e))

        self._events.log_response(
            request_id=request_id,
            result=result,
            latency_ms=(time.time() - start_time) * 1000,
        )
        return result

    async def _exchange(self, request: GenerationRequest) -> Chat:
        """Run one full exchange: create the chat, then the optional follow-up."""
        chat = await self._service.create_chat(request.prompt, system=request.system_prompt)

        if request.iterate:
            logger.info(f"Iterating chat {chat.id}: {request.iterate!r}")
            followup = await self._service.send_message(chat.id, request.iterate)
            chat = followup.model_copy(update={
                "web_url": followup.web_url or chat.web_url,
                "demo": followup.demo or chat.demo,
            })

        return chat

    def _build_result(self, name: str, chat: Chat) -> GenerationResult:
        main_file = select_main_file(chat.files)

        if main_file is None:
            available: List[str] = chat.file_names()
            logger.warning(
                f"No component file in response for {name}. "
                f"Available files: {', '.join(available) or 'none'}"
            )
            return GenerationResult(
                name=name,
                success=False,
                chat_url=chat.web_url,
                demo_url=chat.demo,
                error=f"No component file in response for {name}",
                available_files=available,
            )

        if not main_file.content:
            logger.warning(f"Empty component file {main_file.name} in response for {name}")
            return GenerationResult(
                name=name,
                success=False,
                chat_url=chat.web_url,
                demo_url=chat.demo,
                error=f"Empty component file {main_file.name} in response for {name}",
                source_file=main_file.name,
                available_files=chat.file_names(),
            )

        return GenerationResult(
            name=name,
            success=True,
            content=main_file.content,
            filename=f"{name}{self._output_extension}",
            chat_url=chat.web_url,
            demo_url=chat.demo,
            source_file=main_file.name,
        )

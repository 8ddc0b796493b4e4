"""
Tests for ComponentGenerator and RetryPolicy.

The generation service is a scripted fake and sleeping is mocked, so the
rate-limit cooldown costs nothing.
"""

import pytest

from componentgen.environments.base import ErrorKind, V0APIError
from componentgen.environments.v0.schemas import ChatFile
from componentgen.generation.contracts import GenerationRequest
from componentgen.generation.generator import ComponentGenerator, select_main_file
from componentgen.generation.prompts import SYSTEM_PROMPT
from componentgen.generation.retry import RetryPolicy


def files(*names):
    return [ChatFile(name=n, content=f"// {n}") for n in names]


@pytest.fixture
def request_():
    return GenerationRequest(prompt="Build a hero section.", system_prompt=SYSTEM_PROMPT)


@pytest.fixture
def make_generator(no_sleep):
    def _make(service, cooldown=60.0):
        return ComponentGenerator(
            service,
            retry_policy=RetryPolicy(cooldown_seconds=cooldown, sleep=no_sleep),
        )
    return _make


# ---------------------------------------------------------------------------
# MAIN FILE SELECTION
# ---------------------------------------------------------------------------

class TestSelectMainFile:
    """Tests for select_main_file precedence."""

    def test_first_source_extension_wins(self):
        chosen = select_main_file(files("README.md", "hero.jsx", "page.tsx"))
        assert chosen.name == "hero.jsx"

    def test_source_extension_beats_keyword(self):
        chosen = select_main_file(files("component-notes.txt", "app/layout.tsx"))
        assert chosen.name == "app/layout.tsx"

    def test_keyword_match(self):
        chosen = select_main_file(files("styles.css", "my-component.vue", "other-component.txt"))
        assert chosen.name == "my-component.vue"

    def test_no_match(self):
        assert select_main_file(files("styles.css", "README.md")) is None

    def test_empty(self):
        assert select_main_file([]) is None


# ---------------------------------------------------------------------------
# GENERATION
# ---------------------------------------------------------------------------

class TestComponentGenerator:
    """Tests for ComponentGenerator.generate."""

    @pytest.mark.asyncio
    async def test_success(self, fake_service_cls, make_chat, make_generator, request_):
        service = fake_service_cls(responses=[
            make_chat(files={"globals.css": "body {}", "page.tsx": "export default function Hero() {}"}),
        ])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is True
        assert result.filename == "Hero.tsx"
        assert result.content == "export default function Hero() {}"
        assert result.source_file == "page.tsx"
        assert result.chat_url == "https://v0.dev/chat/chat_1"
        assert result.demo_url == "https://demo.v0.dev/chat_1"
        assert result.error is None
        assert service.create_calls == [("Build a hero section.", SYSTEM_PROMPT)]
        assert service.message_calls == []

    @pytest.mark.asyncio
    async def test_output_extension_is_configurable(self, fake_service_cls, make_chat, no_sleep, request_):
        service = fake_service_cls(responses=[make_chat()])
        generator = ComponentGenerator(
            service,
            retry_policy=RetryPolicy(sleep=no_sleep),
            output_extension=".jsx",
        )

        result = await generator.generate("Hero", request_)
        assert result.filename == "Hero.jsx"

    @pytest.mark.asyncio
    async def test_followup_result_is_used(self, fake_service_cls, make_chat, make_generator):
        service = fake_service_cls(
            responses=[make_chat(chat_id="chat_1", files={"page.tsx": "v1"})],
            followups=[make_chat(chat_id="chat_1", files={"page.tsx": "v2"}, web_url=None, demo=None)],
        )
        request = GenerationRequest(
            prompt="Build a hero section.",
            system_prompt=SYSTEM_PROMPT,
            iterate="Make the CTA button larger",
        )

        result = await make_generator(service).generate("Hero", request)

        assert result.content == "v2"
        assert service.message_calls == [("chat_1", "Make the CTA button larger")]
        # URLs fall back to the initial chat when the follow-up has none
        assert result.chat_url == "https://v0.dev/chat/chat_1"
        assert result.demo_url == "https://demo.v0.dev/chat_1"

    @pytest.mark.asyncio
    async def test_no_matching_file(self, fake_service_cls, make_chat, make_generator, request_):
        service = fake_service_cls(responses=[make_chat(files={"README.md": "docs"})])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is False
        assert result.content is None
        assert result.filename is None
        assert result.chat_url == "https://v0.dev/chat/chat_1"
        assert result.demo_url == "https://demo.v0.dev/chat_1"
        assert result.error == "No component file in response for Hero"
        assert result.available_files == ["README.md"]

    @pytest.mark.asyncio
    async def test_empty_main_file_is_a_failure(self, fake_service_cls, make_chat, make_generator, request_):
        service = fake_service_cls(responses=[make_chat(files={"page.tsx": "", "styles.css": "x"})])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is False
        assert result.has_content is False
        assert result.filename is None
        assert result.error == "Empty component file page.tsx in response for Hero"
        assert result.chat_url == "https://v0.dev/chat/chat_1"
        assert result.demo_url == "https://demo.v0.dev/chat_1"

    @pytest.mark.asyncio
    async def test_rate_limit_retried_once_then_succeeds(
        self, fake_service_cls, make_chat, make_generator, request_, rate_limit_error, no_sleep
    ):
        service = fake_service_cls(responses=[rate_limit_error, make_chat()])

        result = await make_generator(service, cooldown=60.0).generate("Hero", request_)

        assert result.success is True
        assert len(service.create_calls) == 2
        no_sleep.assert_awaited_once_with(60.0)

    @pytest.mark.asyncio
    async def test_retry_repeats_the_followup(
        self, fake_service_cls, make_chat, make_generator, rate_limit_error
    ):
        service = fake_service_cls(
            responses=[make_chat()],
            followups=[rate_limit_error, make_chat(files={"page.tsx": "after retry"})],
        )
        request = GenerationRequest(prompt="p", system_prompt="s", iterate="again")

        result = await make_generator(service).generate("Hero", request)

        assert result.content == "after retry"
        assert len(service.create_calls) == 2
        assert len(service.message_calls) == 2

    @pytest.mark.asyncio
    async def test_second_rate_limit_is_terminal(
        self, fake_service_cls, make_generator, request_, rate_limit_error, no_sleep
    ):
        service = fake_service_cls(responses=[rate_limit_error])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is False
        assert result.error == "Rate limit exceeded"
        assert len(service.create_calls) == 2
        assert no_sleep.await_count == 1

    @pytest.mark.asyncio
    async def test_other_service_errors_are_not_retried(
        self, fake_service_cls, make_generator, request_, no_sleep
    ):
        error = V0APIError("Out of credits", kind=ErrorKind.INSUFFICIENT_RESOURCES, status_code=402)
        service = fake_service_cls(responses=[error])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is False
        assert result.error == "Out of credits"
        assert len(service.create_calls) == 1
        no_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(
        self, fake_service_cls, make_generator, request_
    ):
        service = fake_service_cls(responses=[RuntimeError("socket exploded")])

        result = await make_generator(service).generate("Hero", request_)

        assert result.success is False
        assert result.error == "socket exploded"
        assert len(service.create_calls) == 1


# ---------------------------------------------------------------------------
# RETRY POLICY
# ---------------------------------------------------------------------------

class TestRetryPolicy:
    """Tests for RetryPolicy.run."""

    @pytest.mark.asyncio
    async def test_returns_first_success(self, no_sleep):
        policy = RetryPolicy(sleep=no_sleep)

        async def operation():
            return "ok"

        assert await policy.run(operation) == "ok"
        no_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_on_retry_callback(self, no_sleep, rate_limit_error):
        policy = RetryPolicy(cooldown_seconds=5, sleep=no_sleep)
        calls = []
        outcomes = [rate_limit_error, "ok"]

        async def operation():
            item = outcomes.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        result = await policy.run(operation, on_retry=lambda e, n: calls.append((str(e), n)))

        assert result == "ok"
        assert calls == [("Rate limit exceeded", 1)]
        no_sleep.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_zero_retries(self, no_sleep, rate_limit_error):
        policy = RetryPolicy(max_retries=0, sleep=no_sleep)

        async def operation():
            raise rate_limit_error

        with pytest.raises(V0APIError):
            await policy.run(operation)
        no_sleep.assert_not_awaited()

    def test_should_retry(self, rate_limit_error):
        policy = RetryPolicy()
        assert policy.should_retry(rate_limit_error, 0) is True
        assert policy.should_retry(rate_limit_error, 1) is False
        assert policy.should_retry(ValueError("x"), 0) is False

"""
BatchRunner - Generates every prompt of a design package in sequence.

Flow per run:
    IDLE -> DISCOVERING -> PROCESSING (once per prompt) -> AGGREGATING -> DONE

Discovery failures (missing folder, no prompt files) end the run with no
manifest. Failures of a single prompt are recorded and the run moves on.
Each successful component is written as soon as it is generated, and the
manifest is written only once every prompt has been processed, so a run
without a manifest did not finish.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from componentgen.core.exceptions import PromptDiscoveryError
from componentgen.environments.base import GenerationService
from componentgen.generation.contracts import (
    GenerationRequest,
    GenerationResult,
    PromptDocument,
    RunConfig,
    RunManifest,
)
from componentgen.generation.generator import ComponentGenerator
from componentgen.generation.manifest import ManifestWriter
from componentgen.generation.naming import resolve_component_name
from componentgen.generation.prompts import extract_prompt
from componentgen.generation.retry import RetryPolicy

logger = logging.getLogger("componentgen.generation.runner")


class RunState(str, Enum):
    IDLE = "idle"
    DISCOVERING = "discovering"
    PROCESSING = "processing"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BatchOutcome:
    """What a completed batch run produced."""

    manifest: RunManifest
    manifest_path: Path
    output_path: Path
    results: List[GenerationResult] = field(default_factory=list)

    @property
    def demos(self) -> List[GenerationResult]:
        """Results that have a live preview URL."""
        return [r for r in self.results if r.demo_url]


class BatchRunner:
    """
    Runs the prompt-to-component pipeline over a design package.

    Usage:
        runner = create_runner(RunConfig.from_settings(settings), V0Client())
        outcome = await runner.run("./SmartHomeWizards")
        print(outcome.manifest.successful)
    """

    def __init__(
        self,
        generator: ComponentGenerator,
        config: RunConfig,
        manifest_writer: Optional[ManifestWriter] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        """
        Args:
            generator: Performs one generation per prompt
            config: Folder layout, pacing and system prompt
            manifest_writer: Manifest persistence (default: manifest.json)
            sleep: Awaitable sleep used between prompts (asyncio.sleep by default)
        """
        self._generator = generator
        self.config = config
        self._manifest_writer = manifest_writer or ManifestWriter(filename=config.manifest_name)
        self._sleep = sleep or asyncio.sleep
        self.state = RunState.IDLE

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------

    def prompts_path(self, package_path) -> Path:
        return Path(package_path) / self.config.prompts_dir

    def output_path(self, package_path) -> Path:
        return Path(package_path) / self.config.output_dir

    # -------------------------------------------------------------------------
    # DISCOVERY
    # -------------------------------------------------------------------------

    def discover(self, package_path) -> List[str]:
        """
        List prompt filenames in the package's prompts folder, sorted.

        Raises:
            PromptDiscoveryError: Folder missing/unreadable or no prompt files
        """
        prompts_path = self.prompts_path(package_path)
        try:
            filenames = sorted(
                entry.name
                for entry in prompts_path.iterdir()
                if entry.name.endswith(self.config.prompt_suffix) and entry.is_file()
            )
        except OSError as e:
            raise PromptDiscoveryError(
                f"Error reading prompts directory: {prompts_path} ({e})",
                path=str(prompts_path),
            )

        if not filenames:
            raise PromptDiscoveryError(
                f"No {self.config.prompt_suffix} prompt files found in {prompts_path}",
                path=str(prompts_path),
            )
        return filenames

    # -------------------------------------------------------------------------
    # PER-PROMPT PROCESSING
    # -------------------------------------------------------------------------

    async def process(
        self,
        prompts_path: Path,
        filename: str,
        iterate: Optional[str] = None,
    ) -> GenerationResult:
        """Resolve, extract and generate one prompt. Never raises for item failures."""
        name = resolve_component_name(filename)

        try:
            document = PromptDocument(
                filename=filename,
                content=(prompts_path / filename).read_text(encoding="utf-8"),
            )
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read prompt {filename}: {e}")
            return GenerationResult(name=name, success=False, error=str(e))

        prompt = extract_prompt(document.content)
        if prompt is None:
            logger.error(f"No prompt content found in {filename}")
            return GenerationResult(
                name=name,
                success=False,
                error=f"No prompt content found in {filename}",
            )

        logger.info(f"Generating {name} from {filename}")
        request = GenerationRequest(
            prompt=prompt,
            system_prompt=self.config.system_prompt,
            iterate=iterate,
        )
        return await self._generator.generate(name, request)

    def save(self, result: GenerationResult, output_path: Path) -> Optional[Path]:
        """Write a successful component. Returns the path, or None if nothing to write."""
        if not result.has_content:
            return None
        path = output_path / result.filename
        path.write_text(result.content, encoding="utf-8")
        logger.info(f"Saved {result.filename}")
        return path

    # -------------------------------------------------------------------------
    # RUNS
    # -------------------------------------------------------------------------

    async def run(self, package_path) -> BatchOutcome:
        """
        Generate every prompt in the package and write the manifest.

        Raises:
            PromptDiscoveryError: The run could not start; no manifest written
        """
        self.state = RunState.DISCOVERING
        try:
            filenames = self.discover(package_path)
        except PromptDiscoveryError:
            self.state = RunState.FAILED
            raise

        prompts_path = self.prompts_path(package_path)
        output_path = self.output_path(package_path)
        output_path.mkdir(parents=True, exist_ok=True)

        logger.info(f"Found {len(filenames)} prompt files, output directory: {output_path}")

        self.state = RunState.PROCESSING
        results: List[GenerationResult] = []
        for index, filename in enumerate(filenames):
            result = await self.process(prompts_path, filename)
            self.save(result, output_path)
            results.append(result)

            if index < len(filenames) - 1:
                await self._sleep(self.config.delay_between_requests)

        self.state = RunState.AGGREGATING
        manifest = self._manifest_writer.build(results, package_path=str(package_path))
        manifest_path = self._manifest_writer.write(manifest, output_path)

        self.state = RunState.DONE
        return BatchOutcome(
            manifest=manifest,
            manifest_path=manifest_path,
            output_path=output_path,
            results=results,
        )

    async def run_single(
        self,
        package_path,
        filename: str,
        iterate: Optional[str] = None,
    ) -> GenerationResult:
        """
        Generate one prompt file, optionally with a follow-up. Writes no manifest.

        Raises:
            PromptDiscoveryError: The prompt file does not exist
        """
        self.state = RunState.DISCOVERING
        prompts_path = self.prompts_path(package_path)
        if not (prompts_path / filename).is_file():
            self.state = RunState.FAILED
            raise PromptDiscoveryError(
                f"Prompt file not found: {prompts_path / filename}",
                path=str(prompts_path / filename),
            )

        output_path = self.output_path(package_path)
        output_path.mkdir(parents=True, exist_ok=True)

        self.state = RunState.PROCESSING
        result = await self.process(prompts_path, filename, iterate=iterate)
        self.save(result, output_path)

        self.state = RunState.DONE
        return result


def create_runner(
    config: RunConfig,
    service: GenerationService,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> BatchRunner:
    """Wire a BatchRunner, its generator and retry policy from one RunConfig."""
    retry_policy = RetryPolicy(
        cooldown_seconds=config.rate_limit_cooldown,
        max_retries=config.max_rate_limit_retries,
        sleep=sleep,
    )
    generator = ComponentGenerator(
        service,
        retry_policy=retry_policy,
        output_extension=config.output_extension,
    )
    return BatchRunner(generator, config, sleep=sleep)

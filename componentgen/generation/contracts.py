"""
Contracts for the component generation pipeline.

Dataclasses for prompt documents, requests, per-prompt results, the run
manifest, and the run configuration.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from componentgen.core.config import Settings
from componentgen.generation.prompts import SYSTEM_PROMPT


@dataclass(frozen=True)
class PromptDocument:
    """A prompt file read from the design package."""

    filename: str
    """File name, e.g. hero.md. Consulted by the name resolver."""

    content: str
    """Raw file text."""


@dataclass(frozen=True)
class GenerationRequest:
    """Everything sent to the service for one prompt."""

    prompt: str
    """Extracted instruction text."""

    system_prompt: str
    """Fixed system-level instruction."""

    iterate: Optional[str] = None
    """Optional follow-up sent in the same conversation."""


@dataclass
class GenerationResult:
    """Outcome of generating one component."""

    name: str
    """Target component name (e.g. Hero)."""

    success: bool
    """Whether a component file was produced."""

    content: Optional[str] = None
    """Generated source text."""

    filename: Optional[str] = None
    """Output file name (e.g. Hero.tsx)."""

    chat_url: Optional[str] = None
    """Link to the v0 conversation."""

    demo_url: Optional[str] = None
    """Live preview URL."""

    error: Optional[str] = None
    """Error message if generation failed."""

    source_file: Optional[str] = None
    """Name of the file picked from the service response."""

    available_files: List[str] = field(default_factory=list)
    """File names the service returned, kept when none matched."""

    @property
    def has_content(self) -> bool:
        return self.success and bool(self.content)

    def to_summary(self) -> Dict[str, Any]:
        """Manifest entry for this result."""
        return {
            "name": self.name,
            "success": self.success,
            "filename": self.filename or None,
            "chatUrl": self.chat_url or None,
            "demoUrl": self.demo_url or None,
            "error": self.error or None,
        }

    def describe(self) -> str:
        """Human-readable description."""
        status = "SUCCESS" if self.success else "FAILED"
        lines = [f"GenerationResult [{self.name}]: {status}"]
        if self.filename:
            lines.append(f"  File: {self.filename}")
        if self.source_file:
            lines.append(f"  Source: {self.source_file}")
        if self.chat_url:
            lines.append(f"  Chat: {self.chat_url}")
        if self.demo_url:
            lines.append(f"  Demo: {self.demo_url}")
        if self.error:
            lines.append(f"  Error: {self.error}")
        return "\n".join(lines)


@dataclass(frozen=True)
class RunManifest:
    """
    Summary of one batch run.

    Built once all prompts are processed and written to manifest.json.
    """

    generated: str
    """ISO-8601 timestamp of the run's end."""

    package_path: str
    """Design package the run read from."""

    total_components: int
    successful: int
    failed: int

    components: List[Dict[str, Any]] = field(default_factory=list)
    """Ordered result summaries (see GenerationResult.to_summary)."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated": self.generated,
            "packagePath": self.package_path,
            "totalComponents": self.total_components,
            "successful": self.successful,
            "failed": self.failed,
            "components": list(self.components),
        }


@dataclass(frozen=True)
class RunConfig:
    """
    Run configuration passed explicitly into the BatchRunner.

    Use RunConfig.from_settings() to build it from environment settings.
    """

    prompts_dir: str = "design-reference/v0-prompts"
    output_dir: str = "design-reference/v0-components"
    prompt_suffix: str = ".md"
    output_extension: str = ".tsx"
    delay_between_requests: float = 3.0
    rate_limit_cooldown: float = 60.0
    max_rate_limit_retries: int = 1
    system_prompt: str = SYSTEM_PROMPT
    manifest_name: str = "manifest.json"

    @classmethod
    def from_settings(cls, settings: Settings, system_prompt: Optional[str] = None) -> "RunConfig":
        return cls(
            prompts_dir=settings.PROMPTS_DIR,
            output_dir=settings.OUTPUT_DIR,
            output_extension=settings.OUTPUT_EXTENSION,
            delay_between_requests=settings.DELAY_BETWEEN_REQUESTS,
            rate_limit_cooldown=settings.RATE_LIMIT_COOLDOWN,
            system_prompt=system_prompt if system_prompt is not None else SYSTEM_PROMPT,
        )

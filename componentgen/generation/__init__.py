"""
Component Generation Module.

Turns design-package prompt files into React components via v0.

Usage:
    from componentgen.generation import RunConfig, create_runner
    from componentgen.environments.v0 import V0Client

    runner = create_runner(RunConfig.from_settings(settings), V0Client())
    outcome = await runner.run("./SmartHomeWizards")
"""

from .contracts import (
    GenerationRequest,
    GenerationResult,
    PromptDocument,
    RunConfig,
    RunManifest,
)
from .generator import ComponentGenerator, select_main_file
from .manifest import ManifestWriter
from .naming import COMPONENT_MAP, normalize_component_name, resolve_component_name
from .prompts import PROMPT_SEPARATOR, SYSTEM_PROMPT, extract_prompt
from .retry import RetryPolicy
from .runner import BatchOutcome, BatchRunner, RunState, create_runner

__all__ = [
    # Runner
    "BatchRunner",
    "BatchOutcome",
    "RunState",
    "create_runner",
    # Generator
    "ComponentGenerator",
    "RetryPolicy",
    "select_main_file",
    # Manifest
    "ManifestWriter",
    # Contracts
    "GenerationRequest",
    "GenerationResult",
    "PromptDocument",
    "RunConfig",
    "RunManifest",
    # Prompts and naming
    "COMPONENT_MAP",
    "PROMPT_SEPARATOR",
    "SYSTEM_PROMPT",
    "extract_prompt",
    "normalize_component_name",
    "resolve_component_name",
]

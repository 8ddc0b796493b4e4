"""
Run-level exceptions.

These are the only errors that end a generation run. Everything that goes
wrong with a single prompt is captured into its GenerationResult instead.
"""

from typing import Optional


class ComponentGenError(Exception):
    """Base exception for all run-level failures."""
    pass


class ConfigurationError(ComponentGenError):
    """Raised when required configuration (e.g. the API key) is missing."""
    pass


class PromptDiscoveryError(ComponentGenError):
    """Raised when the prompts folder is unreadable or holds no prompt files."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

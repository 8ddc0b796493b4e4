"""
componentgen - Generate React components from design-package prompts.

Reads v0 prompts from a design package, sends each to the v0 Platform API
and saves the generated component files next to a run manifest.
"""

__version__ = "0.1.0"

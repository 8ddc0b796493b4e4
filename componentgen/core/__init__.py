"""Core configuration and run-level errors."""

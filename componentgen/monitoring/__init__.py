"""
Monitoring Module - logging setup and structured generation events.

Usage:
======
    from componentgen.monitoring import configure_logging, generation_logger

    configure_logging("INFO")
    generation_logger.log_request(request_id, "Hero", prompt)
"""

from componentgen.monitoring.logger import (
    GenerationLogger,
    configure_logging,
    generation_logger,
)

__all__ = [
    "GenerationLogger",
    "configure_logging",
    "generation_logger",
]

"""
Generation Logger - Structured logging for v0 generation requests.

This module provides structured logging for each component generation.
It captures:
- Request details (component, prompt size, follow-up)
- Response details (chosen file, URLs, latency)
- Rate-limit retries
- Errors and failures

Log Format:
==========
Each log entry is a JSON payload with:
- Timestamp
- Request ID (for tracing one component through retries)
- Component name
- Latency
- Success/failure status
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from componentgen.generation.contracts import GenerationResult

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("componentgen.generation.events")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the package logger.

    Safe to call more than once; only the level is updated after the
    first call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The root "componentgen" logger
    """
    root = logging.getLogger("componentgen")
    root.setLevel(level.upper())

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)

    for handler in root.handlers:
        handler.setLevel(level.upper())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class GenerationLogger:
    """
    Structured logger for generation requests.

    Usage:
        gen_logger = GenerationLogger()

        gen_logger.log_request(
            request_id="abc123",
            component="Hero",
            prompt="Build a hero section...",
        )

        gen_logger.log_response(
            request_id="abc123",
            result=result,
            latency_ms=5123.4,
        )
    """

    def __init__(self, base_logger: Optional[logging.Logger] = None):
        self._logger = base_logger or logger

    def log_request(
        self,
        request_id: str,
        component: str,
        prompt: str,
        iterate: Optional[str] = None,
        attempt: int = 1,
    ) -> None:
        """
        Log a generation request.

        Args:
            request_id: Unique request identifier
            component: Target component name
            prompt: Instruction being sent (previewed only)
            iterate: Optional follow-up instruction
            attempt: 1 for the first try, 2 for the rate-limit retry
        """
        log_data = {
            "event": "generation_request",
            "request_id": request_id,
            "component": component,
            "attempt": attempt,
            "prompt_length": len(prompt),
            "prompt_preview": prompt[:100] + "..." if len(prompt) > 100 else prompt,
            "iterate": iterate,
            "timestamp": _now(),
        }
        self._logger.info(f"Generation Request: {json.dumps(log_data)}")

    def log_response(
        self,
        request_id: str,
        result: "GenerationResult",
        latency_ms: float = 0.0,
    ) -> None:
        """
        Log the outcome of a generation request.

        Args:
            request_id: Request identifier (for correlation)
            result: The GenerationResult produced
            latency_ms: Time spent, including any retry
        """
        log_data: Dict[str, Any] = {
            "event": "generation_response",
            "request_id": request_id,
            "component": result.name,
            "success": result.success,
            "latency_ms": round(latency_ms, 2),
            "source_file": result.source_file,
            "content_length": len(result.content) if result.content else 0,
            "chat_url": result.chat_url,
            "demo_url": result.demo_url,
            "timestamp": _now(),
        }
        if result.error:
            log_data["error"] = result.error
        if not result.success and result.available_files:
            log_data["available_files"] = result.available_files

        level = logging.INFO if result.success else logging.WARNING
        self._logger.log(level, f"Generation Response: {json.dumps(log_data)}")

    def log_retry(
        self,
        request_id: str,
        component: str,
        error: str,
        cooldown_seconds: float,
    ) -> None:
        """Log a rate-limit cooldown before the retry."""
        log_data = {
            "event": "generation_retry",
            "request_id": request_id,
            "component": component,
            "error": error,
            "cooldown_seconds": cooldown_seconds,
            "timestamp": _now(),
        }
        self._logger.warning(f"Generation Retry: {json.dumps(log_data)}")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
generation_logger = GenerationLogger()

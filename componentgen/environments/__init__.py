"""
Environments - clients for the external services the generator talks to.

The base module holds the GenerationService interface and the error types;
each service lives in its own subpackage (currently only v0).
"""

from componentgen.environments.base import (
    APIError,
    ErrorKind,
    GenerationService,
    ServiceError,
    V0APIError,
)

__all__ = [
    "APIError",
    "ErrorKind",
    "GenerationService",
    "ServiceError",
    "V0APIError",
]

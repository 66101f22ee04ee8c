"""Async client for the FlareSolverr browser proxy."""

from flaresolverr.client import (
    FlareSolverrClient,
    FlareSolverrError,
    RequestTimeoutError,
    TransportError,
    UnexpectedError,
    classify_error,
    default_http_client,
)
from flaresolverr.config import Settings, settings
from flaresolverr.models import (
    Command,
    CommandType,
    Cookie,
    Response,
    Solution,
    SolutionHeaders,
    session_to_wire,
)

__version__ = "0.1.0"

__all__ = [
    "FlareSolverrClient",
    "FlareSolverrError",
    "RequestTimeoutError",
    "TransportError",
    "UnexpectedError",
    "classify_error",
    "default_http_client",
    "Settings",
    "settings",
    "Command",
    "CommandType",
    "Cookie",
    "Response",
    "Solution",
    "SolutionHeaders",
    "session_to_wire",
]

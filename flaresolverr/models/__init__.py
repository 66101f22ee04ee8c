"""Wire models for FlareSolverr commands and replies."""

from flaresolverr.models.command import NIL_SESSION, Command, CommandType, session_to_wire
from flaresolverr.models.response import Cookie, Response, Solution, SolutionHeaders

__all__ = [
    "NIL_SESSION",
    "Command",
    "CommandType",
    "session_to_wire",
    "Cookie",
    "Response",
    "Solution",
    "SolutionHeaders",
]

"""FlareSolverr command models."""

import uuid
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

NIL_SESSION = uuid.UUID(int=0)


class CommandType(str, Enum):
    """Commands understood by the FlareSolverr endpoint."""

    SESSIONS_CREATE = "sessions.create"
    SESSIONS_LIST = "sessions.list"
    SESSIONS_DESTROY = "sessions.destroy"
    REQUEST_GET = "request.get"
    REQUEST_POST = "request.post"


def session_to_wire(session: uuid.UUID | None) -> str:
    """Return the wire form of a session id, empty for no session."""
    if session is None or session == NIL_SESSION:
        return ""
    return str(session)


class Command(BaseModel):
    """A single command posted to FlareSolverr."""

    cmd: CommandType
    url: str = ""
    session: str = ""
    max_timeout: int = Field(default=0, alias="maxTimeout")
    # Cookies are never sent; the field only mirrors the wire shape.
    cookies: list[Any] = Field(default_factory=list)
    return_only_cookies: bool = Field(default=False, alias="returnOnlyCookies")
    proxy: str = ""
    post_data: str = Field(default="", alias="postData")

    model_config = ConfigDict(populate_by_name=True)

    # Wire fields left out of the payload when empty or false
    OMIT_EMPTY: ClassVar[frozenset[str]] = frozenset(
        {"session", "cookies", "returnOnlyCookies", "proxy", "postData"}
    )

    def to_wire(self) -> dict[str, Any]:
        """Build the JSON object sent to FlareSolverr."""
        data = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in data.items() if key not in self.OMIT_EMPTY or value}

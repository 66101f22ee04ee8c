"""FlareSolverr response models."""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WireModel(BaseModel):
    """Base for decoded replies; null fields fall back to their defaults."""

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Cookie(WireModel):
    """Cookie set by the page, as reported by the browser."""

    name: str = ""
    value: str = ""
    domain: str = ""
    path: str = ""
    expires: float = 0
    size: int = 0
    http_only: bool = Field(default=False, alias="httpOnly")
    secure: bool = False
    session: bool = False
    same_site: str = Field(default="", alias="sameSite")


class SolutionHeaders(WireModel):
    """Subset of response headers exposed by a solution."""

    status: str = ""
    date: str = ""
    content_type: str = Field(default="", alias="content-type")
    expires: str = ""
    cache_control: str = Field(default="", alias="cache-control")
    pragma: str = ""
    x_frame_options: str = Field(default="", alias="x-frame-options")
    x_content_type_options: str = Field(default="", alias="x-content-type-options")
    cf_cache_status: str = Field(default="", alias="cf-cache-status")
    expect_ct: str = Field(default="", alias="expect-ct")
    report_to: str = Field(default="", alias="report-to")
    nel: str = ""
    server: str = ""
    cf_ray: str = Field(default="", alias="cf-ray")
    content_encoding: str = Field(default="", alias="content-encoding")
    alt_svc: str = Field(default="", alias="alt-svc")

    @model_validator(mode="before")
    @classmethod
    def _lowercase_names(cls, data: Any) -> Any:
        """Header names are matched case-insensitively."""
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data


class Solution(WireModel):
    """Result of a page fetch."""

    url: str = ""
    status: int = 0
    headers: SolutionHeaders = Field(default_factory=SolutionHeaders)
    response: str = ""
    cookies: list[Cookie] = Field(default_factory=list)
    user_agent: str = Field(default="", alias="userAgent")


class Response(WireModel):
    """Decoded FlareSolverr reply."""

    status: str = ""
    message: str = ""
    start_timestamp: int = Field(default=0, alias="startTimestamp")
    end_timestamp: int = Field(default=0, alias="endTimestamp")
    version: str = ""
    session: str = ""
    sessions: list[uuid.UUID] = Field(default_factory=list)
    solution: Solution | None = None

    @property
    def ok(self) -> bool:
        """Whether the service reported success."""
        return self.status == "ok"

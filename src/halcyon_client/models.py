from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class HalLink(BaseModel):
    """A single link as it appears in ``_links``."""

    href: str
    method: str = "GET"

    model_config = ConfigDict(frozen=True, extra="ignore")


class HalLinkInfo(HalLink):
    """A link together with the relation name it was published under."""

    rel: str


class HalEndpointDoc(BaseModel):
    """Documentation payload served behind ``<rel>.Docs`` links."""

    request_schema: Optional[Any] = Field(default=None, alias="requestSchema")
    response_schema: Optional[Any] = Field(default=None, alias="responseSchema")
    query_schema: Optional[Any] = Field(default=None, alias="querySchema")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


__all__ = ["HalLink", "HalLinkInfo", "HalEndpointDoc"]

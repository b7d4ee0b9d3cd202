from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from .models import HalLink

QueryArgs = Union[Mapping[str, Any], BaseModel]


def _query_params(query: QueryArgs) -> Mapping[str, Any]:
    if isinstance(query, BaseModel):
        return query.model_dump(mode="json", by_alias=True, exclude_none=True)
    return query


def compose_query_link(link: HalLink, query: Optional[QueryArgs]) -> HalLink:
    """
    Expand a templated query link.
    The query string of ``link.href`` is replaced by ``query``, not merged.
    With no query the original link is returned.
    """
    if query is None:
        return link

    url = httpx.URL(link.href).copy_with(params=_query_params(query))
    return HalLink(href=str(url), method=link.method)


__all__ = ["QueryArgs", "compose_query_link"]

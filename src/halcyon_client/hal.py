"""HAL envelope handling: content negotiation and ``_links``/``_embedded`` separation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx
from pydantic import ValidationError

from .errors import HalcyonParseError, UnsupportedContentTypeError
from .models import HalLink

HALCYON_JSON_MIME_TYPE = "application/json+halcyon"
JSON_MIME_TYPE = "application/json"

LINKS_KEY = "_links"
EMBEDDED_KEY = "_embedded"


@dataclass(frozen=True)
class HalDocument:
    data: Any = field(default_factory=dict)
    links: Optional[Mapping[str, HalLink]] = None
    embedded: Optional[Mapping[str, Tuple[Any, ...]]] = None


def is_accepted_content_type(content_type: str, *, ok: bool) -> bool:
    """
    Halcyon JSON is always accepted.
    Plain JSON is only accepted for error bodies.
    """
    if content_type.startswith(HALCYON_JSON_MIME_TYPE):
        return True
    return not ok and content_type.startswith(JSON_MIME_TYPE)


def parse_result(response: httpx.Response) -> Any:
    """
    Parse a response body according to its content type.
    - No content type: an empty envelope, the body is ignored
    - Accepted content type: JSON, an empty body is None
    - Anything else: UnsupportedContentTypeError
    """
    content_type = response.headers.get("content-type")
    if not content_type:
        return {LINKS_KEY: None, EMBEDDED_KEY: None}

    if not is_accepted_content_type(content_type, ok=response.is_success):
        raise UnsupportedContentTypeError(content_type)

    text = response.text
    if text == "":
        return None
    try:
        return json.loads(text)
    except ValueError as exc:
        snippet = text[:500]
        raise HalcyonParseError(
            f"Expected JSON for {content_type}, got non-JSON body snippet: {snippet!r}"
        ) from exc


def _parse_links(raw: Any) -> Optional[Mapping[str, HalLink]]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise HalcyonParseError(
            f"Expected {LINKS_KEY} to be an object, got {type(raw).__name__}"
        )
    links: Dict[str, HalLink] = {}
    for rel, value in raw.items():
        try:
            links[rel] = HalLink.model_validate(value)
        except ValidationError as exc:
            raise HalcyonParseError(f"Malformed link {rel!r}: {exc}") from exc
    return MappingProxyType(links)


def _parse_embedded(raw: Any) -> Optional[Mapping[str, Tuple[Any, ...]]]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise HalcyonParseError(
            f"Expected {EMBEDDED_KEY} to be an object, got {type(raw).__name__}"
        )
    embedded: Dict[str, Tuple[Any, ...]] = {}
    for rel, value in raw.items():
        # A single embedded resource is a one element collection, null is empty.
        if value is None:
            embedded[rel] = ()
        elif isinstance(value, list):
            embedded[rel] = tuple(value)
        else:
            embedded[rel] = (value,)
    return MappingProxyType(embedded)


def split_envelope(document: Any) -> HalDocument:
    """
    Separate the hypermedia envelope from the domain payload.
    The input is left untouched; the payload is a fresh dict without the
    envelope keys.
    """
    if document is None:
        return HalDocument()
    if not isinstance(document, dict):
        return HalDocument(data=document)

    data = {k: v for k, v in document.items() if k not in (LINKS_KEY, EMBEDDED_KEY)}
    return HalDocument(
        data=data,
        links=_parse_links(document.get(LINKS_KEY)),
        embedded=_parse_embedded(document.get(EMBEDDED_KEY)),
    )


__all__ = [
    "HALCYON_JSON_MIME_TYPE",
    "JSON_MIME_TYPE",
    "HalDocument",
    "is_accepted_content_type",
    "parse_result",
    "split_envelope",
]

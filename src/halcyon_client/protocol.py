from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import (
    HalcyonParseError,
    UnsupportedContentTypeError,
    classify_error,
)
from .fetcher import Fetcher, RequestBody
from .hal import HALCYON_JSON_MIME_TYPE, HalDocument, parse_result, split_envelope
from .models import HalLink
from .observability import HAL_RESPONSE, log_event

log = logging.getLogger("halcyon_client.protocol")


@dataclass(frozen=True)
class LoadOptions:
    req_body: RequestBody = None
    content_type: Optional[str] = None


class HalcyonProtocol:
    """
    Stateless request/response handling for one fetcher.
    Issues a single request per call; no retries, no caching.
    """

    def __init__(self, fetcher: Fetcher):
        self.fetcher = fetcher

    async def load_raw(
        self, link: HalLink, options: Optional[LoadOptions] = None
    ) -> httpx.Response:
        options = options or LoadOptions()
        headers: Dict[str, Optional[str]] = {"Accept": HALCYON_JSON_MIME_TYPE}
        if options.content_type is not None:
            headers["Content-Type"] = options.content_type
        return await self.fetcher.fetch(
            link.href, method=link.method, headers=headers, body=options.req_body
        )

    async def load_document(
        self, link: HalLink, options: Optional[LoadOptions] = None
    ) -> HalDocument:
        response = await self.load_raw(link, options)
        return self.process_result(response)

    def process_result(self, response: httpx.Response) -> HalDocument:
        """
        Classify a response.
        - Success: the parsed, envelope-split document
        - Failure: raises HalError or HalcyonHTTPError
        """
        log_event(
            HAL_RESPONSE,
            level=logging.DEBUG,
            logger=log,
            status=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        if not response.is_success:
            document: Any
            try:
                document = parse_result(response)
            except (UnsupportedContentTypeError, HalcyonParseError):
                document = None
            raise classify_error(response, document)

        return split_envelope(parse_result(response))


__all__ = ["HalcyonProtocol", "LoadOptions"]

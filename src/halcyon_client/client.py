from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import HalcyonModelValidationError, UnknownRelationError
from .fetcher import Fetcher
from .hal import JSON_MIME_TYPE, HalDocument, split_envelope
from .models import HalLink, HalLinkInfo
from .multipart import FormPayload, json_to_form_data
from .observability import HAL_NAVIGATE, log_event, navigating
from .protocol import HalcyonProtocol, LoadOptions
from .query import QueryArgs, compose_query_link

T = TypeVar("T", bound=BaseModel)

DOCS_SUFFIX = ".Docs"

log = logging.getLogger("halcyon_client.client")


def _json_body(data: Any) -> LoadOptions:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    return LoadOptions(req_body=json.dumps(data), content_type=JSON_MIME_TYPE)


def _form_body(data: FormPayload) -> LoadOptions:
    # No content type, httpx picks the multipart boundary.
    return LoadOptions(req_body=json_to_form_data(data))


class Embed:
    """The embedded documents published under one relation name."""

    def __init__(self, name: str, embeds: Optional[Sequence[Any]], fetcher: Fetcher):
        self.name = name
        self._embeds = tuple(embeds) if embeds is not None else ()
        self._fetcher = fetcher

    def get_all_clients(self) -> List["HalEndpointClient"]:
        """Build a new client for every embedded document, in order."""
        return [HalEndpointClient(embed, self._fetcher) for embed in self._embeds]

    def __len__(self) -> int:
        return len(self._embeds)


class HalEndpointClient:
    """
    A single visit to a hal endpoint: the data that was returned plus the
    links and embeds that came with it. The hal properties are removed from
    the data.

    Navigation methods issue exactly one request and return a new client;
    this client stays usable for further requests.
    """

    def __init__(self, data: Any, fetcher: Fetcher):
        doc = data if isinstance(data, HalDocument) else split_envelope(data)
        self._data = doc.data
        self._links: Mapping[str, HalLink] = doc.links or {}
        self._embeds = doc.embedded or {}
        self._fetcher = fetcher
        self._protocol = HalcyonProtocol(fetcher)

    @classmethod
    async def load(
        cls, link: HalLink, fetcher: Fetcher, options: Optional[LoadOptions] = None
    ) -> "HalEndpointClient":
        """Load ``link`` and wrap the response in a new client."""
        document = await HalcyonProtocol(fetcher).load_document(link, options)
        return cls(document, fetcher)

    @property
    def fetcher(self) -> Fetcher:
        return self._fetcher

    def get_data(self) -> Any:
        return self._data

    def get_data_as(self, model: Type[T]) -> T:
        try:
            return model.model_validate(self._data)
        except ValidationError as exc:
            raise HalcyonModelValidationError(
                f"Response did not match model {model.__name__}: {exc}"
            ) from exc

    # --- Embeds ---

    def get_embed(self, name: str) -> Embed:
        """An absent name yields an empty Embed."""
        return Embed(name, self._embeds.get(name), self._fetcher)

    def has_embed(self, name: str) -> bool:
        return name in self._embeds

    def get_all_embeds(self) -> List[Embed]:
        return [
            Embed(name, embeds, self._fetcher) for name, embeds in self._embeds.items()
        ]

    # --- Links ---

    def get_link(self, ref: str) -> HalLink:
        try:
            return self._links[ref]
        except KeyError:
            raise UnknownRelationError(ref) from None

    def has_link(self, ref: str) -> bool:
        return ref in self._links

    def get_all_links(self) -> List[HalLinkInfo]:
        return [
            HalLinkInfo(href=link.href, method=link.method, rel=rel)
            for rel, link in self._links.items()
        ]

    def has_link_doc(self, ref: str) -> bool:
        return self.has_link(ref + DOCS_SUFFIX)

    async def load_link_doc(self, ref: str) -> "HalEndpointClient":
        """Load the documentation published for ``ref``."""
        return await self.load_link(ref + DOCS_SUFFIX)

    def _resolve(self, ref: str, query: Optional[QueryArgs] = None) -> HalLink:
        link = compose_query_link(self.get_link(ref), query)
        log_event(
            HAL_NAVIGATE,
            level=logging.DEBUG,
            logger=log,
            rel=ref,
            method=link.method,
            endpoint=link.href,
        )
        return link

    async def _load(
        self,
        ref: str,
        query: Optional[QueryArgs] = None,
        options: Optional[LoadOptions] = None,
    ) -> "HalEndpointClient":
        with navigating(ref):
            link = self._resolve(ref, query)
            document = await self._protocol.load_document(link, options)
        return HalEndpointClient(document, self._fetcher)

    async def _load_raw(
        self,
        ref: str,
        query: Optional[QueryArgs] = None,
        options: Optional[LoadOptions] = None,
    ) -> httpx.Response:
        with navigating(ref):
            return await self._protocol.load_raw(self._resolve(ref, query), options)

    # --- Navigation ---

    async def load_link(self, ref: str) -> "HalEndpointClient":
        """
        Load a link and return a new client for the result. The ref must
        exist, use has_link to check; UnknownRelationError otherwise.
        """
        return await self._load(ref)

    async def load_link_with_query(
        self, ref: str, query: Optional[QueryArgs]
    ) -> "HalEndpointClient":
        """Load a link whose query string is replaced by ``query``."""
        return await self._load(ref, query)

    async def load_link_with_body(self, ref: str, data: Any) -> "HalEndpointClient":
        """Load a link sending ``data`` as a JSON body."""
        return await self._load(ref, None, _json_body(data))

    async def load_link_with_query_and_body(
        self, ref: str, query: Optional[QueryArgs], data: Any
    ) -> "HalEndpointClient":
        return await self._load(ref, query, _json_body(data))

    async def load_link_with_form(
        self, ref: str, data: FormPayload
    ) -> "HalEndpointClient":
        """Load a link sending ``data`` flattened into a multipart form."""
        return await self._load(ref, None, _form_body(data))

    async def load_link_with_query_and_form(
        self, ref: str, query: Optional[QueryArgs], data: FormPayload
    ) -> "HalEndpointClient":
        return await self._load(ref, query, _form_body(data))

    # --- Raw navigation, the response is returned unparsed ---

    async def load_raw_link(self, ref: str) -> httpx.Response:
        return await self._load_raw(ref)

    async def load_raw_link_with_query(
        self, ref: str, query: Optional[QueryArgs]
    ) -> httpx.Response:
        return await self._load_raw(ref, query)

    async def load_raw_link_with_body(self, ref: str, data: Any) -> httpx.Response:
        return await self._load_raw(ref, None, _json_body(data))

    async def load_raw_link_with_query_and_body(
        self, ref: str, query: Optional[QueryArgs], data: Any
    ) -> httpx.Response:
        return await self._load_raw(ref, query, _json_body(data))

    async def load_raw_link_with_form(
        self, ref: str, data: FormPayload
    ) -> httpx.Response:
        return await self._load_raw(ref, None, _form_body(data))

    async def load_raw_link_with_query_and_form(
        self, ref: str, query: Optional[QueryArgs], data: FormPayload
    ) -> httpx.Response:
        return await self._load_raw(ref, query, _form_body(data))


async def load_entry_point(
    fetcher: Fetcher, href: str = "/", method: str = "GET"
) -> HalEndpointClient:
    """Load the root resource of an API."""
    return await HalEndpointClient.load(HalLink(href=href, method=method), fetcher)


__all__ = ["Embed", "HalEndpointClient", "load_entry_point", "DOCS_SUFFIX"]

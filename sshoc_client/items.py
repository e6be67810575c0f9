from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from .params import autocomplete_query, create_url, search_query
from .types import AutocompleteParams, AutocompleteResponse, SearchParams, SearchResponse

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/item-search"
AUTOCOMPLETE_PATH = "/api/item-search/autocomplete"
DEFAULT_TIMEOUT = 10.0

ResponseT = TypeVar("ResponseT", bound=BaseModel)
ParamsT = TypeVar("ParamsT", bound=BaseModel)


class PreparedRequest(Generic[ResponseT]):
    """A GET whose URL is known up front and whose network call is deferred.

    ``url`` is computed without I/O. Every ``await request()`` sends one new
    request; nothing is cached. Transport failures (``httpx.RequestError``,
    ``httpx.HTTPStatusError``, a non-JSON body) and
    ``pydantic.ValidationError`` for a body of the wrong shape reach the
    caller as raised.
    """

    method = "GET"

    def __init__(
        self,
        url: str,
        response_model: type[ResponseT],
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.response_model = response_model
        self._timeout = timeout
        self._transport = transport

    async def request(self) -> ResponseT:
        logger.debug("%s %s", self.method, self.url)
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            r = await client.get(self.url, headers={"Accept": "application/json"})
            logger.debug("%s %s -> %s", self.method, self.url, r.status_code)
            r.raise_for_status()
            data = r.json()
        return self.response_model.model_validate(data)

    def __repr__(self) -> str:
        return f"PreparedRequest({self.method} {self.url})"


def _coerce(model: type[ParamsT], params: Any, overrides: dict[str, Any]) -> ParamsT:
    if isinstance(params, model) and not overrides:
        return params
    if isinstance(params, BaseModel):
        data = params.model_dump(exclude_unset=True)
    else:
        data = dict(params or {})
    data.update(overrides)
    return model.model_validate(data)


class Items:
    """Item-search operations bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self._timeout = timeout
        self._transport = transport

    def _prepare(self, url: str, response_model: type[ResponseT]) -> PreparedRequest[ResponseT]:
        logger.debug("prepared request: %s", url)
        return PreparedRequest(
            url, response_model, timeout=self._timeout, transport=self._transport
        )

    def search(
        self, params: SearchParams | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> PreparedRequest[SearchResponse]:
        search_params = _coerce(SearchParams, params, kwargs)
        url = create_url(self.base_url, SEARCH_PATH, search_query(search_params))
        return self._prepare(url, SearchResponse)

    def autocomplete(
        self, params: AutocompleteParams | Mapping[str, Any] | None = None, **kwargs: Any
    ) -> PreparedRequest[AutocompleteResponse]:
        autocomplete_params = _coerce(AutocompleteParams, params, kwargs)
        url = create_url(self.base_url, AUTOCOMPLETE_PATH, autocomplete_query(autocomplete_params))
        return self._prepare(url, AutocompleteResponse)

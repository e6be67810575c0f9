from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote, urlencode

from .types import AutocompleteParams, SearchParams

DEFAULT_ORDER = ("label",)
DEFAULT_PAGE = 1
DEFAULT_PERPAGE = 25

QueryPairs = list[tuple[str, str]]


def _to_wire(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _pairs(key: str, value: Any) -> QueryPairs:
    # absent values leave no trace; lists repeat the key per element
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [(key, _to_wire(v)) for v in value]
    return [(key, _to_wire(value))]


def search_query(params: SearchParams | Mapping[str, Any] | None) -> QueryPairs:
    """Map a search request onto ordered wire pairs for ``/api/item-search``."""
    if not isinstance(params, SearchParams):
        params = SearchParams.model_validate(dict(params or {}))

    order = params.order if params.order is not None else list(DEFAULT_ORDER)
    page = params.page if params.page is not None else DEFAULT_PAGE
    perpage = params.perpage if params.perpage is not None else DEFAULT_PERPAGE

    pairs: QueryPairs = []
    for key, value in (
        ("f.activity", params.activities),
        ("advanced", params.advanced),
        ("categories", params.categories),
        ("includeSteps", params.includeSteps),
        ("f.keyword", params.keywords),
        ("f.language", params.languages),
        ("order", order),
        ("page", page),
        ("perpage", perpage),
        ("q", params.q),
        ("f.source", params.sources),
    ):
        pairs.extend(_pairs(key, value))
    for key, value in params.field_filters.items():
        pairs.extend(_pairs(key, value))
    return pairs


def autocomplete_query(params: AutocompleteParams | Mapping[str, Any]) -> QueryPairs:
    if not isinstance(params, AutocompleteParams):
        params = AutocompleteParams.model_validate(dict(params))
    return _pairs("category", params.category) + _pairs("q", params.q)


def create_url(base_url: str, pathname: str, query: Iterable[tuple[str, str]] = ()) -> str:
    """Join ``base_url`` and ``pathname`` and append a percent-encoded query.

    Spaces are encoded as ``%20``. No ``?`` is emitted for an empty query.
    """
    url = base_url.rstrip("/") + pathname
    encoded = urlencode(list(query), quote_via=quote)
    return f"{url}?{encoded}" if encoded else url

"""Parsers for MetaForge JSON responses: record arrays and pagination."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .constants import (
    CURRENT_PAGE_KEYS,
    GENERIC_LIST_KEYS,
    HAS_NEXT_PAGE_KEY,
    NEXT_PAGE_KEYS,
    PAGE_PARAM,
    PAGINATION_PATHS,
    TOTAL_ITEMS_KEYS,
    TOTAL_PAGES_KEYS,
)

logger = logging.getLogger(__name__)


def candidate_keys(key: str) -> list[str]:
    """Entity key first, then the generic aliases, without duplicates."""
    keys = [key]
    keys.extend(k for k in GENERIC_LIST_KEYS if k != key)
    return keys


def _find_list(container: Mapping, keys: list[str]) -> Optional[list]:
    for candidate in keys:
        value = container.get(candidate)
        if isinstance(value, list):
            return value
    return None


def extract_records(payload: Any, key: str) -> list:
    """
    Locate the record array inside one page's payload.
    Tries the payload itself, the candidate keys at top level, then the
    same keys inside a nested "data" object. Unknown shapes yield [] and a
    warning listing the keys that were present; this never raises.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        logger.warning(
            "Unexpected MetaForge response shape for %s: %s payload",
            key,
            type(payload).__name__,
        )
        return []

    keys = candidate_keys(key)
    found = _find_list(payload, keys)
    if found is not None:
        return found

    nested = payload.get("data")
    if isinstance(nested, Mapping):
        found = _find_list(nested, keys)
        if found is not None:
            return found

    logger.warning(
        "Unexpected MetaForge response shape for %s; available response keys: %s",
        key,
        list(payload.keys()),
    )
    if isinstance(nested, Mapping):
        logger.warning("Available data keys: %s", list(nested.keys()))
    return []


def extract_pagination(payload: Any) -> Optional[Mapping]:
    """Return the first pagination object found under the known locations."""
    if not isinstance(payload, Mapping):
        return None
    for path in PAGINATION_PATHS:
        current: Any = payload
        for part in path:
            current = current.get(part) if isinstance(current, Mapping) else None
        if isinstance(current, Mapping):
            return current
    return None


def _as_page_number(value: Any) -> Optional[int]:
    """Page numbers arrive as ints or digit strings; anything else is ignored."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _first_page_number(pagination: Mapping, keys: tuple[str, ...]) -> Optional[int]:
    for k in keys:
        number = _as_page_number(pagination.get(k))
        if number:
            return number
    return None


def next_page(current_page: int, pagination: Optional[Mapping]) -> Optional[int]:
    """
    Compute the next page number, in priority order: explicit next pointer,
    hasNextPage flag, then total pages against the reported current page.
    None means pagination is exhausted.
    """
    if not pagination:
        return None

    pointer = _first_page_number(pagination, NEXT_PAGE_KEYS)
    if pointer:
        return pointer

    if pagination.get(HAS_NEXT_PAGE_KEY) is True:
        return current_page + 1

    total_pages = _first_page_number(pagination, TOTAL_PAGES_KEYS)
    page_field = _first_page_number(pagination, CURRENT_PAGE_KEYS) or current_page
    if total_pages and page_field < total_pages:
        return page_field + 1

    return None


def pagination_totals(pagination: Mapping) -> tuple[Any, Any]:
    """(total items, total pages) as reported, None when absent."""
    total_items = next(
        (pagination[k] for k in TOTAL_ITEMS_KEYS if pagination.get(k)),
        None,
    )
    total_pages = next(
        (pagination[k] for k in TOTAL_PAGES_KEYS if pagination.get(k)),
        None,
    )
    return total_items, total_pages


def build_page_url(endpoint: str, page: int) -> str:
    """Append page=<n>, using & when the endpoint already has a query string."""
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{PAGE_PARAM}={page}"

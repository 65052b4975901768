"""
Follow-up requests that turn one logical query into a lazy record stream.

Two strategies, chosen from the first response:
- Link header: follow `rel="next"` until a page has none. The fetcher resolves
  the link; this module only sees absolute URLs.
- Total count: no Link but a `total` in the envelope; bump `page` until the
  running record count reaches `total`.
Anything else is a single complete page.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, Optional, Tuple

import httpx

from .payload import project_field

log = logging.getLogger("freshservice_toolkit.core.pagination")

# Guards against a server whose `total` never matches what it returns.
MAX_CONSECUTIVE_EMPTY_PAGES = 3

# fetch_page(url) -> (envelope, resolved next link or None), or None when the
# page is gone (404).
PageFetcher = Callable[[str], Optional[Tuple[Any, Optional[str]]]]


def extract_records(envelope: Any, field_name: Optional[str]) -> List[Any]:
    """Records contributed by one page; null or missing counts as none."""
    value = project_field(envelope, field_name)
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _total(envelope: Any) -> Optional[int]:
    if not isinstance(envelope, dict):
        return None
    total = envelope.get("total")
    if isinstance(total, bool) or not isinstance(total, int):
        return None
    return total


def _with_page(url: str, page: int) -> str:
    return str(httpx.URL(url).copy_set_param("page", page))


def _current_page(url: str) -> int:
    raw = httpx.URL(url).params.get("page")
    try:
        return max(1, int(raw)) if raw is not None else 1
    except ValueError:
        return 1


def paginate(
    fetch_page: PageFetcher, first_url: str, field_name: Optional[str]
) -> Iterator[Any]:
    """Yield every record of a query, one page at a time."""
    first = fetch_page(first_url)
    if first is None:
        return

    envelope, link = first
    records = extract_records(envelope, field_name)
    yield from records

    total = _total(envelope)

    uri: Optional[str]
    if link:
        uri = link
        while uri is not None:
            log.debug("fs.page", extra={"url": uri, "strategy": "link"})
            page = fetch_page(uri)
            if page is None:
                uri = None
                continue
            envelope, uri = page
            yield from extract_records(envelope, field_name)
        return

    if total is None:
        return

    received = len(records)
    page_no = _current_page(first_url)
    empty_streak = 0
    uri = _with_page(first_url, page_no + 1) if received < total else None
    while uri is not None:
        log.debug("fs.page", extra={"url": uri, "strategy": "total"})
        page = fetch_page(uri)
        if page is None:
            uri = None
            continue
        envelope, _ = page
        records = extract_records(envelope, field_name)
        yield from records

        received += len(records)
        empty_streak = 0 if records else empty_streak + 1
        page_no += 1
        if received >= total:
            uri = None
        elif empty_streak >= MAX_CONSECUTIVE_EMPTY_PAGES:
            log.warning(
                "fs.page.stalled",
                extra={"url": uri, "received": received, "total": total},
            )
            uri = None
        else:
            uri = _with_page(first_url, page_no + 1)


__all__ = [
    "extract_records",
    "paginate",
    "MAX_CONSECUTIVE_EMPTY_PAGES",
]

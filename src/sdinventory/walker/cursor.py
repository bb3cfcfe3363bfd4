"""Restartable page sequence over one "list children" call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")

PageFetcher = Callable[[Optional[str]], tuple[Sequence[T], Optional[str]]]


@dataclass(slots=True, frozen=True)
class Page(Generic[T]):
    """
    One fetched page.

    token is the page token that produced this page (None for the first
    page); resuming from token re-fetches exactly this page.
    """

    token: Optional[str]
    items: Sequence[T]
    next_token: Optional[str]


class PaginationCursor(Generic[T]):
    """
    Iterate pages of a paginated listing, starting from an arbitrary token.

    Pages are fetched lazily, one per iteration step, so a consumer that stops
    iterating never fetches the following page. Fetch errors propagate.
    """

    def __init__(self, fetch: PageFetcher, *, start_token: Optional[str] = None) -> None:
        self._fetch = fetch
        self._start_token = start_token

    def __iter__(self) -> Iterator[Page[T]]:
        token = self._start_token
        while True:
            items, next_token = self._fetch(token)
            yield Page(token=token, items=items, next_token=next_token or None)
            if not next_token:
                return
            token = next_token

"""
Client-side "show more" window over an already fetched alert list.
"""
from __future__ import annotations

from typing import Sequence, TypeVar

from .const import ALERTS_PAGE_SIZE

T = TypeVar("T")


def slice_alerts(alerts: Sequence[T], page: int, page_size: int = ALERTS_PAGE_SIZE) -> list[T]:
    """Return the first page * page_size entries (or the whole list if shorter)."""
    return list(alerts[: page * page_size])


class AlertPager:
    """Page counter for the alert history. Never triggers a fetch."""

    def __init__(self, page_size: int = ALERTS_PAGE_SIZE) -> None:
        self.page_size = page_size
        self.page = 1

    def reset(self) -> None:
        """Back to the first page; called whenever a fresh list is adopted."""
        self.page = 1

    def show_more(self) -> None:
        self.page += 1

    def visible_slice(self, alerts: Sequence[T]) -> list[T]:
        return slice_alerts(alerts, self.page, self.page_size)

    def has_more(self, alerts: Sequence[T]) -> bool:
        """True iff the full list is strictly longer than the visible slice."""
        return len(alerts) > len(self.visible_slice(alerts))

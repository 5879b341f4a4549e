from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_PAGE_SIZE = 20


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int | None = None

    def update_from_metadata(self, metadata: Mapping[str, Any]) -> "PaginationState":
        """Adopt the server's page accounting; nothing is recomputed locally."""
        current = metadata.get("current_page")
        total = metadata.get("total_pages")
        if current is not None:
            self.page = max(1, int(current))
        if total is not None:
            self.total_pages = int(total)
        return self


def can_go_previous(page: int) -> bool:
    return page > 1


def can_go_next(page: int, total_pages: int | None) -> bool:
    if total_pages is None:
        return False
    return page < total_pages


def next_page(state: PaginationState) -> PaginationState:
    if not can_go_next(state.page, state.total_pages):
        return state
    state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int) -> PaginationState:
    page = max(1, page)
    if state.total_pages is not None:
        page = min(page, max(1, state.total_pages))
    state.page = page
    return state

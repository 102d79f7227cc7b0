"""Board controller: assembles a game from the fetcher and handles reveals."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import (
    NUM_CLUES_PER_CATEGORY,
    Board,
    Category,
    RenderInstruction,
    RevealState,
    cell_id,
    handle_cell_click,
)
from .fetcher import CategoryFetcher, FetchResult

logger = logging.getLogger(__name__)


class BoardBusyError(RuntimeError):
    """Raised when the board is touched while a setup is in flight."""


@dataclass(frozen=True)
class CellView:
    cell_id: str
    state: Optional[RevealState]
    text: str

    @property
    def css_class(self) -> str:
        # Columns whose category failed to load have no clue behind the cell
        return self.state.css_class if self.state is not None else "empty"


@dataclass
class Grid:
    """Rendered board: one header per category, rows indexed by clue."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[CellView]] = field(default_factory=list)


class BoardController:
    """Owns one board and the loading flag guarding its setup."""

    def __init__(self, fetcher: CategoryFetcher, *, concurrent: bool = False):
        self.fetcher = fetcher
        self.concurrent = concurrent
        self.board = Board()
        self.loading = False
        self.started = False
        self.fetch_errors: List[str] = []

    # ---- loading view ----

    def _show_loading_view(self) -> None:
        self.loading = True
        self.board = Board()
        self.fetch_errors = []

    def _hide_loading_view(self) -> None:
        self.loading = False
        self.started = True

    # ---- setup ----

    async def setup_and_start(self) -> bool:
        """Fetch a fresh board. Returns False if a setup was already running."""

        if self.loading:
            logger.info("Game setup already in progress; ignoring start request")
            return False

        self._show_loading_view()
        try:
            ids_result = await self.fetcher.fetch_category_ids()
            if not ids_result.ok:
                self._record_failure("categories", ids_result)
            category_ids = ids_result.value or []
            logger.info("Loading %d categories", len(category_ids))

            self.board = Board()
            if self.concurrent:
                results = await asyncio.gather(
                    *(self.fetcher.fetch_category(cid) for cid in category_ids)
                )
                for category_id, result in zip(category_ids, results):
                    self.board.categories.append(self._accept(category_id, result))
            else:
                for category_id in category_ids:
                    result = await self.fetcher.fetch_category(category_id)
                    self.board.categories.append(self._accept(category_id, result))
        finally:
            self._hide_loading_view()

        logger.info(
            "Board ready with %d categories (%d failed fetches)",
            len(self.board),
            len(self.fetch_errors),
        )
        return True

    def _accept(self, category_id: int, result: FetchResult[Category]) -> Category:
        if result.ok and result.value is not None:
            return result.value
        # Degrade: keep the column slot so the remaining categories stay put
        self._record_failure(f"category {category_id}", result)
        return Category()

    def _record_failure(self, what: str, result: FetchResult) -> None:
        message = f"Could not load {what}: {result.error}"
        logger.debug("Degrading board: %s", message)
        self.fetch_errors.append(message)

    # ---- play ----

    def handle_click(self, category_index: int, clue_index: int) -> RenderInstruction:
        if self.loading:
            raise BoardBusyError("Board is still loading")
        return handle_cell_click(self.board, category_index, clue_index)

    def render(self) -> Grid:
        if self.loading or not self.board.categories:
            return Grid()

        grid = Grid(headers=[category.title for category in self.board.categories])
        for clue_index in range(NUM_CLUES_PER_CATEGORY):
            row: List[CellView] = []
            for category_index, category in enumerate(self.board.categories):
                ident = cell_id(category_index, clue_index)
                if clue_index < len(category.clues):
                    clue = category.clues[clue_index]
                    row.append(CellView(ident, clue.showing, clue.display_text()))
                else:
                    row.append(CellView(ident, None, ""))
            grid.rows.append(row)
        return grid

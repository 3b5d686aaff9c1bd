"""Page loading and cross-page selection for one job search session.

Every page fetch replaces the visible rows wholesale, and upstream records
carry no reliable id. Rows are keyed by fingerprint; the SelectionStore is
the only authority on what is selected, and the checked rows on screen are
recomputed from it after every event.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import config as config
from errors import CreateError, FetchError, error_message
from fingerprint import fingerprint
from models import ApplicationPayload, Row, SearchQuery
from notifier import LoggingNotifier
from selection import SelectionStore
from sources.base import BulkCreateSink, PageSource

logger = logging.getLogger(__name__)

GENERIC_FETCH_ERROR = "Could not load jobs"
CREATE_FAILED = "Insert failed"


@dataclass(frozen=True)
class ViewState:
    """Snapshot of everything the presentation layer renders."""

    rows: tuple
    selected_row_keys: tuple
    loading: bool
    error_message: str
    page: int
    total_pages: int
    total_count: int
    disable_next: bool
    disable_prev: bool
    disable_create: bool
    selection_count: int


def total_pages(total_count: int, page_size: int) -> int:
    return max(1, math.ceil((total_count or 0) / page_size))


class PageReconciler:
    def __init__(
        self,
        source: PageSource,
        sink: Optional[BulkCreateSink] = None,
        notifier=None,
        page_size: Optional[int] = None,
        query: Optional[SearchQuery] = None,
    ):
        self.source = source
        self.sink = sink
        self.notifier = notifier or LoggingNotifier()
        self.page_size = page_size or config.PAGE_SIZE
        self.query = query or SearchQuery()

        self.page = 1
        self.total_count = 0
        self.rows: list[Row] = []
        self.selected_row_keys: list[str] = []
        self.loading = False
        self.error_message = ""

        self._selection = SelectionStore()
        self._listeners: list[Callable[[ViewState], None]] = []

    # --- derived state ---

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    @property
    def disable_prev(self) -> bool:
        return self.loading or self.page <= 1

    @property
    def disable_next(self) -> bool:
        return self.loading or self.page >= self.total_pages

    @property
    def disable_create(self) -> bool:
        return self.loading or self._selection.size == 0

    @property
    def selection_count(self) -> int:
        return self._selection.size

    def is_selected(self, key: str) -> bool:
        return self._selection.has(key)

    def selected_records(self) -> list[dict]:
        return self._selection.values()

    def view_state(self) -> ViewState:
        return ViewState(
            rows=tuple(self.rows),
            selected_row_keys=tuple(self.selected_row_keys),
            loading=self.loading,
            error_message=self.error_message,
            page=self.page,
            total_pages=self.total_pages,
            total_count=self.total_count,
            disable_next=self.disable_next,
            disable_prev=self.disable_prev,
            disable_create=self.disable_create,
            selection_count=self.selection_count,
        )

    # --- change notification ---

    def subscribe(self, listener: Callable[[ViewState], None]) -> Callable[[], None]:
        """Register a listener called with a ViewState after every event."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        state = self.view_state()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.warning(f"State listener {listener!r} failed: {e}")

    # --- events ---

    async def search(self, query: Optional[SearchQuery] = None) -> None:
        """New search: back to page 1 with an empty selection, then load."""
        if self.loading:
            return
        if query is not None:
            self.query = query
        self.page = 1
        self._selection.clear()
        self._sync_selected_row_keys()
        logger.info(
            f"Search: keywords={self.query.keywords!r} location={self.query.location!r} "
            f"min_salary={self.query.min_salary}"
        )
        await self.load_page()

    async def load_page(self) -> bool:
        """Fetch the page under the cursor. Returns True when rows were replaced."""
        if self.loading:
            return False
        loaded = False
        self.loading = True
        self.error_message = ""
        self._emit()
        try:
            result = await self.source.fetch(
                self.query.keywords,
                self.query.location,
                self.query.min_salary,
                self.page,
                self.page_size,
            )
            rows = [
                Row(key=fingerprint(r), record=dict(r))
                for r in result.jobs
                if isinstance(r, dict)
            ]
            total_count = int(result.total_count or 0)
        except FetchError as e:
            self._fetch_failed(e)
        except Exception as e:
            self._fetch_failed(FetchError(str(e)))
        else:
            self.rows = rows
            self.total_count = total_count
            self._sync_selected_row_keys()
            loaded = True
        finally:
            self.loading = False
        self._emit()
        return loaded

    def _fetch_failed(self, exc: FetchError) -> None:
        # Rows, total count and selection are left as they were
        self.error_message = error_message(exc, GENERIC_FETCH_ERROR)
        logger.warning(f"Page {self.page} load failed: {self.error_message}")

    async def next_page(self) -> None:
        if self.disable_next:
            return
        await self._go_to(self.page + 1)

    async def prev_page(self) -> None:
        if self.disable_prev:
            return
        await self._go_to(max(1, self.page - 1))

    async def _go_to(self, page: int) -> None:
        # The cursor stays on the rows still shown if the fetch fails
        previous = self.page
        self.page = page
        if not await self.load_page():
            self.page = previous

    def select(self, selected: Iterable) -> None:
        """Reconcile the whole visible page against the rows now checked.

        Rows on this page that are not in ``selected`` are dropped from the
        selection, even if they were picked on an earlier visit. Selections
        from other pages are untouched.
        """
        checked = {s.key if isinstance(s, Row) else s for s in (selected or ())}
        for row in self.rows:
            if row.key in checked:
                self._selection.upsert(row.key, row.record)
            else:
                self._selection.remove(row.key)
        self._sync_selected_row_keys()
        self._emit()

    async def create_applications(self) -> list:
        """Send every selected job, across all pages, to the create sink."""
        payloads = [ApplicationPayload.from_record(r) for r in self._selection.values()]
        if not payloads or self.loading:
            return []
        if self.sink is None:
            raise RuntimeError("No bulk create sink configured")

        self.loading = True
        self.error_message = ""
        self._emit()
        ids = []
        try:
            ids = list(await self.sink.create(payloads) or [])
        except CreateError as e:
            self._create_failed(e)
        except Exception as e:
            self._create_failed(CreateError(str(e)))
        else:
            self._selection.clear()
            self._sync_selected_row_keys()
            self._notify("Job Applications created", f"Created {len(ids)} record(s)", "success")
        finally:
            self.loading = False
        self._emit()
        return ids

    def _create_failed(self, exc: CreateError) -> None:
        # Selection is kept so the user can retry without re-selecting
        self.error_message = error_message(exc, CREATE_FAILED)
        self._notify(CREATE_FAILED, self.error_message, "error")

    def _notify(self, title: str, message: str, severity: str) -> None:
        try:
            self.notifier.notify(title, message, severity)
        except Exception as e:
            logger.warning(f"Notifier failed to deliver {title!r}: {e}")

    def _sync_selected_row_keys(self) -> None:
        on_page = [row.key for row in self.rows]
        self.selected_row_keys = [k for k in dict.fromkeys(on_page) if self._selection.has(k)]

"""Browsing session: navigation, listing, paging, selection and export.

The session owns one folder view of one bucket. Listing and export run in a
worker thread so the event loop stays responsive; paging and selection are
plain in-memory updates.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

from s3_navigator.browser.collaborators import ArchiveBuilder, StoreClient
from s3_navigator.browser.events import (
    BrowserEvent,
    ExportCompletedEvent,
    ExportFailedEvent,
    ExportStartedEvent,
    Listener,
    ListingErrorEvent,
)
from s3_navigator.browser.export import ExportOrchestrator, ExportResult
from s3_navigator.browser.items import FolderItem, NavigationItem
from s3_navigator.browser.listing import ListingEngine
from s3_navigator.browser.navigation import Breadcrumb, NavigationStatus, Navigator
from s3_navigator.browser.pagination import PageInfo, Pager
from s3_navigator.browser.selection import SelectionState, SelectionTracker
from s3_navigator.core import get_logger
from s3_navigator.core.exceptions import ExportError, ListingError
from s3_navigator.schemas import BucketConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class BrowserView:
    """Snapshot of everything a renderer needs."""

    bucket: str
    prefix: str
    status: NavigationStatus
    breadcrumbs: list[Breadcrumb]
    items: list[NavigationItem]
    selection_state: SelectionState
    selected_count: int
    page: PageInfo
    search_query: str


class BrowserSession:
    """Browse one bucket from its root folder down."""

    def __init__(
        self,
        config: BucketConfig,
        store_client: StoreClient,
        archive_builder: ArchiveBuilder,
        page_size: Optional[int] = None,
        on_disconnect: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self.navigator = Navigator(config.root_prefix)
        self.engine = ListingEngine(store_client, config.bucket)
        self.pager = Pager(page_size)
        self.selection = SelectionTracker()
        self.exporter = ExportOrchestrator(archive_builder, config)
        self.on_disconnect = on_disconnect
        self.detail_item: Optional[NavigationItem] = None
        self.last_error: Optional[ListingError] = None
        self._listeners: list[Listener] = []

    # Events

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: BrowserEvent) -> None:
        logger.debug("Emitting event", event_name=event.name)
        for listener in list(self._listeners):
            listener(event)

    # Navigation

    @property
    def current_prefix(self) -> str:
        return self.navigator.current_prefix

    @property
    def status(self) -> NavigationStatus:
        return self.navigator.status

    @property
    def items(self) -> list[NavigationItem]:
        return self.pager.items

    async def open(self) -> bool:
        """List the root folder."""
        return await self._load(self.navigator.begin_listing())

    async def refresh(self) -> bool:
        """Re-list the current folder, e.g. after its contents changed."""
        return await self._load(self.navigator.begin_listing())

    async def enter_folder(self, prefix: str) -> bool:
        """Navigate to a folder; returns False if the result was superseded."""
        generation = self.navigator.enter_folder(prefix)
        self.selection.clear()
        self.pager.set_search_query("")
        self.detail_item = None
        return await self._load(generation)

    async def jump_to_breadcrumb(self, index: int) -> bool:
        return await self.enter_folder(self.navigator.breadcrumb_prefix(index))

    async def open_item(self, item: NavigationItem) -> bool:
        """Enter a folder or show a file's details.

        A selected folder is not entered. Returns True if the view changed.
        """
        if isinstance(item, FolderItem):
            if self.selection.is_selected(item.prefix):
                return False
            return await self.enter_folder(item.prefix)
        self.detail_item = item
        return True

    async def _load(self, generation: int) -> bool:
        prefix = self.navigator.current_prefix
        try:
            items = await asyncio.to_thread(self.engine.list, prefix)
        except ListingError as error:
            if not self.navigator.fail_listing(generation):
                return False
            self.last_error = error
            self._emit(ListingErrorEvent(prefix=prefix, error=error))
            self.navigator.disconnect()
            if self.on_disconnect is not None:
                self.on_disconnect()
            return False

        if not self.navigator.complete_listing(generation):
            return False

        self.pager.set_items(items, prefix)
        self.selection.clear()
        return True

    def breadcrumbs(self) -> list[Breadcrumb]:
        return self.navigator.breadcrumbs()

    # Search and paging

    def set_search_query(self, search_query: str) -> None:
        self.pager.set_search_query(search_query)

    def set_page_size(self, page_size: int) -> None:
        self.pager.set_page_size(page_size)

    def go_to_page(self, page_index: int) -> int:
        return self.pager.go_to_page(page_index)

    def visible_items(self) -> list[NavigationItem]:
        return self.pager.current().items

    def visible_keys(self) -> list[str]:
        return [item.key for item in self.visible_items()]

    # Selection

    def select(self, key: str, included: bool) -> None:
        self.selection.select(key, included)

    def select_all_visible(self, included: bool) -> None:
        self.selection.select_all_visible(included, self.visible_keys())

    def is_selected(self, key: str) -> bool:
        return self.selection.is_selected(key)

    def visible_selection_state(self) -> SelectionState:
        return self.selection.visible_selection_state(self.visible_keys())

    # Export

    async def export_selection(self) -> ExportResult:
        """Export the selection as one archive and clear it on success.

        Raises:
            ExportError: If the selection is empty or the archive fails
        """
        try:
            self.exporter.request_for(self.selection.keys, self.items)
        except ExportError as error:
            self._export_failed(error)
            raise

        self._emit(ExportStartedEvent(selected_count=len(self.selection)))
        try:
            result = await asyncio.to_thread(
                self.exporter.export_selection, self.selection.keys, self.items
            )
        except ExportError as error:
            self._export_failed(error)
            raise

        self.selection.clear()
        self._emit(
            ExportCompletedEvent(
                byte_count=result.byte_count, item_count=result.item_count
            )
        )
        return result

    def _export_failed(self, error: ExportError) -> None:
        self._emit(
            ExportFailedEvent(reason=error.reason, description=error.description)
        )

    def view(self) -> BrowserView:
        return BrowserView(
            bucket=self.config.bucket,
            prefix=self.navigator.current_prefix,
            status=self.navigator.status,
            breadcrumbs=self.navigator.breadcrumbs(),
            items=self.visible_items(),
            selection_state=self.visible_selection_state(),
            selected_count=len(self.selection),
            page=self.pager.info(),
            search_query=self.pager.search_query,
        )

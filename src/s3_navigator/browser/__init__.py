"""Folder-style browsing of a prefix-delimited object store."""

from .events import (
    ExportCompletedEvent,
    ExportFailedEvent,
    ExportStartedEvent,
    ListingErrorEvent,
)
from .export import ExportOrchestrator, ExportResult, build_export_request
from .items import FileItem, FolderItem, NavigationItem, display_name
from .listing import ListingEngine, classify_listing_failure
from .navigation import Breadcrumb, NavigationStatus, Navigator
from .pagination import PageInfo, Pager, PageSlice, apply, page_window
from .selection import SelectionState, SelectionTracker
from .session import BrowserSession, BrowserView

__all__ = [
    "Breadcrumb",
    "BrowserSession",
    "BrowserView",
    "ExportCompletedEvent",
    "ExportFailedEvent",
    "ExportOrchestrator",
    "ExportResult",
    "ExportStartedEvent",
    "FileItem",
    "FolderItem",
    "ListingEngine",
    "ListingErrorEvent",
    "NavigationItem",
    "NavigationStatus",
    "Navigator",
    "PageInfo",
    "PageSlice",
    "Pager",
    "SelectionState",
    "SelectionTracker",
    "apply",
    "build_export_request",
    "classify_listing_failure",
    "display_name",
    "page_window",
]

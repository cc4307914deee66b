"""Folder-style browsing of S3-compatible object storage.

This package turns the flat key namespace of a bucket into a navigable tree:
folders and files one level at a time, breadcrumbs, search, fixed-size pages,
multi-select across pages and export of a selection as a single zip archive.

Key Features:
    - Delimited listing with folder placeholders hidden
    - Root-folder scoping and breadcrumb navigation
    - Search and pagination with page clamping
    - Tri-state "select all" for the visible page
    - Zip export of files and whole folders
    - CLI interface

Recommended Usage:

    >>> import asyncio
    >>> from s3_navigator import BrowserSession, BucketConfig
    >>> from s3_navigator.objectstorage import S3ArchiveBuilder, S3PrefixLister
    >>> config = BucketConfig(name="docs", bucket="my-bucket", root_folder="team")
    >>> session = BrowserSession(config, S3PrefixLister(config), S3ArchiveBuilder())
    >>> asyncio.run(session.open())
    >>> session.view().items
"""

__version__ = "0.1.0"

from .browser import (
    BrowserSession,
    BrowserView,
    FileItem,
    FolderItem,
    NavigationItem,
    SelectionState,
)
from .core.exceptions import (
    ExportError,
    ListingError,
    NavigatorError,
    StoreClientError,
    ValidationError,
)
from .repository import InMemoryBucketRepository, JsonBucketRepository
from .schemas import BucketConfig

__all__ = [
    # Session
    "BrowserSession",
    "BrowserView",
    "FileItem",
    "FolderItem",
    "NavigationItem",
    "SelectionState",
    # Configuration
    "BucketConfig",
    "InMemoryBucketRepository",
    "JsonBucketRepository",
    # Errors
    "ExportError",
    "ListingError",
    "NavigatorError",
    "StoreClientError",
    "ValidationError",
]

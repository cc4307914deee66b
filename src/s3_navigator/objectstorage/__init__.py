"""Object storage collaborators for S3-compatible services."""

from .clients import S3ClientManager
from .export import S3ArchiveBuilder
from .listing import S3PrefixLister
from .models import ArchiveEntry, ItemKind, RawFile, RawFolder, RawListing

__all__ = [
    "ArchiveEntry",
    "ItemKind",
    "RawFile",
    "RawFolder",
    "RawListing",
    "S3ArchiveBuilder",
    "S3ClientManager",
    "S3PrefixLister",
]

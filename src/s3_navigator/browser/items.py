"""Typed navigation items produced from a delimited listing."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Union

from s3_navigator.objectstorage.models import ArchiveEntry, ItemKind


@dataclass(frozen=True)
class FolderItem:
    """A sub-prefix of the current folder."""

    kind: ClassVar[ItemKind] = ItemKind.folder

    prefix: str

    @property
    def key(self) -> str:
        return self.prefix


@dataclass(frozen=True)
class FileItem:
    """An object directly inside the current folder."""

    kind: ClassVar[ItemKind] = ItemKind.file

    key: str
    size: int
    last_modified: Optional[datetime] = None


NavigationItem = Union[FolderItem, FileItem]


def display_name(item: NavigationItem, current_prefix: str) -> str:
    """Name of an item relative to the folder being shown.

    Folders lose their trailing "/" ("docs/img/" in "docs/" shows as "img").
    """
    name = item.key
    if current_prefix and name.startswith(current_prefix):
        name = name[len(current_prefix) :]
    if isinstance(item, FolderItem) and name.endswith("/"):
        name = name[:-1]
    return name


def to_archive_entry(item: NavigationItem) -> ArchiveEntry:
    return ArchiveEntry(key=item.key, kind=item.kind)

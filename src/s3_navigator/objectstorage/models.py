"""Data exchanged with the object store collaborators."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    """Discriminator for folder and file entries."""

    folder = "folder"
    file = "file"


@dataclass(frozen=True)
class RawFolder:
    """A common prefix returned by a delimited listing."""

    prefix: str


@dataclass(frozen=True)
class RawFile:
    """An object returned by a delimited listing."""

    key: str
    size: int
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class RawListing:
    """One directory level: sub-prefixes and direct objects, in store order."""

    folders: list[RawFolder] = field(default_factory=list)
    files: list[RawFile] = field(default_factory=list)


@dataclass(frozen=True)
class ArchiveEntry:
    """A key to include in an export archive; folders are included recursively."""

    key: str
    kind: ItemKind

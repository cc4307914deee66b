"""Interfaces of the collaborators the browser depends on."""

from typing import Protocol

from s3_navigator.objectstorage.models import ArchiveEntry, RawListing
from s3_navigator.schemas import BucketConfig


class StoreClient(Protocol):
    """Performs a single delimited listing against a prefix."""

    def list_one_prefix_level(self, bucket: str, prefix: str) -> RawListing: ...


class ArchiveBuilder(Protocol):
    """Builds one archive from files and (recursively) folders."""

    def build_archive(
        self, config: BucketConfig, entries: list[ArchiveEntry]
    ) -> bytes: ...

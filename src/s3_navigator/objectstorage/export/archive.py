"""Zip archive construction for exported selections.

Files are fetched with get_object. Folders are expanded with a recursive
(non-delimited) listing. Member names are keys relative to the bucket's root
prefix, so an archive of a scoped bucket does not repeat the scope folder.
"""

import io
import zipfile
from typing import Iterable

from botocore.exceptions import BotoCoreError, ClientError

from s3_navigator.core import get_logger
from s3_navigator.objectstorage.clients import S3ClientManager, store_error_from
from s3_navigator.objectstorage.models import ArchiveEntry, ItemKind
from s3_navigator.schemas import BucketConfig

logger = get_logger(__name__)


class S3ArchiveBuilder:
    """Builds a single zip archive from files and folders in a bucket."""

    def __init__(self):
        self._managers: dict[str, S3ClientManager] = {}

    def _client_for(self, config: BucketConfig):
        manager = self._managers.get(config.id)
        if manager is None or manager.config != config:
            manager = S3ClientManager(config)
            self._managers[config.id] = manager
        return manager.client

    def _expand(
        self, client, bucket: str, entries: Iterable[ArchiveEntry]
    ) -> list[str]:
        """Resolve entries to object keys, each at most once, in entry order."""
        keys: list[str] = []
        seen: set[str] = set()

        for entry in entries:
            if entry.kind is ItemKind.file:
                candidates = [entry.key]
            else:
                candidates = []
                paginator = client.get_paginator("list_objects_v2")
                for page in paginator.paginate(Bucket=bucket, Prefix=entry.key):
                    for obj in page.get("Contents", []):
                        # Folder markers carry no content
                        if not obj["Key"].endswith("/"):
                            candidates.append(obj["Key"])

            for key in candidates:
                if key not in seen:
                    seen.add(key)
                    keys.append(key)

        return keys

    def build_archive(
        self, config: BucketConfig, entries: list[ArchiveEntry]
    ) -> bytes:
        """Build a zip archive of the given entries.

        Args:
            config: Bucket the entries belong to
            entries: Files and folders to include

        Returns:
            Zip archive bytes

        Raises:
            StoreClientError: If listing or fetching any object fails
        """
        logger.info("Building archive", bucket=config.bucket, entry_count=len(entries))
        root_prefix = config.root_prefix
        buffer = io.BytesIO()

        try:
            client = self._client_for(config)
            keys = self._expand(client, config.bucket, entries)

            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                for key in keys:
                    response = client.get_object(Bucket=config.bucket, Key=key)
                    member = key
                    if root_prefix and key.startswith(root_prefix):
                        member = key[len(root_prefix) :]
                    archive.writestr(member, response["Body"].read())
        except (BotoCoreError, ClientError) as e:
            error = store_error_from(e, f"Failed to archive s3://{config.bucket}")
            logger.error(str(error), error_code=error.code)
            raise error from e

        payload = buffer.getvalue()
        logger.info(
            "Archive built",
            bucket=config.bucket,
            object_count=len(keys),
            byte_count=len(payload),
        )
        return payload

"""Bucket configuration repositories.

A repository has an explicit lifecycle: `load()` before use and `save()`
after changes. Secret keys and session tokens are never persisted by the
JSON repository; supply them at runtime or use an AWS profile.
"""

import json
from pathlib import Path
from typing import Optional, Protocol

from pydantic import TypeAdapter

from s3_navigator.core import get_logger, settings
from s3_navigator.core.exceptions import NavigatorError, ValidationError
from s3_navigator.schemas import BucketConfig, BucketStatus

logger = get_logger(__name__)

ADMIN_USERNAME = "admin"
UNPERSISTED_FIELDS = {"secret_access_key", "session_token"}

_bucket_list = TypeAdapter(list[BucketConfig])


class BucketRepository(Protocol):
    def load(self) -> None: ...

    def save(self) -> None: ...

    def add(
        self, config: BucketConfig, owner: Optional[str] = None
    ) -> BucketConfig: ...

    def update(self, bucket_id: str, config: BucketConfig) -> BucketConfig: ...

    def delete(self, bucket_id: str) -> None: ...

    def get(self, bucket_id: str) -> BucketConfig: ...

    def list_for(self, username: str) -> list[BucketConfig]: ...

    def set_status(self, bucket_id: str, status: BucketStatus) -> BucketConfig: ...


def visible_to(config: BucketConfig, username: str) -> bool:
    """Owned buckets are visible to their owner; unowned ones only to admin."""
    if config.owner:
        return config.owner == username
    return username == ADMIN_USERNAME


class InMemoryBucketRepository:
    """Bucket configurations held in memory only."""

    def __init__(self, buckets: Optional[list[BucketConfig]] = None):
        self._buckets: dict[str, BucketConfig] = {}
        for config in buckets or []:
            self._buckets[config.id] = config

    def load(self) -> None:
        pass

    def save(self) -> None:
        pass

    def add(self, config: BucketConfig, owner: Optional[str] = None) -> BucketConfig:
        if config.id in self._buckets:
            raise ValidationError(f"Bucket id already exists: {config.id}")
        if owner is not None:
            config = config.model_copy(update={"owner": owner})
        self._buckets[config.id] = config
        logger.info("Bucket added", bucket_id=config.id, bucket=config.bucket)
        return config

    def update(self, bucket_id: str, config: BucketConfig) -> BucketConfig:
        existing = self.get(bucket_id)
        updated = config.model_copy(update={"id": bucket_id, "owner": existing.owner})
        self._buckets[bucket_id] = updated
        logger.info("Bucket updated", bucket_id=bucket_id)
        return updated

    def delete(self, bucket_id: str) -> None:
        self.get(bucket_id)
        del self._buckets[bucket_id]
        logger.info("Bucket deleted", bucket_id=bucket_id)

    def get(self, bucket_id: str) -> BucketConfig:
        try:
            return self._buckets[bucket_id]
        except KeyError:
            raise ValidationError(f"Unknown bucket id: {bucket_id}") from None

    def find(self, name: str, username: str) -> BucketConfig:
        """Look a bucket up by id or alias among those visible to `username`."""
        for config in self.list_for(username):
            if name in (config.id, config.name):
                return config
        raise ValidationError(f"No bucket named '{name}' for user '{username}'")

    def list_for(self, username: str) -> list[BucketConfig]:
        return [c for c in self._buckets.values() if visible_to(c, username)]

    def set_status(self, bucket_id: str, status: BucketStatus) -> BucketConfig:
        updated = self.get(bucket_id).model_copy(update={"status": status})
        self._buckets[bucket_id] = updated
        return updated


class JsonBucketRepository(InMemoryBucketRepository):
    """Bucket configurations stored in a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        super().__init__()
        self.path = Path(path or settings.bucket_store_path).expanduser()

    def load(self) -> None:
        """Read the file; a missing file means no buckets yet."""
        if not self.path.exists():
            logger.info("Bucket store not found, starting empty", path=str(self.path))
            self._buckets = {}
            return

        try:
            buckets = _bucket_list.validate_json(self.path.read_bytes())
        except ValueError as e:
            message = f"Failed to load bucket store '{self.path}': {e}"
            raise NavigatorError(message) from e

        self._buckets = {config.id: config for config in buckets}
        logger.info("Bucket store loaded", path=str(self.path), count=len(buckets))

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = [
            config.model_dump(mode="json", exclude=UNPERSISTED_FIELDS)
            for config in self._buckets.values()
        ]
        self.path.write_text(json.dumps(data, indent=2))
        logger.info("Bucket store saved", path=str(self.path), count=len(data))

"""Test configuration and fixtures for s3-navigator."""

import threading
from datetime import datetime, timezone

import pytest

from s3_navigator.objectstorage.models import RawFile, RawFolder, RawListing
from s3_navigator.schemas import BucketConfig

MODIFIED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def raw_listing(folders=(), files=()):
    """Build a RawListing from prefixes and (key, size) pairs."""
    return RawListing(
        folders=[RawFolder(prefix=p) for p in folders],
        files=[RawFile(key=k, size=s, last_modified=MODIFIED) for k, s in files],
    )


class FakeStoreClient:
    """In-memory store client; prefixes can be held to simulate slow calls."""

    def __init__(self, listings=None, error=None):
        self.listings = listings or {}
        self.error = error
        self.calls = []
        self._gates = {}

    def hold(self, prefix):
        """Block listings of `prefix` until the returned release event is set."""
        started, release = threading.Event(), threading.Event()
        self._gates[prefix] = (started, release)
        return started, release

    def list_one_prefix_level(self, bucket, prefix):
        self.calls.append((bucket, prefix))
        if prefix in self._gates:
            started, release = self._gates[prefix]
            started.set()
            release.wait(5)
        if self.error is not None:
            raise self.error
        return self.listings.get(prefix, RawListing())


class FakeArchiveBuilder:
    """Records archive requests and returns a fixed payload."""

    def __init__(self, payload=b"PK\x05\x06archive", error=None):
        self.payload = payload
        self.error = error
        self.requests = []

    def build_archive(self, config, entries):
        self.requests.append((config, list(entries)))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def bucket_config():
    """Bucket configuration without a root folder."""
    return BucketConfig(name="Test", bucket="test-bucket", region="us-east-1")


@pytest.fixture
def scoped_config():
    """Bucket configuration scoped to the "team" folder."""
    return BucketConfig(
        name="Team", bucket="test-bucket", region="us-east-1", root_folder="team"
    )


@pytest.fixture
def store():
    return FakeStoreClient()


@pytest.fixture
def archive_builder():
    return FakeArchiveBuilder()

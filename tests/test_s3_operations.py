"""Tests for the boto3 store client and archive builder."""

import io
import zipfile

import boto3
import pytest
from moto import mock_aws

from s3_navigator.browser.items import FileItem, FolderItem
from s3_navigator.browser.listing import ListingEngine
from s3_navigator.core.exceptions import (
    ListingError,
    ListingErrorKind,
    StoreClientError,
    ValidationError,
)
from s3_navigator.objectstorage import (
    ArchiveEntry,
    ItemKind,
    RawFolder,
    S3ArchiveBuilder,
    S3ClientManager,
    S3PrefixLister,
)
from s3_navigator.schemas import BucketConfig


def make_config(**kwargs):
    return BucketConfig(
        name="Test",
        bucket="test-bucket",
        region="us-east-1",
        access_key_id="test_key",
        secret_access_key="test_secret",
        **kwargs,
    )


@mock_aws
class TestS3PrefixLister:
    """Test one-level delimited listing with mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")

        self.s3_client.put_object(Bucket="test-bucket", Key="docs/", Body=b"")
        self.s3_client.put_object(Bucket="test-bucket", Key="docs/img/", Body=b"")
        self.s3_client.put_object(
            Bucket="test-bucket", Key="docs/img/logo.png", Body=b"png"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="docs/report.pdf", Body=b"report"
        )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="docs/2024/q1.csv", Body=b"a,b"
        )

    def test_list_one_prefix_level(self):
        """Test folders and direct files are returned, nothing deeper."""
        config = make_config()
        listing = S3PrefixLister(config).list_one_prefix_level("test-bucket", "docs/")

        assert listing.folders == [RawFolder("docs/2024/"), RawFolder("docs/img/")]
        assert [f.key for f in listing.files] == ["docs/", "docs/report.pdf"]
        report = listing.files[1]
        assert report.size == 6
        assert report.last_modified is not None

    def test_list_bucket_root(self):
        listing = S3PrefixLister(make_config()).list_one_prefix_level(
            "test-bucket", ""
        )
        assert listing.folders == [RawFolder("docs/")]
        assert listing.files == []

    def test_listing_engine_hides_placeholder(self):
        """Test the folder placeholder object never reaches the items."""
        config = make_config()
        items = ListingEngine(S3PrefixLister(config), "test-bucket").list("docs/")

        assert items[:2] == [FolderItem("docs/2024/"), FolderItem("docs/img/")]
        assert [item.key for item in items if isinstance(item, FileItem)] == [
            "docs/report.pdf"
        ]

    def test_missing_bucket(self):
        """Test a missing bucket is reported as a misconfiguration."""
        lister = S3PrefixLister(make_config())

        with pytest.raises(StoreClientError) as exc_info:
            lister.list_one_prefix_level("no-such-bucket", "")
        assert exc_info.value.code == "NoSuchBucket"

        engine = ListingEngine(lister, "no-such-bucket")
        with pytest.raises(ListingError) as listing_exc:
            engine.list("")
        assert listing_exc.value.kind is ListingErrorKind.misconfigured


@mock_aws
class TestS3ArchiveBuilder:
    """Test zip construction with mocked S3."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")
        for key, body in [
            ("team/docs/a.txt", b"alpha"),
            ("team/docs/img/", b""),
            ("team/docs/img/logo.png", b"png"),
            ("team/docs/img/icons/x.svg", b"<svg/>"),
        ]:
            self.s3_client.put_object(Bucket="test-bucket", Key=key, Body=body)

    def test_files_and_folders(self):
        """Test folders are expanded recursively and markers skipped."""
        config = make_config(root_folder="team")
        archive = S3ArchiveBuilder().build_archive(
            config,
            [
                ArchiveEntry("team/docs/img/", ItemKind.folder),
                ArchiveEntry("team/docs/a.txt", ItemKind.file),
            ],
        )

        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            assert zf.namelist() == [
                "docs/img/icons/x.svg",
                "docs/img/logo.png",
                "docs/a.txt",
            ]
            assert zf.read("docs/a.txt") == b"alpha"

    def test_overlapping_entries_stored_once(self):
        config = make_config()
        archive = S3ArchiveBuilder().build_archive(
            config,
            [
                ArchiveEntry("team/docs/img/logo.png", ItemKind.file),
                ArchiveEntry("team/docs/img/", ItemKind.folder),
            ],
        )

        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            assert sorted(zf.namelist()) == [
                "team/docs/img/icons/x.svg",
                "team/docs/img/logo.png",
            ]

    def test_missing_object(self):
        with pytest.raises(StoreClientError) as exc_info:
            S3ArchiveBuilder().build_archive(
                make_config(), [ArchiveEntry("team/nope.txt", ItemKind.file)]
            )
        assert exc_info.value.code == "NoSuchKey"


@mock_aws
class TestS3ClientManager:
    """Test client management and connection checks."""

    def setup_method(self, method):
        boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        ).create_bucket(Bucket="test-bucket")

    def test_connection_ok(self):
        assert S3ClientManager(make_config()).test_connection() is True

    def test_connection_missing_bucket(self):
        config = make_config().model_copy(update={"bucket": "missing"})
        with pytest.raises(StoreClientError):
            S3ClientManager(config).test_connection()


class TestParseS3Path:
    """Test s3:// path parsing."""

    def test_bucket_and_prefix(self):
        assert S3ClientManager.parse_s3_path("s3://b/docs/img/") == ("b", "docs/img/")

    def test_bucket_only(self):
        assert S3ClientManager.parse_s3_path("s3://b") == ("b", "")

    def test_invalid_scheme(self):
        with pytest.raises(ValidationError, match="must start with"):
            S3ClientManager.parse_s3_path("/local/path")

    def test_missing_bucket(self):
        with pytest.raises(ValidationError, match="missing bucket"):
            S3ClientManager.parse_s3_path("s3:///prefix")

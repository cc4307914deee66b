"""Tests for the command-line interface."""

import io
import json
import zipfile

import boto3
from moto import mock_aws
from typer.testing import CliRunner

from s3_navigator import __version__
from s3_navigator.cli import app, format_bytes

runner = CliRunner()

CREDENTIALS = [
    "--access-key-id",
    "test_key",
    "--secret-access-key",
    "test_secret",
    "--region",
    "us-east-1",
]


@mock_aws
class TestListCommand:
    """Test the list command against mocked S3."""

    def setup_method(self, method):
        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")
        self.s3_client.put_object(Bucket="test-bucket", Key="docs/", Body=b"")
        for i in range(1, 13):
            self.s3_client.put_object(
                Bucket="test-bucket",
                Key=f"docs/file{i:02d}.txt",
                Body=b"x" * (100 * i),
            )
        self.s3_client.put_object(
            Bucket="test-bucket", Key="docs/img/logo.png", Body=b"png"
        )

    def test_list_first_page(self):
        result = runner.invoke(app, ["list", "s3://test-bucket/docs/", *CREDENTIALS])

        assert result.exit_code == 0, result.output
        assert "s3://test-bucket: home / docs" in result.output
        assert "[DIR]  img/" in result.output
        assert "file09.txt" in result.output
        assert "file10.txt" not in result.output
        assert "Showing 1 to 10 of 13 items (page 1 of 2)" in result.output

    def test_list_second_page(self):
        result = runner.invoke(
            app, ["list", "s3://test-bucket/docs", "--page", "2", *CREDENTIALS]
        )

        assert result.exit_code == 0, result.output
        assert "file12.txt" in result.output
        assert "Showing 11 to 13 of 13 items (page 2 of 2)" in result.output

    def test_list_search(self):
        result = runner.invoke(
            app,
            ["list", "s3://test-bucket/docs/", "--search", "FILE1", *CREDENTIALS],
        )

        assert result.exit_code == 0, result.output
        assert "file10.txt" in result.output
        assert "file02.txt" not in result.output

    def test_list_no_results(self):
        result = runner.invoke(
            app,
            ["list", "s3://test-bucket/docs/", "--search", "nothing", *CREDENTIALS],
        )

        assert result.exit_code == 0
        assert 'No results for "nothing"' in result.output

    def test_list_empty_folder(self):
        result = runner.invoke(app, ["list", "s3://test-bucket/none/", *CREDENTIALS])

        assert result.exit_code == 0
        assert "This folder is empty." in result.output

    def test_list_outside_root_folder(self):
        result = runner.invoke(
            app,
            [
                "list",
                "s3://test-bucket/docs/",
                "--root-folder",
                "team",
                *CREDENTIALS,
            ],
        )

        assert result.exit_code == 1
        assert "outside root folder" in result.output

    def test_list_invalid_page_size(self):
        result = runner.invoke(
            app,
            ["list", "s3://test-bucket/docs/", "--page-size", "7", *CREDENTIALS],
        )

        assert result.exit_code == 1
        assert "page_size must be one of" in result.output

    def test_list_missing_bucket(self):
        result = runner.invoke(app, ["list", "s3://missing-bucket/", *CREDENTIALS])

        assert result.exit_code == 1
        assert "Error:" in result.output


@mock_aws
class TestExportCommand:
    """Test the export command against mocked S3."""

    def setup_method(self, method):
        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket="test-bucket")
        self.s3_client.put_object(Bucket="test-bucket", Key="docs/a.txt", Body=b"a")
        self.s3_client.put_object(Bucket="test-bucket", Key="docs/b.txt", Body=b"bb")
        self.s3_client.put_object(
            Bucket="test-bucket", Key="docs/img/logo.png", Body=b"png"
        )

    def test_export_names_and_folder(self, tmp_path):
        output = tmp_path / "out.zip"
        result = runner.invoke(
            app,
            [
                "export",
                "s3://test-bucket/docs/",
                "a.txt",
                "img/",
                "--output",
                str(output),
                *CREDENTIALS,
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Exported 2 items" in result.output
        with zipfile.ZipFile(io.BytesIO(output.read_bytes())) as zf:
            assert sorted(zf.namelist()) == ["docs/a.txt", "docs/img/logo.png"]

    def test_export_unknown_name(self, tmp_path):
        result = runner.invoke(
            app,
            [
                "export",
                "s3://test-bucket/docs/",
                "missing.txt",
                "--output",
                str(tmp_path / "out.zip"),
                *CREDENTIALS,
            ],
        )

        assert result.exit_code == 1
        assert "No entry named 'missing.txt'" in result.output


class TestBucketsCommands:
    """Test management of saved bucket configurations."""

    def test_add_list_remove(self, tmp_path):
        store = str(tmp_path / "buckets.json")

        added = runner.invoke(
            app,
            [
                "buckets",
                "add",
                "--name",
                "work",
                "--bucket",
                "work-bucket",
                "--root-folder",
                "team",
                "--store",
                store,
            ],
        )
        assert added.exit_code == 0, added.output
        assert "Added bucket 'work'" in added.output

        listed = runner.invoke(app, ["buckets", "list", "--store", store])
        assert "s3://work-bucket/team/" in listed.output
        assert "[untested]" in listed.output

        other = runner.invoke(
            app, ["buckets", "list", "--user", "bob", "--store", store]
        )
        assert "No buckets configured." in other.output

        removed = runner.invoke(app, ["buckets", "remove", "work", "--store", store])
        assert removed.exit_code == 0
        assert json.loads((tmp_path / "buckets.json").read_text()) == []

    def test_remove_unknown(self, tmp_path):
        result = runner.invoke(
            app,
            ["buckets", "remove", "nope", "--store", str(tmp_path / "b.json")],
        )
        assert result.exit_code == 1
        assert "No bucket named 'nope'" in result.output

    @mock_aws
    def test_test_records_status(self, tmp_path):
        boto3.client("s3", region_name="us-east-1").create_bucket(Bucket="work-bucket")
        store = str(tmp_path / "buckets.json")
        runner.invoke(
            app,
            [
                "buckets",
                "add",
                "--name",
                "work",
                "--bucket",
                "work-bucket",
                "--access-key-id",
                "test_key",
                "--store",
                store,
            ],
        )

        result = runner.invoke(
            app,
            [
                "buckets",
                "test",
                "work",
                "--secret-access-key",
                "test_secret",
                "--store",
                store,
            ],
        )

        assert result.exit_code == 0, result.output
        (stored,) = json.loads((tmp_path / "buckets.json").read_text())
        assert stored["status"] == "connected"


class TestMisc:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_format_bytes(self):
        assert format_bytes(512) == "512 bytes"
        assert format_bytes(2048) == "2.00 KB"
        assert format_bytes(3 * 1024**2) == "3.00 MB"

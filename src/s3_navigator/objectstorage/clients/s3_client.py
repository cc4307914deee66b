"""S3 client management.

The S3ClientManager turns a BucketConfig into a boto3 client and provides
utilities for S3 path parsing and connection checks.

Authentication Methods Supported:
    1. AWS CLI profiles (aws_profile)
    2. Explicit credentials (access_key_id, secret_access_key, session_token)
    3. IAM roles / environment variables (no explicit credentials)

S3-Compatible Services:
    Custom endpoints (MinIO, DigitalOcean Spaces, ...) are used via endpoint_url.
"""

from typing import Any, Dict
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3_navigator.core import get_logger
from s3_navigator.core.exceptions import StoreClientError, ValidationError
from s3_navigator.schemas import BucketConfig

logger = get_logger(__name__)


def store_error_from(exc: Exception, message: str) -> StoreClientError:
    """Wrap a botocore failure.

    The backend's own message is kept apart from the wrapper text as
    ``detail``, so classification never sees bucket or prefix names.
    """
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = error.get("Code")
        detail = error.get("Message") or str(exc)
    else:
        code = type(exc).__name__
        detail = str(exc)
    return StoreClientError(f"{message}: {exc}", code=code, detail=detail)


class S3ClientManager:
    """Manages the S3 client for one bucket configuration."""

    def __init__(self, config: BucketConfig):
        """Initialize S3 client manager.

        Args:
            config: Bucket configuration holding region and credentials
        """
        self.config = config
        self._client = None
        logger.info(
            "S3 client manager initialized",
            bucket=config.bucket,
            region=config.region,
        )

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client

    @staticmethod
    def parse_s3_path(s3_path: str) -> tuple[str, str]:
        """Parse S3 path into bucket and prefix components.

        Args:
            s3_path: S3 path in format s3://bucket/prefix or s3://bucket

        Returns:
            Tuple of (bucket_name, prefix)

        Raises:
            ValidationError: If path format is invalid
        """
        if not s3_path.startswith("s3://"):
            raise ValidationError(f"S3 path must start with 's3://': {s3_path}")

        parsed = urlparse(s3_path)
        bucket = parsed.netloc
        prefix = parsed.path.lstrip("/")

        if not bucket:
            raise ValidationError(f"Invalid S3 path, missing bucket: {s3_path}")

        logger.debug("S3 path parsed", bucket=bucket, prefix=prefix)
        return bucket, prefix

    def test_connection(self) -> bool:
        """Test access to the configured bucket with a HEAD request.

        Returns:
            True if the bucket is reachable with these credentials

        Raises:
            StoreClientError: If the bucket cannot be reached
        """
        try:
            self.client.head_bucket(Bucket=self.config.bucket)
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 connection test failed", bucket=self.config.bucket)
            message = f"Cannot reach bucket '{self.config.bucket}'"
            raise store_error_from(e, message) from e

        logger.info("S3 connection test successful", bucket=self.config.bucket)
        return True

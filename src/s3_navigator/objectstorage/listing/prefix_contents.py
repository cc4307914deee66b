"""Delimited S3 listing: one directory level of folders and files."""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from s3_navigator.core import get_logger
from s3_navigator.objectstorage.clients import S3ClientManager, store_error_from
from s3_navigator.objectstorage.models import RawFile, RawFolder, RawListing
from s3_navigator.schemas import BucketConfig

logger = get_logger(__name__)

DELIMITER = "/"


class S3PrefixLister:
    """Lists the direct children of an S3 prefix."""

    def __init__(
        self,
        config: BucketConfig,
        client_manager: Optional[S3ClientManager] = None,
    ):
        """Initialize S3 prefix lister.

        Args:
            config: Bucket configuration
            client_manager: Shared client manager; created from config if omitted
        """
        self.config = config
        self.client_manager = client_manager or S3ClientManager(config)
        logger.info("S3 prefix lister initialized", bucket=config.bucket)

    def list_one_prefix_level(self, bucket: str, prefix: str) -> RawListing:
        """List sub-prefixes and objects directly under a prefix.

        For objects:
        - data/2023/file1.txt
        - data/readme.txt

        listing "data/" returns folder "data/2023/" and file "data/readme.txt".

        Args:
            bucket: Bucket name
            prefix: Key prefix; "" lists the bucket root

        Returns:
            RawListing with folders and files in the order S3 returned them

        Raises:
            StoreClientError: If the S3 call fails
        """
        logger.info("Listing S3 prefix level", bucket=bucket, prefix=prefix)

        folders: list[RawFolder] = []
        files: list[RawFile] = []

        try:
            paginator = self.client_manager.client.get_paginator("list_objects_v2")
            page_iterator = paginator.paginate(
                Bucket=bucket, Prefix=prefix, Delimiter=DELIMITER
            )

            for page in page_iterator:
                for prefix_info in page.get("CommonPrefixes", []):
                    folders.append(RawFolder(prefix=prefix_info["Prefix"]))
                for obj in page.get("Contents", []):
                    files.append(
                        RawFile(
                            key=obj["Key"],
                            size=obj.get("Size", 0),
                            last_modified=obj.get("LastModified"),
                        )
                    )
        except (BotoCoreError, ClientError) as e:
            error = store_error_from(e, f"Failed to list s3://{bucket}/{prefix}")
            logger.error(str(error), error_code=error.code)
            raise error from e

        logger.info(
            "S3 prefix level listed",
            bucket=bucket,
            prefix=prefix,
            folder_count=len(folders),
            file_count=len(files),
        )
        return RawListing(folders=folders, files=files)

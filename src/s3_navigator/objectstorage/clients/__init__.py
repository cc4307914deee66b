"""S3 client management and configuration."""

from .s3_client import S3ClientManager, store_error_from

__all__ = ["S3ClientManager", "store_error_from"]

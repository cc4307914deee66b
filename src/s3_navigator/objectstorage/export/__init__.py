"""Bulk export of objects as a single archive."""

from .archive import S3ArchiveBuilder

__all__ = ["S3ArchiveBuilder"]

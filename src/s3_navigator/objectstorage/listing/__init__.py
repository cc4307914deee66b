"""Object storage listing operations."""

from .prefix_contents import DELIMITER, S3PrefixLister

__all__ = ["DELIMITER", "S3PrefixLister"]

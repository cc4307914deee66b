"""Core utilities and shared components for s3-navigator."""

from .config import PAGE_SIZES, settings
from .exceptions import NavigatorError, ValidationError
from .observability import get_logger, get_tracer

__all__ = [
    "PAGE_SIZES",
    "settings",
    "NavigatorError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]

"""Exception hierarchy for s3-navigator."""

from enum import Enum
from typing import Optional


class NavigatorError(Exception):
    """Base exception for all s3-navigator errors."""

    pass


class ValidationError(NavigatorError):
    """Raised when validation fails."""

    pass


class StoreClientError(NavigatorError):
    """Raised by the object store client when a backend call fails."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.detail = detail if detail is not None else message


class ListingErrorKind(str, Enum):
    """Classification of a failed folder listing."""

    transient = "transient"
    auth_failure = "auth_failure"
    misconfigured = "misconfigured"


class ListingError(NavigatorError):
    """Raised when the contents of a folder cannot be listed."""

    def __init__(
        self,
        kind: ListingErrorKind,
        description: str,
        likely_misconfiguration: bool = False,
    ):
        super().__init__(description)
        self.kind = kind
        self.description = description
        self.likely_misconfiguration = likely_misconfiguration


class ExportFailureReason(str, Enum):
    """Why an export did not produce an archive."""

    collaborator_failure = "collaborator_failure"
    empty_selection = "empty_selection"


class ExportError(NavigatorError):
    """Raised when a selection cannot be exported as an archive."""

    def __init__(self, reason: ExportFailureReason, description: str):
        super().__init__(description)
        self.reason = reason
        self.description = description

"""Events emitted by a browsing session to its listeners."""

from dataclasses import dataclass
from typing import Callable, ClassVar, Union

from s3_navigator.core.exceptions import ExportFailureReason, ListingError


@dataclass(frozen=True)
class ListingErrorEvent:
    name: ClassVar[str] = "listing-error"

    prefix: str
    error: ListingError


@dataclass(frozen=True)
class ExportStartedEvent:
    name: ClassVar[str] = "export-started"

    selected_count: int


@dataclass(frozen=True)
class ExportCompletedEvent:
    name: ClassVar[str] = "export-completed"

    byte_count: int
    item_count: int


@dataclass(frozen=True)
class ExportFailedEvent:
    name: ClassVar[str] = "export-failed"

    reason: ExportFailureReason
    description: str


BrowserEvent = Union[
    ListingErrorEvent, ExportStartedEvent, ExportCompletedEvent, ExportFailedEvent
]
Listener = Callable[[BrowserEvent], None]

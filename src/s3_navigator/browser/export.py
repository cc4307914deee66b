"""Export orchestration: selection to one archive request."""

from dataclasses import dataclass
from typing import Iterable, Sequence

from s3_navigator.browser.collaborators import ArchiveBuilder
from s3_navigator.browser.items import NavigationItem, to_archive_entry
from s3_navigator.core import get_logger, get_tracer
from s3_navigator.core.exceptions import ExportError, ExportFailureReason
from s3_navigator.objectstorage.models import ArchiveEntry
from s3_navigator.schemas import BucketConfig

logger = get_logger(__name__)
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Archive bytes and what went into them."""

    archive: bytes
    item_count: int
    filename: str

    @property
    def byte_count(self) -> int:
        return len(self.archive)


def build_export_request(
    selection: Iterable[str], items: Sequence[NavigationItem]
) -> list[ArchiveEntry]:
    """Entries for selected keys still present in `items`, in item order.

    Selected keys that no longer appear (e.g. removed by a refresh) are
    dropped.
    """
    selected = set(selection)
    entries: list[ArchiveEntry] = []
    seen: set[str] = set()
    for item in items:
        if item.key in selected and item.key not in seen:
            seen.add(item.key)
            entries.append(to_archive_entry(item))
    return entries


class ExportOrchestrator:
    """Hands the current selection to the archive builder."""

    def __init__(self, archive_builder: ArchiveBuilder, config: BucketConfig):
        self.archive_builder = archive_builder
        self.config = config

    def request_for(
        self, selection: Iterable[str], items: Sequence[NavigationItem]
    ) -> list[ArchiveEntry]:
        """Archive entries for the selection.

        Raises:
            ExportError: If nothing selected is present in `items`
        """
        entries = build_export_request(selection, items)
        if not entries:
            raise ExportError(
                ExportFailureReason.empty_selection, "No selected items to export"
            )
        return entries

    def export_selection(
        self, selection: Iterable[str], items: Sequence[NavigationItem]
    ) -> ExportResult:
        """Build one archive containing the selected items.

        Raises:
            ExportError: If nothing selected is present, or the archive
                builder fails
        """
        entries = self.request_for(selection, items)

        with tracer.start_as_current_span("s3_navigator.export") as span:
            span.set_attribute("s3.bucket", self.config.bucket)
            span.set_attribute("export.item_count", len(entries))
            try:
                archive = self.archive_builder.build_archive(self.config, entries)
            except Exception as e:
                logger.error(
                    "Export failed",
                    bucket=self.config.bucket,
                    item_count=len(entries),
                    error=str(e),
                )
                raise ExportError(
                    ExportFailureReason.collaborator_failure,
                    f"Could not build archive of the selected items: {e}",
                ) from e

        logger.info(
            "Export completed",
            bucket=self.config.bucket,
            item_count=len(entries),
            byte_count=len(archive),
        )
        return ExportResult(
            archive=archive,
            item_count=len(entries),
            filename=self.config.archive_name,
        )

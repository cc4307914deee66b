"""Navigation state machine.

States:
    idle -> listing -> ready
    listing -> error -> disconnected

Every listing request is stamped with a generation number. A completion whose
generation is not the latest one belongs to a superseded navigation and is
discarded, so the last navigation always wins.
"""

from dataclasses import dataclass
from enum import Enum

from s3_navigator.core import get_logger
from s3_navigator.core.exceptions import ValidationError

logger = get_logger(__name__)

HOME = "home"


class NavigationStatus(str, Enum):
    idle = "idle"
    listing = "listing"
    ready = "ready"
    error = "error"
    disconnected = "disconnected"


@dataclass(frozen=True)
class Breadcrumb:
    """One breadcrumb part and the full prefix it jumps to."""

    label: str
    prefix: str


class Navigator:
    """Tracks the current prefix within a fixed root prefix."""

    def __init__(self, root_prefix: str = ""):
        self.root_prefix = root_prefix
        self.current_prefix = root_prefix
        self.status = NavigationStatus.idle
        self.generation = 0

    @property
    def connected(self) -> bool:
        return self.status is not NavigationStatus.disconnected

    def _require_connected(self) -> None:
        if not self.connected:
            raise ValidationError("Browsing session is disconnected")

    def breadcrumb_parts(self) -> list[str]:
        """Return ["home", ...folders between the root and the current prefix]."""
        relative = self.current_prefix
        if relative.startswith(self.root_prefix):
            relative = relative[len(self.root_prefix) :]
        return [HOME, *[part for part in relative.split("/") if part]]

    def breadcrumb_prefix(self, index: int) -> str:
        """Full prefix for breadcrumb `index` (0 is the root)."""
        parts = self.breadcrumb_parts()
        if index < 0 or index >= len(parts):
            raise ValidationError(
                f"Breadcrumb index {index} out of range (0..{len(parts) - 1})"
            )
        if index == 0:
            return self.root_prefix
        return self.root_prefix + "/".join(parts[1 : index + 1]) + "/"

    def breadcrumbs(self) -> list[Breadcrumb]:
        return [
            Breadcrumb(label=part, prefix=self.breadcrumb_prefix(index))
            for index, part in enumerate(self.breadcrumb_parts())
        ]

    def begin_listing(self) -> int:
        """Start a listing of the current prefix and return its generation."""
        self._require_connected()
        self.generation += 1
        self.status = NavigationStatus.listing
        logger.debug(
            "Listing started",
            prefix=self.current_prefix,
            generation=self.generation,
        )
        return self.generation

    def enter_folder(self, prefix: str) -> int:
        """Move to a folder inside the root and start listing it.

        Raises:
            ValidationError: If the prefix lies outside the root prefix or the
                session is disconnected
        """
        self._require_connected()
        if not prefix.startswith(self.root_prefix):
            raise ValidationError(
                f"Prefix '{prefix}' is outside root folder '{self.root_prefix}'"
            )
        self.current_prefix = prefix
        logger.info("Entering folder", prefix=prefix)
        return self.begin_listing()

    def jump_to_breadcrumb(self, index: int) -> int:
        return self.enter_folder(self.breadcrumb_prefix(index))

    def is_current(self, generation: int) -> bool:
        return self.connected and generation == self.generation

    def complete_listing(self, generation: int) -> bool:
        """Mark a listing finished; False means the result is stale."""
        if not self.is_current(generation):
            logger.info(
                "Discarding stale listing",
                generation=generation,
                current_generation=self.generation,
            )
            return False
        self.status = NavigationStatus.ready
        return True

    def fail_listing(self, generation: int) -> bool:
        """Record a failed listing; False means the failure is stale."""
        if not self.is_current(generation):
            return False
        self.status = NavigationStatus.error
        return True

    def disconnect(self) -> None:
        self.status = NavigationStatus.disconnected
        logger.warning("Browsing session disconnected", prefix=self.current_prefix)

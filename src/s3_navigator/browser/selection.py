"""Multi-select over the items of the current folder."""

from enum import Enum
from typing import Iterable


class SelectionState(str, Enum):
    """Tri-state of the visible page's "select all" control."""

    none = "none"
    some = "some"
    all = "all"


class SelectionTracker:
    """A set of selected item keys, scoped to one folder.

    Selection is sticky within a folder: a key stays selected when a search
    or page change hides it, and is only dropped by an explicit deselect,
    a "select all" toggle, or navigation.
    """

    def __init__(self):
        self._keys: set[str] = set()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self._keys)

    def select(self, key: str, included: bool) -> None:
        if included:
            self._keys.add(key)
        else:
            self._keys.discard(key)

    def select_all_visible(self, included: bool, visible_keys: Iterable[str]) -> None:
        """Replace the selection with the visible keys, or clear it."""
        self._keys = set(visible_keys) if included else set()

    def is_selected(self, key: str) -> bool:
        return key in self._keys

    def visible_selection_state(self, visible_keys: Iterable[str]) -> SelectionState:
        visible = list(visible_keys)
        selected = sum(1 for key in visible if key in self._keys)
        if visible and selected == len(visible):
            return SelectionState.all
        if selected:
            return SelectionState.some
        return SelectionState.none

    def clear(self) -> None:
        self._keys.clear()

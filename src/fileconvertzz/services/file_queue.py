"""Ordered file queue with the selection it holds."""

from __future__ import annotations
from typing import Iterable

from fileconvertzz.types_job_types import SelectableFile


def renumber_selection(selection: Iterable[int], removed: int) -> frozenset[int]:
    """Selection after the file at ``removed`` is taken out of the queue.

    The removed index is dropped, indices above it shift down by one and
    indices below it stay put.
    """
    return frozenset(i - 1 if i > removed else i for i in selection if i != removed)


class FileQueue:
    """File queue plus multi-select selection, owned by one UI controller.

    Files keep insertion order and duplicates by name are allowed. Files and
    selection are changed together so the selection never points at a
    removed or shifted row. Use ``files`` and ``selection`` as snapshots for
    the resolver.
    """

    def __init__(self) -> None:
        self._files: list[SelectableFile] = []
        self._selection: frozenset[int] = frozenset()

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> tuple[SelectableFile, ...]:
        return tuple(self._files)

    @property
    def selection(self) -> frozenset[int]:
        return self._selection

    def add(self, files: Iterable[SelectableFile]) -> int:
        """Append files; the first file is selected when the queue was empty."""
        was_empty = not self._files
        added = list(files)
        self._files.extend(added)
        if was_empty and added:
            self._selection = frozenset({0})
        return len(added)

    def remove(self, index: int) -> SelectableFile:
        self._check_index(index)
        removed = self._files.pop(index)
        self._selection = renumber_selection(self._selection, index)
        return removed

    def clear(self) -> None:
        self._files.clear()
        self._selection = frozenset()

    def toggle(self, index: int) -> None:
        self._check_index(index)
        self._selection = self._selection ^ {index}

    def set_selected(self, index: int, selected: bool) -> None:
        self._check_index(index)
        if selected:
            self._selection = self._selection | {index}
        else:
            self._selection = self._selection - {index}

    def select_only(self, index: int) -> None:
        self._check_index(index)
        self._selection = frozenset({index})

    def select_all(self) -> None:
        self._selection = frozenset(range(len(self._files)))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._files):
            raise IndexError(f"queue index out of range: {index}")

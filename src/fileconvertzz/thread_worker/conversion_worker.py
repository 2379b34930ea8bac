from __future__ import annotations

"""Background worker for running one conversion job in a QThread.

The window resolves nothing itself: it snapshots the queue and selection
into a ``ConversionRequest`` and hands it to this worker, which resolves,
runs and saves the job off the UI thread and reports back through signals.
It does **not** know anything about widgets.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from PySide6.QtCore import QObject, Signal, Slot

from ..config import Settings
from ..errors import SelectionError, ValidationError
from ..pipeline import run_action
from ..types_job_types import Operation, SelectableFile


@dataclass(slots=True)
class ConversionRequest:
    """Everything the worker needs, captured on the UI thread.

    - ``files``     : Queue snapshot, in queue order.
    - ``selection`` : Selected queue indices at the time of the click.
    - ``out_dir``   : Folder where the outputs are saved.
    """

    operation: Operation
    files: tuple[SelectableFile, ...]
    selection: frozenset[int]
    out_dir: Path
    settings: Settings
    parameters: Mapping[str, Any] = field(default_factory=dict)


class ConversionWorker(QObject):
    """QObject that runs ``run_action`` in a background thread.

    Create it in the main window, move it to a ``QThread`` and connect its
    signals to the log pane and progress bar.
    """

    # Status text (shown in the log area)
    status = Signal(str)

    # Per-file / per-page progress: done, total
    progress = Signal(int, int)

    # Emitted when the job finishes successfully (report dict)
    finished = Signal(dict)

    # The selection or the exclusion spec did not fit the operation
    rejected = Signal(str)

    # Emitted on failure: human message, full traceback as string
    error = Signal(str, str)

    def __init__(self, request: ConversionRequest, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._request = request

    @Slot()
    def run(self) -> None:
        """Entry-point invoked from the QThread.

        Every outcome ends in exactly one of ``finished``, ``rejected`` or
        ``error`` so the window can always re-enable its controls.
        """
        import traceback

        req = self._request
        try:
            report: Dict[str, Any] = run_action(
                req.operation,
                req.files,
                req.selection,
                req.out_dir,
                settings=req.settings,
                parameters=req.parameters,
                status_cb=self.status.emit,
                progress_cb=self.progress.emit,
            )
        except (SelectionError, ValidationError) as exc:
            self.rejected.emit(str(exc))
        except Exception as exc:  # noqa: BLE001 – surfaced to the UI, not swallowed
            tb = traceback.format_exc()
            self.error.emit(str(exc), tb)
        else:
            self.finished.emit(report)

from __future__ import annotations
import html
import sys
from pathlib import Path
from typing import List

from PySide6.QtCore import Qt, QThread
from PySide6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QHeaderView,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from fileconvertzz.config import Settings
from fileconvertzz.logging_setup import get_logger
from fileconvertzz.services.file_kinds import classify
from fileconvertzz.services.file_queue import FileQueue
from fileconvertzz.thread_worker.conversion_worker import ConversionRequest, ConversionWorker
from fileconvertzz.types_job_types import ImageFormat, Operation, SelectableFile

HERE = Path(__file__).resolve().parent

# (label, operation, parameters); None rows are section headers
ACTIONS = [
    ("Image Tools", None, None),
    ("Convert to PNG", Operation.CONVERT_IMAGE_FORMAT, {"target": ImageFormat.PNG}),
    ("Convert to JPEG", Operation.CONVERT_IMAGE_FORMAT, {"target": ImageFormat.JPEG}),
    ("Images to PDF", Operation.IMAGES_TO_PDF, {}),
    ("PDF Tools", None, None),
    ("PDF to JPEGs", Operation.PDF_TO_IMAGES, {}),
    ("Merge PDFs", Operation.MERGE_PDFS, {}),
    ("Exclude Pages", Operation.EXCLUDE_PAGES, {}),
]

# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------
class ConvertzzApp(QMainWindow):
    def __init__(self) -> None:
        super().__init__()

        # Log styles
        self.LOG_STYLES = {
            "warning": {"color": "#d97a00", "bold": True},
            "error":   {"color": "#c62828", "bold": True},
            "success": {"color": "#007200", "bold": True},
            "info":    {"color": "#000000", "bold": False},
        }

        # Load settings from YAML (or defaults if file is missing)
        self.settings = Settings.from_file(HERE.parent.parent / "config.yaml")
        self.logger = get_logger(logfile=self.settings.log_file, level=self.settings.log_level)

        # The queue and its selection live here and nowhere else
        self.queue = FileQueue()
        self._refreshing = False

        self._thread: QThread | None = None
        self._worker: ConversionWorker | None = None

        self._build_ui()
        self.setAcceptDrops(True)
        self.setWindowTitle("File Convertzz")
        self.resize(760, 560)
        self.log("Ready. Drop files or click Add files.")

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)

        toolbar = QHBoxLayout()
        self.add_files_btn = QPushButton("Add files…")
        self.remove_btn = QPushButton("Remove")
        self.clear_btn = QPushButton("Clear All")
        for btn in (self.add_files_btn, self.remove_btn, self.clear_btn):
            toolbar.addWidget(btn)
        toolbar.addStretch(1)
        layout.addLayout(toolbar)

        # Columns: ✓, Name, Type, Size
        self.table = QTableWidget(0, 4, central)
        self.table.setHorizontalHeaderLabels(["", "Name", "Type", "Size"])
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setStretchLastSection(True)
        self.table.setColumnWidth(0, 28)
        self.table.setColumnWidth(1, 360)
        self.table.setColumnWidth(2, 90)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table)

        actions = QHBoxLayout()
        self.action_combo = QComboBox()
        self.action_combo.addItem("Select an Action…")
        for label, operation, _ in ACTIONS:
            self.action_combo.addItem(label)
            if operation is None:
                # section header: visible but not selectable
                item = self.action_combo.model().item(self.action_combo.count() - 1)
                item.setEnabled(False)
        actions.addWidget(self.action_combo, 1)
        self.run_btn = QPushButton("Run")
        actions.addWidget(self.run_btn)
        layout.addLayout(actions)

        output = QHBoxLayout()
        output.addWidget(QLabel("Save to:"))
        self.output_line = QLineEdit(str(self.settings.output_dir))
        output.addWidget(self.output_line, 1)
        self.browse_output_btn = QPushButton("Browse…")
        output.addWidget(self.browse_output_btn)
        layout.addLayout(output)

        self.progress_bar = QProgressBar()
        self.progress_bar.setValue(0)
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.log_text = QTextEdit()
        self.log_text.setReadOnly(True)
        layout.addWidget(self.log_text)

        self.setCentralWidget(central)

        # Wire signals
        self.add_files_btn.clicked.connect(self.on_add_files)
        self.remove_btn.clicked.connect(self.on_remove_selected)
        self.clear_btn.clicked.connect(self.on_clear_all)
        self.browse_output_btn.clicked.connect(self.select_output_dir)
        self.run_btn.clicked.connect(self.on_run_clicked)
        self.table.itemChanged.connect(self._on_item_changed)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def log(self, message: str, style: str = "info") -> None:
        """Unified logger with style presets (warning, error, success, info)."""
        safe = html.escape(message)

        cfg = self.LOG_STYLES.get(style, self.LOG_STYLES["info"])
        if cfg["bold"]:
            html_msg = f'<span style="color:{cfg["color"]};"><b>{safe}</b></span>'
        else:
            html_msg = f'<span style="color:{cfg["color"]};">{safe}</span>'

        self.log_text.append(html_msg)

    def _set_ui_enabled(self, enabled: bool) -> None:
        """Enable or disable every trigger while a job is in flight."""
        for widget in (
            self.add_files_btn,
            self.remove_btn,
            self.clear_btn,
            self.table,
            self.action_combo,
            self.run_btn,
            self.output_line,
            self.browse_output_btn,
        ):
            widget.setEnabled(enabled)
        self.setAcceptDrops(enabled)

    @staticmethod
    def _format_size(num_bytes: int) -> str:
        return f"{num_bytes / 1024:.1f} KB"

    def _refresh_table(self) -> None:
        """Rebuild the table from the queue; check boxes mirror the selection."""
        self._refreshing = True
        try:
            files = self.queue.files
            selection = self.queue.selection
            self.table.setRowCount(len(files))
            for row, f in enumerate(files):
                check = QTableWidgetItem()
                check.setFlags(Qt.ItemIsUserCheckable | Qt.ItemIsEnabled | Qt.ItemIsSelectable)
                check.setCheckState(Qt.Checked if row in selection else Qt.Unchecked)
                self.table.setItem(row, 0, check)

                self.table.setItem(row, 1, QTableWidgetItem(f.name))
                self.table.setItem(row, 2, QTableWidgetItem(classify(f).value))

                size_item = QTableWidgetItem(self._format_size(f.size_bytes))
                size_item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
                self.table.setItem(row, 3, size_item)
        finally:
            self._refreshing = False

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        if self._refreshing or item.column() != 0:
            return
        self.queue.set_selected(item.row(), item.checkState() == Qt.Checked)

    def _append_files(self, paths: List[Path]) -> None:
        """Queue the given files in order; duplicates are kept."""
        files: List[SelectableFile] = []
        for path in paths:
            if not path.is_file():
                continue
            try:
                files.append(SelectableFile.from_path(path))
            except OSError as exc:
                self.log(f"Skipped unreadable file: {path} ({exc})", "error")

        if not files:
            return
        self.queue.add(files)
        self._refresh_table()
        self.log(f"Added {len(files)} file(s).")

    # -------------------- Drag & Drop Events -------------------------
    def dragEnterEvent(self, event):  # type: ignore[override]
        """Accept drags carrying at least one local file."""
        mime = event.mimeData()
        if mime.hasUrls() and any(u.isLocalFile() and Path(u.toLocalFile()).is_file() for u in mime.urls()):
            event.acceptProposedAction()
            return
        event.ignore()

    def dropEvent(self, event):  # type: ignore[override]
        """Queue every dropped local file."""
        mime = event.mimeData()
        if not mime.hasUrls():
            event.ignore()
            return

        paths = [Path(u.toLocalFile()) for u in mime.urls() if u.isLocalFile()]
        self._append_files(paths)
        event.acceptProposedAction()

    # -------------------- Slots: toolbar buttons ---------------------
    def on_add_files(self) -> None:
        """Select one or more files and append them to the queue."""
        names, _ = QFileDialog.getOpenFileNames(self, "Add files")
        if names:
            self._append_files([Path(n) for n in names])

    def on_remove_selected(self) -> None:
        """Remove the highlighted row; the checked selection is renumbered."""
        row = self.table.currentRow()
        if row < 0 or row >= len(self.queue):
            self.log("Highlight a row to remove it.", "warning")
            return
        removed = self.queue.remove(row)
        self._refresh_table()
        self.log(f"Removed {removed.name}.")

    def on_clear_all(self) -> None:
        self.queue.clear()
        self._refresh_table()
        self.log("Queue cleared.")

    def select_output_dir(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, "Save to", self.output_line.text())
        if folder:
            self.output_line.setText(folder)

    # -------------------- Running a job ------------------------------
    def on_run_clicked(self) -> None:
        """Snapshot queue and selection, then run the job on a QThread."""
        if self._thread is not None:
            # single flight: a job is already running
            return

        index = self.action_combo.currentIndex() - 1
        if index < 0 or ACTIONS[index][1] is None:
            QMessageBox.warning(self, "File Convertzz", "Please select an action first.")
            return
        label, operation, parameters = ACTIONS[index]
        parameters = dict(parameters)

        if not self.queue.selection:
            QMessageBox.warning(self, "File Convertzz", "Please select a file first!")
            return

        if operation is Operation.EXCLUDE_PAGES:
            spec, ok = QInputDialog.getText(
                self, "Exclude Pages", 'Enter pages or ranges to exclude (e.g., "1, 4-6")'
            )
            if not ok or not spec.strip():
                return
            parameters["exclude"] = spec

        out_dir = Path(self.output_line.text()).expanduser()
        request = ConversionRequest(
            operation=operation,
            files=self.queue.files,
            selection=self.queue.selection,
            out_dir=out_dir,
            settings=self.settings,
            parameters=parameters,
        )
        self.log(f"{label}…")
        self._start_job(request)

    def _start_job(self, request: ConversionRequest) -> None:
        """Create QThread + ConversionWorker and start the background job."""
        self._set_ui_enabled(False)
        self.progress_bar.setValue(0)
        self.progress_bar.setVisible(True)

        self._thread = QThread(self)
        self._worker = ConversionWorker(request)
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.run)
        self._worker.status.connect(self.log)
        self._worker.progress.connect(self._on_worker_progress)
        self._worker.finished.connect(self._on_job_finished)
        self._worker.rejected.connect(self._on_job_rejected)
        self._worker.error.connect(self._on_job_error)

        for signal in (self._worker.finished, self._worker.rejected, self._worker.error):
            signal.connect(self._thread.quit)
            signal.connect(self._worker.deleteLater)
        self._thread.finished.connect(self._on_thread_finished)
        self._thread.finished.connect(self._thread.deleteLater)

        self._thread.start()

    def _on_worker_progress(self, done: int, total: int) -> None:
        if total > 0:
            self.progress_bar.setValue(int(done * 100 / total))

    def _on_job_finished(self, report: dict) -> None:
        for path in report["outputs"]:
            self.log(f"Saved {path}", "success")
        self.log("Done!", "success")

    def _on_job_rejected(self, message: str) -> None:
        self.log(message, "warning")
        QMessageBox.warning(self, "File Convertzz", message)

    def _on_job_error(self, message: str, tb: str) -> None:
        self.logger.error("Conversion failed: %s\n%s", message, tb)
        self.log(f"An error occurred: {message}", "error")
        QMessageBox.critical(self, "File Convertzz", f"An error occurred: {message}")

    def _on_thread_finished(self) -> None:
        """Reset thread/worker references when the QThread stops."""
        self._thread = None
        self._worker = None
        self.progress_bar.setVisible(False)
        self._set_ui_enabled(True)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main():
    app = QApplication(sys.argv)
    win = ConvertzzApp()
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()

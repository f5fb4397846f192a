# LogViewer widget: imports multi-node logs and shows them as an incrementally loaded node grid
# Ties together LogCorpus, FilterState and RowGrouper with the Qt model and widgets

import logging

from nodelog import qt
from .constants import (DEFAULT_FETCH_LIMIT, DEFAULT_TIME_WINDOW_NS, NODE_COLUMN_WIDTH,
                        TIME_COLUMN_WIDTH, ordered_levels)
from .corpus import LogCorpus, read_log_files
from .errors import FilterConfigError, LogLoadError
from .export import default_export_filename, export_records_to_csv_file, format_record_as_text
from .filtering import FilterState
from .grouping import RowGrouper
from .log_model import LogModel
from .sample import SAMPLE_LOG
from .widgets import FilterWidget, ModuleBadgeDelegate

logger = logging.getLogger(__name__)


class LogViewer(qt.QWidget):
    """QWidget for browsing logs from several nodes side by side.

    Records are shown in time order, one column per node; records from
    different nodes that are close in time share a row. Rows are loaded
    ``fetch_limit`` matching records at a time as the user scrolls down.

    Arguments
    ---------
    time_window : int
        Largest gap in nanoseconds between consecutive records in one row.
    fetch_limit : int
        Number of matching records requested per load.
    parent : QWidget | None
        Parent widget (see Qt documentation).
    """

    # Emitted with a short user-facing message after imports, filtering and failures
    status_changed = qt.Signal(str)

    def __init__(self, time_window=DEFAULT_TIME_WINDOW_NS, fetch_limit=DEFAULT_FETCH_LIMIT, parent=None):
        qt.QWidget.__init__(self, parent=parent)
        self.time_window = time_window
        self.fetch_limit = fetch_limit

        self.corpus = None
        self.filter_state = None
        self.grouper = None
        self.loaded_records = []
        self._finished = True
        self._loading = False

        self.layout = qt.QGridLayout()
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(self.layout)

        self.filter_widget = FilterWidget()
        self.filter_widget.filters_changed.connect(self.apply_filters)
        self.filter_widget.open_requested.connect(self.open_files_dialog)
        self.filter_widget.sample_requested.connect(self.load_sample)
        self.filter_widget.export_requested.connect(self.export_csv)
        self.filter_widget.expand_all_requested.connect(self.set_all_expanded)
        self.layout.addWidget(self.filter_widget, 0, 0)

        self.model = LogModel()

        self.tree = qt.QTreeView()
        self.tree.setModel(self.model)
        self.tree.setAlternatingRowColors(True)
        self.tree.setUniformRowHeights(False)
        self.tree.setEditTriggers(qt.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.badge_delegate = ModuleBadgeDelegate(self)
        self.tree.setItemDelegate(self.badge_delegate)
        self.tree.expanded.connect(self._on_item_expanded)

        self.tree.setContextMenuPolicy(qt.Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.customContextMenuRequested.connect(self._show_row_context_menu)

        scrollbar = self.tree.verticalScrollBar()
        scrollbar.valueChanged.connect(self._on_scroll_changed)
        self.layout.addWidget(self.tree, 1, 0)

        self.status_label = qt.QLabel("Drop log files here or use ≡ to import them")
        self.status_changed.connect(self.status_label.setText)
        self.layout.addWidget(self.status_label, 2, 0)

        self.setAcceptDrops(True)
        self.resize(1200, 600)

    # ---- import -------------------------------------------------------------------------------

    def load_text(self, text):
        """Parse *text* as a new corpus and show it. Returns the corpus, or None on failure."""
        try:
            corpus = LogCorpus.load(text)
        except LogLoadError as exc:
            logger.warning("Failed to load logs: %s", exc)
            self._report("failed to load logs")
            return None

        self.set_corpus(corpus)
        self._report(f"logs successfully imported: {len(corpus.records)} records found")
        return corpus

    def load_files(self, paths):
        """Read, concatenate and load the log files at *paths*."""
        try:
            text = read_log_files(paths)
        except OSError as exc:
            logger.warning("Failed to read log files %s: %s", paths, exc)
            self._report("failed to load logs")
            return None
        return self.load_text(text)

    def load_sample(self):
        """Load the built-in sample log."""
        return self.load_text(SAMPLE_LOG)

    def open_files_dialog(self):
        paths, _ = qt.QFileDialog.getOpenFileNames(
            self, "Import Log Files", "", "Log Files (*.log *.json *.jsonl);;All Files (*)"
        )
        if paths:
            self.load_files(paths)

    def set_corpus(self, corpus):
        """Replace the displayed corpus; filters are reset to their defaults."""
        self.corpus = corpus
        self.filter_state = FilterState(corpus)
        self.filter_widget.reset(ordered_levels(corpus.levels))
        self._restart()

    # ---- filtering and incremental loading ----------------------------------------------------

    def apply_filters(self, levels, message):
        """Filter by *levels* (empty = all) and *message* pattern, then reload from the start."""
        if self.filter_state is None:
            return
        error = None
        try:
            self.filter_state.set_filters(levels, message)
            self.filter_widget.set_message_error(None)
        except FilterConfigError as exc:
            error = str(exc)
            self.filter_widget.set_message_error(error)

        self._restart()
        if error is not None:
            self._report(error)
        else:
            self._report(f"logs successfully filtered: {len(self.loaded_records)} records found")

    def _restart(self):
        self.filter_state.reset()
        self.grouper = RowGrouper(self.corpus.nodes, self.time_window)
        self.loaded_records = []
        self._finished = False
        self.model.set_nodes(self.corpus.nodes, self.corpus.modules, self.corpus.first)
        self.tree.setColumnWidth(0, TIME_COLUMN_WIDTH)
        for column in range(1, len(self.corpus.nodes) + 1):
            self.tree.setColumnWidth(column, NODE_COLUMN_WIDTH)
        self.fetch_more()

    def fetch_more(self):
        """Load the next batch of matching records into the grid. Returns the number loaded."""
        if self._finished or self._loading:
            return 0

        self._loading = True
        try:
            records = list(self.filter_state.filter(self.fetch_limit))
            self.loaded_records.extend(records)
            for row in self.grouper.feed(records):
                self.model.append_display_row(row)

            if self.filter_state.exhausted:
                last = self.grouper.close()
                if last is not None:
                    self.model.append_display_row(last)
                else:
                    self.model.set_pending_row(None)
                self._finished = True
            else:
                self.model.set_pending_row(self.grouper.pending)
                # the view lays out its rows first; the scrollbar range is only known afterwards
                qt.QTimer.singleShot(0, self._fill_viewport)
        finally:
            self._loading = False
        return len(records)

    @property
    def finished(self):
        """True when every matching record has been loaded."""
        return self._finished

    def _on_scroll_changed(self, value):
        if value >= self.tree.verticalScrollBar().maximum():
            self.fetch_more()

    def _fill_viewport(self):
        """Keep loading while the rows loaded so far do not fill the view.

        Without a scrollbar there is nothing to scroll, so valueChanged would
        never ask for the next batch.
        """
        if not self._finished and self.tree.verticalScrollBar().maximum() == 0:
            self.fetch_more()

    # ---- export and display -------------------------------------------------------------------

    def export_csv(self, filename=None):
        """Export the loaded records to CSV, asking for a file name if none is given."""
        if self.corpus is None:
            self._report("import logs before exporting")
            return None

        if not filename:
            filename, _ = qt.QFileDialog.getSaveFileName(
                self, "Export to CSV", default_export_filename(), "CSV Files (*.csv)"
            )
            if not filename:
                return None

        try:
            count = export_records_to_csv_file(self.loaded_records, self.corpus.nodes, filename)
        except OSError as e:
            qt.QMessageBox.critical(self, "Export Error", f"Failed to export logs:\n{e}")
            return None

        self._report(f"{count} records exported to {filename}")
        return filename

    def set_all_expanded(self, expanded):
        """Expand (creating details) or collapse every row."""
        if expanded:
            self.model.expand_all_content()
            self.tree.expandAll()
        else:
            self.tree.collapseAll()

    def _on_item_expanded(self, index):
        item = self.model.itemFromIndex(index)
        self.model.item_expanded(item)

    def _show_row_context_menu(self, position):
        index = self.tree.indexAt(position)
        record = self.model.record_at(index)
        if record is None:
            return

        menu = qt.QMenu(self)
        copy_action = qt.QAction("Copy Record", self)
        copy_action.triggered.connect(lambda checked=False, rec=record: self.copy_record(rec))
        menu.addAction(copy_action)
        menu.popup(self.tree.mapToGlobal(position))

    def copy_record(self, record):
        """Copy the text form of *record* to the clipboard."""
        qt.QApplication.clipboard().setText(format_record_as_text(record))

    def _report(self, message):
        logger.info(message)
        self.status_changed.emit(message)

    # ---- drag and drop ------------------------------------------------------------------------

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event):
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        if paths:
            event.acceptProposedAction()
            self.load_files(paths)

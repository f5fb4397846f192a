import csv
import os
import tempfile
from unittest.mock import patch

import pytest

from nodelog import qt
from nodelog.logviewer.log_model import ItemDataRole, RowKind
from nodelog.logviewer.viewer import LogViewer

SAMPLE_NODES = ["GAEU.6BSA", "GCHI.OEDQ", "GDJ7.M4FG", "GDZH.X5S3"]


class TestLogViewerImport:
    """Test importing logs into the viewer."""

    # QApplication fixture provided by conftest.py

    def test_load_sample(self, qapp):
        viewer = LogViewer()
        statuses = []
        viewer.status_changed.connect(statuses.append)

        corpus = viewer.load_sample()
        assert len(corpus.records) == 19
        assert statuses[-1] == "logs successfully imported: 19 records found"
        assert viewer.status_label.text() == statuses[-1]

        # everything fits in one fetch
        assert viewer.finished
        assert len(viewer.loaded_records) == 19
        assert viewer.model.column_titles() == ["T"] + SAMPLE_NODES
        assert len(viewer.model.display_rows()) == 6

        # repeated header before the first row
        first = viewer.model.item(0, 0)
        assert first.data(ItemDataRole.ROW_KIND) == RowKind.HEADER
        assert first.text() == "T"
        second = viewer.model.item(1, 0)
        assert second.data(ItemDataRole.ROW_KIND) == RowKind.ROW
        assert second.text() == "000.000000s"

        # level checkboxes follow the corpus levels
        levels = [cb.text() for cb in viewer.filter_widget.level_checkboxes]
        assert sorted(levels) == sorted(corpus.levels)

    def test_load_files(self, qapp, log_line):
        viewer = LogViewer()
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = []
            for i, node in enumerate(["A", "B"]):
                path = os.path.join(tmpdir, f"{node}.log")
                with open(path, "w", encoding="utf-8") as fh:
                    fh.write(log_line(f"2019-05-15T00:00:0{i}Z", node=node))
                paths.append(path)
            corpus = viewer.load_files(paths)

        assert corpus.nodes == ["A", "B"]
        assert len(viewer.loaded_records) == 2

    def test_load_failure(self, qapp):
        viewer = LogViewer()
        assert viewer.load_text(b"\xff\xfe\x81") is None
        assert viewer.status_label.text() == "failed to load logs"
        assert viewer.corpus is None

        assert viewer.load_files(["/nonexistent/node.log"]) is None
        assert viewer.status_label.text() == "failed to load logs"


class TestLogViewerIncremental:
    """Test that rows are loaded a batch at a time."""

    def test_fetch_more(self, qapp):
        viewer = LogViewer(fetch_limit=3)
        viewer.load_sample()

        # limit + 1 records: the first row is full but still open
        assert len(viewer.loaded_records) == 4
        assert not viewer.finished
        assert len(viewer.model.display_rows()) == 1
        assert viewer.model.rowCount() == 2

        viewer.fetch_more()
        assert len(viewer.loaded_records) == 8
        assert len(viewer.model.display_rows()) == 2
        assert viewer.model.rowCount() == 3

        while not viewer.finished:
            viewer.fetch_more()
        assert len(viewer.loaded_records) == 19
        assert len(viewer.model.display_rows()) == 6
        assert viewer.fetch_more() == 0

    def test_loads_until_view_is_filled(self, qapp):
        """Batches too short to scroll are followed by more without user action."""
        viewer = LogViewer(fetch_limit=2)
        viewer.resize(1200, 2000)
        viewer.show()
        qapp.processEvents()
        viewer.load_sample()
        assert not viewer.finished

        for _ in range(100):
            if viewer.finished:
                break
            qapp.processEvents()

        viewer.close()
        assert viewer.finished
        assert len(viewer.loaded_records) == 19
        assert len(viewer.model.display_rows()) == 6

    def test_batches_match_single_fetch(self, qapp):
        whole = LogViewer()
        whole.load_sample()

        paged = LogViewer(fetch_limit=2)
        paged.load_sample()
        while not paged.finished:
            paged.fetch_more()

        def layout(viewer):
            return [[None if rec is None else rec.id for rec in row.cells] for row in viewer.model.display_rows()]

        assert [r.message for r in paged.loaded_records] == [r.message for r in whole.loaded_records]
        assert len(layout(paged)) == len(layout(whole))


class TestLogViewerFiltering:
    """Test applying filters from the viewer."""

    def test_apply_level_filter(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        viewer.apply_filters(["eror", "crit"], "")

        assert {r.level for r in viewer.loaded_records} == {"eror", "crit"}
        assert viewer.status_label.text() == "logs successfully filtered: 2 records found"
        assert len(viewer.model.display_rows()) == 1

    def test_apply_message_filter(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        viewer.apply_filters([], "/BALLOT/i")
        assert [r.message for r in viewer.loaded_records] == ["ballot broadcasted", "ballot broadcasted"]

    def test_invalid_pattern_is_reported(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        viewer.apply_filters(["info"], "node (")

        assert "node (" in viewer.filter_widget.message_input.toolTip()
        assert "node (" in viewer.status_label.text()
        # message predicate left unset, level filter still applied
        assert {r.level for r in viewer.loaded_records} == {"info"}

        viewer.apply_filters(["info"], "node")
        assert viewer.filter_widget.message_input.toolTip() == ""

    def test_filter_widget_signal(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        for checkbox in viewer.filter_widget.level_checkboxes:
            checkbox.setChecked(checkbox.text() == "warn")
        viewer.filter_widget.message_input.setText("voteproof")
        viewer.filter_widget.apply_button.click()

        assert [r.message for r in viewer.loaded_records] == ["voteproof not yet majority"]

    def test_apply_before_import_is_ignored(self, qapp):
        viewer = LogViewer()
        viewer.apply_filters(["info"], "")
        assert viewer.model.rowCount() == 0


class TestLogViewerExport:
    """Test CSV export from the viewer."""

    def test_export_to_given_file(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        viewer.apply_filters(["warn"], "")

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, "export.csv")
            assert viewer.export_csv(filename) == filename
            with open(filename, encoding="utf-8", newline="") as fh:
                rows = list(csv.reader(fh, escapechar="\\", doublequote=False))

        assert rows[0] == ["t"] + SAMPLE_NODES
        # only the loaded (filtered) records are exported
        assert len(rows) == 3
        assert viewer.status_label.text() == f"2 records exported to {filename}"

    def test_export_asks_for_file_name(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, "dialog.csv")
            with patch('nodelog.qt.QFileDialog.getSaveFileName') as mock_dialog:
                mock_dialog.return_value = (filename, "CSV Files (*.csv)")
                viewer.export_csv()
            assert mock_dialog.call_args[0][2].startswith("nodelog-")
            assert os.path.exists(filename)

    def test_export_cancelled(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        with patch('nodelog.qt.QFileDialog.getSaveFileName') as mock_dialog:
            mock_dialog.return_value = ("", "")
            assert viewer.export_csv() is None

    def test_export_before_import(self, qapp):
        viewer = LogViewer()
        assert viewer.export_csv("unused.csv") is None
        assert not os.path.exists("unused.csv")


class TestLogViewerDetails:
    """Test lazily created record details."""

    @pytest.fixture
    def viewer(self, qapp):
        viewer = LogViewer()
        viewer.load_sample()
        return viewer

    def test_expand_all_creates_details(self, viewer):
        model = viewer.model
        row_item = model.item(1, 0)
        assert row_item.rowCount() == 1
        assert row_item.child(0, 0).data(ItemDataRole.ROW_KIND) == RowKind.PLACEHOLDER

        viewer.set_all_expanded(True)
        display_row = row_item.data(ItemDataRole.DISPLAY_ROW)
        assert row_item.rowCount() == len(display_row.records)
        assert row_item.child(0, 0).data(ItemDataRole.ROW_KIND) == RowKind.DETAIL
        assert row_item.child(0, 0).text() == display_row.records[0].node
        assert '"module": "node"' in row_item.child(0, 1).text()

        viewer.set_all_expanded(False)
        assert row_item.rowCount() == len(display_row.records)

    def test_expanding_one_row(self, viewer):
        model = viewer.model
        row_item = model.item(2, 0)
        viewer.tree.expand(row_item.index())
        assert row_item.child(0, 0).data(ItemDataRole.ROW_KIND) == RowKind.DETAIL

    def test_copy_record(self, viewer, qapp):
        record = viewer.corpus.records[0]
        viewer.copy_record(record)
        text = qt.QApplication.clipboard().text()
        assert '"node created"' in text

# Qt item model presenting DisplayRows as a tree: one top-level row per display row
# Record details are created lazily, replacing a placeholder child when a row is expanded

from nodelog import qt
from .constants import TIME_COLUMN_TITLE
from .export import format_record_as_text
from .utils import level_abbreviation, level_color, module_colors

USER_ROLE = 0x0100  # Qt.ItemDataRole.UserRole


class ItemDataRole:
    """Constants for QStandardItem UserRole data slots."""
    DISPLAY_ROW = USER_ROLE + 1      # DisplayRow object on the time column item
    RECORD = USER_ROLE + 2           # LogRecord object on node cells and detail rows
    ROW_KIND = USER_ROLE + 3         # one of the RowKind strings below
    HAS_PLACEHOLDER = USER_ROLE + 4  # bool, True until details are created
    MODULE = USER_ROLE + 5           # module name of the record in a node cell
    MODULE_COLOR = USER_ROLE + 6     # badge background color for MODULE


class RowKind:
    HEADER = 'header'
    ROW = 'row'
    PLACEHOLDER = 'placeholder'
    DETAIL = 'detail'


PLACEHOLDER_TEXT = "Loading..."


class LogModel(qt.QStandardItemModel):
    """Tree model of display rows with node columns.

    Column 0 holds the elapsed time of the row's earliest record relative to
    the reference record; column ``i + 1`` holds the record for ``nodes[i]``.
    A repeated header row is inserted before every header-boundary row. The
    last appended row may be marked pending; it is replaced by the next call
    to :meth:`set_pending_row`.
    """

    def __init__(self, nodes=(), parent=None):
        super().__init__(parent)
        self.nodes = []
        self.reference = None
        self.module_colors = {}
        self._pending_model_rows = 0
        self.set_nodes(nodes)

    def set_nodes(self, nodes, modules=(), reference=None):
        """Clear all rows and set up columns for *nodes*.

        *reference* is the record elapsed times are measured from (normally
        the first record of the corpus).
        """
        self.clear()
        self.nodes = list(nodes)
        self.reference = reference
        self.module_colors = module_colors(list(modules))
        self._pending_model_rows = 0
        self.setHorizontalHeaderLabels(self.column_titles())

    def column_titles(self):
        return [TIME_COLUMN_TITLE] + [str(node) for node in self.nodes]

    def append_display_row(self, display_row):
        """Append a closed display row (and a header row before it when due)."""
        self._remove_pending()
        self._append(display_row)

    def set_pending_row(self, display_row):
        """Show *display_row* as the provisional last row, replacing any previous one."""
        self._remove_pending()
        if display_row is not None:
            self._pending_model_rows = self._append(display_row)

    def _remove_pending(self):
        if self._pending_model_rows:
            self.removeRows(self.rowCount() - self._pending_model_rows, self._pending_model_rows)
            self._pending_model_rows = 0

    def _append(self, display_row):
        added = 0
        if display_row.is_header_boundary:
            self.appendRow(self._create_header_items())
            added += 1
        self.appendRow(self._create_row_items(display_row))
        return added + 1

    def _create_header_items(self):
        items = []
        for title in self.column_titles():
            item = qt.QStandardItem(title)
            font = item.font()
            font.setBold(True)
            item.setFont(font)
            item.setSelectable(False)
            item.setData(RowKind.HEADER, ItemDataRole.ROW_KIND)
            items.append(item)
        return items

    def _create_row_items(self, display_row):
        earliest = display_row.earliest
        if earliest is not None and self.reference is not None:
            elapsed = earliest.timestamp.elapsed(self.reference.timestamp)
        else:
            elapsed = ""

        time_item = qt.QStandardItem(elapsed)
        time_item.setData(display_row, ItemDataRole.DISPLAY_ROW)
        time_item.setData(RowKind.ROW, ItemDataRole.ROW_KIND)
        if earliest is not None:
            time_item.setToolTip(earliest.timestamp.original)

        items = [time_item]
        for record in display_row.cells:
            items.append(self._create_cell_item(record))

        if display_row.records:
            time_item.appendRow(self._create_placeholder_items())
            time_item.setData(True, ItemDataRole.HAS_PLACEHOLDER)
        else:
            time_item.setData(False, ItemDataRole.HAS_PLACEHOLDER)
        return items

    def _create_cell_item(self, record):
        if record is None:
            item = qt.QStandardItem("")
            item.setData(RowKind.ROW, ItemDataRole.ROW_KIND)
            return item

        text = f"[{level_abbreviation(record.level)}] {record.module} {record.message}"
        item = qt.QStandardItem(text)
        item.setForeground(qt.QColor(level_color(record.level)))
        item.setToolTip(f"{record.caller}\n{record.timestamp.original}")
        item.setData(record, ItemDataRole.RECORD)
        item.setData(RowKind.ROW, ItemDataRole.ROW_KIND)
        item.setData(record.module, ItemDataRole.MODULE)
        item.setData(self.module_colors.get(record.module), ItemDataRole.MODULE_COLOR)
        return item

    def _create_placeholder_items(self):
        placeholder = qt.QStandardItem(PLACEHOLDER_TEXT)
        placeholder.setData(RowKind.PLACEHOLDER, ItemDataRole.ROW_KIND)
        return [placeholder]

    def item_expanded(self, item):
        """A row was expanded in a tree view: create its details if still pending."""
        if item is not None and item.data(ItemDataRole.HAS_PLACEHOLDER):
            self.replace_placeholder_with_content(item)

    def replace_placeholder_with_content(self, time_item):
        """Replace the loading placeholder of a row with one detail row per record."""
        if not time_item.data(ItemDataRole.HAS_PLACEHOLDER):
            return
        display_row = time_item.data(ItemDataRole.DISPLAY_ROW)

        time_item.removeRow(0)
        time_item.setData(False, ItemDataRole.HAS_PLACEHOLDER)
        for record in display_row.records:
            time_item.appendRow(self._create_detail_items(record))

    def expand_all_content(self):
        """Create the details of every row, e.g. before expanding the whole tree."""
        for row in range(self.rowCount()):
            item = self.item(row, 0)
            if item is not None:
                self.item_expanded(item)

    def _create_detail_items(self, record):
        label = qt.QStandardItem(str(record.node))
        label.setData(RowKind.DETAIL, ItemDataRole.ROW_KIND)
        label.setData(record, ItemDataRole.RECORD)

        detail = qt.QStandardItem(format_record_as_text(record))
        detail.setData(RowKind.DETAIL, ItemDataRole.ROW_KIND)
        detail.setData(record, ItemDataRole.RECORD)
        detail.setForeground(qt.QColor(level_color(record.level)))
        return [label, detail]

    def display_rows(self):
        """Return the DisplayRows currently shown, including a pending one."""
        rows = []
        for row in range(self.rowCount()):
            item = self.item(row, 0)
            display_row = item.data(ItemDataRole.DISPLAY_ROW) if item is not None else None
            if display_row is not None:
                rows.append(display_row)
        return rows

    def record_at(self, index):
        """Return the LogRecord behind a model index, or None."""
        if not index.isValid():
            return None
        return self.data(index, ItemDataRole.RECORD)

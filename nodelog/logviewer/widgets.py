# Custom widgets for the log viewer
# Contains FilterWidget (level/message filter bar with actions menu) and ModuleBadgeDelegate

from nodelog import qt
from .log_model import ItemDataRole
from .utils import font_color_for_background, level_abbreviation, level_color


class FilterWidget(qt.QWidget):
    """Filter bar: one checkbox per level, a message pattern field and an actions menu."""

    filters_changed = qt.Signal(list, str)  # (levels, message pattern); empty list = all levels
    open_requested = qt.Signal()
    sample_requested = qt.Signal()
    export_requested = qt.Signal()
    expand_all_requested = qt.Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = qt.QHBoxLayout()
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(6)
        self.setLayout(self.layout)

        self.layout.addWidget(qt.QLabel("Level:"))
        self.level_layout = qt.QHBoxLayout()
        self.level_layout.setSpacing(3)
        self.layout.addLayout(self.level_layout)
        self.level_checkboxes = []

        self.message_input = qt.QLineEdit()
        self.message_input.setPlaceholderText("Message  [regular expression | /regular expression/flags]")
        self.message_input.setClearButtonEnabled(True)
        self.message_input.returnPressed.connect(self._emit_filters_changed)
        self.message_input.setSizePolicy(qt.QSizePolicy.Policy.Expanding, qt.QSizePolicy.Policy.Fixed)
        self.layout.addWidget(self.message_input)

        self.apply_button = qt.QPushButton("Apply Filters")
        self.apply_button.clicked.connect(self._emit_filters_changed)
        self.layout.addWidget(self.apply_button)

        self.menu_button = qt.QPushButton()
        self.menu_button.setText("≡")
        self.menu_button.setFixedSize(30, 30)
        self.menu_button.setToolTip("Import, export and display options")
        self.menu_button.clicked.connect(self._show_menu)
        self.layout.addWidget(self.menu_button)

        self._expanded = False

    def set_levels(self, levels):
        """Replace the level checkboxes with one (checked) box per level."""
        for checkbox in self.level_checkboxes:
            self.level_layout.removeWidget(checkbox)
            checkbox.setParent(None)
            checkbox.deleteLater()
        self.level_checkboxes = []

        for level in levels:
            checkbox = qt.QCheckBox(str(level))
            checkbox.setChecked(True)
            checkbox.setStyleSheet(f"QCheckBox {{ color: {level_color(level)}; }}")
            self.level_layout.addWidget(checkbox)
            self.level_checkboxes.append(checkbox)

    def selected_levels(self):
        """Return the checked levels, or an empty list when all of them are checked."""
        checked = [cb.text() for cb in self.level_checkboxes if cb.isChecked()]
        if len(checked) == len(self.level_checkboxes):
            return []
        return checked

    def message_text(self):
        return self.message_input.text()

    def set_message_error(self, error):
        """Mark the message field invalid (with *error* as tooltip), or clear the mark if None."""
        if error:
            self.message_input.setStyleSheet("QLineEdit { border: 2px solid red; }")
            self.message_input.setToolTip(error)
        else:
            self.message_input.setStyleSheet("")
            self.message_input.setToolTip("")

    def reset(self, levels=()):
        """Clear the message field and show *levels*, all checked."""
        self.message_input.clear()
        self.set_message_error(None)
        self.set_levels(levels)

    def _emit_filters_changed(self):
        self.filters_changed.emit(self.selected_levels(), self.message_text())

    def _show_menu(self):
        """Show the actions menu below the menu button."""
        menu = qt.QMenu(self)

        open_action = qt.QAction("Import Log Files...", self)
        open_action.triggered.connect(self.open_requested.emit)
        menu.addAction(open_action)

        sample_action = qt.QAction("Load Sample Data", self)
        sample_action.triggered.connect(self.sample_requested.emit)
        menu.addAction(sample_action)

        export_action = qt.QAction("Export to CSV...", self)
        export_action.setToolTip("Export the loaded (filtered) records to a CSV file")
        export_action.triggered.connect(self.export_requested.emit)
        menu.addAction(export_action)

        menu.addSeparator()
        expand_action = qt.QAction("Collapse All" if self._expanded else "Expand All", self)
        expand_action.triggered.connect(self._toggle_expand_all)
        menu.addAction(expand_action)

        button_pos = self.menu_button.mapToGlobal(self.menu_button.rect().bottomLeft())
        menu.exec(button_pos)

    def _toggle_expand_all(self):
        self._expanded = not self._expanded
        self.expand_all_requested.emit(self._expanded)


class ModuleBadgeDelegate(qt.QStyledItemDelegate):
    """Paints node cells as a colored module badge followed by the level letter and message."""

    BADGE_PADDING = 4

    def paint(self, painter, option, index):
        record = index.data(ItemDataRole.RECORD)
        color = index.data(ItemDataRole.MODULE_COLOR)
        if record is None or color is None or index.data(ItemDataRole.MODULE) is None:
            super().paint(painter, option, index)
            return

        opt = qt.QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        opt.text = ""
        style = opt.widget.style() if opt.widget is not None else qt.QApplication.style()
        style.drawControl(qt.QStyle.ControlElement.CE_ItemViewItem, opt, painter, opt.widget)

        painter.save()
        metrics = opt.fontMetrics
        rect = opt.rect
        badge_text = str(record.module)
        badge_width = metrics.horizontalAdvance(badge_text) + 2 * self.BADGE_PADDING
        badge_rect = qt.QRect(rect.left() + 2, rect.top() + 2, badge_width, rect.height() - 4)

        painter.setRenderHint(qt.QPainter.RenderHint.Antialiasing)
        painter.setPen(qt.Qt.PenStyle.NoPen)
        painter.setBrush(qt.QColor(color))
        painter.drawRoundedRect(badge_rect, 4, 4)
        painter.setPen(qt.QColor(font_color_for_background(color)))
        painter.drawText(badge_rect, qt.Qt.AlignmentFlag.AlignCenter, badge_text)

        text_rect = rect.adjusted(badge_width + 2 * self.BADGE_PADDING, 0, 0, 0)
        text = f"[{level_abbreviation(record.level)}] {record.message}"
        text = metrics.elidedText(text, qt.Qt.TextElideMode.ElideRight, max(text_rect.width(), 0))
        painter.setPen(qt.QColor(level_color(record.level)))
        painter.drawText(text_rect, qt.Qt.AlignmentFlag.AlignLeft | qt.Qt.AlignmentFlag.AlignVCenter, text)
        painter.restore()

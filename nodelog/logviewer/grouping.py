# Merges a time-sorted record stream into display rows with one column per node
# Records from different nodes that arrive within the time window share a row

import logging

from .constants import DEFAULT_TIME_WINDOW_NS, HEADER_INTERVAL

logger = logging.getLogger(__name__)


class DisplayRow:
    """One table row: at most one record per node, in node-column order.

    ``cells[i]`` is the record for ``nodes[i]`` or None. ``index`` counts rows
    from 0 in emission order.
    """

    __slots__ = ('index', 'cells')

    def __init__(self, index, cells):
        self.index = index
        self.cells = tuple(cells)

    @property
    def is_header_boundary(self):
        """True for every HEADER_INTERVAL-th row, where column headers are repeated."""
        return self.index % HEADER_INTERVAL == 0

    @property
    def records(self):
        """The records in this row, in column order, skipping empty cells."""
        return [rec for rec in self.cells if rec is not None]

    @property
    def earliest(self):
        """The record with the smallest timestamp, or None for an empty row."""
        records = self.records
        if not records:
            return None
        return min(records, key=lambda rec: rec.timestamp.nanos)

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        filled = ''.join('x' if rec is not None else '.' for rec in self.cells)
        return f"<DisplayRow {self.index} [{filled}]>"


class RowGrouper:
    """Incrementally groups records into DisplayRows.

    Records must be fed in ascending timestamp order. A record closes the open
    row when its node's cell is already filled, or when it is more than
    ``time_window`` nanoseconds after the last record placed. Closed rows are
    kept in ``rows`` so a front end can re-render without regrouping; the open
    row survives between calls to :meth:`feed`.
    """

    def __init__(self, nodes, time_window=DEFAULT_TIME_WINDOW_NS):
        self.nodes = list(nodes)
        self.time_window = time_window
        self._columns = {node: i for i, node in enumerate(self.nodes)}
        self.rows = []
        self._open = [None] * len(self.nodes)
        self._open_count = 0
        self._last_nanos = None

    def feed(self, records):
        """Consume *records*, yielding each row as it is closed."""
        for record in records:
            column = self._columns.get(record.node)
            if column is None:
                logger.warning("Skipping record %s from unknown node %r", record.id, record.node)
                continue

            nanos = record.timestamp.nanos
            if self._open[column] is not None or (
                self._last_nanos is not None and nanos - self._last_nanos > self.time_window
            ):
                yield self._close_row()

            self._open[column] = record
            self._open_count += 1
            self._last_nanos = nanos

    def close(self):
        """Close the open row and return it, or return None if it is empty."""
        if self._open_count == 0:
            return None
        row = self._close_row()
        self._last_nanos = None
        return row

    @property
    def pending(self):
        """The open row as a provisional DisplayRow, or None if it is empty."""
        if self._open_count == 0:
            return None
        return DisplayRow(len(self.rows), self._open)

    def _close_row(self):
        row = DisplayRow(len(self.rows), self._open)
        self.rows.append(row)
        self._open = [None] * len(self.nodes)
        self._open_count = 0
        return row


def group_for_display(records, nodes, time_window=DEFAULT_TIME_WINDOW_NS):
    """Lazily group time-sorted *records* into DisplayRows, one column per node.

    The final, possibly partial, row is emitted when the input is exhausted.
    """
    grouper = RowGrouper(nodes, time_window)
    yield from grouper.feed(records)
    last = grouper.close()
    if last is not None:
        yield last

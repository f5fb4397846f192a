# Constants and defaults shared by the log engine and the viewer
# Centralized location for time window, paging and level configuration values


# Largest gap (ns) between consecutive records that may share a display row
DEFAULT_TIME_WINDOW_NS = 8_000_000

# Number of matching records requested each time more rows are needed
DEFAULT_FETCH_LIMIT = 500

# Column headers are repeated on every row whose index is a multiple of this
HEADER_INTERVAL = 30

# Level spellings emitted by the logging nodes, in display order.
# Levels not listed here are still accepted and sorted after these.
KNOWN_LEVELS = ['debug', 'dbug', 'info', 'warn', 'error', 'eror', 'crit', 'fatal', 'panic']

# Title of the first (elapsed time) column; node names follow it
TIME_COLUMN_TITLE = 'T'

# Default widths for the viewer's columns
TIME_COLUMN_WIDTH = 160
NODE_COLUMN_WIDTH = 360


def ordered_levels(levels):
    """Sort level names by KNOWN_LEVELS order, unknown levels last in their given order."""
    known = {level: i for i, level in enumerate(KNOWN_LEVELS)}
    return sorted(levels, key=lambda level: known.get(level, len(KNOWN_LEVELS)))

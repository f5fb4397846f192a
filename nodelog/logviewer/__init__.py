# Public API for the logviewer subpackage: the Qt-free ingestion, filter and grouping engine
# The Qt widget is imported separately: `from nodelog.logviewer.viewer import LogViewer`

from .corpus import LogCorpus, read_log_files
from .errors import FilterConfigError, LogLoadError, ParseError
from .filtering import FilterState, compile_message_filter
from .grouping import DisplayRow, RowGrouper, group_for_display
from .record import LogRecord
from .timestamp import Timestamp

__all__ = [
    'LogCorpus', 'read_log_files',
    'FilterConfigError', 'LogLoadError', 'ParseError',
    'FilterState', 'compile_message_filter',
    'DisplayRow', 'RowGrouper', 'group_for_display',
    'LogRecord', 'Timestamp',
]

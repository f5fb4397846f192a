# Canonical log record parsed from one newline-delimited JSON log line
# Required keys become attributes; everything else is preserved in `extra`

import json
import logging
import uuid

from .errors import ParseError
from .timestamp import Timestamp

logger = logging.getLogger(__name__)


# JSON key -> LogRecord attribute, in the order they are checked
REQUIRED_KEYS = {
    'module': 'module',
    'msg': 'message',
    'lvl': 'level',
    't': 'timestamp',
    'caller': 'caller',
}
OPTIONAL_KEYS = {'node': 'node'}
RECOGNIZED_KEYS = set(REQUIRED_KEYS) | set(OPTIONAL_KEYS)


class LogRecord:
    """One normalized log event.

    Attributes
    ----------
    id : str
        ``"<nanos>-<uuid4>"``; unique even when timestamps collide.
    module, message, level, caller : object
        Values of the ``module``, ``msg``, ``lvl`` and ``caller`` keys.
    timestamp : Timestamp
        Parsed ``t`` key.
    node : str | None
        Value of the ``node`` key, or None when the line has none.
    extra : dict
        All other keys of the JSON object.
    body : str
        The raw input line; message filters match against it.
    """

    __slots__ = ('id', 'module', 'message', 'level', 'timestamp', 'node', 'caller', 'extra', 'body')

    def __init__(self, id, module, message, level, timestamp, node, caller, extra, body):
        self.id = id
        self.module = module
        self.message = message
        self.level = level
        self.timestamp = timestamp
        self.node = node
        self.caller = caller
        self.extra = extra
        self.body = body

    @classmethod
    def from_json(cls, line):
        """Parse one log line.

        Returns None (after logging a warning) when *line* is not a JSON
        object. Raises ParseError when a required key is missing or the
        timestamp is invalid.
        """
        try:
            obj = json.loads(line)
        except ValueError as exc:
            logger.warning("Skipping malformed log line: %s", exc)
            return None
        if not isinstance(obj, dict):
            logger.warning("Skipping log line that is not a JSON object: %.80s", line)
            return None

        values = {}
        for key, attr in REQUIRED_KEYS.items():
            if key not in obj:
                raise ParseError(key)
            values[attr] = obj[key]

        timestamp = Timestamp.parse(values['timestamp'])
        values['timestamp'] = timestamp
        values['node'] = obj.get('node')

        extra = {k: v for k, v in obj.items() if k not in RECOGNIZED_KEYS}
        record_id = f"{timestamp.nanos}-{uuid.uuid4()}"
        return cls(id=record_id, extra=extra, body=line, **values)

    def basic(self):
        """Return the summary fields shown in a record's detail view."""
        return {
            't': self.timestamp.original,
            'module': self.module,
            'message': self.message,
            'level': self.level,
            'node': self.node,
            'caller': self.caller,
            'body': self.body,
        }

    def to_dict(self):
        """Return the full JSON-serializable representation of this record."""
        return {
            'id': self.id,
            't': {'n': self.timestamp.nanos, 'orig': self.timestamp.original},
            'module': self.module,
            'message': self.message,
            'level': self.level,
            'node': self.node,
            'caller': self.caller,
            'extra': self.extra,
            'body': self.body,
        }

    def __repr__(self):
        return f"<LogRecord {self.timestamp.original} node={self.node!r} {self.level}: {self.message!r}>"

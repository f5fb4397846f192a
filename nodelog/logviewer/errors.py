# Exception types raised by the log ingestion and filtering engine
# Per-line failures are recovered by the corpus; only LogLoadError reaches callers of LogCorpus.load


class ParseError(Exception):
    """A log line is valid JSON but cannot be turned into a LogRecord.

    The ``field`` attribute names the missing required key, or is
    ``"invalid time"`` when the timestamp does not match either accepted format.
    """

    def __init__(self, field, text=None):
        self.field = field
        self.text = text
        if text is None:
            msg = field
        else:
            msg = f"{field}: {text!r}"
        Exception.__init__(self, msg)


class FilterConfigError(Exception):
    """A message filter pattern could not be compiled."""

    def __init__(self, pattern, reason):
        self.pattern = pattern
        self.reason = reason
        Exception.__init__(self, f"invalid message filter {pattern!r}: {reason}")


class LogLoadError(Exception):
    """The imported content cannot be treated as text at all."""

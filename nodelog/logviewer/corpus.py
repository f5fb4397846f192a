# Log corpus: parses a blob of newline-delimited JSON into sorted records and index sets
# Built once per import and never mutated afterwards

import logging

from .errors import LogLoadError, ParseError
from .record import LogRecord

logger = logging.getLogger(__name__)


class LogCorpus:
    """All records from one import, sorted by timestamp, plus distinct-value indexes.

    ``nodes`` and ``messages`` are sorted; ``levels`` and ``modules`` keep the
    order in which they were first seen. Only records that parsed cleanly and
    carry a node contribute to any of them.
    """

    def __init__(self, records=(), nodes=(), modules=(), levels=(), messages=()):
        self.records = list(records)
        self.nodes = list(nodes)
        self.modules = list(modules)
        self.levels = list(levels)
        self.messages = list(messages)

    @classmethod
    def load(cls, text):
        """Parse *text* (str, or UTF-8 bytes) into a new LogCorpus.

        Bad lines are logged and skipped. Raises LogLoadError only when the
        input as a whole cannot be read as text.
        """
        if isinstance(text, (bytes, bytearray)):
            try:
                text = text.decode('utf-8')
            except UnicodeDecodeError as exc:
                raise LogLoadError(f"log content is not UTF-8 text: {exc}") from exc
        if not isinstance(text, str):
            raise LogLoadError(f"log content must be text, not {type(text).__name__}")

        records = []
        nodes = {}
        modules = {}
        levels = {}
        messages = {}
        skipped = 0
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            record = cls._parse_line(line, lineno)
            if record is None:
                skipped += 1
                continue

            records.append(record)
            # dicts double as insertion-ordered sets
            nodes.setdefault(record.node, None)
            modules.setdefault(_index_key(record.module), None)
            levels.setdefault(_index_key(record.level), None)
            messages.setdefault(_index_key(record.message), None)

        records.sort(key=lambda r: r.timestamp.nanos)
        corpus = cls(
            records=records,
            nodes=sorted(nodes, key=str),
            modules=modules,
            levels=levels,
            messages=sorted(messages, key=str),
        )
        logger.info("Loaded %d records from %d nodes (%d lines skipped)",
                    len(records), len(corpus.nodes), skipped)
        return corpus

    @staticmethod
    def _parse_line(line, lineno):
        try:
            record = LogRecord.from_json(line)
        except ParseError as exc:
            logger.warning("Skipping log line %d: %s", lineno, exc)
            return None
        if record is None:
            return None
        if record.node is None:
            logger.debug("Skipping log line %d: no node", lineno)
            return None
        if _index_key(record.node) is not record.node:
            logger.warning("Skipping log line %d: node must be a scalar, got %r", lineno, record.node)
            return None
        return record

    @property
    def first(self):
        """The earliest record, or None for an empty corpus."""
        return self.records[0] if self.records else None

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __repr__(self):
        return f"<LogCorpus {len(self.records)} records, nodes={self.nodes!r}>"


def _index_key(value):
    # unhashable JSON values (lists, objects) are indexed by their text
    try:
        hash(value)
    except TypeError:
        return str(value)
    return value


def read_log_files(paths, encoding='utf-8'):
    """Read and concatenate log files into one text blob for LogCorpus.load.

    A line break is inserted between files so the last line of one file never
    merges with the first line of the next.
    """
    chunks = []
    for path in paths:
        with open(path, 'r', encoding=encoding, errors='replace') as fh:
            content = fh.read()
        if content and not content.endswith('\n'):
            content += '\n'
        chunks.append(content)
    return ''.join(chunks)

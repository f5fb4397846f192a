# Streaming, resumable filter over a LogCorpus by level set and message pattern
# Contains FilterState and the message pattern compiler

import itertools
import logging
import re

from .errors import FilterConfigError

logger = logging.getLogger(__name__)


# Flags accepted after the closing slash of a /pattern/flags literal
_LITERAL_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    # global, unicode and sticky matching have no meaning for a search predicate
    'g': 0,
    'u': 0,
    'y': 0,
}
_REGEX_LITERAL = re.compile(r'/(?P<body>.*)/(?P<flags>[a-z]*)', re.DOTALL)


def level_key(level):
    """Return the text a level is compared by, so ``5`` and ``"5"`` select the same records.

    Non-string levels (numbers, lists, objects) are compared by their ``str()``,
    which is also how the corpus indexes unhashable values and how the viewer
    labels its level checkboxes.
    """
    return level if isinstance(level, str) else str(level)


def compile_message_filter(spec):
    """Compile a message filter specification into a regular expression.

    Returns None when *spec* is empty or blank (no message filtering).

    A spec beginning with ``/`` is read as a regular-expression literal
    ``/pattern/flags``; any other spec is compiled as a regular expression
    as-is. Raises FilterConfigError when the pattern does not compile.
    """
    if spec is None or not spec.strip():
        return None

    if not spec.startswith('/'):
        try:
            return re.compile(spec)
        except re.error as exc:
            raise FilterConfigError(spec, str(exc)) from exc

    literal = spec.strip()
    match = _REGEX_LITERAL.fullmatch(literal)
    if match is None:
        raise FilterConfigError(spec, "expected a /pattern/flags literal")

    flags = 0
    for char in match.group('flags'):
        if char not in _LITERAL_FLAGS:
            raise FilterConfigError(spec, f"unsupported flag {char!r}")
        flags |= _LITERAL_FLAGS[char]

    try:
        return re.compile(match.group('body'), flags)
    except re.error as exc:
        raise FilterConfigError(spec, str(exc)) from exc


class FilterState:
    """Level and message filter configuration plus a cursor into a corpus.

    Each call to :meth:`filter` continues scanning where the previous call
    stopped; :meth:`reset` (or :meth:`set_filters`) moves the cursor back to
    the first record.

    Parameters
    ----------
    corpus : LogCorpus
        The corpus to scan. Its records must already be sorted.
    filters : dict | None
        Optional initial configuration with keys ``levels`` (iterable of level
        strings) and ``message`` (message filter spec).
    """

    def __init__(self, corpus, filters=None):
        self.corpus = corpus
        self.level_set = frozenset()
        self.message_spec = ''
        self.message_pattern = None
        self.offset = 0

        filters = filters or {}
        if filters:
            self.set_filters(filters.get('levels', ()), filters.get('message', ''))

    def set_filters(self, levels=(), message=''):
        """Replace the level set and message pattern, and reset the cursor.

        An empty level set lets every level through; levels are compared by
        :func:`level_key`. If *message* fails to
        compile the message filter is left unset (everything passes) and
        FilterConfigError is raised after the new level set is in place.
        """
        self.level_set = frozenset(level_key(level) for level in levels or ())
        self.message_spec = message or ''
        self.offset = 0
        try:
            self.message_pattern = compile_message_filter(message)
        except FilterConfigError as exc:
            self.message_pattern = None
            logger.warning("Message filter disabled: %s", exc)
            raise

    def reset(self):
        """Rewind the cursor to the first record, keeping the configured filters."""
        self.offset = 0

    def matches(self, record):
        """Return True if *record* passes both the level and message filters."""
        if self.level_set and level_key(record.level) not in self.level_set:
            return False
        if self.message_pattern is not None and self.message_pattern.search(record.body) is None:
            return False
        return True

    def filter(self, limit):
        """Yield matching records starting at the cursor.

        Stops when the corpus is exhausted or after ``limit + 1`` matches have
        been yielded. The cursor then advances by the number of records
        examined, matching or not, so the next call never revisits them. The
        cursor is also advanced if the consumer stops iterating early.
        """
        start = self.offset
        examined = 0
        found = 0
        try:
            for record in itertools.islice(self.corpus.records, start, None):
                examined += 1
                if not self.matches(record):
                    continue
                yield record
                found += 1
                if found > limit:
                    break
        finally:
            self.offset = start + examined

    @property
    def exhausted(self):
        """True once the cursor has passed the last record of the corpus."""
        return self.offset >= len(self.corpus.records)

    def __repr__(self):
        return (f"<FilterState levels={sorted(self.level_set)!r} "
                f"message={self.message_spec!r} offset={self.offset}>")

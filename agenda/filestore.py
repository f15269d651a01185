"""
----------------
agenda.filestore
----------------

Flat-file implementation of the Event Store.

This module provides an implementation of the :class:`agenda.storeapi.EventStore`
that keeps all events in memory and persists them in a single plain-text file.

Each line of the file holds one serialized event (see :mod:`agenda.model`),
encoded in UTF-8. Plain text is chosen so that the file can be read and edited
with other tools as well. The file is a snapshot of the in-memory state: it is
read once on :meth:`FileEventStore.load` and rewritten completely on every
:meth:`FileEventStore.save`.

The file is written atomically, so there is no danger of leaving it in an
inconsistent state.

Here is an example of usage of the store:

.. code-block:: python

    from datetime import datetime, timedelta
    from agenda.filestore import FileEventStore
    from agenda.model import new_event, EventCategory

    store = FileEventStore('events.data')
    store.load()

    now = datetime.now()

    store.add(new_event('Concert', 'Main Square', EventCategory.SHOW, now + timedelta(minutes=30)))
    store.add(new_event('Lecture', 'University', EventCategory.EDUCATION, now - timedelta(minutes=10)))

    for event in store.all_ordered():
        print(event.name, store.status_of(event))

would print::

    >> Lecture happening now
    >> Concert in 29 min

"""

from tempfile import NamedTemporaryFile
from shutil import move
from os import unlink
from os.path import abspath, basename, dirname, exists, join as join_paths
from operator import attrgetter
from datetime import datetime
from logging import getLogger
from agenda.storeapi import EventStore, EventNotFound, EventReadException, EventWriteException
from agenda.model import EventSerializer, EventParser, DecodeException
from agenda import temporal


log = getLogger(__name__)


_by_time = attrgetter('when')


class AtomicFile:
    """A file in the file-system that is always replaced as a whole.

    Writing is atomic and consistent. The content is first written to a temporary file (in the same directory), then
    the buffers are flushed, and then the temporary file is renamed as the actual file. The actual file is never left
    half-written.

    :param file_path: ``str``, the path to the file.
    :param encoding: ``str``, the text encoding of the file. Default is UTF-8.
    """
    def __init__(self, file_path, encoding='utf-8'):
        self.path = abspath(file_path)
        self.name = basename(self.path)
        self.directory = dirname(self.path)
        self.encoding = encoding

    def exists(self):
        return exists(self.path)

    def lines(self):
        """Reads the file line by line.

        Returns an iterator over the lines of the file, without line terminators.
        """
        with open(self.path, 'r', encoding=self.encoding, newline='') as data_file:
            for line in data_file:
                yield line.rstrip('\r\n')

    def first_line(self):
        """Reads only the first line of the file.

        Returns the line without the line terminator, or ``None`` if the file is empty.
        """
        with open(self.path, 'r', encoding=self.encoding, newline='') as data_file:
            line = data_file.readline()
        return line.rstrip('\r\n') if line else None

    def write_lines(self, lines):
        """Replaces the content of the file with the given lines.

        Each line is terminated with a newline. Raises ``OSError`` if the file cannot be written, or
        ``UnicodeEncodeError`` if a line cannot be encoded. In either case the original file is left unchanged.

        :param lines: iterable of ``str``, the lines to write.
        """
        tmpf = NamedTemporaryFile(dir=self.directory, prefix='.%s.' % self.name, delete=False)
        try:
            for line in lines:
                tmpf.write(line.encode(self.encoding))
                tmpf.write(b'\n')
            tmpf.flush()
            tmpf.close()
            move(tmpf.name, join_paths(self.directory, self.name))
        except Exception:
            tmpf.close()
            if exists(tmpf.name):
                unlink(tmpf.name)
            raise


def read_lines(data_file):
    """Reads all lines of the :class:`AtomicFile`.

    Raises :class:`agenda.storeapi.EventReadException` if the file cannot be read or decoded.
    """
    try:
        return list(data_file.lines())
    except (OSError, UnicodeDecodeError) as e:
        raise EventReadException('Failed to read %s: %s' % (data_file.path, e)) from e


def write_lines(data_file, lines):
    """Replaces the content of the :class:`AtomicFile` with the given lines.

    Raises :class:`agenda.storeapi.EventWriteException` if the file cannot be written or a line cannot be encoded.
    """
    try:
        data_file.write_lines(lines)
    except (OSError, UnicodeError) as e:
        raise EventWriteException('Failed to write %s: %s' % (data_file.path, e)) from e


class FileEventStore(EventStore):
    """An implementation of the :class:`agenda.storeapi.EventStore` that keeps the events in a single plain text file.

    All events are held in memory, ordered ascending by start time. The in-memory state is the source of truth while
    the process runs; the file is only read on :meth:`load`. Every :meth:`add` rewrites the file synchronously, there
    is no buffering.

    None of the operations fail because of bad data or I/O errors: malformed lines are skipped on load and I/O errors
    are logged.

    The instances of this class are **not** thread-safe. The store assumes it is the only one using the file.

    :param file_path: ``str``, the path to the events file. The file does not have to exist.
    :param duration: :class:`datetime.timedelta`, how long each event is assumed to last.
    :param clock: callable returning the current :class:`datetime.datetime`. Used when no reference time is given to
        the queries. Defaults to :meth:`datetime.datetime.now`.
    """
    def __init__(self, file_path, duration=temporal.DEFAULT_DURATION, clock=datetime.now):
        self.file = AtomicFile(file_path)
        self.duration = duration
        self.clock = clock
        self.serializer = EventSerializer()
        self.parser = EventParser()
        self.events = []

    def __len__(self):
        return len(self.events)

    def _sort(self):
        # sorted() is stable, so events with equal start keep their order
        self.events = sorted(self.events, key=_by_time)

    def _reference(self, reference_time):
        return reference_time if reference_time is not None else self.clock()

    def load(self):
        self.events = []
        if not self.file.exists():
            log.info('No events file at %s. Starting with an empty store.', self.file.path)
            return

        try:
            lines = read_lines(self.file)
        except EventReadException as e:
            log.error('Failed to load events. Error: %s', e)
            return

        loaded = []
        seen_ids = set()
        skipped = 0
        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                event = self.parser.parse(line)
            except DecodeException as e:
                skipped += 1
                log.warning('Skipping invalid line %d in %s: %s. Line: %s', line_no, self.file.path, e, line)
                continue
            if event.id in seen_ids:
                skipped += 1
                log.warning('Skipping line %d in %s: duplicate event id %s', line_no, self.file.path, event.id)
                continue
            seen_ids.add(event.id)
            loaded.append(event)

        self.events = loaded
        self._sort()
        log.info('Loaded %d events from %s (%d skipped).', len(self.events), self.file.path, skipped)

    def add(self, event):
        if any(stored.id == event.id for stored in self.events):
            log.warning('Event %s is already in the store. Not added.', event.id)
            return False
        self.events.append(event)
        self._sort()
        log.debug('Added event %s at %s', event.id, event.when)
        return self.save()

    def save(self):
        try:
            write_lines(self.file, [self.serializer.serialize(event) for event in self.events])
        except EventWriteException as e:
            log.error('Failed to save events. Error: %s', e)
            return False
        log.debug('Saved %d events to %s', len(self.events), self.file.path)
        return True

    def get(self, event_id):
        for event in self.events:
            if event.id == event_id:
                return event
        raise EventNotFound(event_id)

    def find_by_ids(self, event_ids):
        if not event_ids:
            return []
        return [event for event in self.events if event.id in event_ids]

    def all_ordered(self):
        return list(self.events)

    def happening_now(self, reference_time=None):
        reference_time = self._reference(reference_time)
        return [event for event in self.events
                if temporal.is_happening_now(event, reference_time, self.duration)]

    def past_events(self, reference_time=None):
        reference_time = self._reference(reference_time)
        return sorted([event for event in self.events
                       if temporal.is_past(event, reference_time, self.duration)], key=_by_time)

    def upcoming(self, reference_time=None):
        """Returns a ``list`` of events that have not started yet at ``reference_time`` (defaults to now).
        """
        reference_time = self._reference(reference_time)
        return [event for event in self.events if event.when > reference_time]

    def status_of(self, event, reference_time=None):
        return temporal.status_of(event, self._reference(reference_time), self.duration)

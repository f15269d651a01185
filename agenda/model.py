"""
------------
agenda.model
------------

Event and user models, and the codec that turns an event into a single line of
text and back.

The line format is::

    <id>|<name>|<address>|<CATEGORY>|<yyyy-mm-ddTHH:MM:SS>|<description>

The timestamp carries a fractional part (``.ffffff``) only for sub-second times.

**Escaping is lossy.** Before joining, every ``|`` in a free-text field is
replaced with ``/``, every line break with a single space, and the value is
trimmed. Unescaping is the identity, so the original characters cannot be
recovered. Stored files depend on this exact rule, so it must not change.
"""
from collections import namedtuple
from datetime import datetime
from enum import Enum
from uuid import uuid4


DELIMITER = '|'

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S'

_ACCEPTED_TIMESTAMP_FORMATS = (TIMESTAMP_FORMAT, '%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S.%f')

EVENT_FIELDS = 6

USER_FIELDS = 4


class EventCategory(Enum):
    """The closed set of event categories.
    """
    PARTY = 'PARTY'
    SPORTS = 'SPORTS'
    SHOW = 'SHOW'
    THEATER = 'THEATER'
    EDUCATION = 'EDUCATION'
    TECHNOLOGY = 'TECHNOLOGY'
    RELIGIOUS = 'RELIGIOUS'
    OTHER = 'OTHER'

    def __str__(self):
        return self.name


Event = namedtuple('Event', ['id', 'name', 'address', 'category', 'when', 'description'])
"""An event registered by the user. Events are never changed once created.
"""

Event.id.__doc__ = """
    ``str``, unique identifier of the event. Generated once and never reused.
"""

Event.category.__doc__ = """
    :class:`EventCategory`, the category of the event.
"""

Event.when.__doc__ = """
    :class:`datetime.datetime`, naive local time at which the event starts.
"""


def new_event(name, address, category, when, description=''):
    """Creates new :class:`Event` with a freshly generated id.
    """
    return Event(id=str(uuid4()), name=name, address=address, category=category,
                 when=when, description=description or '')


class User(namedtuple('User', ['name', 'email', 'city', 'phone'])):
    """The user of the registry. ``phone`` is optional and empty when not given.
    """
    __slots__ = ()

    @property
    def first_name(self):
        parts = self.name.split()
        return parts[0] if parts else self.name


class DecodeException(ValueError):
    """Raised when a line cannot be turned back into a record.

    :param message: ``str``, what went wrong.
    :param line: ``str``, the offending line.
    """
    def __init__(self, message, line=None):
        super(DecodeException, self).__init__(message)
        self.line = line


def escape(value):
    """Makes a free-text value safe to store in one delimited line.

    This is a one-way transform: ``|`` becomes ``/`` and line breaks become
    spaces.
    """
    value = value or ''
    return value.replace(DELIMITER, '/').replace('\r', ' ').replace('\n', ' ').strip()


def unescape(value):
    return value


def format_timestamp(when):
    """Formats the start time as ``yyyy-mm-ddTHH:MM:SS``, with ``.ffffff`` appended only when there are microseconds.
    """
    if when.microsecond:
        return when.strftime(TIMESTAMP_FORMAT + '.%f')
    return when.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value):
    """Parses a stored timestamp. Seconds are optional.

    Raises ``ValueError`` if the value does not match any accepted format.
    """
    for fmt in _ACCEPTED_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError('Invalid timestamp: %s' % value)


def parse_category(name):
    """Looks up an :class:`EventCategory` by its exact (case-sensitive) name.
    """
    try:
        return EventCategory[name]
    except KeyError:
        raise DecodeException('Unknown category %s' % name) from None


class EventSerializer:
    """Serializes :class:`Event` into a single line of text (without the line terminator).
    """

    def serialize(self, event):
        return DELIMITER.join([event.id,
                               escape(event.name),
                               escape(event.address),
                               event.category.name,
                               format_timestamp(event.when),
                               escape(event.description)])


class EventParser:
    """Parses a single line of text back into an :class:`Event`.

    Raises :class:`DecodeException` if the line has too few fields, an unknown
    category or an invalid timestamp.
    """

    def parse(self, line):
        line = line.rstrip('\r\n')
        parts = line.split(DELIMITER)
        if len(parts) < EVENT_FIELDS:
            raise DecodeException('Expected %d fields, got %d' % (EVENT_FIELDS, len(parts)), line)
        try:
            category = parse_category(parts[3])
        except DecodeException as e:
            e.line = line
            raise
        try:
            when = parse_timestamp(parts[4])
        except ValueError as e:
            raise DecodeException(str(e), line) from e

        return Event(id=parts[0],
                     name=unescape(parts[1]),
                     address=unescape(parts[2]),
                     category=category,
                     when=when,
                     description=unescape(parts[5]))


class UserSerializer:

    def serialize(self, user):
        return DELIMITER.join([escape(user.name), escape(user.email),
                               escape(user.city), escape(user.phone)])


class UserParser:

    def parse(self, line):
        parts = line.rstrip('\r\n').split(DELIMITER)
        if len(parts) < USER_FIELDS:
            raise DecodeException('Expected %d fields, got %d' % (USER_FIELDS, len(parts)), line)
        return User(name=unescape(parts[0]), email=unescape(parts[1]),
                    city=unescape(parts[2]), phone=unescape(parts[3]))

"""
---------------
agenda.temporal
---------------

Time-window classification of events.

Events carry only a start time. Every event is assumed to last
:data:`DEFAULT_DURATION`, so the event *window* is the closed interval
``[when, when + duration]``.

There are two different notions of an event being over:

* :func:`is_past` - the window has ended, ``when < t - duration``. Used when
  listing past events.
* the plain ``when < t`` test used by :func:`status_of` once the event is no
  longer happening.

Both are kept as they are; do not merge them.
"""
from datetime import timedelta


DEFAULT_DURATION = timedelta(hours=2)

HAPPENING_NOW = 'happening now'

ALREADY_HAPPENED = 'already happened'

_STARTS_IN = 'in %d min'


def window_end(event, duration=DEFAULT_DURATION):
    return event.when + duration


def is_happening_now(event, reference_time, duration=DEFAULT_DURATION):
    """Checks whether ``reference_time`` falls within the event window (both ends included).
    """
    return event.when <= reference_time <= window_end(event, duration)


def is_past(event, reference_time, duration=DEFAULT_DURATION):
    """Checks whether the event window ended strictly before ``reference_time``.
    """
    return event.when < reference_time - duration


def has_started(event, reference_time):
    return event.when < reference_time


def minutes_until(event, reference_time):
    """Whole minutes from ``reference_time`` to the start of the event, truncated toward zero.

    Negative for events that already started.
    """
    return int((event.when - reference_time).total_seconds() / 60)


def status_of(event, reference_time, duration=DEFAULT_DURATION):
    """Returns the status of the event at ``reference_time``.

    One of ``'happening now'``, ``'already happened'`` or ``'in N min'``, where
    ``N`` is never negative.
    """
    if is_happening_now(event, reference_time, duration):
        return HAPPENING_NOW
    if has_started(event, reference_time):
        return ALREADY_HAPPENED
    return _STARTS_IN % max(minutes_until(event, reference_time), 0)

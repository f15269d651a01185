"""
--------------------
agenda.participation
--------------------

Tracking of the events a user confirmed to attend.

Attendance is kept in memory only, for the duration of the session.
"""
from logging import getLogger


log = getLogger(__name__)


class ParticipationService:
    """Keeps the set of confirmed event ids per user (by e-mail).

    The service does not own any events. It resolves ids to events through the ``lookup`` given at construction -
    usually the :class:`agenda.storeapi.EventStore` itself.

    :param lookup: object with ``find_by_ids(event_ids)`` that returns the events (ascending by start time) with the
        given ids.
    """
    def __init__(self, lookup=None):
        self.lookup = lookup
        self.participations = {}

    def confirm(self, user, event):
        self.participations.setdefault(user.email, set()).add(event.id)
        log.debug('User %s confirmed attendance to %s', user.email, event.id)

    def cancel(self, user, event):
        confirmed = self.participations.get(user.email)
        if confirmed is not None:
            confirmed.discard(event.id)
            log.debug('User %s cancelled attendance to %s', user.email, event.id)

    def is_attending(self, user, event):
        return event.id in self.participations.get(user.email, ())

    def events_of(self, user):
        """Returns the ``list`` of events the user confirmed to attend, ascending by start time.
        """
        event_ids = self.participations.get(user.email)
        if self.lookup is None or not event_ids:
            return []
        return self.lookup.find_by_ids(event_ids)

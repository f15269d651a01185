"""
-------------------
agenda.notification
-------------------

Notifies the user about events that are about to start.
"""
from datetime import datetime
from logging import getLogger
from agenda.temporal import minutes_until


log = getLogger(__name__)


class NotificationService:
    """Emits a notice when an event starts within ``window_minutes``.

    :param window_minutes: ``int``, how many minutes ahead an event is considered upcoming. Default is 60.
    :param notifier: callable taking a single ``str``, called with the notice. Default is :func:`print`.
    :param clock: callable returning the current :class:`datetime.datetime`.
    """
    def __init__(self, window_minutes=60, notifier=print, clock=datetime.now):
        self.window_minutes = window_minutes
        self.notifier = notifier
        self.clock = clock

    def upcoming_message(self, event, now):
        """Returns the notice text for the event, or ``None`` if the event is not upcoming at ``now``.
        """
        minutes = minutes_until(event, now)
        if 0 <= minutes <= self.window_minutes:
            return 'Upcoming event: %s in %d min.' % (event.name, minutes)
        return None

    def notify_if_upcoming(self, event, now=None):
        """Sends a notice if the event is upcoming.

        Returns the notice text, or ``None`` if nothing was sent.
        """
        message = self.upcoming_message(event, now or self.clock())
        if message:
            log.info(message)
            self.notifier(message)
        return message

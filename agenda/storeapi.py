"""
---------------
agenda.storeapi
---------------

Event Store API
^^^^^^^^^^^^^^^

Defines classes, methods and exceptions to be used when implementing an Event Store.
"""
from abc import abstractmethod


class EventStore:
    """EventStore is the basic interface for interaction with the registered events.

    The store keeps the events ordered ascending by their start time (:attr:`agenda.model.Event.when`). Events with
    the same start time keep the order in which they were added (or loaded). This order holds after every
    operation.

    Query results are snapshots: the returned lists are never the store's own internal list.
    """
    @abstractmethod
    def load(self):
        """Reloads the whole store from the underlying storage.

        The in-memory state is cleared first. Records that cannot be read are skipped, the load does not fail
        because of them.

        This method does not return any value.
        """
        pass

    @abstractmethod
    def add(self, event):
        """Adds an event to the store and persists the store immediately.

        :param event: :class:`agenda.model.Event`, the event to add. The store takes the event as-is, it does not
            assign a new identity.

        Event ids are unique within the store: an event whose id is already stored is not added.

        Returns ``True`` if the event was added and the store was persisted. Returns ``False`` if the id is already
        stored, or if persisting failed (the event stays added in memory in that case).
        """
        pass

    @abstractmethod
    def save(self):
        """Writes the full state of the store to the underlying storage.

        Returns ``True`` on success, ``False`` if writing failed. A failed save does not change the in-memory state.
        """
        pass

    @abstractmethod
    def get(self, event_id):
        """Looks up an event by its unique identifier.

        :param event_id: ``str``, the unique identifier of the event.

        Returns the :class:`agenda.model.Event` with the given id, or raises :class:`EventNotFound`.
        """
        pass

    @abstractmethod
    def find_by_ids(self, event_ids):
        """Resolves a collection of event ids to events.

        :param event_ids: collection of ``str``, the ids to look up. Unknown ids are ignored.

        Returns a ``list`` of :class:`agenda.model.Event`, ascending by start time.
        """
        pass

    @abstractmethod
    def all_ordered(self):
        """Returns a ``list`` of all events, ascending by start time.
        """
        pass

    @abstractmethod
    def happening_now(self, reference_time=None):
        """Returns a ``list`` of events that are taking place at ``reference_time`` (defaults to now).
        """
        pass

    @abstractmethod
    def past_events(self, reference_time=None):
        """Returns a ``list`` of events that ended before ``reference_time`` (defaults to now), ascending.
        """
        pass

    @abstractmethod
    def status_of(self, event, reference_time=None):
        """Returns a textual status of the event relative to ``reference_time`` (defaults to now).
        """
        pass


class EventStoreException(Exception):
    """General store error.
    """
    pass


class EventWriteException(EventStoreException):
    """Represents an error while writing events to the underlying storage.
    """
    pass


class EventReadException(EventStoreException):
    """Represents an error while reading events from the underlying storage.
    """
    pass


class EventNotFound(EventReadException):
    """Raised if there is no event found in the store.
    """
    pass

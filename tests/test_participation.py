from unittest import mock
from agenda.participation import ParticipationService
from agenda.filestore import FileEventStore
from agenda.model import Event, EventCategory, User
from datetime import datetime, timedelta
import tempfile
import os


T = datetime(2025, 9, 10, 19, 30)

ANA = User(name='Ana Silva', email='ana@example.com', city='Lisbon', phone='')

BOB = User(name='Bob', email='bob@example.com', city='Porto', phone='')


def _event(id, when):
    return Event(id=id, name=id, address='Square', category=EventCategory.PARTY, when=when, description='')


def test_confirm_and_events_of():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, 'events.data'))
        late, early = _event('late', T + timedelta(days=1)), _event('early', T)
        store.add(late)
        store.add(early)

        service = ParticipationService(lookup=store)
        service.confirm(ANA, late)
        service.confirm(ANA, early)
        service.confirm(ANA, early)

        assert service.events_of(ANA) == [early, late]
        assert service.events_of(BOB) == []
        assert service.is_attending(ANA, late) is True
        assert service.is_attending(BOB, late) is False


def test_cancel():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventStore(os.path.join(tmpdir, 'events.data'))
        event = _event('e1', T)
        store.add(event)

        service = ParticipationService(lookup=store)
        service.cancel(ANA, event)  # nothing confirmed yet
        service.confirm(ANA, event)
        service.cancel(ANA, event)

        assert service.events_of(ANA) == []
        assert service.is_attending(ANA, event) is False


def test_events_of_uses_lookup():
    lookup = mock.MagicMock()
    lookup.find_by_ids.return_value = ['resolved']
    event = _event('e1', T)

    service = ParticipationService(lookup=lookup)
    assert service.events_of(ANA) == []
    assert lookup.find_by_ids.call_count == 0

    service.confirm(ANA, event)
    assert service.events_of(ANA) == ['resolved']
    lookup.find_by_ids.assert_called_once_with({'e1'})


def test_events_of_without_lookup():
    service = ParticipationService()
    service.confirm(ANA, _event('e1', T))
    assert service.events_of(ANA) == []

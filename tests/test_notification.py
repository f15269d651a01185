from unittest import mock
from agenda.notification import NotificationService
from agenda.model import Event, EventCategory
from datetime import datetime, timedelta


NOW = datetime(2025, 9, 10, 18, 0)


def _event(when):
    return Event(id='e1', name='Concert', address='Square', category=EventCategory.SHOW,
                 when=when, description='')


def test_upcoming_message():
    service = NotificationService()
    assert service.upcoming_message(_event(NOW + timedelta(minutes=30)), NOW) == 'Upcoming event: Concert in 30 min.'
    assert service.upcoming_message(_event(NOW + timedelta(minutes=60)), NOW) == 'Upcoming event: Concert in 60 min.'
    assert service.upcoming_message(_event(NOW), NOW) == 'Upcoming event: Concert in 0 min.'
    assert service.upcoming_message(_event(NOW + timedelta(minutes=61)), NOW) is None
    assert service.upcoming_message(_event(NOW - timedelta(minutes=5)), NOW) is None


def test_custom_window():
    service = NotificationService(window_minutes=10)
    assert service.upcoming_message(_event(NOW + timedelta(minutes=30)), NOW) is None
    assert service.upcoming_message(_event(NOW + timedelta(minutes=10)), NOW) is not None


def test_notify_if_upcoming():
    notifier = mock.MagicMock()
    service = NotificationService(notifier=notifier, clock=lambda: NOW)

    assert service.notify_if_upcoming(_event(NOW + timedelta(minutes=15))) == 'Upcoming event: Concert in 15 min.'
    notifier.assert_called_once_with('Upcoming event: Concert in 15 min.')

    notifier.reset_mock()
    assert service.notify_if_upcoming(_event(NOW + timedelta(days=1))) is None
    assert notifier.call_count == 0


def test_notify_with_explicit_time():
    notifier = mock.MagicMock()
    service = NotificationService(notifier=notifier, clock=mock.MagicMock(side_effect=Exception('not used')))

    service.notify_if_upcoming(_event(NOW + timedelta(minutes=5)), NOW)
    assert notifier.call_count == 1

from agenda.cli.events import (get_parser, parse_when, parse_category, render_event, run_add, run_list,
                               run_now, run_past, run_categories)
from agenda.cli.parser import get_parent_parser
from agenda.filestore import FileEventStore
from agenda.model import Event, EventCategory
from agenda.notification import NotificationService
from datetime import datetime, timedelta
from argparse import ArgumentParser
from unittest import mock
import tempfile
import io
import os

import pytest


def _parser():
    parser = get_parent_parser(name='test')
    subparsers = parser.add_subparsers(dest='command', title='command', help='CLI commands')
    get_parser(subparsers)
    return parser


def _write_events(path, lines):
    with open(path, 'w', encoding='utf-8') as f:
        f.write('\n'.join(lines) + '\n')


def test_get_parser():
    parent_parser = ArgumentParser(prog='test')
    subparsers = parent_parser.add_subparsers(dest='command', title='command', help='CLI commands')

    parser = get_parser(subparsers)

    args = parser.parse_args(args=['-n', 'Concert', '-C', 'show', '-w', '10/09/2025 19:30'])
    assert args.name == 'Concert'
    assert args.address == ''
    assert args.category is EventCategory.SHOW
    assert args.when == datetime(2025, 9, 10, 19, 30)
    assert args.description == ''

    args = parser.parse_args(args=['--name', 'Concert', '--address', 'Square', '--category', 'PARTY',
                                   '--when', '01/01/2026 00:00', '--description', 'New year'])
    assert args.address == 'Square'
    assert args.category is EventCategory.PARTY
    assert args.description == 'New year'

    for command in ['list', 'now', 'past', 'categories']:
        assert parent_parser.parse_args(args=[command]).command == command


def test_parse_when():
    assert parse_when(' 10/09/2025 19:30 ') == datetime(2025, 9, 10, 19, 30)
    with pytest.raises(ValueError):
        parse_when('2025-09-10 19:30')


def test_parse_category():
    assert parse_category('technology') is EventCategory.TECHNOLOGY
    with pytest.raises(ValueError):
        parse_category('concert')


def test_render_event():
    event = Event(id='e1', name='Concert', address='Square', category=EventCategory.SHOW,
                  when=datetime(2025, 9, 10, 19, 30), description='')
    assert render_event(event, 'in 5 min') == 'Concert | Square | SHOW | 10/09/2025 19:30 | in 5 min'


@mock.patch.object(NotificationService, 'notify_if_upcoming')
@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_add(fake_out, m_notify):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'events.data')
        args = _parser().parse_args(['-f', path, 'add', '-n', 'Concert', '-a', 'Square', '-C', 'SHOW',
                                     '-w', '10/09/2025 19:30', '-d', 'Open | air'])
        event = run_add(args)

        store = FileEventStore(path)
        store.load()
        stored = store.all_ordered()
        assert len(stored) == 1
        assert stored[0].id == event.id
        assert stored[0].description == 'Open / air'
        assert 'Event registered: %s' % event.id in fake_out.getvalue()
        assert m_notify.call_count == 1


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_add_notifies_upcoming(fake_out):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'events.data')
        when = (datetime.now() + timedelta(minutes=30, seconds=59)).strftime('%d/%m/%Y %H:%M')
        args = _parser().parse_args(['-f', path, 'add', '-n', 'Soon', '-C', 'OTHER', '-w', when])
        run_add(args)

        assert 'Upcoming event: Soon in' in fake_out.getvalue()


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_list(fake_out):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'events.data')
        _write_events(path, ['e2|Second|Square|SHOW|2000-01-02T10:00:00|',
                             'e1|First|Square|PARTY|2000-01-01T10:00:00|'])
        run_list(_parser().parse_args(['-f', path, 'list']))

        assert fake_out.getvalue() == ('1) First | Square | PARTY | 01/01/2000 10:00 | already happened\n'
                                       '2) Second | Square | SHOW | 02/01/2000 10:00 | already happened\n')


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_list_empty(fake_out):
    with tempfile.TemporaryDirectory() as tmpdir:
        run_list(_parser().parse_args(['-f', os.path.join(tmpdir, 'events.data'), 'list']))
        assert fake_out.getvalue() == 'No events registered.\n'


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_now_and_past(fake_out):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'events.data')
        started = (datetime.now() - timedelta(minutes=10)).strftime('%Y-%m-%dT%H:%M:%S')
        _write_events(path, ['e1|Old|Square|PARTY|2000-01-01T10:00:00|',
                             'e2|Current|Square|SHOW|%s|' % started])

        run_now(_parser().parse_args(['-f', path, 'now']))
        assert fake_out.getvalue().startswith('- Current | Square | SHOW')
        assert 'happening now' in fake_out.getvalue()
        assert 'Old' not in fake_out.getvalue()

        fake_out.truncate(0)
        fake_out.seek(0)

        run_past(_parser().parse_args(['-f', path, 'past']))
        assert fake_out.getvalue() == '- Old | Square | PARTY | 01/01/2000 10:00 | already happened\n'


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_now_empty(fake_out):
    with tempfile.TemporaryDirectory() as tmpdir:
        run_now(_parser().parse_args(['-f', os.path.join(tmpdir, 'events.data'), 'now']))
        assert fake_out.getvalue() == 'No events happening right now.\n'


@mock.patch('sys.stdout', new_callable=io.StringIO)
def test_run_categories(fake_out):
    run_categories(None)
    lines = fake_out.getvalue().splitlines()
    assert lines[0] == '- PARTY'
    assert len(lines) == 8

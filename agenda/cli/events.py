"""
-----------------
agenda.cli.events
-----------------

Commands for registering and listing events.
"""
from datetime import datetime
from agenda.cli.parser import get_config, open_store
from agenda.model import EventCategory, new_event
from agenda.notification import NotificationService


DATE_FORMAT = '%d/%m/%Y %H:%M'


def get_parser(subparsers):
    """Configures the subparsers for the event commands: ``add``, ``list``, ``now``, ``past`` and ``categories``.

    :param argparse.ArgumentParser subparser: subparser for commands.

    Returns :class:`argparse.ArgumentParser` configured for the ``add`` command.
    """
    parser = subparsers.add_parser('add', help='Register new event')

    parser.add_argument('-n', '--name', dest='name', required=True, help='Event name')
    parser.add_argument('-a', '--address', dest='address', default='', help='Event address')
    parser.add_argument('-C', '--category', dest='category', required=True,
                        type=parse_category, metavar='CATEGORY',
                        help='Event category. One of: ' + ', '.join(c.name for c in EventCategory))
    parser.add_argument('-w', '--when', dest='when', required=True, type=parse_when,
                        metavar='"DD/MM/YYYY HH:MM"', help='Date and time of the event')
    parser.add_argument('-d', '--description', dest='description', default='',
                        help='Event description')

    subparsers.add_parser('list', help='List all events ordered by date and time')
    subparsers.add_parser('now', help='List events happening now')
    subparsers.add_parser('past', help='List events that already happened')
    subparsers.add_parser('categories', help='List the event categories')

    return parser


def parse_when(value):
    """Parses date and time entered by the user (``DD/MM/YYYY HH:MM``).

    Raises ``ValueError`` if the value is not in the expected format.
    """
    return datetime.strptime(value.strip(), DATE_FORMAT)


def parse_category(value):
    """Parses category entered by the user. The match is case-insensitive.
    """
    try:
        return EventCategory[value.strip().upper()]
    except KeyError:
        raise ValueError('Unknown category: %s' % value) from None


def render_event(event, status):
    """Formats the event as a single line for display.
    """
    return '%s | %s | %s | %s | %s' % (event.name, event.address, event.category.name,
                                       event.when.strftime(DATE_FORMAT), status)


def print_events(store, events, empty_message, bullet=None, now=None):
    """Prints the events (one per line) or ``empty_message`` if there are none.

    Events are numbered from 1, unless a ``bullet`` is given.
    """
    if not events:
        print(empty_message)
        return
    for i, event in enumerate(events, start=1):
        prefix = bullet if bullet else '%d)' % i
        print(prefix, render_event(event, store.status_of(event, now)))


def print_categories():
    for category in EventCategory:
        print('-', category.name)


def run_add(args):
    """Registers new event and notifies if it is about to start.

    :param argparse.Namespace args: parsed command-line arguments.
    """
    config = get_config(args)
    store = open_store(config)
    event = new_event(name=args.name, address=args.address, category=args.category,
                      when=args.when, description=args.description)
    if not store.add(event):
        print('Event registered, but it could not be saved to', config.events_file)
        return event
    print('Event registered:', event.id)
    NotificationService(window_minutes=config.notify_minutes).notify_if_upcoming(event)
    return event


def run_list(args):
    store = open_store(get_config(args))
    print_events(store, store.all_ordered(), 'No events registered.')


def run_now(args):
    store = open_store(get_config(args))
    now = datetime.now()
    print_events(store, store.happening_now(now), 'No events happening right now.', bullet='-', now=now)


def run_past(args):
    store = open_store(get_config(args))
    now = datetime.now()
    print_events(store, store.past_events(now), 'No past events.', bullet='-', now=now)


def run_categories(args):
    print_categories()

"""
----------------
agenda.cli.shell
----------------

Interactive menu session.

The session loads the events on start, keeps the attendance confirmations in
memory and saves the events and the user profile on exit.
"""
from datetime import datetime
from logging import getLogger
from agenda.cli.parser import get_config, open_store
from agenda.cli.events import parse_when, render_event
from agenda.model import EventCategory, User, new_event
from agenda.notification import NotificationService
from agenda.participation import ParticipationService
from agenda.userstore import UserStore


log = getLogger(__name__)


MENU = '''---------------- MENU ----------------
1) Register/Change user
2) Register event
3) List events (ordered by date and time)
4) Attend an event
5) My confirmed events
6) Cancel attendance
7) Events happening NOW
8) Events that ALREADY happened
9) Show categories
0) Exit
--------------------------------------'''


def get_parser(subparsers):
    """Configures the subparser for the ``shell`` command.

    :param argparse.ArgumentParser subparser: subparser for commands.

    Returns :class:`argparse.ArgumentParser` configured for the ``shell`` command.
    """
    return subparsers.add_parser('shell', help='Interactive session')


class Shell:
    """The interactive menu session.

    :param store: :class:`agenda.storeapi.EventStore`, the (loaded) event store.
    :param users: :class:`agenda.userstore.UserStore`, the user profile store.
    :param participation: :class:`agenda.participation.ParticipationService`. Defaults to a new service backed by
        ``store``.
    :param notifications: :class:`agenda.notification.NotificationService`.
    :param read: callable that takes a prompt and returns the line entered. Default is :func:`input`.
    :param write: callable that outputs a line. Default is :func:`print`.
    :param clock: callable returning the current :class:`datetime.datetime`.
    """
    def __init__(self, store, users, participation=None, notifications=None, read=input, write=print,
                 clock=datetime.now):
        self.store = store
        self.users = users
        self.participation = participation or ParticipationService(lookup=store)
        self.notifications = notifications or NotificationService(notifier=write, clock=clock)
        self.read = read
        self.write = write
        self.clock = clock
        self.actions = {
            '1': self.register_user,
            '2': self.create_event,
            '3': self.list_events,
            '4': self.attend,
            '5': self.list_my_events,
            '6': self.cancel_attendance,
            '7': self.show_happening_now,
            '8': self.show_past_events,
            '9': self.list_categories,
        }
        self.needs_user = {'2', '4', '5', '6'}

    @property
    def user(self):
        return self.users.current_user

    def run(self):
        self.welcome()
        while True:
            self.write(MENU)
            option = self.read_line('Choose an option: ')
            if option == '0':
                self.write('Saving and exiting...')
                self.store.save()
                self.users.save()
                return
            action = self.actions.get(option)
            if action is None:
                self.write('Invalid option.\n')
                continue
            if option in self.needs_user:
                self.ensure_user()
            action()

    def welcome(self):
        self.write('========================================')
        self.write('  EVENT REGISTRY')
        self.write('========================================\n')
        self.write('Tip: dates use the format DD/MM/YYYY HH:MM (e.g. 10/09/2025 19:30)\n')
        if self.user is not None:
            self.write('Loaded user: %s\n' % self.user.name)

    def read_line(self, prompt):
        return self.read(prompt).strip()

    def read_int(self, prompt):
        while True:
            value = self.read_line(prompt)
            try:
                return int(value)
            except ValueError:
                self.write('Enter a valid number.\n')

    def read_when(self, prompt):
        while True:
            value = self.read_line(prompt)
            try:
                return parse_when(value)
            except ValueError:
                self.write('Invalid format. Use DD/MM/YYYY HH:MM.\n')

    def read_category(self):
        categories = list(EventCategory)
        while True:
            self.write('Choose the category:')
            for i, category in enumerate(categories, start=1):
                self.write('%d) %s' % (i, category.name))
            option = self.read_int('Category number: ')
            if 1 <= option <= len(categories):
                return categories[option - 1]
            self.write('Invalid option. Try again.\n')

    def ensure_user(self):
        if self.user is not None:
            return
        self.write('No user logged in. Register to continue.\n')
        self.register_user()
        self.write('\nWelcome, %s!\n' % self.user.first_name)

    def register_user(self):
        self.write('--- User registration ---')
        user = User(name=self.read_line('Full name: '),
                    email=self.read_line('E-mail: '),
                    city=self.read_line('City: '),
                    phone=self.read_line('Phone (optional): '))
        self.users.set_current_user(user)
        return user

    def create_event(self):
        self.write('--- Event registration ---')
        name = self.read_line('Name: ')
        address = self.read_line('Address: ')
        category = self.read_category()
        when = self.read_when('Date and time (DD/MM/YYYY HH:MM): ')
        description = self.read_line('Description: ')
        event = new_event(name=name, address=address, category=category, when=when, description=description)
        if self.store.add(event):
            self.write('Event registered successfully!\n')
        else:
            self.write('Event registered, but it could not be saved.\n')
        self.notifications.notify_if_upcoming(event, self.clock())
        return event

    def render(self, event, now):
        return render_event(event, self.store.status_of(event, now))

    def write_numbered(self, events):
        now = self.clock()
        for i, event in enumerate(events, start=1):
            self.write('%d) %s' % (i, self.render(event, now)))

    def list_events(self):
        self.write('--- Events (ordered) ---')
        events = self.store.all_ordered()
        if not events:
            self.write('No events registered.\n')
            return
        self.write_numbered(events)
        self.write('')

    def choose(self, events, prompt):
        index = self.read_int(prompt)
        if index < 1 or index > len(events):
            self.write('Invalid index.\n')
            return None
        return events[index - 1]

    def attend(self):
        events = self.store.all_ordered()
        if not events:
            self.write('No events available.\n')
            return
        self.list_events()
        event = self.choose(events, 'Enter the number of the event to attend: ')
        if event is not None:
            self.participation.confirm(self.user, event)
            self.write('Attendance confirmed for: %s\n' % event.name)

    def list_my_events(self):
        self.write('--- My confirmed events ---')
        events = self.participation.events_of(self.user)
        if not events:
            self.write('You have not confirmed attendance to any event yet.\n')
            return
        self.write_numbered(events)
        self.write('')

    def cancel_attendance(self):
        events = self.participation.events_of(self.user)
        if not events:
            self.write('You have no confirmed events.\n')
            return
        self.write('--- Cancel attendance ---')
        self.write_numbered(events)
        event = self.choose(events, 'Enter the number of the event to cancel: ')
        if event is not None:
            self.participation.cancel(self.user, event)
            self.write('Attendance cancelled for: %s\n' % event.name)

    def show_happening_now(self):
        self.write('--- Events happening NOW ---')
        now = self.clock()
        events = self.store.happening_now(now)
        if not events:
            self.write('No events happening right now.\n')
            return
        for event in events:
            self.write('- ' + self.render(event, now))
        self.write('')

    def show_past_events(self):
        self.write('--- Events that already happened ---')
        now = self.clock()
        events = self.store.past_events(now)
        if not events:
            self.write('No past events.\n')
            return
        for event in events:
            self.write('- ' + self.render(event, now))
        self.write('')

    def list_categories(self):
        self.write('Event categories:')
        for category in EventCategory:
            self.write('- %s' % category.name)
        self.write('')


def run_shell(args):
    """Runs the interactive session.

    :param argparse.Namespace args: parsed command-line arguments.
    """
    config = get_config(args)
    store = open_store(config)
    users = UserStore(config.user_file)
    shell = Shell(store=store, users=users,
                  notifications=NotificationService(window_minutes=config.notify_minutes))
    try:
        shell.run()
    except (EOFError, KeyboardInterrupt):
        log.info('Session interrupted. Saving.')
        store.save()
        users.save()

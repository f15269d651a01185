"""
-----------------
agenda.cli.parser
-----------------


Agenda CLI main :mod:`argparse` parser.
"""
import argparse
from agenda.config import load_config
from agenda.filestore import FileEventStore


def get_parent_parser(name, desc=''):
    """Creates the main (parent) :class:`argparse.ArgumentParser` for Agenda CLI.

    Defines the main argument options such as the configuration file, the data files and the verbosity level.

    :param str name: the name of the program.
    :param str desc: program description.

    Returns the configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(prog=name, description=desc)

    parser.add_argument('-v', '--version',
                        help='Print program version and exit', action='store_true')
    parser.add_argument('-c', '--config', dest='config_file', metavar='FILE',
                        default=None, help='YAML configuration file')
    parser.add_argument('-f', '--events-file', dest='events_file', metavar='FILE',
                        default=None, help='Events data file')
    parser.add_argument('-u', '--user-file', dest='user_file', metavar='FILE',
                        default=None, help='User profile data file')

    parser.add_argument('--verbose', dest='verbose', action='store_true',
                        help='Verbose output.')

    return parser


def get_config(args):
    """Loads the configuration and applies the command line overrides.

    :param argparse.Namespace args: parsed command-line arguments.

    Returns :class:`agenda.config.Config`.
    """
    config = load_config(getattr(args, 'config_file', None))
    return config.override(events_file=getattr(args, 'events_file', None),
                           user_file=getattr(args, 'user_file', None))


def open_store(config):
    """Creates a :class:`agenda.filestore.FileEventStore` for the configured events file and loads it.
    """
    store = FileEventStore(config.events_file)
    store.load()
    return store

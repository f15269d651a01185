import sys
import logging
from agenda.cli.parser import get_parent_parser
from agenda.cli import events, shell, user
from agenda.config import ConfigException


COMMANDS = {
    'add': events.run_add,
    'list': events.run_list,
    'now': events.run_now,
    'past': events.run_past,
    'categories': events.run_categories,
    'user': user.run_user,
    'shell': shell.run_shell,
}


def get_parser():
    parser = get_parent_parser('agenda', 'Agenda - event registry CLI')

    subparsers = parser.add_subparsers(dest='command', title='command', help='CLI commands')
    events.get_parser(subparsers)
    user.get_parser(subparsers)
    shell.get_parser(subparsers)

    return parser


def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.version:
        from agenda.metadata import version
        print('agenda', version)
        sys.exit(0)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    run = COMMANDS.get(args.command)
    if run is None:
        parser.print_help()
        return

    try:
        run(args)
    except ConfigException as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()

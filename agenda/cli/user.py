"""
---------------
agenda.cli.user
---------------

Command for showing and registering the current user.
"""
from agenda.cli.parser import get_config
from agenda.model import User
from agenda.userstore import UserStore


def get_parser(subparsers):
    """Configures the subparser for the ``user`` command.

    Without arguments the command shows the current user. With ``--name`` and ``--email`` it registers (replaces)
    the current user.

    :param argparse.ArgumentParser subparser: subparser for commands.

    Returns :class:`argparse.ArgumentParser` configured for the ``user`` command.
    """
    parser = subparsers.add_parser('user', help='Show or register the current user')

    parser.add_argument('-n', '--name', dest='name', default=None, help='Full name')
    parser.add_argument('-e', '--email', dest='email', default=None, help='E-mail')
    parser.add_argument('--city', dest='city', default='', help='City')
    parser.add_argument('-p', '--phone', dest='phone', default='', help='Phone (optional)')

    return parser


def run_user(args):
    """Shows or registers the current user.

    :param argparse.Namespace args: parsed command-line arguments.
    """
    users = UserStore(get_config(args).user_file)

    if args.name or args.email:
        if not (args.name and args.email):
            print('Both --name and --email are required to register a user.')
            return None
        user = User(name=args.name, email=args.email, city=args.city, phone=args.phone)
        if users.set_current_user(user):
            print('Welcome, %s!' % user.first_name)
        else:
            print('User could not be saved.')
        return user

    user = users.current_user
    if user is None:
        print('No user registered.')
    else:
        print('%s <%s>, %s %s' % (user.name, user.email, user.city, user.phone))
    return user

from agenda.cli.parser import get_parent_parser, get_config, open_store
import tempfile
import os


def test_get_parent_parser():
    parser = get_parent_parser(name='test', desc='unit test parser')

    args = parser.parse_args(args=['-v'])
    assert args.version is True

    args = parser.parse_args(args=['--version'])
    assert args.version is True

    args = parser.parse_args(args=[])
    assert args.version is False
    assert args.verbose is False
    assert args.config_file is None
    assert args.events_file is None
    assert args.user_file is None

    args = parser.parse_args(args=['-c', 'agenda.yml', '-f', 'ev.data', '-u', 'user.data', '--verbose'])
    assert args.config_file == 'agenda.yml'
    assert args.events_file == 'ev.data'
    assert args.user_file == 'user.data'
    assert args.verbose is True


def test_get_config_overrides_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = os.path.join(tmpdir, 'agenda.yml')
        with open(config_path, 'w') as f:
            f.write('events_file: from-config.data\nuser_file: user-config.data\n')

        parser = get_parent_parser(name='test')
        config = get_config(parser.parse_args(args=['-c', config_path, '-f', 'cli.data']))

        assert config.events_file == 'cli.data'
        assert config.user_file == 'user-config.data'


def test_open_store_loads_events():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, 'events.data')
        with open(path, 'w') as f:
            f.write('e1|A|Square|PARTY|2025-09-10T10:00:00|\n')

        parser = get_parent_parser(name='test')
        store = open_store(get_config(parser.parse_args(args=['-f', path])))

        assert [e.id for e in store.all_ordered()] == ['e1']

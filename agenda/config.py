"""
-------------
agenda.config
-------------

Configuration of the event registry.

The configuration is a YAML file. All keys are optional:

.. code-block:: yaml

    events_file: /home/me/.agenda/events.data
    user_file: /home/me/.agenda/current_user.data
    notify_minutes: 60

"""
from os.path import exists
from logging import getLogger
import yaml


log = getLogger(__name__)


DEFAULTS = {
    'events_file': 'events.data',
    'user_file': 'current_user.data',
    'notify_minutes': 60,
}


class ConfigException(Exception):
    """Raised when the configuration file cannot be read or is invalid.
    """
    pass


class Config:
    """Holds the configuration values.

    :param values: ``dict``, configuration values. Missing keys take the value from :data:`DEFAULTS`.
    """
    def __init__(self, values=None):
        self.values = dict(DEFAULTS)
        if values:
            self.values.update(values)

    @property
    def events_file(self):
        return self.values['events_file']

    @property
    def user_file(self):
        return self.values['user_file']

    @property
    def notify_minutes(self):
        return int(self.values['notify_minutes'])

    def override(self, **overrides):
        """Returns new :class:`Config` with the given values replaced. ``None`` values are ignored.
        """
        values = dict(self.values)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return Config(values)


def load_config(file_path=None):
    """Loads the configuration from a YAML file.

    :param file_path: ``str``, path to the configuration file. If ``None`` or the file does not exist, the default
        configuration is returned.

    Returns :class:`Config`. Raises :class:`ConfigException` if the file cannot be read or parsed.
    """
    if not file_path or not exists(file_path):
        if file_path:
            log.info('Config file %s not found. Using defaults.', file_path)
        return Config()
    try:
        with open(file_path, 'r', encoding='utf-8') as config_file:
            values = yaml.safe_load(config_file)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigException('Failed to load config from %s: %s' % (file_path, e)) from e

    if values is None:
        return Config()
    if not isinstance(values, dict):
        raise ConfigException('Invalid config in %s: expected a mapping' % file_path)

    unknown = set(values) - set(DEFAULTS)
    if unknown:
        log.warning('Unknown config keys in %s: %s', file_path, ', '.join(sorted(unknown)))

    config = Config(values)
    try:
        config.notify_minutes
    except (TypeError, ValueError) as e:
        raise ConfigException('Invalid notify_minutes in %s: %s' % (file_path, e)) from e
    return config

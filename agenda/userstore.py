"""
----------------
agenda.userstore
----------------

Persistence of the current user profile.

The profile is kept in a single line of a plain-text file, in the same
delimited format (and with the same lossy escaping) as the events. See
:mod:`agenda.model`.
"""
from logging import getLogger
from agenda.filestore import AtomicFile, write_lines
from agenda.storeapi import EventWriteException
from agenda.model import UserSerializer, UserParser, DecodeException


log = getLogger(__name__)


class UserStore:
    """Keeps the profile of the current user and persists it in a file.

    The profile is loaded when the store is created. If the file does not exist or cannot be read, there is no
    current user.

    :param file_path: ``str``, path to the user profile file.
    """
    def __init__(self, file_path):
        self.file = AtomicFile(file_path)
        self.serializer = UserSerializer()
        self.parser = UserParser()
        self._current_user = None
        self.load()

    @property
    def current_user(self):
        """The current :class:`agenda.model.User`, or ``None`` if not registered yet.
        """
        return self._current_user

    def set_current_user(self, user):
        """Replaces the current user and saves the profile.

        Returns ``True`` if the profile was saved.
        """
        self._current_user = user
        return self.save()

    def load(self):
        self._current_user = None
        if not self.file.exists():
            return
        try:
            first_line = self.file.first_line()
        except (OSError, UnicodeDecodeError) as e:
            log.error('Failed to read user from %s. Error: %s', self.file.path, e)
            return
        if not first_line:
            return
        try:
            self._current_user = self.parser.parse(first_line)
        except DecodeException as e:
            log.warning('Invalid user profile in %s: %s', self.file.path, e)

    def save(self):
        if self._current_user is None:
            return False
        try:
            write_lines(self.file, [self.serializer.serialize(self._current_user)])
        except EventWriteException as e:
            log.error('Failed to save user. Error: %s', e)
            return False
        return True

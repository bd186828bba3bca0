# coding: utf-8
"""
    flask_oauthflow.config
    ~~~~~~~~~~~~~~~~~~~~~~

    The JSON credentials file of command line programs::

        {
          "consumer_key": "...",
          "consumer_secret": "...",
          "access_token": "...",
          "access_secret": "..."
        }

    The access pair is optional; it is written back after the first
    successful authorization so later runs skip the handshake. Any other
    keys of the file are kept as they are.
"""

import os
import json
import logging
import tempfile

from .exceptions import ConfigError
from .structure import Credentials


__all__ = ['CredentialsFile']

log = logging.getLogger('flask_oauthflow')

# other spellings accepted on load
_ALIASES = {
    'consumer_key': ('ConsumerToken', 'ConsumerKey', 'Token'),
    'consumer_secret': ('ConsumerSecret', 'Secret'),
    'access_token': ('AccessToken',),
    'access_secret': ('AccessSecret',),
}

_KNOWN_KEYS = set(_ALIASES).union(*_ALIASES.values())


class CredentialsFile(object):
    """Consumer identity and optional access credentials of one program.

    :param path: where the file lives.
    :param consumer: the consumer :class:`Credentials`.
    :param access: the access :class:`Credentials` or ``None``.
    :param extra: other keys of the file, written back unchanged by
                  :meth:`save`.
    """

    def __init__(self, path, consumer, access=None, extra=None):
        self.path = path
        self.consumer = consumer
        self.access = access
        self.extra = extra or {}

    @classmethod
    def load(cls, path):
        """Reads ``path``.

        :raises ConfigError: the file is missing, is not a JSON object, or
                             lacks the consumer key or secret.
        """
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError('Error reading configuration, %s' % e,
                              type='config_missing')
        except ValueError as e:
            raise ConfigError('Error reading configuration, %s' % e,
                              type='config_invalid')
        if not isinstance(data, dict):
            raise ConfigError('Configuration must be a JSON object',
                              type='config_invalid')

        values = dict(
            (key, _lookup(data, key)) for key in _ALIASES
        )
        if not values['consumer_key'] or not values['consumer_secret']:
            raise ConfigError(
                '%s is missing consumer_key or consumer_secret' % path,
                type='config_invalid')

        consumer = Credentials(values['consumer_key'],
                               values['consumer_secret'])
        access = None
        if values['access_token'] and values['access_secret']:
            access = Credentials(values['access_token'],
                                 values['access_secret'])
        extra = dict(
            (key, value) for key, value in data.items()
            if key not in _KNOWN_KEYS
        )
        log.debug('Load credentials from %r', path)
        return cls(path, consumer, access, extra)

    def to_dict(self):
        data = dict(self.extra)
        data.update({
            'consumer_key': self.consumer.token,
            'consumer_secret': self.consumer.secret,
        })
        if self.access is not None:
            data['access_token'] = self.access.token
            data['access_secret'] = self.access.secret
        return data

    def save(self):
        """Rewrites the file, readable by the owner only."""
        content = json.dumps(self.to_dict(), indent=2, sort_keys=True)
        # mkstemp creates the file with mode 0600
        fd, tmp = tempfile.mkstemp(
            dir=os.path.dirname(os.path.abspath(self.path)))
        try:
            with open(fd, 'w', encoding='utf-8') as f:
                f.write(content)
                f.write('\n')
            os.replace(tmp, self.path)
        except OSError:
            os.unlink(tmp)
            raise
        log.debug('Save credentials to %r', self.path)

    def forget_access(self):
        """Drops the access pair and rewrites the file, the next run has to
        authorize again.
        """
        self.access = None
        self.save()


def _lookup(data, key):
    if data.get(key):
        return data[key]
    for alias in _ALIASES[key]:
        if data.get(alias):
            return data[alias]
    return None

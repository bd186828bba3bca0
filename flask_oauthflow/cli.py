# coding: utf-8
"""
    flask_oauthflow.cli
    ~~~~~~~~~~~~~~~~~~~

    Helpers for command line programs which authorize with a PIN and keep
    their credentials in a JSON file.
"""

import argparse
import logging

from .flow import AuthorizationFlow


__all__ = [
    'make_parser', 'setup_logging', 'obtain_access_token',
    'forget_access_token',
]

log = logging.getLogger('flask_oauthflow')


def make_parser(description=None):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        '--config', default='config.json',
        help='Path to configuration file containing the application\'s '
             'credentials.')
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Log the OAuth requests.')
    parser.add_argument(
        '--logout', action='store_true',
        help='Remove the stored access token from the configuration file.')
    return parser


def setup_logging(verbose=False):
    logger = logging.getLogger('flask_oauthflow')
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


def obtain_access_token(remote, credentials, prompt=None, output=None):
    """Returns the access credentials of ``credentials``, running the PIN
    flow first when the file has none yet.

    A newly obtained pair is written back to the file.

    :param remote: an :class:`~flask_oauthflow.application.OAuth1Application`
                   whose consumer pair is taken from the file.
    :param credentials: a :class:`~flask_oauthflow.config.CredentialsFile`.
    :returns: ``(access_credentials, authorized)``, ``authorized`` tells
              whether the handshake ran.
    """
    remote.consumer_key, remote.consumer_secret = credentials.consumer

    flow = AuthorizationFlow(remote)
    if credentials.access is not None:
        return flow.restore(credentials.access), False

    access = flow.authorize_interactive(prompt=prompt, output=output)
    credentials.access = access
    credentials.save()
    log.info('Stored access token to %r', credentials.path)
    return access, True


def forget_access_token(remote, credentials):
    """Logs out: discards the access credentials of ``credentials`` and
    rewrites the file without them.
    """
    flow = AuthorizationFlow(remote)
    if credentials.access is not None:
        flow.restore(credentials.access)
    flow.logout()
    credentials.forget_access()
    log.info('Removed access token from %r', credentials.path)

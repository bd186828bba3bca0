# coding: utf-8
"""
    flask_oauthflow.flow
    ~~~~~~~~~~~~~~~~~~~~

    The three-legged OAuth 1.0a authorization flow::

        UNAUTHORIZED --begin--> PENDING --complete--> AUTHORIZED
              ^                                            |
              +------------------- logout -----------------+

    Temporary credentials are kept in the credential store between
    :meth:`AuthorizationFlow.begin` and :meth:`AuthorizationFlow.complete`,
    so the two steps may run in different requests, each with a fresh flow
    object bound to the same store. Temporary and access credentials live in
    separate namespaces of that store: a temporary token never resolves as
    an access token and the other way around.
"""

import logging

from .exceptions import OAuthException, UnknownToken
from .signals import request_token_fetched, access_token_fetched, logged_out
from .store import MemoryStore


__all__ = [
    'AuthorizationFlow', 'UNAUTHORIZED', 'PENDING', 'AUTHORIZED',
    'TEMPORARY_NAMESPACE', 'ACCESS_NAMESPACE',
]

log = logging.getLogger('flask_oauthflow')

UNAUTHORIZED = 'unauthorized'
PENDING = 'pending'
AUTHORIZED = 'authorized'

#: seconds a temporary credential may stay pending
DEFAULT_TEMPORARY_TTL = 600

#: store namespaces of the two kinds of credentials
TEMPORARY_NAMESPACE = 'temporary:'
ACCESS_NAMESPACE = 'access:'


class AuthorizationFlow(object):
    """Drives the authorization of one user against a remote application.

    :param remote: an :class:`~flask_oauthflow.application.OAuth1Application`.
    :param store: the credential store shared with other flows. A private
                  :class:`~flask_oauthflow.store.MemoryStore` when omitted.
    :param temporary_ttl: lifetime of pending temporary credentials.
    """

    def __init__(self, remote, store=None, temporary_ttl=None):
        self.remote = remote
        if store is None:
            store = MemoryStore()
        self.store = store
        self.temporary_store = store.namespace(TEMPORARY_NAMESPACE)
        self.access_store = store.namespace(ACCESS_NAMESPACE)
        if temporary_ttl is None:
            temporary_ttl = DEFAULT_TEMPORARY_TTL
        self.temporary_ttl = temporary_ttl

        self.state = UNAUTHORIZED
        self.temporary = None
        self.access_credentials = None
        self.token_response = None

    def __repr__(self):
        return '<%s:%s %s>' % (
            self.__class__.__name__, self.remote.name, self.state)

    @property
    def authorized(self):
        return self.state == AUTHORIZED

    def begin(self, callback_uri=None, authorization_url=None):
        """Fetches temporary credentials and returns them along with the URL
        the user has to visit.

        :param callback_uri: the redirect target after authorization, or
                             ``None`` for an out-of-band verifier.
        :param authorization_url: the authorization endpoint to send the user
                                  to. Defaults to the remote's
                                  ``authorization_url``.
        :returns: ``(temporary_credentials, url)``
        :raises UpstreamError: the remote service refused the request, the
                               flow stays where it was.
        """
        temporary = self.remote.fetch_request_token(callback_uri)
        self.temporary_store.put(temporary, timeout=self.temporary_ttl)
        url = self.remote.make_authorization_url(
            temporary, authorization_url)

        log.debug('Flow %r pending on %r', self.remote.name, temporary.token)
        self.temporary = temporary
        self.state = PENDING
        request_token_fetched.send(self.remote, flow=self, token=temporary)
        return temporary, url

    def authorize(self, callback_uri=None):
        """Begins the flow with the full consent screen."""
        return self.begin(callback_uri, self.remote.authorization_url)

    def signin(self, callback_uri=None):
        """Begins the flow with the sign-in shortcut of the remote, which
        skips the consent screen for users who approved the application
        before.
        """
        endpoint = self.remote.authentication_url or \
            self.remote.authorization_url
        return self.begin(callback_uri, endpoint)

    def complete(self, token, verifier):
        """Exchanges the verifier of a pending temporary token for access
        credentials.

        The temporary credentials are consumed before the exchange, a second
        call with the same token is rejected even when the exchange failed.

        :raises UnknownToken: ``token`` is not pending (forged, expired or
                              replayed).
        :raises UpstreamError: the exchange was refused.
        :returns: the access :class:`~flask_oauthflow.structure.Credentials`.
        """
        temporary = self.temporary_store.pop(token)
        if temporary is None:
            log.warning('Reject unknown oauth_token %r', token)
            raise UnknownToken(token)

        self.temporary = None
        self.state = PENDING
        response = self.remote.fetch_access_token(temporary, verifier)

        credentials = response.credentials
        self.access_store.put(credentials)
        self.access_credentials = credentials
        self.token_response = response
        self.state = AUTHORIZED
        log.debug('Flow %r authorized', self.remote.name)
        access_token_fetched.send(self.remote, flow=self, token=credentials)
        return credentials

    def authorize_interactive(self, prompt=None, output=None):
        """Runs the whole flow with an out-of-band verifier.

        The authorization URL is handed to ``output``, then ``prompt`` blocks
        until the user types the PIN the remote service displayed.

        :param prompt: called with a message, returns the typed PIN.
                       Defaults to :func:`input`.
        :param output: called with a message. Defaults to :func:`print`.
        """
        prompt = prompt or input
        output = output or print

        temporary, url = self.authorize()
        output('Open the following URL and authorize it: %s' % url)
        verifier = (prompt('Input the PIN code: ') or '').strip()
        if not verifier:
            self.discard(temporary.token)
            raise OAuthException('Empty verifier', type='verifier_missing')
        return self.complete(temporary.token, verifier)

    def discard(self, token):
        """Drops the pending temporary credentials of ``token``, e.g. when
        the user declined the authorization. Access credentials are never
        touched.
        """
        self.temporary_store.delete(token)
        if self.temporary is not None and self.temporary.token == token:
            self.temporary = None
            self.state = UNAUTHORIZED

    def restore(self, credentials):
        """Marks the flow authorized with access credentials obtained
        earlier, e.g. loaded from a credentials file.
        """
        self.access_store.put(credentials)
        self.access_credentials = credentials
        self.state = AUTHORIZED
        return credentials

    def logout(self, token=None):
        """Discards the access credentials and resets the flow.

        :param token: the access token to discard, defaults to the one this
                      flow obtained.
        """
        if token is None and self.access_credentials is not None:
            token = self.access_credentials.token
        if token is not None:
            self.access_store.delete(token)
        if self.temporary is not None:
            self.temporary_store.delete(self.temporary.token)

        self.temporary = None
        self.access_credentials = None
        self.token_response = None
        self.state = UNAUTHORIZED
        logged_out.send(self.remote, flow=self, token=token)

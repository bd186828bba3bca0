"""
    flask_oauthflow.application
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Remote OAuth 1.0a applications with requests-oauthlib as the signer.
"""

import logging
from urllib.parse import urljoin

import requests
from requests_oauthlib import OAuth1Session

from .descriptor import OAuthProperty
from .exceptions import AccessTokenNotFound, UpstreamError
from .exceptions import APIError, HTTPStatusError, DecodeError
from .structure import Credentials, TokenResponse


__all__ = ['OAuth1Application', 'decode_response']

log = logging.getLogger('flask_oauthflow')

#: the ``oauth_callback`` value for flows without a redirect
OUT_OF_BAND = 'oob'

#: methods whose parameters travel in the query string
QUERY_METHODS = ('GET', 'DELETE')


class OAuth1Application(object):
    """The remote application for OAuth 1.0a.

    An application instance could be used in multiple contexts. It never
    stores any per-user state in the ``__dict__`` of itself; temporary and
    access credentials live in a credential store or with the caller.

    :param name: the name of this application.
    :param kwargs: values for the :class:`OAuthProperty` attributes. Missing
                   ones are read from ``app.config``, e.g. the
                   ``consumer_key`` of the app named ``twitter`` is read
                   from ``TWITTER_CONSUMER_KEY``.
    """

    #: the signer collaborator, it must behave like
    #: :class:`requests_oauthlib.OAuth1Session`
    session_class = OAuth1Session

    endpoint_url = OAuthProperty('endpoint_url', default='')
    request_token_url = OAuthProperty('request_token_url')
    access_token_url = OAuthProperty('access_token_url')
    authorization_url = OAuthProperty('authorization_url')
    authentication_url = OAuthProperty('authentication_url', default=None)

    consumer_key = OAuthProperty('consumer_key')
    consumer_secret = OAuthProperty('consumer_secret')

    def __init__(self, name, **kwargs):
        self.name = name

        for k, v in kwargs.items():
            if not hasattr(self.__class__, k):
                raise TypeError('descriptor %r not found' % k)
            setattr(self, k, v)

    def __repr__(self):
        class_name = self.__class__.__name__
        return '<%s:%s at %s>' % (class_name, self.name, hex(id(self)))

    @property
    def consumer(self):
        """The consumer identity as a :class:`Credentials` pair."""
        return Credentials(self.consumer_key, self.consumer_secret)

    def make_oauth_session(self, **kwargs):
        return self.session_class(
            self.consumer_key, client_secret=self.consumer_secret, **kwargs)

    def expand_url(self, url):
        return urljoin(self.endpoint_url, url)

    # signer steps of the three-legged flow

    def fetch_request_token(self, callback_uri=None):
        """Obtains temporary credentials.

        :param callback_uri: where the service redirects the user after
                             authorization. ``None`` asks for an out-of-band
                             verifier (a PIN shown to the user).
        :returns: the temporary :class:`Credentials`.
        """
        oauth = self.make_oauth_session(
            callback_uri=callback_uri or OUT_OF_BAND)
        log.debug('Fetch request token from %r', self.request_token_url)
        try:
            response = oauth.fetch_request_token(self.request_token_url)
            return Credentials(
                response['oauth_token'], response['oauth_token_secret'])
        except (ValueError, KeyError, requests.RequestException) as e:
            raise UpstreamError(
                'Failed to generate request token, %s' % e,
                type='token_generation_failed',
                data=getattr(e, 'status_code', None),
            )

    def make_authorization_url(self, temporary, endpoint=None):
        """Builds the URL the user visits to approve ``temporary``.

        :param temporary: the temporary :class:`Credentials`.
        :param endpoint: the authorization endpoint, defaults to
                         :attr:`authorization_url`.
        """
        oauth = self.make_oauth_session()
        return oauth.authorization_url(
            endpoint or self.authorization_url, request_token=temporary.token)

    def fetch_access_token(self, temporary, verifier):
        """Exchanges the verifier of ``temporary`` for access credentials.

        :returns: a :class:`TokenResponse`.
        """
        oauth = self.make_oauth_session(
            resource_owner_key=temporary.token,
            resource_owner_secret=temporary.secret,
            verifier=verifier)
        log.debug('Fetch access token from %r', self.access_token_url)
        try:
            response = TokenResponse(
                oauth.fetch_access_token(self.access_token_url, verifier))
        except (ValueError, requests.RequestException) as e:
            raise UpstreamError(
                'Invalid response from %s, %s' % (self.name, e),
                type='invalid_response',
                data=getattr(e, 'status_code', None),
            )
        if 'oauth_token_secret' not in response:
            raise UpstreamError(
                'Invalid response from %s, missing secret' % self.name,
                type='invalid_response',
            )
        return response

    # signed API requests

    def tokengetter(self, fn):
        """Registers a function returning the default access credentials."""
        self._tokengetter = fn
        return fn

    def obtain_token(self):
        """Obtains the access token by calling ``tokengetter`` which was
        defined by users.

        :returns: token or ``None``.
        """
        tokengetter = getattr(self, '_tokengetter', None)
        if tokengetter is None:
            raise RuntimeError('%r missing tokengetter' % self)
        return tokengetter()

    @property
    def client(self):
        """The OAuth session signing with the result of :meth:`tokengetter`.
        """
        token = self.obtain_token()
        if token is None:
            raise AccessTokenNotFound
        return self.make_client(token)

    def make_client(self, token):
        """Creates a client with specific access token pair.

        :param token: a tuple of access token pair ``(token, token_secret)``
                      or a dictionary of access token response.
        :returns: a :class:`requests_oauthlib.OAuth1Session` object.
        """
        if isinstance(token, dict):
            access_token = token['oauth_token']
            access_token_secret = token['oauth_token_secret']
        else:
            access_token, access_token_secret = token
        return self.make_oauth_session(
            resource_owner_key=access_token,
            resource_owner_secret=access_token_secret)

    def request(self, method, url, params=None, token=None):
        """Sends a signed request and decodes the JSON response.

        :param method: the HTTP method.
        :param url: absolute, or relative to :attr:`endpoint_url`.
        :param params: a dictionary of parameters. They are sent in the
                       query string for ``GET`` and ``DELETE``, as
                       a form body otherwise.
        :param token: the access credentials. The ``tokengetter`` result is
                      used when it is ``None``.
        :returns: the decoded JSON value.
        """
        if token is None:
            client = self.client
        else:
            client = self.make_client(token)
        method = method.upper()
        url = self.expand_url(url)

        if method in QUERY_METHODS:
            kwargs = dict(params=params)
        else:
            kwargs = dict(data=params or {})

        log.debug('Request %r with %r method', url, method)
        try:
            resp = client.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise APIError('Failed to request %s, %s' % (url, e),
                           type='request_failed')
        return decode_response(resp)

    def get(self, *args, **kwargs):
        return self.request('GET', *args, **kwargs)

    def post(self, *args, **kwargs):
        return self.request('POST', *args, **kwargs)

    def put(self, *args, **kwargs):
        return self.request('PUT', *args, **kwargs)

    def delete(self, *args, **kwargs):
        return self.request('DELETE', *args, **kwargs)

    def patch(self, *args, **kwargs):
        return self.request('PATCH', *args, **kwargs)


def decode_response(resp):
    """Decodes the JSON body of a :class:`requests.Response`.

    Anything but status 200 raises :class:`HTTPStatusError` carrying the
    body; a malformed body raises :class:`DecodeError`.
    """
    if resp.status_code != 200:
        log.debug('%r returned status %d', resp.url, resp.status_code)
        raise HTTPStatusError(resp.status_code, resp.text, resp.url)
    try:
        return resp.json()
    except ValueError as e:
        raise DecodeError(resp.text, str(e))

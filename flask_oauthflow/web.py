# coding: utf-8
"""
    flask_oauthflow.web
    ~~~~~~~~~~~~~~~~~~~

    Flask integration: the extension owning the credential store, the
    cookie based ``auth_handler`` and the blueprint serving the sign-in,
    authorize, callback and logout routes.
"""

import logging
from functools import wraps

from flask import Blueprint, current_app, redirect, request, url_for

from .application import OAuth1Application
from .cache import make_store
from .exceptions import APIError, UnknownToken, UpstreamError
from .flow import AuthorizationFlow, ACCESS_NAMESPACE


__all__ = ['OAuth', 'OAuthState', 'create_blueprint', 'AUTH_ROUTES']

log = logging.getLogger('flask_oauthflow')

#: the cookie carrying the access token of a signed in user
COOKIE_NAME = 'auth'

#: ``(rule, endpoint)`` pairs served by :func:`create_blueprint`
AUTH_ROUTES = (
    ('/signin', 'signin'),
    ('/authorize', 'authorize'),
    ('/callback', 'callback'),
    ('/logout', 'logout'),
)


class OAuth(object):
    """The extension to integrate OAuth 1.0a flows to Flask applications::

        oauth = OAuth(app)

    or::

        oauth = OAuth()
        oauth.init_app(app)

    :param store: the credential store shared by all request handlers. When
                  omitted it is built from the app config, see
                  :func:`~flask_oauthflow.cache.make_store`.
    """

    state_key = 'oauthflow'

    def __init__(self, app=None, store=None):
        self.remote_apps = {}
        self._store = store
        if app is not None:
            self.init_app(app)

    def init_app(self, app, store=None):
        if store is None:
            store = self._store
        if store is None:
            store = make_store(app)
        ttl = app.config.get('OAUTHFLOW_TEMPORARY_TTL')
        app.extensions = getattr(app, 'extensions', {})
        app.extensions[self.state_key] = OAuthState(store, ttl)

    def remote_app(self, name, **kwargs):
        """Creates and adds new remote application.

        :param name: the remote application's name.
        :param kwargs: the attributes of remote application.
        """
        remote = OAuth1Application(name, **kwargs)
        self.remote_apps[name] = remote
        return remote

    def __getitem__(self, name):
        return self.remote_apps[name]

    def __getattr__(self, key):
        try:
            return object.__getattribute__(self, key)
        except AttributeError:
            app = self.remote_apps.get(key)
            if app:
                return app
            raise AttributeError('No such app: %s' % key)

    @property
    def state(self):
        if self.state_key not in current_app.extensions:
            raise RuntimeError('%r is not initialized.' % current_app)
        return current_app.extensions[self.state_key]

    @property
    def store(self):
        """The credential store of the current app."""
        return self.state.store

    def flow(self, name):
        """Creates an :class:`AuthorizationFlow` for the remote app ``name``
        bound to the store of the current app.
        """
        state = self.state
        return AuthorizationFlow(
            self.remote_apps[name], state.store, state.temporary_ttl)

    def current_credentials(self):
        """Resolves the ``auth`` cookie of the current request.

        :returns: the access credentials, or ``None`` when the cookie is
                  absent or no longer valid.
        """
        token = request.cookies.get(COOKIE_NAME)
        if not token:
            return None
        return self.state.access_store.get(token)

    def auth_handler(self, optional=False):
        """A decorator passing the credentials of the signed in user as the
        first argument of the view::

            @app.route('/timeline')
            @oauth.auth_handler()
            def timeline(credentials):
                ...

        :param optional: call the view with ``None`` for anonymous users
                         instead of rejecting them with 403.
        """
        def decorator(f):
            @wraps(f)
            def decorated(*args, **kwargs):
                credentials = self.current_credentials()
                if credentials is None and not optional:
                    return 'Not logged in.', 403
                return f(*((credentials,) + args), **kwargs)
            return decorated
        return decorator


class OAuthState(object):

    def __init__(self, store, temporary_ttl=None):
        self.store = store
        self.access_store = store.namespace(ACCESS_NAMESPACE)
        self.temporary_ttl = temporary_ttl


class AuthViews(object):
    """The views of :data:`AUTH_ROUTES` for one remote app."""

    def __init__(self, oauth, name, home='/'):
        self.oauth = oauth
        self.name = name
        self.home = home

    def _begin(self, entry):
        flow = self.oauth.flow(self.name)
        callback_uri = url_for('.callback', _external=True)
        try:
            _, url = getattr(flow, entry)(callback_uri)
        except UpstreamError as e:
            return 'Error getting temp cred, %s' % e, 500
        return redirect(url, 302)

    def signin(self):
        return self._begin('signin')

    def authorize(self):
        return self._begin('authorize')

    def callback(self):
        flow = self.oauth.flow(self.name)
        denied = request.args.get('denied')
        if denied:
            flow.discard(denied)
            return 'Access denied.', 403

        try:
            credentials = flow.complete(
                request.args.get('oauth_token'),
                request.args.get('oauth_verifier'),
            )
        except UnknownToken as e:
            return str(e), 403
        except UpstreamError as e:
            return 'Error getting request token, %s' % e, 500

        resp = redirect(self.home, 302)
        resp.set_cookie(
            COOKIE_NAME, credentials.token, path='/', httponly=True)
        return resp

    def logout(self):
        token = request.cookies.get(COOKIE_NAME)
        if token:
            self.oauth.flow(self.name).logout(token)
        resp = redirect(self.home, 302)
        resp.delete_cookie(COOKIE_NAME, path='/', httponly=True)
        return resp


def create_blueprint(oauth, name, home='/', import_name=__name__):
    """Creates the blueprint serving :data:`AUTH_ROUTES` for the remote app
    ``name``. Failed API calls of any view are rendered as 500 responses.
    """
    bp = Blueprint('oauthflow_%s' % name, import_name)
    views = AuthViews(oauth, name, home)
    for rule, endpoint in AUTH_ROUTES:
        bp.add_url_rule(rule, endpoint, getattr(views, endpoint))

    @bp.app_errorhandler(APIError)
    def handle_api_error(e):
        log.debug('API error %r', e.type)
        return 'Error requesting %s, %s' % (name, e), 500

    return bp

"""
    flask_oauthflow.apps
    ~~~~~~~~~~~~~~~~~~~~

    The bundle of remote app factories for OAuth 1.0a services.

    Usage::

        from flask import Flask
        from flask_oauthflow.web import OAuth
        from flask_oauthflow.apps import twitter

        app = Flask(__name__)
        oauth = OAuth(app)

        twitter.register_to(oauth)
        twitter.register_to(oauth, name='twitter2')

    Of course, it requires consumer keys in your config::

        TWITTER_CONSUMER_KEY = ''
        TWITTER_CONSUMER_SECRET = ''
        TWITTER2_CONSUMER_KEY = ''
        TWITTER2_CONSUMER_SECRET = ''

    Command line programs without a Flask app pass them directly::

        plurk_app = plurk.create(consumer_key='...', consumer_secret='...')
"""

import copy

from .application import OAuth1Application


__all__ = ['twitter', 'plurk']


class RemoteAppFactory(object):
    """The factory to create remote app and bind it to given extension.

    :param default_name: the default name which be used for registering.
    :param kwargs: the pre-defined kwargs.
    :param docstring: the docstring of factory.
    """

    def __init__(self, default_name, kwargs, docstring=''):
        assert 'name' not in kwargs
        self.default_name = default_name
        self.kwargs = kwargs
        self.__doc__ = docstring.lstrip()

    def register_to(self, oauth, name=None, **kwargs):
        """Creates a remote app and registers it."""
        kwargs = self._process_kwargs(**kwargs)
        return oauth.remote_app(name or self.default_name, **kwargs)

    def create(self, name=None, **kwargs):
        """Creates a remote app only."""
        kwargs = self._process_kwargs(**kwargs)
        return OAuth1Application(name or self.default_name, **kwargs)

    def _process_kwargs(self, **kwargs):
        final_kwargs = copy.deepcopy(self.kwargs)
        final_kwargs.update(kwargs)
        return final_kwargs


twitter = RemoteAppFactory('twitter', {
    'endpoint_url': 'https://api.twitter.com/1.1/',
    'request_token_url': 'https://api.twitter.com/oauth/request_token',
    'access_token_url': 'https://api.twitter.com/oauth/access_token',
    'authorization_url': 'https://api.twitter.com/oauth/authorize',
    'authentication_url': 'https://api.twitter.com/oauth/authenticate',
}, """
The OAuth app for Twitter API.

``authorization_url`` shows the consent screen every time, the
``authentication_url`` is the "Sign in with Twitter" shortcut.
""")


plurk = RemoteAppFactory('plurk', {
    'endpoint_url': 'https://www.plurk.com',
    'request_token_url': 'https://www.plurk.com/OAuth/request_token',
    'access_token_url': 'https://www.plurk.com/OAuth/access_token',
    'authorization_url': 'https://www.plurk.com/OAuth/authorize',
}, """The OAuth app for Plurk API.""")

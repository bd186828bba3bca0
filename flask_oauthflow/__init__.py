# -*- coding: utf-8 -*-
"""
    flask_oauthflow
    ~~~~~~~~~~~~~~~

    Flask-OAuthFlow drives the OAuth 1.0a three-legged authorization flow
    against remote services, keeps the obtained credentials, and issues
    signed JSON API calls with them.

    :license: BSD, see LICENSE for more details.
"""

__version__ = "0.1.0"
__author__ = "Flask-OAuthFlow Developers <oauthflow@example.org>"
__homepage__ = 'https://github.com/flask-oauthflow/flask-oauthflow'
__license__ = 'BSD'

# coding: utf-8

import unittest

import requests
from flask import Flask
from mock import MagicMock
from urllib.parse import urlparse, parse_qs

from flask_oauthflow.application import OAuth1Application, decode_response
from flask_oauthflow.exceptions import AccessTokenNotFound, APIError
from flask_oauthflow.exceptions import DecodeError, HTTPStatusError
from flask_oauthflow.exceptions import UpstreamError
from flask_oauthflow.structure import Credentials, TokenResponse
from ._base import FakeResponse, StubAdapter, create_remote, make_transport


ACCESS = Credentials('access-token', 'access-secret')


class TestDecodeResponse(unittest.TestCase):
    def test_valid_json(self):
        resp = FakeResponse(200, '{"id":"1","text":"hi"}')
        assert decode_response(resp) == {'id': '1', 'text': 'hi'}

    def test_sequence(self):
        resp = FakeResponse(200, '[{"id": 1}, {"id": 2}]')
        assert decode_response(resp) == [{'id': 1}, {'id': 2}]

    def test_status_error(self):
        resp = FakeResponse(404, 'not here', 'https://dev.example/x')
        with self.assertRaises(HTTPStatusError) as cm:
            decode_response(resp)
        assert cm.exception.status == 404
        assert cm.exception.body == 'not here'
        assert 'https://dev.example/x returned status 404' in str(cm.exception)

    def test_created_is_not_ok(self):
        self.assertRaises(
            HTTPStatusError, decode_response, FakeResponse(201, '{}'))

    def test_malformed_json(self):
        with self.assertRaises(DecodeError) as cm:
            decode_response(FakeResponse(200, '{not json'))
        assert cm.exception.body == '{not json'


class TestSignedRequest(unittest.TestCase):
    def create_remote(self, status=200, body=b'{}'):
        self.adapter = StubAdapter(status, body)
        return create_remote(session_class=make_transport(self.adapter))

    def test_server_error(self):
        remote = self.create_remote(500, b'internal boom')
        with self.assertRaises(HTTPStatusError) as cm:
            remote.get('statuses/home_timeline.json', token=ACCESS)
        assert cm.exception.status == 500
        assert cm.exception.body == 'internal boom'
        assert isinstance(cm.exception, APIError)

    def test_malformed_json(self):
        remote = self.create_remote(200, b'{not json')
        self.assertRaises(DecodeError, remote.get, 'me', token=ACCESS)

    def test_valid_json(self):
        remote = self.create_remote(200, b'{"id":"1","text":"hi"}')
        data = remote.get('me', token=ACCESS)
        assert data == {'id': '1', 'text': 'hi'}

    def test_get_is_signed_with_query(self):
        remote = self.create_remote(200, b'[]')
        remote.get('statuses/home_timeline.json', {'count': '5'},
                   token=ACCESS)

        request = self.adapter.requests[0]
        assert request.method == 'GET'
        url = urlparse(request.url)
        assert url.path == '/api/statuses/home_timeline.json'
        assert parse_qs(url.query) == {'count': ['5']}

        auth = request.headers['Authorization']
        if isinstance(auth, bytes):
            auth = auth.decode('utf-8')
        assert auth.startswith('OAuth ')
        assert 'oauth_consumer_key="dev"' in auth
        assert 'oauth_token="access-token"' in auth
        assert 'oauth_signature_method="HMAC-SHA1"' in auth

    def test_post_sends_form(self):
        remote = self.create_remote(200, b'{"screen_name": "gburd"}')
        data = remote.post(
            'https://dev.example/1.1/friendships/create.json',
            {'screen_name': 'gburd', 'follow': 'true'},
            token=ACCESS,
        )
        assert data == {'screen_name': 'gburd'}

        request = self.adapter.requests[0]
        assert request.method == 'POST'
        assert request.url == 'https://dev.example/1.1/friendships/create.json'
        body = request.body
        if isinstance(body, bytes):
            body = body.decode('utf-8')
        assert parse_qs(body) == {'screen_name': ['gburd'], 'follow': ['true']}

    def test_transport_error(self):
        remote = self.create_remote()
        self.adapter.send = MagicMock(
            side_effect=requests.ConnectionError('refused'))
        with self.assertRaises(APIError) as cm:
            remote.get('me', token=ACCESS)
        assert cm.exception.type == 'request_failed'

    def test_tokengetter(self):
        remote = self.create_remote(200, b'{"ok": true}')
        self.assertRaises(RuntimeError, remote.get, 'me')

        tokens = []

        @remote.tokengetter
        def get_token():
            return tokens and tokens[0] or None

        self.assertRaises(AccessTokenNotFound, remote.get, 'me')

        tokens.append({
            'oauth_token': 'access-token',
            'oauth_token_secret': 'access-secret',
        })
        assert remote.get('me') == {'ok': True}


class TestTokenEndpoints(unittest.TestCase):
    def create_remote(self, status=200, body=b''):
        self.adapter = StubAdapter(status, body)
        return create_remote(session_class=make_transport(self.adapter))

    def test_fetch_request_token(self):
        remote = self.create_remote(
            200, b'oauth_token=temp&oauth_token_secret=temp-secret'
                 b'&oauth_callback_confirmed=true')
        temporary = remote.fetch_request_token('https://me.example/callback')
        assert temporary == Credentials('temp', 'temp-secret')

        auth = self.adapter.requests[0].headers['Authorization']
        if isinstance(auth, bytes):
            auth = auth.decode('utf-8')
        assert 'oauth_callback="https%3A%2F%2Fme.example%2Fcallback"' in auth

    def test_fetch_request_token_out_of_band(self):
        remote = self.create_remote(
            200, b'oauth_token=temp&oauth_token_secret=temp-secret')
        remote.fetch_request_token()
        auth = self.adapter.requests[0].headers['Authorization']
        if isinstance(auth, bytes):
            auth = auth.decode('utf-8')
        assert 'oauth_callback="oob"' in auth

    def test_request_token_denied(self):
        remote = self.create_remote(401, b'bad consumer')
        with self.assertRaises(UpstreamError) as cm:
            remote.fetch_request_token()
        assert cm.exception.type == 'token_generation_failed'
        assert cm.exception.data == 401

    def test_request_token_malformed(self):
        remote = self.create_remote(200, b'hello=world')
        self.assertRaises(UpstreamError, remote.fetch_request_token)

        remote = self.create_remote(200, b'oauth_token=temp')
        self.assertRaises(UpstreamError, remote.fetch_request_token)

    def test_make_authorization_url(self):
        remote = create_remote()
        temporary = Credentials('temp', 'temp-secret')
        url = remote.make_authorization_url(temporary)
        assert url == 'https://dev.example/oauth/authorize?oauth_token=temp'

        url = remote.make_authorization_url(
            temporary, 'https://dev.example/oauth/authenticate')
        assert url.startswith('https://dev.example/oauth/authenticate?')

    def test_fetch_access_token(self):
        remote = self.create_remote(
            200, b'oauth_token=access&oauth_token_secret=access-secret'
                 b'&screen_name=gburd')
        response = remote.fetch_access_token(
            Credentials('temp', 'temp-secret'), 'pin')
        assert isinstance(response, TokenResponse)
        assert response.credentials == Credentials('access', 'access-secret')
        assert response['screen_name'] == 'gburd'

        auth = self.adapter.requests[0].headers['Authorization']
        if isinstance(auth, bytes):
            auth = auth.decode('utf-8')
        assert 'oauth_verifier="pin"' in auth
        assert 'oauth_token="temp"' in auth

    def test_access_token_denied(self):
        remote = self.create_remote(401, b'expired')
        with self.assertRaises(UpstreamError) as cm:
            remote.fetch_access_token(Credentials('temp', 's'), 'pin')
        assert cm.exception.type == 'invalid_response'

    def test_access_token_without_secret(self):
        remote = self.create_remote(200, b'oauth_token=access')
        self.assertRaises(
            UpstreamError, remote.fetch_access_token,
            Credentials('temp', 's'), 'pin')


class TestOAuthProperty(unittest.TestCase):
    def test_explicit_values(self):
        remote = create_remote()
        assert remote.consumer == Credentials('dev', 'dev-secret')
        assert remote.authentication_url is None
        assert remote.expand_url('me') == 'https://dev.example/api/me'

    def test_unknown_attribute(self):
        self.assertRaises(TypeError, OAuth1Application, 'dev', foo='bar')

    def test_missing_outside_app(self):
        remote = OAuth1Application('twitter')
        self.assertRaises(RuntimeError, lambda: remote.consumer_key)
        assert remote.endpoint_url == ''

    def test_app_config(self):
        app = Flask(__name__)
        app.config['TWITTER_CONSUMER_KEY'] = 'twitter key'
        app.config['TWITTER_CONSUMER_SECRET'] = 'twitter secret'
        remote = OAuth1Application(
            'twitter', consumer_secret='explicit secret')
        with app.app_context():
            assert remote.consumer_key == 'twitter key'
            assert remote.consumer_secret == 'explicit secret'
            self.assertRaises(RuntimeError, lambda: remote.request_token_url)

__all__ = [
    'OAuthException', 'ConfigError', 'UpstreamError', 'UnknownToken',
    'AccessTokenNotFound', 'APIError', 'HTTPStatusError', 'DecodeError',
]


class OAuthException(RuntimeError):
    def __init__(self, message, type=None, data=None):
        super(OAuthException, self).__init__(message)
        self.message = message
        self.type = type
        self.data = data

    def __str__(self):
        return self.message


class ConfigError(OAuthException):
    """The credentials file is missing or malformed."""


class UpstreamError(OAuthException):
    """The remote service rejected a step of the OAuth handshake."""


class UnknownToken(OAuthException):
    """A callback or verifier refers to a token that is not pending."""

    def __init__(self, token):
        super(UnknownToken, self).__init__(
            'Unknown oauth_token.', type='unknown_token', data=token
        )
        self.token = token


class AccessTokenNotFound(OAuthException):
    def __init__(self, message='No token available'):
        super(AccessTokenNotFound, self).__init__(
            message, type='token_missing'
        )


class APIError(OAuthException):
    """A signed data request failed."""


class HTTPStatusError(APIError):
    def __init__(self, status, body, url=None):
        message = '%s returned status %d, %s' % (
            url or 'Request', status, _shorten(body)
        )
        super(HTTPStatusError, self).__init__(
            message, type='invalid_status', data=body
        )
        self.status = status
        self.body = body
        self.url = url


class DecodeError(APIError):
    def __init__(self, body, reason=None):
        message = 'Invalid JSON response'
        if reason:
            message = '%s, %s' % (message, reason)
        super(DecodeError, self).__init__(
            message, type='invalid_json', data=body
        )
        self.body = body


def _shorten(body, limit=200):
    if isinstance(body, bytes):
        body = body.decode('utf-8', 'replace')
    if len(body) > limit:
        return body[:limit] + '...'
    return body

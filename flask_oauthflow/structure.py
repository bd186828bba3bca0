import operator
from collections import namedtuple


__all__ = ['Credentials', 'TokenResponse']


class Credentials(namedtuple('Credentials', ['token', 'secret'])):
    """A pair of opaque strings, used for the consumer identity and for
    temporary and access credentials alike.
    """

    __slots__ = ()

    def __repr__(self):
        # never leak the secret into logs
        return '<Credentials %r>' % self.token


class TokenResponse(dict):
    """The decoded body of a token endpoint response.

    Services add extra fields such as ``screen_name`` or ``user_id``, which
    stay available as items.
    """

    token = property(operator.itemgetter('oauth_token'))
    token_secret = property(operator.itemgetter('oauth_token_secret'))

    @property
    def credentials(self):
        return Credentials(self.token, self.token_secret)

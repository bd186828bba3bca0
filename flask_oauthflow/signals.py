from blinker import Namespace

__all__ = ['request_token_fetched', 'access_token_fetched', 'logged_out']

_signals = Namespace()
request_token_fetched = _signals.signal('request-token-fetched')
access_token_fetched = _signals.signal('access-token-fetched')
logged_out = _signals.signal('logged-out')

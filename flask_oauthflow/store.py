# coding: utf-8
"""
    flask_oauthflow.store
    ~~~~~~~~~~~~~~~~~~~~~

    Credential stores map token strings to their secrets. A store instance is
    owned by the application and shared by every request handler, so all
    implementations here are safe for concurrent callers.
"""

import time
import heapq
import logging
import threading

from .structure import Credentials


__all__ = ['BaseStore', 'MemoryStore', 'CacheStore', 'NamespacedStore']

log = logging.getLogger('flask_oauthflow')


class BaseStore(object):
    """The interface of credential stores.

    Absence of a token is a normal outcome: lookups return ``None`` instead
    of raising.
    """

    def put(self, credentials, timeout=None):
        """Inserts or overwrites the secret for ``credentials.token``.

        :param credentials: a :class:`Credentials` pair.
        :param timeout: lifetime in seconds, ``None`` for no expiry.
        """
        raise NotImplementedError

    def get(self, token):
        """Returns the :class:`Credentials` for ``token`` or ``None``."""
        raise NotImplementedError

    def delete(self, token):
        """Removes ``token``, no-op when it is absent."""
        raise NotImplementedError

    def pop(self, token):
        """Removes ``token`` and returns its credentials in one step."""
        raise NotImplementedError

    def __contains__(self, token):
        return self.get(token) is not None

    def namespace(self, prefix):
        """Returns a :class:`NamespacedStore` view keeping its tokens apart
        from every other namespace of this store.
        """
        return NamespacedStore(self, prefix)


class MemoryStore(BaseStore):
    """A dictionary guarded by a single lock.

    Entries with a timeout are also tracked in a heap ordered by expiry, so
    sweeping them on :meth:`put` never walks the entries which do not expire.
    """

    def __init__(self):
        self._secrets = {}
        self._expiry = []
        self._lock = threading.Lock()

    def put(self, credentials, timeout=None):
        expires = None
        if timeout is not None:
            expires = time.time() + timeout
        with self._lock:
            self._prune()
            self._secrets[credentials.token] = (credentials.secret, expires)
            if expires is not None:
                heapq.heappush(self._expiry, (expires, credentials.token))

    def get(self, token):
        with self._lock:
            return self._lookup(token)

    def delete(self, token):
        with self._lock:
            self._secrets.pop(token, None)

    def pop(self, token):
        with self._lock:
            credentials = self._lookup(token)
            self._secrets.pop(token, None)
            return credentials

    def prune(self):
        """Evicts every expired entry and returns how many were dropped."""
        with self._lock:
            return self._prune()

    def __len__(self):
        with self._lock:
            return len(self._secrets)

    def _lookup(self, token):
        item = self._secrets.get(token)
        if item is None:
            return None
        secret, expires = item
        if expires is not None and expires <= time.time():
            log.debug('Evict expired token %r', token)
            del self._secrets[token]
            return None
        return Credentials(token, secret)

    def _prune(self):
        now = time.time()
        dropped = 0
        while self._expiry and self._expiry[0][0] <= now:
            expires, token = heapq.heappop(self._expiry)
            item = self._secrets.get(token)
            # skip heap entries left behind by an overwrite or delete
            if item is not None and item[1] == expires:
                del self._secrets[token]
                dropped += 1
        return dropped


class CacheStore(BaseStore):
    """A store backed by a :class:`cachelib.BaseCache` instance.

    Expiry is left to the cache's own per-key timeout. A timeout of ``0``
    means "never expire" for cachelib, which is what ``None`` maps to.

    .. warning::

        The in-process caches of cachelib are not thread safe, so every
        call is serialized with a lock here.
    """

    def __init__(self, cache, key_prefix='oauthflow:'):
        self.cache = cache
        self.key_prefix = key_prefix
        self._lock = threading.Lock()

    def _key(self, token):
        return '%s%s' % (self.key_prefix, token)

    def put(self, credentials, timeout=None):
        with self._lock:
            self.cache.set(
                self._key(credentials.token), credentials.secret,
                timeout=timeout or 0,
            )

    def get(self, token):
        with self._lock:
            secret = self.cache.get(self._key(token))
        if secret is None:
            return None
        return Credentials(token, secret)

    def delete(self, token):
        with self._lock:
            self.cache.delete(self._key(token))

    def pop(self, token):
        key = self._key(token)
        with self._lock:
            secret = self.cache.get(key)
            self.cache.delete(key)
        if secret is None:
            return None
        return Credentials(token, secret)


class NamespacedStore(BaseStore):
    """A view of ``store`` keeping its entries under ``prefix``.

    Tokens are handed in and returned without the prefix, a token put into
    one namespace is not visible from another one::

        temporaries = store.namespace('temporary:')
        temporaries.put(Credentials('abc', 'secret'), timeout=600)
        store.get('abc')  # None
    """

    def __init__(self, store, prefix):
        self.store = store
        self.prefix = prefix

    def _key(self, token):
        return '%s%s' % (self.prefix, token)

    def put(self, credentials, timeout=None):
        token, secret = credentials
        self.store.put(Credentials(self._key(token), secret), timeout)

    def get(self, token):
        return _rename(self.store.get(self._key(token)), token)

    def delete(self, token):
        self.store.delete(self._key(token))

    def pop(self, token):
        return _rename(self.store.pop(self._key(token)), token)

    def namespace(self, prefix):
        return NamespacedStore(self.store, self.prefix + prefix)


def _rename(credentials, token):
    if credentials is None:
        return None
    return Credentials(token, credentials.secret)

# coding: utf-8
"""
    flask_oauthflow.cache
    ~~~~~~~~~~~~~~~~~~~~~

    Builds the credential store of an application from its config.
"""

from cachelib import NullCache, SimpleCache, FileSystemCache
from cachelib import MemcachedCache, RedisCache

from .store import MemoryStore, CacheStore


__all__ = ['make_store']

_missing = object()


def make_store(app, config_prefix='OAUTHFLOW', **kwargs):
    """Creates the credential store configured for ``app``.

    ``OAUTHFLOW_STORE_TYPE`` picks the backend: ``memory`` (the default),
    or one of the cachelib backends ``null``, ``simple``, ``filesystem``,
    ``redis`` and ``memcache``, which are configured with
    ``OAUTHFLOW_CACHE_*`` keys (falling back to ``CACHE_*``)::

        OAUTHFLOW_STORE_TYPE = 'redis'
        OAUTHFLOW_CACHE_REDIS_HOST = 'localhost'

    :param kwargs: extra arguments for the cachelib backend.
    """
    store_type = app.config.get('%s_STORE_TYPE' % config_prefix, 'memory')
    if store_type == 'memory':
        return MemoryStore()

    factory = _backends.get(store_type)
    if factory is None:
        raise RuntimeError('`%s` is not a valid store type!' % store_type)

    config = CacheConfig(app.config, config_prefix)
    kwargs.setdefault('default_timeout', config.get('DEFAULT_TIMEOUT', 0))
    return CacheStore(
        factory(config, **kwargs),
        key_prefix='%s:' % config_prefix.lower(),
    )


class CacheConfig(object):
    """Reads ``<PREFIX>_CACHE_<KEY>``, then ``CACHE_<KEY>`` from a Flask
    config.
    """

    def __init__(self, config, config_prefix):
        self.config = config
        self.config_prefix = config_prefix

    def get(self, key, default=_missing):
        key = key.upper()
        prior = '%s_CACHE_%s' % (self.config_prefix, key)
        if prior in self.config:
            return self.config[prior]
        fallback = 'CACHE_%s' % key
        if fallback in self.config:
            return self.config[fallback]
        if default is _missing:
            raise RuntimeError('%s is missing.' % prior)
        return default


def _null(config, **kwargs):
    return NullCache()


def _simple(config, **kwargs):
    kwargs.setdefault('threshold', config.get('THRESHOLD', 500))
    return SimpleCache(**kwargs)


def _filesystem(config, **kwargs):
    kwargs.setdefault('threshold', config.get('THRESHOLD', 500))
    return FileSystemCache(config.get('DIR'), **kwargs)


def _memcache(config, **kwargs):
    kwargs.setdefault('servers', config.get('MEMCACHED_SERVERS', None))
    kwargs.setdefault('key_prefix', config.get('KEY_PREFIX', None))
    return MemcachedCache(**kwargs)


def _redis(config, **kwargs):
    kwargs.setdefault('host', config.get('REDIS_HOST', 'localhost'))
    kwargs.setdefault('port', config.get('REDIS_PORT', 6379))
    kwargs.setdefault('password', config.get('REDIS_PASSWORD', None))
    kwargs.setdefault('db', config.get('REDIS_DB', 0))
    kwargs.setdefault('key_prefix', config.get('KEY_PREFIX', ''))
    return RedisCache(**kwargs)


_backends = {
    'null': _null,
    'simple': _simple,
    'filesystem': _filesystem,
    'memcache': _memcache,
    'redis': _redis,
}

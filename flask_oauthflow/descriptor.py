from flask import current_app, has_app_context


__all__ = ['OAuthProperty']


class OAuthProperty(object):
    """The property which providing config item to remote applications.

    The value given to the application instance wins, then the Flask config
    item ``<NAME>_<ATTRIBUTE>`` of the current app, then the default.

    The application classes must have ``name`` to identity themselves.
    """

    _missing = object()

    def __init__(self, name, default=_missing):
        self.name = name
        self.default = default

    def __get__(self, instance, owner):
        if instance is None:
            return self

        instance_namespace = vars(instance)
        if self.name in instance_namespace:
            return instance_namespace[self.name]

        config_name = '{0}_{1}'.format(instance.name, self.name).upper()
        if has_app_context() and config_name in current_app.config:
            return current_app.config[config_name]
        if self.default is not self._missing:
            return self.default
        exception_message = (
            '{0!r} missing {1} \n\n You need to provide it in arguments'
            ' `{0.__class__.__name__}(..., {1}="foobar", ...)` or in '
            'app.config `{2}`').format(instance, self.name, config_name)
        raise RuntimeError(exception_message)

    def __set__(self, instance, value):
        vars(instance)[self.name] = value

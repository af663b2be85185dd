"""Built-in auth plugins for restclient.

Each subpackage implements :class:`~restclient.auth.base.AuthPlugin` types:

* :mod:`restclient.plugins.api_key` -- ``api_key``
* :mod:`restclient.plugins.authorization` -- ``bearer`` and ``basic``

They are registered by :func:`~restclient.auth.manager.create_default_manager`.
"""

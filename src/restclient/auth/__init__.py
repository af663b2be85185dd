"""Pluggable authentication for restclient.

The main entry points are:

- :class:`Auth` -- the capability a client calls to put credentials on a
  request.  Pass one as a client's default auth or per call via
  :func:`~restclient.options.with_auth`.
- :class:`AuthResult` -- static headers, params and cookies; usable as an
  :class:`Auth` directly.
- :class:`AuthPlugin` -- abstract base class for configuration-driven
  auth strategies.
- :class:`AuthManager` -- registry that maps auth type strings to plugin
  instances.
- :func:`create_default_manager` -- factory that returns an
  :class:`AuthManager` pre-loaded with all built-in plugins.

Typical usage::

    from restclient.auth import create_default_manager

    manager = create_default_manager()
    auth = manager.auth_for(config.auth)
    client = Client(config.base_url, auth=auth)
"""

from restclient.auth.base import Auth, AuthPlugin, AuthResult
from restclient.auth.manager import AuthManager, DeferredAuth, create_default_manager

__all__ = [
    "Auth",
    "AuthPlugin",
    "AuthResult",
    "AuthManager",
    "DeferredAuth",
    "create_default_manager",
]

"""``Authorization``-header auth plugins.

Implements the ``bearer`` and ``basic`` auth types.  Both resolve one
credential from the configured ``source`` and send it through the same
header options that callers can pass per request
(:func:`~restclient.options.with_jwt_token`,
:func:`~restclient.options.with_basic_auth`).
"""

from restclient.plugins.authorization.plugin import (
    AuthorizationPlugin,
    BasicAuthPlugin,
    BearerAuthPlugin,
)

__all__ = ["AuthorizationPlugin", "BasicAuthPlugin", "BearerAuthPlugin"]

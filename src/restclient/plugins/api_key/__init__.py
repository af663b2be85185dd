"""API Key authentication plugin.

Implements the ``api_key`` auth type, which injects a static API key into
outgoing requests as a header, query parameter, or cookie.

See Also:
    :class:`~restclient.plugins.api_key.plugin.APIKeyAuthPlugin`
    :mod:`restclient.auth.base` for the plugin interface contract.
"""

from restclient.plugins.api_key.plugin import APIKeyAuthPlugin

__all__ = ["APIKeyAuthPlugin"]

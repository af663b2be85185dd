"""Auth manager -- registry and dispatcher for auth plugins.

The :class:`AuthManager` maintains a mapping from auth-type strings
(``"api_key"``, ``"bearer"``, ``"basic"``) to concrete
:class:`~restclient.auth.base.AuthPlugin` instances.  It turns an
:class:`~restclient.models.AuthConfig` either into an
:class:`~restclient.auth.base.AuthResult` right away
(:meth:`~AuthManager.authenticate`) or into a deferred
:class:`~restclient.auth.base.Auth` that resolves credentials the first
time a request needs them (:meth:`~AuthManager.auth_for`).

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in plugin.
"""

from __future__ import annotations

import importlib.metadata
import logging
import threading
from typing import Optional

import httpx

from restclient.auth.base import Auth, AuthPlugin, AuthResult
from restclient.exceptions import AuthError
from restclient.models import AuthConfig

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "restclient.auth"
"""The entry-point group scanned by :meth:`AuthManager.discover`."""


class AuthManager:
    """Registry and dispatcher for authentication plugins.

    Example::

        from restclient.auth import AuthManager
        from restclient.plugins.authorization import BearerAuthPlugin

        manager = AuthManager()
        manager.register(BearerAuthPlugin())
        auth = manager.auth_for(AuthConfig(type="bearer", source="env:TOKEN"))
    """

    def __init__(self) -> None:
        self._plugins: dict[str, AuthPlugin] = {}

    def register(self, plugin: AuthPlugin) -> None:
        """Register an auth plugin, keyed by its :attr:`~AuthPlugin.auth_type`.

        If a plugin for the same type is already registered it is replaced.
        """
        self._plugins[plugin.auth_type] = plugin

    def get_plugin(self, auth_type: str) -> AuthPlugin:
        """Retrieve a registered plugin by its auth type identifier.

        Raises:
            AuthError: If no plugin is registered for *auth_type*.
        """
        plugin = self._plugins.get(auth_type)
        if plugin is None:
            available = ", ".join(sorted(self._plugins)) or "(none)"
            raise AuthError(
                f"No auth plugin registered for type '{auth_type}'. "
                f"Available types: {available}"
            )
        return plugin

    def authenticate(self, auth_config: Optional[AuthConfig]) -> AuthResult:
        """Resolve credentials for *auth_config* now.

        Returns an empty :class:`~restclient.auth.base.AuthResult` when
        *auth_config* is ``None``.

        Raises:
            AuthError: If the auth type has no registered plugin, the
                configuration is invalid, or the plugin rejects the
                credential.
            ConfigError: If the credential source cannot be resolved.
        """
        if auth_config is None:
            return AuthResult()
        plugin = self.get_plugin(auth_config.type)
        errors = plugin.validate_config(auth_config)
        if errors:
            raise AuthError(
                f"Invalid '{auth_config.type}' auth config: " + "; ".join(errors)
            )
        return plugin.authenticate(auth_config)

    def auth_for(self, auth_config: AuthConfig) -> Auth:
        """Return an :class:`~restclient.auth.base.Auth` that authenticates lazily.

        The plugin lookup happens immediately so an unknown type fails
        fast; credentials are resolved on the first request.
        """
        self.get_plugin(auth_config.type)
        return DeferredAuth(self, auth_config)

    def list_types(self) -> list[str]:
        """Return the sorted identifiers of all registered auth types."""
        return sorted(self._plugins.keys())

    def discover(self) -> list[str]:
        """Register third-party auth plugins declared as entry points.

        Third-party packages register a plugin class under the
        ``restclient.auth`` entry-point group in their ``pyproject.toml``::

            [project.entry-points."restclient.auth"]
            hmac = "my_package.auth:HMACAuthPlugin"

        Returns:
            The auth types that were registered. Entry points that fail to
            load are logged as warnings and skipped.
        """
        registered: list[str] = []
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            try:
                plugin_cls = ep.load()
                plugin: AuthPlugin = plugin_cls()
            except Exception as exc:
                logger.warning("Failed to load auth plugin '%s': %s", ep.name, exc)
                continue
            self.register(plugin)
            registered.append(plugin.auth_type)
            logger.info("Loaded auth plugin '%s' (type '%s')", ep.name, plugin.auth_type)
        return registered


class DeferredAuth(Auth):
    """Resolves credentials through an :class:`AuthManager` on first use, then reuses them."""

    def __init__(self, manager: AuthManager, auth_config: AuthConfig) -> None:
        self._manager = manager
        self._auth_config = auth_config
        self._result: Optional[AuthResult] = None
        self._lock = threading.Lock()

    @property
    def auth_type(self) -> str:
        return self._auth_config.type

    def handle(self, request: httpx.Request) -> None:
        with self._lock:
            if self._result is None:
                logger.debug("Resolving '%s' credentials", self._auth_config.type)
                self._result = self._manager.authenticate(self._auth_config)
        self._result.handle(request)


def create_default_manager() -> AuthManager:
    """Create an :class:`AuthManager` pre-loaded with all built-in plugins.

    The following plugins are registered:

    - ``api_key`` -- static API key in header, query param, or cookie.
    - ``basic`` -- HTTP Basic authentication.
    - ``bearer`` -- static Bearer token.
    """
    from restclient.plugins.api_key import APIKeyAuthPlugin
    from restclient.plugins.authorization import BasicAuthPlugin, BearerAuthPlugin

    manager = AuthManager()
    manager.register(APIKeyAuthPlugin())
    manager.register(BasicAuthPlugin())
    manager.register(BearerAuthPlugin())
    return manager

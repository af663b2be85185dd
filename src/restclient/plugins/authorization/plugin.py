"""Plugins that turn a configured credential into an ``Authorization`` header."""

from __future__ import annotations

from abc import abstractmethod

from restclient.auth.base import AuthPlugin, AuthResult
from restclient.config import resolve_credential
from restclient.exceptions import AuthError
from restclient.models import AuthConfig
from restclient.options import WithHeader, with_basic_auth, with_jwt_token


class AuthorizationPlugin(AuthPlugin):
    """Base for auth types that send one credential in the ``Authorization`` header.

    Subclasses set :attr:`name` and map the resolved credential to a
    header option in :meth:`header_for`.  The credential is resolved from
    ``auth_config.source`` each time :meth:`authenticate` runs.
    """

    name: str = ""

    @property
    def auth_type(self) -> str:
        return self.name

    @abstractmethod
    def header_for(self, credential: str) -> WithHeader:
        ...

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        header = self.header_for(resolve_credential(auth_config.source))
        return AuthResult(headers={header.name: header.value})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        if not auth_config.source:
            return [f"'{self.name}' auth requires a 'source' for the credential"]
        return []


class BearerAuthPlugin(AuthorizationPlugin):
    """``bearer``: the credential is a ready-made token.  No refresh is attempted."""

    name = "bearer"

    def header_for(self, credential: str) -> WithHeader:
        return with_jwt_token(credential)


class BasicAuthPlugin(AuthorizationPlugin):
    """``basic``: the credential is a ``username:password`` pair."""

    name = "basic"

    def header_for(self, credential: str) -> WithHeader:
        username, sep, password = credential.partition(":")
        if not sep:
            raise AuthError(
                "Basic auth credential must be in 'username:password' format, "
                "got a value without ':'"
            )
        return with_basic_auth(username, password)

"""Auth resolution for the selected endpoint and application.

The result always names the auth scheme and carries either a usable credential
or an error message, never an empty credential.
"""

from typing import Literal

from pydantic import BaseModel

from x_api_explorer.catalog.base import AuthType

from .profiles import CredentialBundle

MISSING_BEARER = "Missing Bearer Token"
MISSING_OAUTH1 = "Missing OAuth 1.0a keys"


class OAuth1Credentials(BaseModel):
    api_key: str
    api_secret: str
    access_token: str
    access_secret: str


class BearerAuth(BaseModel):
    kind: Literal["bearer"] = "bearer"
    token: str

    @property
    def auth_type(self) -> AuthType:
        return "bearer"


class OAuth1Auth(BaseModel):
    kind: Literal["oauth1a"] = "oauth1a"
    credentials: OAuth1Credentials

    @property
    def auth_type(self) -> AuthType:
        return "oauth1a"


class AuthError(BaseModel):
    kind: Literal["error"] = "error"
    auth_type: AuthType
    error: str


AuthResult = BearerAuth | OAuth1Auth | AuthError


def resolve_auth(
    auth_type: AuthType,
    bundle: CredentialBundle | None,
    override_token: str = "",
) -> AuthResult:
    """Derive the effective credential for an endpoint's auth scheme."""
    match auth_type:
        case "bearer":
            if override_token.strip():
                token = override_token
            else:
                token = bundle.bearer_token if bundle else None
            if not token:
                return AuthError(auth_type="bearer", error=MISSING_BEARER)
            return BearerAuth(token=token)
        case "oauth1a":
            # The override token is a bearer token and does not apply here.
            keys = bundle.oauth1 if bundle else None
            if keys is None or not all(
                (keys.api_key, keys.api_secret, keys.access_token, keys.access_secret)
            ):
                return AuthError(auth_type="oauth1a", error=MISSING_OAUTH1)
            return OAuth1Auth(credentials=OAuth1Credentials(**keys.model_dump()))
    raise ValueError(f"Unsupported auth type: {auth_type}")

import logging
from typing import Iterable, Optional

import requests
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .errors import ServerError

logger = logging.getLogger(__name__)

STAFF_MEMBER_GROUP = "StaffMember"
MANAGER_GROUP = "Manager"

security = HTTPBearer(auto_error=False)


class CognitoTokenVerifier:
    """
    Verifies Cognito access tokens issued for one app client.

    A token passes when its signature matches a key in the pool's JWKS, it was
    issued by the pool for `client_id`, it is an access token, and the user
    belongs to at least one of `groups`.
    """

    def __init__(self, region: str, user_pool_id: str, client_id: str,
                 groups: Iterable[str], jwks: Optional[dict] = None):
        self.issuer = f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"
        self.client_id = client_id
        self.groups = set(groups)
        self._jwks = jwks

    @property
    def jwks(self) -> dict:
        if self._jwks is None:
            logger.info(f"Fetching JWKS from {self.issuer}")
            response = requests.get(f"{self.issuer}/.well-known/jwks.json", timeout=10)
            response.raise_for_status()
            self._jwks = response.json()
        return self._jwks

    def verify(self, token: str) -> dict:
        header = jwt.get_unverified_header(token)
        key = next((k for k in self.jwks.get("keys", []) if k.get("kid") == header.get("kid")), None)
        if key is None:
            raise JWTError("No matching key found for token")

        claims = jwt.decode(
            token,
            key,
            algorithms=[key.get("alg", "RS256")],
            issuer=self.issuer,
            options={"verify_aud": False}
        )

        if claims.get("token_use") != "access":
            raise JWTError("Token is not an access token")
        if claims.get("client_id") != self.client_id:
            raise JWTError("Token was not issued for this app client")
        if not self.groups.intersection(claims.get("cognito:groups", [])):
            raise JWTError("User is not in a permitted group")

        return claims


def _authenticate(verifier: CognitoTokenVerifier, credentials: Optional[HTTPAuthorizationCredentials]) -> dict:
    if credentials is None:
        raise ServerError("User not authorised", 401)

    try:
        return verifier.verify(credentials.credentials)
    except (JWTError, requests.RequestException) as e:
        logger.warning(f"Authentication failed: {str(e)}")
        raise ServerError("Authentication failed", 403)


def authenticate_all_users(request: Request,
                           credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> dict:
    """Any staff member or manager."""
    return _authenticate(request.app.state.all_users_verifier, credentials)


def authenticate_manager(request: Request,
                         credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> dict:
    """Managers only."""
    return _authenticate(request.app.state.managers_verifier, credentials)

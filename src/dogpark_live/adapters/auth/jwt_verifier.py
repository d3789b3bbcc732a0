"""Access token verification using PyJWT."""

import logging

import jwt

from dogpark_live.domain.errors import AuthorizationError
from dogpark_live.domain.models import AuthenticatedUser

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "Access token required"
TOKEN_INVALID = "Invalid or expired token"


class JwtTokenVerifier:
    """Verifies HMAC-signed access tokens issued by the auth service.

    The caller's id is read from the ``userId`` claim, falling back to ``sub``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        """Initialize with the shared signing secret."""
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str | None) -> AuthenticatedUser:
        """Verify a token and return the caller.

        Raises:
            AuthorizationError: 401 when the token is missing, 403 when it is invalid.
        """
        if not token:
            raise AuthorizationError(TOKEN_REQUIRED, status_code=401)

        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise AuthorizationError(TOKEN_INVALID, status_code=403) from e

        user_id = claims.get("userId") or claims.get("sub")
        if not user_id:
            logger.warning("JWT verification failed: token carries no user id")
            raise AuthorizationError(TOKEN_INVALID, status_code=403)

        return AuthenticatedUser(user_id=str(user_id), email=claims.get("email"))

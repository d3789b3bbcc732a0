"""Access token verification port."""

from typing import Protocol

from dogpark_live.domain.models.user import AuthenticatedUser


class TokenVerifier(Protocol):
    """Port for the external authentication collaborator."""

    def verify(self, token: str | None) -> AuthenticatedUser:
        """Verify an access token.

        Raises:
            AuthorizationError: 401 if the token is missing, 403 if it is invalid.
        """
        ...

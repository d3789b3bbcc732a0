"""Authentication adapters."""

from dogpark_live.adapters.auth.jwt_verifier import JwtTokenVerifier

__all__ = ["JwtTokenVerifier"]

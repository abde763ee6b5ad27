"""JWT Token Verification"""
from typing import Dict, Optional, Protocol
import requests
from jose import jwt


class IdentityVerifier(Protocol):
    """Anything that turns a bearer token into verified claims or raises"""

    def verify_and_decode(self, token: str) -> Dict:
        ...


class JWTVerifier:
    """Verifies identity provider tokens against the provider's JWKS document"""

    def __init__(
        self,
        jwks_url: str,
        issuer: str,
        audience: Optional[str] = None,
        algorithm: str = "RS256",
        timeout: float = 10.0,
    ):
        self.jwks_url = jwks_url
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.timeout = timeout
        self._jwks_cache: Optional[Dict] = None

    def _get_jwks(self) -> Dict:
        """Fetch JWKS from the identity provider (cached)"""
        if self._jwks_cache is None:
            response = requests.get(self.jwks_url, timeout=self.timeout)
            response.raise_for_status()
            self._jwks_cache = response.json()
        return self._jwks_cache

    def verify_and_decode(self, token: str) -> Dict:
        """
        Verify JWT token signature and decode payload

        Raises:
            JWTError: Token is invalid or expired
        """
        jwks = self._get_jwks()

        return jwt.decode(
            token,
            jwks,
            algorithms=[self.algorithm],
            issuer=self.issuer or None,
            audience=self.audience,
            options={"verify_aud": self.audience is not None},
        )

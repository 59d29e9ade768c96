import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

ALGORITHM = "HS256"


@dataclass(frozen=True)
class IssuedTokens:
    access_token: str
    refresh_token: str


def extract_signature(token: str) -> str:
    """
    Return the signature segment of a compact JWT.

    Used as the session identity: stable for one issuance, independent of
    payload field ordering, and never the token itself.
    """
    parts = token.split(".") if token else []
    if len(parts) != 3:
        return ""
    return parts[2]


class JwtTokenIssuer:
    """
    Stateless signer/verifier for access and refresh tokens.

    Both token kinds carry {"userId": ...} plus aud (client user agent),
    iss, iat, exp and a random jti. They are signed with distinct secrets,
    so a refresh token never verifies as an access token and vice versa.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        issuer: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh tokens must use distinct secrets")
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.issuer = issuer
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_config(cls, config) -> "JwtTokenIssuer":
        return cls(
            access_secret=config.ACCESS_TOKEN_SECRET,
            refresh_secret=config.REFRESH_TOKEN_SECRET,
            issuer=config.TOKEN_ISSUER,
            access_ttl=timedelta(minutes=config.ACCESS_TOKEN_EXPIRES_MINUTES),
            refresh_ttl=timedelta(days=config.REFRESH_TOKEN_EXPIRES_DAYS),
        )

    @property
    def refresh_ttl_seconds(self) -> int:
        return int(self.refresh_ttl.total_seconds())

    def _encode(self, user_id: UUID | str, audience: str, secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {
            "userId": str(user_id),
            "aud": audience,
            "iss": self.issuer,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def issue_access_token(self, user_id: UUID | str, audience: str) -> str:
        return self._encode(user_id, audience, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, user_id: UUID | str, audience: str) -> str:
        return self._encode(user_id, audience, self.refresh_secret, self.refresh_ttl)

    def issue_pair(self, user_id: UUID | str, audience: str) -> IssuedTokens:
        return IssuedTokens(
            access_token=self.issue_access_token(user_id, audience),
            refresh_token=self.issue_refresh_token(user_id, audience),
        )

    def _decode(self, token: str, secret: str, audience: Optional[str]) -> Optional[dict]:
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                audience=audience,
                issuer=self.issuer,
                options={"verify_aud": audience is not None},
            )
        except JWTError:
            return None
        if not isinstance(payload.get("userId"), str):
            return None
        return payload

    def verify_access(self, token: str, audience: Optional[str] = None) -> Optional[dict]:
        """
        Verify and decode an access token

        Returns:
            Decoded payload dict or None if invalid, expired, or bound to a
            different audience
        """
        return self._decode(token, self.access_secret, audience)

    def verify_refresh(self, token: str, audience: Optional[str] = None) -> Optional[dict]:
        """
        Verify and decode a refresh token

        Returns:
            Decoded payload dict or None if invalid, expired, or bound to a
            different audience
        """
        return self._decode(token, self.refresh_secret, audience)

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from marketplace.config import settings
from marketplace.errors import UnauthorizedError
from marketplace.utils.security import generate_token_id


class TokenIssuer:
    """Signs and verifies access/refresh JWTs. Persistence of refresh tokens
    lives in ``auth_service``; this class only deals with the encoding."""

    def __init__(self, access_secret: str, refresh_secret: str, algorithm: str,
                 access_ttl: timedelta, refresh_ttl: timedelta):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls) -> "TokenIssuer":
        return cls(
            access_secret=settings.jwt_secret,
            refresh_secret=settings.jwt_refresh_secret,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
        )

    def issue_access_token(self, user_id: str, email: str, roles: list[str]) -> str:
        claims = {
            "sub": user_id,
            "email": email,
            "roles": roles,
            "type": "access",
            "exp": datetime.now(timezone.utc) + self.access_ttl,
        }
        return jwt.encode(claims, self.access_secret, algorithm=self.algorithm)

    def issue_refresh_token(self, user_id: str) -> tuple[str, datetime]:
        expires_at = datetime.now(timezone.utc) + self.refresh_ttl
        claims = {
            "sub": user_id,
            "type": "refresh",
            "jti": generate_token_id(),
            "exp": expires_at,
        }
        return jwt.encode(claims, self.refresh_secret, algorithm=self.algorithm), expires_at

    def verify_access_token(self, token: str) -> dict:
        return self._decode(token, self.access_secret, "access")

    def verify_refresh_token(self, token: str) -> dict:
        return self._decode(token, self.refresh_secret, "refresh")

    def _decode(self, token: str, secret: str, expected_type: str) -> dict:
        try:
            claims = jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise UnauthorizedError() from exc
        if claims.get("type") != expected_type or not claims.get("sub"):
            raise UnauthorizedError()
        return claims


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings()

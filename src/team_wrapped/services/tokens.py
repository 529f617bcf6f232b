"""Signed session tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from team_wrapped.domain.auth import SessionClaims
from team_wrapped.domain.errors import Unauthenticated

ALGORITHM = "HS256"


@dataclass
class TokenService:
    """Issues and verifies expiring HS256 session tokens."""

    secret: str
    ttl_days: int = 7

    @property
    def max_age_seconds(self) -> int:
        return int(timedelta(days=self.ttl_days).total_seconds())

    def issue(self, claims: SessionClaims, now: datetime | None = None) -> str:
        """Sign the claims into a token valid for ``ttl_days``."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "sub": str(claims.participant_id),
            "email": claims.email,
            "name": claims.name,
            "is_admin": claims.is_admin,
            "photo_url": claims.photo_url,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(days=self.ttl_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify(self, token: str | None) -> SessionClaims:
        """Return the claims of a valid token or raise Unauthenticated."""
        if not token:
            raise Unauthenticated()
        try:
            payload = jwt.decode(token, self.secret, algorithms=[ALGORITHM])
            return SessionClaims(
                participant_id=UUID(payload["sub"]),
                email=payload["email"],
                name=payload["name"],
                is_admin=bool(payload.get("is_admin", False)),
                photo_url=payload.get("photo_url"),
            )
        except (JWTError, KeyError, ValueError) as exc:
            raise Unauthenticated() from exc

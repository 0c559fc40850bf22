from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt

from profile_app.core import config


class TokenSigner:
    """Signs and verifies profile tokens with one secret and a fixed lifetime."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 360) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, claims: dict, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = dict(claims)
        payload.update(
            {
                "sub": str(claims["id"]),
                "iat": issued_at,
                "exp": issued_at + timedelta(minutes=self.expires_minutes),
            }
        )
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            options={"require": ["exp", "sub"]},
        )


@lru_cache
def get_token_signer() -> TokenSigner:
    return TokenSigner(
        secret_key=config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        expires_minutes=config.JWT_EXPIRES_MINUTES,
    )

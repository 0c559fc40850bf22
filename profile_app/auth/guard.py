"""Bearer token check applied in front of every protected route.

A request starts unauthenticated. If it presents a token the guard validates
the signature and expiry; the request is then either authorized, and carries
the decoded payload onward, or rejected with ``UnauthorizedError``.
"""
import logging

import jwt
from pydantic import BaseModel

from profile_app.auth.jwt_handler import TokenSigner
from profile_app.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class TokenPayload(BaseModel):
    id: str
    username: str
    campus: str | None = None
    course: str | None = None
    image: str | None = None
    sub: str
    iat: int | None = None
    exp: int


class AccessGuard:
    def __init__(self, token_signer: TokenSigner) -> None:
        self.token_signer = token_signer

    def authorize(self, token: str | None) -> TokenPayload:
        if not token:
            raise UnauthorizedError("No authorization token was found")

        try:
            claims = self.token_signer.decode(token)
        except jwt.ExpiredSignatureError as exc:
            logger.debug("Rejected expired token")
            raise UnauthorizedError("Token has expired") from exc
        except jwt.PyJWTError as exc:
            logger.debug("Rejected invalid token: %s", exc)
            raise UnauthorizedError("Invalid token") from exc

        if not claims.get("id") or not claims.get("username"):
            raise UnauthorizedError("Invalid token subject")

        return TokenPayload.model_validate(claims)

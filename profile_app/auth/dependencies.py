from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from profile_app.auth.guard import AccessGuard, TokenPayload
from profile_app.auth.jwt_handler import TokenSigner, get_token_signer

security = HTTPBearer(auto_error=False)


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_signer: TokenSigner = Depends(get_token_signer),
) -> TokenPayload:
    token = credentials.credentials if credentials else None
    identity = AccessGuard(token_signer).authorize(token)
    request.state.identity = identity
    return identity

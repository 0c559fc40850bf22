import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from profile_app.auth.dependencies import get_current_identity
from profile_app.auth.guard import TokenPayload
from profile_app.services.credentials import CredentialService, UserSummary
from profile_app.services.dependencies import get_credential_service

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class SignupRequest(BaseModel):
    username: str | None = None
    password: str | None = None
    campus: str | None = None
    course: str | None = None


class SignupResponse(BaseModel):
    user: UserSummary


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    authToken: str


@router.post('/signup', response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, service: CredentialService = Depends(get_credential_service)):
    user = service.register(data.username, data.password, data.campus, data.course)
    return SignupResponse(user=user)


@router.post('/login', response_model=LoginResponse)
def login(data: LoginRequest, service: CredentialService = Depends(get_credential_service)):
    return LoginResponse(authToken=service.authenticate(data.username, data.password))


@router.get('/verify', response_model=TokenPayload)
def verify(identity: TokenPayload = Depends(get_current_identity)):
    logger.debug('Verified token for %s', identity.username)
    return identity
